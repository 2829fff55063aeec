"""Protocol buffer classes for smart_control_reward.proto.

Copyright 2024 Google LLC

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    https://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

The file descriptor is assembled from descriptor_pb2 messages instead of a
protoc-generated byte string, so the module does not depend on the protoc
version that would otherwise have produced it. The message classes are then
built the same way generated code builds them, and expose the usual
RewardInfo, RewardInfo.ZoneRewardInfo, RewardInfo.AirHandlerRewardInfo,
RewardInfo.BoilerRewardInfo and RewardResponse attributes.

Field numbers are part of the wire contract and must never change.
"""

from typing import Optional, Sequence, Tuple

from google.protobuf import descriptor_pb2
from google.protobuf import descriptor_pool
from google.protobuf import timestamp_pb2
from google.protobuf.internal import builder

_PACKAGE = 'smart_buildings.smart_control.proto'
_FILE_NAME = 'smart_reward/proto/smart_control_reward.proto'
_TIMESTAMP_TYPE = '.google.protobuf.Timestamp'

_Field = descriptor_pb2.FieldDescriptorProto

# (name, number, type, message type name)
_FieldSpec = Tuple[str, int, int, Optional[str]]

_ZONE_REWARD_INFO_FIELDS: Sequence[_FieldSpec] = (
    ('heating_setpoint_temperature', 1, _Field.TYPE_FLOAT, None),
    ('cooling_setpoint_temperature', 2, _Field.TYPE_FLOAT, None),
    ('zone_air_temperature', 3, _Field.TYPE_FLOAT, None),
    ('air_flow_rate_setpoint', 4, _Field.TYPE_FLOAT, None),
    ('air_flow_rate', 5, _Field.TYPE_FLOAT, None),
    ('average_occupancy', 6, _Field.TYPE_FLOAT, None),
)

_AIR_HANDLER_REWARD_INFO_FIELDS: Sequence[_FieldSpec] = (
    ('blower_electrical_energy_rate', 1, _Field.TYPE_FLOAT, None),
    ('air_conditioning_electrical_energy_rate', 2, _Field.TYPE_FLOAT, None),
)

_BOILER_REWARD_INFO_FIELDS: Sequence[_FieldSpec] = (
    ('natural_gas_heating_energy_rate', 1, _Field.TYPE_FLOAT, None),
    ('pump_electrical_energy_rate', 2, _Field.TYPE_FLOAT, None),
)

_REWARD_INFO_FIELDS: Sequence[_FieldSpec] = (
    ('start_timestamp', 1, _Field.TYPE_MESSAGE, _TIMESTAMP_TYPE),
    ('end_timestamp', 2, _Field.TYPE_MESSAGE, _TIMESTAMP_TYPE),
    ('agent_id', 3, _Field.TYPE_STRING, None),
    ('scenario_id', 4, _Field.TYPE_STRING, None),
)

# (map field name, number, entry message name, value message name)
_REWARD_INFO_MAPS: Sequence[Tuple[str, int, str, str]] = (
    ('zone_reward_infos', 5, 'ZoneRewardInfosEntry', 'ZoneRewardInfo'),
    (
        'air_handler_reward_infos',
        6,
        'AirHandlerRewardInfosEntry',
        'AirHandlerRewardInfo',
    ),
    ('boiler_reward_infos', 7, 'BoilerRewardInfosEntry', 'BoilerRewardInfo'),
)

_REWARD_RESPONSE_FIELDS: Sequence[_FieldSpec] = (
    ('agent_reward_value', 1, _Field.TYPE_FLOAT, None),
    ('productivity_reward', 2, _Field.TYPE_FLOAT, None),
    ('electricity_energy_cost', 3, _Field.TYPE_FLOAT, None),
    ('natural_gas_energy_cost', 4, _Field.TYPE_FLOAT, None),
    ('carbon_emitted', 5, _Field.TYPE_FLOAT, None),
    ('carbon_cost', 6, _Field.TYPE_FLOAT, None),
    ('productivity_weight', 7, _Field.TYPE_FLOAT, None),
    ('energy_cost_weight', 8, _Field.TYPE_FLOAT, None),
    ('carbon_emission_weight', 9, _Field.TYPE_FLOAT, None),
    ('person_productivity', 10, _Field.TYPE_FLOAT, None),
    ('total_occupancy', 11, _Field.TYPE_FLOAT, None),
    ('reward_scale', 12, _Field.TYPE_FLOAT, None),
    ('reward_shift', 13, _Field.TYPE_FLOAT, None),
    ('productivity_regret', 14, _Field.TYPE_FLOAT, None),
    ('normalized_productivity_regret', 15, _Field.TYPE_FLOAT, None),
    ('normalized_energy_cost', 16, _Field.TYPE_FLOAT, None),
    ('normalized_carbon_emission', 17, _Field.TYPE_FLOAT, None),
    ('start_timestamp', 18, _Field.TYPE_MESSAGE, _TIMESTAMP_TYPE),
    ('end_timestamp', 19, _Field.TYPE_MESSAGE, _TIMESTAMP_TYPE),
)


def _add_fields(
    message_proto: descriptor_pb2.DescriptorProto,
    field_specs: Sequence[_FieldSpec],
) -> None:
  for name, number, field_type, type_name in field_specs:
    field = message_proto.field.add(
        name=name,
        number=number,
        type=field_type,
        label=_Field.LABEL_OPTIONAL,
        json_name=_json_name(name),
    )
    if type_name is not None:
      field.type_name = type_name


def _json_name(name: str) -> str:
  head, *tail = name.split('_')
  return head + ''.join(part.capitalize() for part in tail)


def _build_file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
  """Returns the FileDescriptorProto equivalent to the .proto file."""
  file_proto = descriptor_pb2.FileDescriptorProto(
      name=_FILE_NAME,
      package=_PACKAGE,
      syntax='proto3',
      dependency=[timestamp_pb2.DESCRIPTOR.name],
  )

  reward_info = file_proto.message_type.add(name='RewardInfo')
  _add_fields(
      reward_info.nested_type.add(name='ZoneRewardInfo'),
      _ZONE_REWARD_INFO_FIELDS,
  )
  _add_fields(
      reward_info.nested_type.add(name='AirHandlerRewardInfo'),
      _AIR_HANDLER_REWARD_INFO_FIELDS,
  )
  _add_fields(
      reward_info.nested_type.add(name='BoilerRewardInfo'),
      _BOILER_REWARD_INFO_FIELDS,
  )
  _add_fields(reward_info, _REWARD_INFO_FIELDS)

  for map_name, number, entry_name, value_name in _REWARD_INFO_MAPS:
    value_type = '.%s.RewardInfo.%s' % (_PACKAGE, value_name)
    entry = reward_info.nested_type.add(name=entry_name)
    entry.options.map_entry = True
    _add_fields(
        entry,
        (
            ('key', 1, _Field.TYPE_STRING, None),
            ('value', 2, _Field.TYPE_MESSAGE, value_type),
        ),
    )
    reward_info.field.add(
        name=map_name,
        number=number,
        type=_Field.TYPE_MESSAGE,
        label=_Field.LABEL_REPEATED,
        type_name='.%s.RewardInfo.%s' % (_PACKAGE, entry_name),
        json_name=_json_name(map_name),
    )

  _add_fields(
      file_proto.message_type.add(name='RewardResponse'),
      _REWARD_RESPONSE_FIELDS,
  )
  return file_proto


DESCRIPTOR = descriptor_pool.Default().AddSerializedFile(
    _build_file_descriptor_proto().SerializeToString()
)

_globals = globals()
builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, _globals)
builder.BuildTopDescriptorsAndMessages(DESCRIPTOR, __name__, _globals)
