"""Immutable value records for the reward function inputs and outputs.

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

The records mirror the RewardInfo and RewardResponse protos field by field,
and convert to and from them with from_proto() and to_proto(). Unlike the
protos they cannot be mutated after construction, and the zone, air handler
and boiler mappings are read-only views keyed by id.

Physical range checks are left to the reward components that consume the
values. The only invariant enforced here is the ordering of the interval
bounds.
"""

import dataclasses
import types
from typing import Mapping, TypeVar

import pandas as pd
from smart_reward.proto import smart_control_reward_pb2
from smart_reward.reward import errors
from smart_reward.utils import conversion_utils

_RewardInfoProto = smart_control_reward_pb2.RewardInfo

_T = TypeVar('_T')


@dataclasses.dataclass(frozen=True)
class TimeInterval:
  """Start and end instants of a timestep, with end strictly after start."""

  start: pd.Timestamp
  end: pd.Timestamp

  def __post_init__(self):
    if not self.end > self.start:
      raise errors.InvalidRangeError(
          f'end_timestamp {self.end} must be after start_timestamp'
          f' {self.start}.'
      )

  @property
  def duration_sec(self) -> float:
    return (self.end - self.start).total_seconds()

  @classmethod
  def from_proto(cls, start_timestamp, end_timestamp) -> 'TimeInterval':
    return cls(
        start=conversion_utils.proto_to_pandas_timestamp(start_timestamp),
        end=conversion_utils.proto_to_pandas_timestamp(end_timestamp),
    )


def _fields_from_proto(record_class: type[_T], proto) -> _T:
  return record_class(**{
      field.name: getattr(proto, field.name)
      for field in dataclasses.fields(record_class)
  })


@dataclasses.dataclass(frozen=True)
class ZoneRewardInfo:
  """Zone conditions over the timestep in K, m^3/s and people."""

  heating_setpoint_temperature: float
  cooling_setpoint_temperature: float
  zone_air_temperature: float
  air_flow_rate_setpoint: float = 0.0
  air_flow_rate: float = 0.0
  average_occupancy: float = 0.0

  @classmethod
  def from_proto(cls, proto: _RewardInfoProto.ZoneRewardInfo):
    return _fields_from_proto(cls, proto)

  def to_proto(self) -> _RewardInfoProto.ZoneRewardInfo:
    return _RewardInfoProto.ZoneRewardInfo(**dataclasses.asdict(self))


@dataclasses.dataclass(frozen=True)
class AirHandlerRewardInfo:
  """Air handler electrical power in W."""

  blower_electrical_energy_rate: float = 0.0
  air_conditioning_electrical_energy_rate: float = 0.0

  @classmethod
  def from_proto(cls, proto: _RewardInfoProto.AirHandlerRewardInfo):
    return _fields_from_proto(cls, proto)

  def to_proto(self) -> _RewardInfoProto.AirHandlerRewardInfo:
    return _RewardInfoProto.AirHandlerRewardInfo(**dataclasses.asdict(self))


@dataclasses.dataclass(frozen=True)
class BoilerRewardInfo:
  """Boiler natural gas and pump power in W."""

  natural_gas_heating_energy_rate: float = 0.0
  pump_electrical_energy_rate: float = 0.0

  @classmethod
  def from_proto(cls, proto: _RewardInfoProto.BoilerRewardInfo):
    return _fields_from_proto(cls, proto)

  def to_proto(self) -> _RewardInfoProto.BoilerRewardInfo:
    return _RewardInfoProto.BoilerRewardInfo(**dataclasses.asdict(self))


def _lookup(mapping: Mapping[str, _T], key: str, kind: str) -> _T:
  if key not in mapping:
    raise errors.MissingMappingEntryError(
        f'No {kind} with id {key!r}; known ids: {sorted(mapping)}.'
    )
  return mapping[key]


@dataclasses.dataclass(frozen=True)
class RewardInfo:
  """Everything the reward function needs for one timestep.

  Attributes:
    interval: start and end of the timestep.
    agent_id: id of the agent (controller) being rewarded.
    scenario_id: id of the scenario being executed.
    zone_reward_infos: zone id -> zone conditions.
    air_handler_reward_infos: air handler id -> air handler power.
    boiler_reward_infos: boiler id -> boiler power.
  """

  interval: TimeInterval
  agent_id: str = ''
  scenario_id: str = ''
  zone_reward_infos: Mapping[str, ZoneRewardInfo] = dataclasses.field(
      default_factory=dict
  )
  air_handler_reward_infos: Mapping[str, AirHandlerRewardInfo] = (
      dataclasses.field(default_factory=dict)
  )
  boiler_reward_infos: Mapping[str, BoilerRewardInfo] = dataclasses.field(
      default_factory=dict
  )

  def __post_init__(self):
    # Copy into read-only views so the caller's dicts can't alias the record.
    for name in (
        'zone_reward_infos',
        'air_handler_reward_infos',
        'boiler_reward_infos',
    ):
      object.__setattr__(
          self, name, types.MappingProxyType(dict(getattr(self, name)))
      )

  @property
  def start_timestamp(self) -> pd.Timestamp:
    return self.interval.start

  @property
  def end_timestamp(self) -> pd.Timestamp:
    return self.interval.end

  def zone(self, zone_id: str) -> ZoneRewardInfo:
    return _lookup(self.zone_reward_infos, zone_id, 'zone')

  def air_handler(self, air_handler_id: str) -> AirHandlerRewardInfo:
    return _lookup(
        self.air_handler_reward_infos, air_handler_id, 'air handler'
    )

  def boiler(self, boiler_id: str) -> BoilerRewardInfo:
    return _lookup(self.boiler_reward_infos, boiler_id, 'boiler')

  @classmethod
  def from_proto(cls, proto: _RewardInfoProto) -> 'RewardInfo':
    return cls(
        interval=TimeInterval.from_proto(
            proto.start_timestamp, proto.end_timestamp
        ),
        agent_id=proto.agent_id,
        scenario_id=proto.scenario_id,
        zone_reward_infos={
            zone_id: ZoneRewardInfo.from_proto(zone_info)
            for zone_id, zone_info in proto.zone_reward_infos.items()
        },
        air_handler_reward_infos={
            air_handler_id: AirHandlerRewardInfo.from_proto(air_handler_info)
            for air_handler_id, air_handler_info in (
                proto.air_handler_reward_infos.items()
            )
        },
        boiler_reward_infos={
            boiler_id: BoilerRewardInfo.from_proto(boiler_info)
            for boiler_id, boiler_info in proto.boiler_reward_infos.items()
        },
    )

  def to_proto(self) -> _RewardInfoProto:
    proto = _RewardInfoProto(
        agent_id=self.agent_id, scenario_id=self.scenario_id
    )
    proto.start_timestamp.CopyFrom(
        conversion_utils.pandas_to_proto_timestamp(self.interval.start)
    )
    proto.end_timestamp.CopyFrom(
        conversion_utils.pandas_to_proto_timestamp(self.interval.end)
    )
    for zone_id in sorted(self.zone_reward_infos):
      proto.zone_reward_infos[zone_id].CopyFrom(
          self.zone_reward_infos[zone_id].to_proto()
      )
    for air_handler_id in sorted(self.air_handler_reward_infos):
      proto.air_handler_reward_infos[air_handler_id].CopyFrom(
          self.air_handler_reward_infos[air_handler_id].to_proto()
      )
    for boiler_id in sorted(self.boiler_reward_infos):
      proto.boiler_reward_infos[boiler_id].CopyFrom(
          self.boiler_reward_infos[boiler_id].to_proto()
      )
    return proto


@dataclasses.dataclass(frozen=True)
class RewardResponse:
  """Reward signal and its breakdown for one RewardInfo.

  agent_reward_value is the signal returned to the agent. The other fields
  are for tracking and monitoring. Costs are in USD, carbon in kg.
  """

  interval: TimeInterval
  agent_reward_value: float
  productivity_reward: float = 0.0
  electricity_energy_cost: float = 0.0
  natural_gas_energy_cost: float = 0.0
  carbon_emitted: float = 0.0
  carbon_cost: float = 0.0
  productivity_weight: float = 0.0
  energy_cost_weight: float = 0.0
  carbon_emission_weight: float = 0.0
  person_productivity: float = 0.0
  total_occupancy: float = 0.0
  reward_scale: float = 1.0
  reward_shift: float = 0.0
  productivity_regret: float = 0.0
  normalized_productivity_regret: float = 0.0
  normalized_energy_cost: float = 0.0
  normalized_carbon_emission: float = 0.0

  @property
  def start_timestamp(self) -> pd.Timestamp:
    return self.interval.start

  @property
  def end_timestamp(self) -> pd.Timestamp:
    return self.interval.end

  def to_proto(self) -> smart_control_reward_pb2.RewardResponse:
    values = {
        field.name: getattr(self, field.name)
        for field in dataclasses.fields(self)
        if field.name != 'interval'
    }
    response = smart_control_reward_pb2.RewardResponse(**values)
    response.start_timestamp.CopyFrom(
        conversion_utils.pandas_to_proto_timestamp(self.interval.start)
    )
    response.end_timestamp.CopyFrom(
        conversion_utils.pandas_to_proto_timestamp(self.interval.end)
    )
    return response

  @classmethod
  def from_proto(
      cls, proto: smart_control_reward_pb2.RewardResponse
  ) -> 'RewardResponse':
    values = {
        field.name: getattr(proto, field.name)
        for field in dataclasses.fields(cls)
        if field.name != 'interval'
    }
    return cls(
        interval=TimeInterval.from_proto(
            proto.start_timestamp, proto.end_timestamp
        ),
        **values,
    )
