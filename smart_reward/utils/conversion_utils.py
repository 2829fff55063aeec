"""General-purpose conversion utilities for the reward function.

Copyright 2022 Google LLC

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    https://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import collections
import functools
from typing import Mapping

import holidays
import pandas as pd
from smart_reward.proto import smart_control_reward_pb2
from smart_reward.utils import units

from google.protobuf import timestamp_pb2


def pandas_to_proto_timestamp(
    pandas_timestamp: pd.Timestamp,
) -> timestamp_pb2.Timestamp:
  """Returns the instant of pandas_timestamp with nanosecond precision.

  Naive timestamps are taken to be in UTC.
  """
  ts = timestamp_pb2.Timestamp()
  ts.FromNanoseconds(pandas_timestamp.value)
  return ts


def proto_to_pandas_timestamp(
    proto_timestamp: timestamp_pb2.Timestamp,
) -> pd.Timestamp:
  """Returns a UTC pandas Timestamp for a protobuf Timestamp."""
  return pd.Timestamp(proto_timestamp.ToNanoseconds(), unit='ns', tz='UTC')


@functools.cache
def _us_holidays() -> holidays.HolidayBase:
  return holidays.US()


def is_work_day(timestamp: pd.Timestamp) -> bool:
  """Returns False on weekends and US federal holidays."""

  return timestamp.weekday() < 5 and timestamp.date() not in _us_holidays()


_AIR_HANDLER_ENERGY_FIELDS = (
    ('air_handler_blower_electricity', 'blower_electrical_energy_rate'),
    (
        'air_handler_air_conditioning',
        'air_conditioning_electrical_energy_rate',
    ),
)
_BOILER_ENERGY_FIELDS = (
    ('boiler_natural_gas_heating_energy', 'natural_gas_heating_energy_rate'),
    ('boiler_pump_electrical_energy', 'pump_electrical_energy_rate'),
)


def get_reward_info_energy_use(
    reward_info: smart_control_reward_pb2.RewardInfo,
) -> Mapping[str, float]:
  """Returns the kWh used by each device category over the step."""
  dt = (
      proto_to_pandas_timestamp(reward_info.end_timestamp)
      - proto_to_pandas_timestamp(reward_info.start_timestamp)
  ).total_seconds()

  energy_use = collections.defaultdict(float)
  for device_infos, fields in (
      (reward_info.air_handler_reward_infos, _AIR_HANDLER_ENERGY_FIELDS),
      (reward_info.boiler_reward_infos, _BOILER_ENERGY_FIELDS),
  ):
    for device_id in sorted(device_infos):
      for category, rate_field in fields:
        energy_use[category] += units.energy_rate_to_kwh(
            getattr(device_infos[device_id], rate_field), dt
        )
  return energy_use
