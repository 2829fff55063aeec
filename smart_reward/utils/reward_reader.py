"""Reads reward protos written by RewardWriter and tabulates them.

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
"""

import dataclasses
import os
from typing import Sequence, Type, TypeVar

from absl import logging
import gin
from google.protobuf import message
import pandas as pd
from smart_reward.models import reward_records
from smart_reward.proto import smart_control_reward_pb2
from smart_reward.utils import constants
from smart_reward.utils import conversion_utils
from smart_reward.utils import reward_writer

_M = TypeVar('_M', bound=message.Message)

_SIZE_BYTES = 4


def read_shard(filepath: str, message_class: Type[_M]) -> list[_M]:
  """Returns every size-prefixed message in a shard, in write order.

  A truncated trailing message, e.g. from an interrupted write, is logged and
  dropped.
  """
  messages = []
  with open(filepath, 'rb') as input_file:
    while True:
      size_bytes = input_file.read(_SIZE_BYTES)
      if not size_bytes:
        break
      if len(size_bytes) < _SIZE_BYTES:
        logging.warning('Dropping truncated message at the end of %s', filepath)
        break
      size = int.from_bytes(size_bytes, 'little')
      data = input_file.read(size)
      if len(data) < size:
        logging.warning('Dropping truncated message at the end of %s', filepath)
        break
      messages.append(message_class.FromString(data))
  return messages


@gin.configurable
class RewardReader:
  """Reads the hourly shards of reward protos from a directory.

  Shards are selected by the hour encoded in their serial, so the time range
  must be given in the same time zone the writer was given.

  Attributes:
    input_dir: directory the shards were written to
  """

  def __init__(self, input_dir: str):
    self._input_dir = input_dir

  def read_reward_infos(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp
  ) -> list[smart_control_reward_pb2.RewardInfo]:
    """Reads the reward infos written in [start_time, end_time)."""
    return self._read_messages(
        constants.REWARD_INFO_PREFIX,
        smart_control_reward_pb2.RewardInfo,
        start_time,
        end_time,
    )

  def read_reward_responses(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp
  ) -> list[smart_control_reward_pb2.RewardResponse]:
    """Reads the reward responses written in [start_time, end_time)."""
    return self._read_messages(
        constants.REWARD_RESPONSE_PREFIX,
        smart_control_reward_pb2.RewardResponse,
        start_time,
        end_time,
    )

  def _read_messages(
      self,
      file_prefix: str,
      message_class: Type[_M],
      start_time: pd.Timestamp,
      end_time: pd.Timestamp,
  ) -> list[_M]:
    messages = []
    for hour in pd.date_range(start_time.floor('h'), end_time, freq='h'):
      if hour >= end_time:
        continue
      filepath = reward_writer.get_file_path(
          self._input_dir, file_prefix, reward_writer.get_serial(hour)
      )
      if not os.path.exists(filepath):
        continue
      messages.extend(read_shard(filepath, message_class))
    return messages


def get_reward_timeseries(
    reward_responses: Sequence[smart_control_reward_pb2.RewardResponse],
    time_zone: str = 'UTC',
) -> pd.DataFrame:
  """Returns reward responses as a DataFrame indexed by step start time.

  Every RewardResponse value becomes a column, plus the step end time and the
  cumulative agent reward.
  """
  rows = []
  start_times = []
  for reward_response in reward_responses:
    record = reward_records.RewardResponse.from_proto(reward_response)
    row = {
        field.name: getattr(record, field.name)
        for field in dataclasses.fields(record)
        if field.name != 'interval'
    }
    row['end_time'] = record.end_timestamp.tz_convert(time_zone)
    rows.append(row)
    start_times.append(record.start_timestamp.tz_convert(time_zone))

  index = pd.DatetimeIndex(start_times, name='start_time')
  df = pd.DataFrame(rows, index=index)
  if df.empty:
    return df
  df = df.sort_index()
  df['cumulative_reward'] = df['agent_reward_value'].cumsum()
  logging.info('Cumulative reward: %4.2f', df.iloc[-1]['cumulative_reward'])
  return df


def get_energy_use_timeseries(
    reward_infos: Sequence[smart_control_reward_pb2.RewardInfo],
    time_zone: str = 'UTC',
) -> pd.DataFrame:
  """Returns the energy use [kWh] of each step, indexed by step start time."""
  rows = []
  start_times = []
  for reward_info in reward_infos:
    rows.append(dict(conversion_utils.get_reward_info_energy_use(reward_info)))
    start_times.append(
        conversion_utils.proto_to_pandas_timestamp(
            reward_info.start_timestamp
        ).tz_convert(time_zone)
    )
  index = pd.DatetimeIndex(start_times, name='start_time')
  df = pd.DataFrame(rows, index=index)
  return df.fillna(0.0).sort_index()
