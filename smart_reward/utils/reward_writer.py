"""Writes reward protos to hourly shards on disk.

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

import os

from absl import logging
import gin
from google.protobuf import message
import pandas as pd
from smart_reward.proto import smart_control_reward_pb2
from smart_reward.utils import constants

_SERIAL_FORMAT = '%Y.%m.%d.%H'


def get_serial(timestamp: pd.Timestamp) -> str:
  return timestamp.strftime(_SERIAL_FORMAT)


def get_file_path(output_dir: str, file_prefix: str, serial: str) -> str:
  return os.path.join(output_dir, '%s_%s' % (file_prefix, serial))


@gin.configurable
class RewardWriter:
  """Writes RewardInfo and RewardResponse protos as hourly shards.

  Each type of message uses a different file prefix to identify the type of
  proto. Each shard is identified with a serial based on the timestamp. For
  example, a file of RewardResponses written on the 4th hour of 5/25 would be
  reward_response_2021.05.25.04. Every message is prefixed with its size as a
  4-byte little-endian integer.

  Attributes:
    output_dir: destination directory
  """

  def __init__(self, output_dir: str):
    self._output_dir = output_dir
    os.makedirs(output_dir, exist_ok=True)
    logging.info('Reward writer output directory %s', self._output_dir)

  @property
  def output_dir(self) -> str:
    return self._output_dir

  def write_reward_info(
      self,
      reward_info: smart_control_reward_pb2.RewardInfo,
      timestamp: pd.Timestamp,
  ) -> None:
    """Writes the reward info obtained from the environment."""
    filepath = get_file_path(
        self._output_dir, constants.REWARD_INFO_PREFIX, get_serial(timestamp)
    )
    self._write_msg_to_disk(reward_info, filepath)

  def write_reward_response(
      self,
      reward_response: smart_control_reward_pb2.RewardResponse,
      timestamp: pd.Timestamp,
  ) -> None:
    """Writes the reward response from the reward function."""
    filepath = get_file_path(
        self._output_dir,
        constants.REWARD_RESPONSE_PREFIX,
        get_serial(timestamp),
    )
    self._write_msg_to_disk(reward_response, filepath)

  def _write_msg_to_disk(self, proto: message.Message, filepath: str):
    """Creates or appends a binary file with the proto."""

    if os.path.exists(filepath):
      mode = 'ab'
    else:
      mode = 'wb'

    try:
      with open(filepath, mode) as output_file:
        size = proto.ByteSize()
        output_file.write(size.to_bytes(4, 'little'))
        output_file.write(proto.SerializeToString())

    except IOError:
      logging.exception(
          'IOException encountered. Failed to write proto to %s', filepath
      )
