"""Defines a base class for energy cost and carbon for use in reward function.

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

import abc

from absl import logging
import pandas as pd
from smart_reward.utils import constants


class BaseEnergyCost(metaclass=abc.ABCMeta):
  """Prices and emission factors for one energy source (electricity, gas).

  Implementations are read-only after construction, so a single instance can
  be shared by reward functions running in parallel.
  """

  @abc.abstractmethod
  def cost(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the USD billed for a constant draw over [start_time, end_time).

    The energy is energy_rate [W] times the window length [s]. Tariffs are
    quoted per kWh, per Btu or per volume, and implementations convert to
    joules internally.

    Args:
      start_time: local time the draw begins, used for tariff lookup.
      end_time: local time the draw ends.
      energy_rate: average power [W] over the window.
    """

  @abc.abstractmethod
  def carbon(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the kg of CO2 emitted by the same draw that cost() prices.

    Args:
      start_time: local time the draw begins, used for intensity lookup.
      end_time: local time the draw ends.
      energy_rate: average power [W] over the window.
    """


def get_duration_sec(
    start_time: pd.Timestamp, end_time: pd.Timestamp, quantity: str
) -> float:
  """Returns end_time - start_time in seconds, warning beyond one hour.

  Hourly price and emission schedules are looked up by the start hour, so
  longer windows are priced as if they fell entirely within that hour.
  """
  dt = (end_time - start_time).total_seconds()
  if dt > constants.HOUR_SEC:
    logging.warning(
        'Queries greater than an hour may yield incorrect %s estimates.',
        quantity,
    )
  return dt
