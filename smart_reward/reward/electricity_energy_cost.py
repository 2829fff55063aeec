"""Energy carbon and cost model for electricity.

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

Electricity is priced on a time-of-use schedule (by hour of day, with separate
workday and weekend/holiday tables) and emits carbon at an hourly grid
intensity.
"""

from typing import Sequence

import gin
import numpy as np
import pandas as pd
from smart_reward.models import base_energy_cost
from smart_reward.utils import conversion_utils
from smart_reward.utils import units

UNIT = units.UNIT

# Average hourly grid intensity of a Silicon Valley data center site
# (US-SVL-BORD1212), kg CO2 / MWh, indexed by local hour.
CARBON_EMISSION_BY_HOUR = (
    88.19666493, 87.79190866, 87.87607686, 87.83054163,  # 00-03
    88.00279618, 88.19648183, 89.70663283, 93.97947901,  # 04-07
    98.85868291, 100.7853521, 101.3866866, 101.7795612,  # 08-11
    102.5919168, 103.4403736, 104.1380294, 104.7359292,  # 12-15
    102.0714466, 97.04226176, 93.57895651, 92.46355045,  # 16-19
    91.72914657, 90.69209747, 89.76552213, 88.99950995,  # 20-23
)

# PG&E commercial time-of-use tariff, cents / kWh, indexed by local hour.
WEEKDAY_PRICE_BY_HOUR = (16.0,) * 6 + (18.0,) * 6 + (20.0,) * 7 + (16.0,) * 5
WEEKEND_PRICE_BY_HOUR = (16.0,) * 24

_HOURS_IN_DAY = 24


def _check_hourly_schedule(name: str, values: Sequence[float]) -> np.ndarray:
  if len(values) != _HOURS_IN_DAY:
    raise ValueError(f'{name} must have {_HOURS_IN_DAY} entries.')
  return np.array([units.check_finite(name, v) for v in values])


@gin.configurable()
class ElectricityEnergyCost(base_energy_cost.BaseEnergyCost):
  """Time-of-use electricity prices with an hourly carbon intensity.

  Both price and intensity are looked up by the hour the window starts in.
  The sign of the energy rate is ignored: a chiller drawing heat out of the
  building consumes electricity just like a heater does.

  Attributes:
    weekday_energy_prices: 24 hourly prices in cents/kWh on workdays.
    weekend_energy_prices: 24 hourly prices in cents/kWh on weekends and US
      holidays.
    carbon_emission_rates: 24 hourly grid intensities in kg/MWh.
  """

  def __init__(
      self,
      weekday_energy_prices: Sequence[float] = WEEKDAY_PRICE_BY_HOUR,
      weekend_energy_prices: Sequence[float] = WEEKEND_PRICE_BY_HOUR,
      carbon_emission_rates: Sequence[float] = CARBON_EMISSION_BY_HOUR,
  ):
    usd_per_joule = UNIT.USD / UNIT.joule
    self._prices_by_day_type = {
        True: (
            _check_hourly_schedule(
                'weekday_energy_prices', weekday_energy_prices
            )
            * UNIT.US_cent
            / UNIT.kilowatt_hour
        ).to(usd_per_joule),
        False: (
            _check_hourly_schedule(
                'weekend_energy_prices', weekend_energy_prices
            )
            * UNIT.US_cent
            / UNIT.kilowatt_hour
        ).to(usd_per_joule),
    }
    self._kg_per_joule = (
        _check_hourly_schedule('carbon_emission_rates', carbon_emission_rates)
        * UNIT.kilogram
        / UNIT.megawatt_hour
    ).to(UNIT.kilogram / UNIT.joule)

  def cost(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the USD price of drawing |energy_rate| W over the window."""
    energy = _window_energy(start_time, end_time, energy_rate, 'price')
    prices = self._prices_by_day_type[conversion_utils.is_work_day(start_time)]
    return (prices[start_time.hour] * energy).to(UNIT.USD).magnitude

  def carbon(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the kg of CO2 the grid emits to supply |energy_rate| W."""
    energy = _window_energy(start_time, end_time, energy_rate, 'carbon')
    intensity = self._kg_per_joule[start_time.hour]
    return (intensity * energy).to(UNIT.kilogram).magnitude


def _window_energy(
    start_time: pd.Timestamp,
    end_time: pd.Timestamp,
    energy_rate: float,
    quantity: str,
):
  dt = base_energy_cost.get_duration_sec(start_time, end_time, quantity)
  return np.abs(energy_rate) * UNIT.watt * dt * UNIT.second
