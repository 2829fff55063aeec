"""Energy cost and carbon model with a fixed price and emission factor.

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

import gin
import pandas as pd
from smart_reward.models.base_energy_cost import BaseEnergyCost
from smart_reward.utils import units

UNIT = units.UNIT


@gin.configurable()
class FlatRateEnergyCost(BaseEnergyCost):
  """Prices energy at a constant USD/kWh and emits a constant kg CO2/kWh.

  Attributes:
    usd_per_kwh: energy price in USD per kWh.
    kg_per_kwh: emission factor in kg CO2 per kWh.
  """

  def __init__(self, usd_per_kwh: float, kg_per_kwh: float = 0.0):
    if usd_per_kwh < 0.0 or kg_per_kwh < 0.0:
      raise ValueError('Energy price and emission factor must be >= 0.')

    self._energy_price = (
        units.check_finite('usd_per_kwh', usd_per_kwh)
        * UNIT.USD
        / UNIT.kilowatt_hour
    )
    self._carbon_rate = (
        units.check_finite('kg_per_kwh', kg_per_kwh)
        * UNIT.kilogram
        / UNIT.kilowatt_hour
    )

  @property
  def usd_per_kwh(self) -> float:
    return self._energy_price.magnitude

  @property
  def kg_per_kwh(self) -> float:
    return self._carbon_rate.magnitude

  def cost(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the cost in USD, with negative energy rates costing nothing."""
    energy = self._energy(start_time, end_time, energy_rate)
    return (self._energy_price * energy).to(UNIT.USD).magnitude

  def carbon(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the carbon emitted in kg."""
    energy = self._energy(start_time, end_time, energy_rate)
    return (self._carbon_rate * energy).to(UNIT.kilogram).magnitude

  def _energy(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ):
    dt = (end_time - start_time).total_seconds()
    return max(energy_rate, 0.0) * UNIT.watt * dt * UNIT.second
