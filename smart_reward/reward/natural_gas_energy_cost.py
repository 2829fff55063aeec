"""Energy carbon and cost model for natural gas.

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

Natural gas is billed by volume (thousand cubic feet) at a price that varies
with the month, and emits a fixed mass of CO2 per Btu burned. A negative
energy rate is treated as no consumption.
"""

from typing import Sequence

import gin
import numpy as np
import pandas as pd
from smart_reward.models import base_energy_cost
from smart_reward.utils import constants
from smart_reward.utils import units

UNIT = units.UNIT

# Commercial natural gas price, USD per thousand cubic feet, January first.
MONTHLY_PRICE_PER_KCF = (
    9.02,
    8.40,
    7.77,
    7.32,
    7.09,
    6.86,
    6.90,
    6.95,
    6.99,
    7.65,
    8.32,
    8.98,
)

# Source: https://www.eia.gov/environment/emissions/co2_vol_mass.php
# 53.1 kg CO2 per million Btu of natural gas.
CARBON_KG_PER_MMBTU = 53.1


@gin.configurable()
class NaturalGasEnergyCost(base_energy_cost.BaseEnergyCost):
  """Monthly priced natural gas with a constant emission factor."""

  def __init__(
      self,
      gas_price_by_month: Sequence[float] = MONTHLY_PRICE_PER_KCF,
      carbon_kg_per_mmbtu: float = CARBON_KG_PER_MMBTU,
  ):
    if len(gas_price_by_month) != 12:
      raise ValueError('Gas prices must have 12 monthly entries.')
    if carbon_kg_per_mmbtu < 0.0:
      raise ValueError('Carbon emission factor must be >= 0.')

    prices_per_kcf = np.array([
        units.check_finite('gas_price_by_month', price)
        for price in gas_price_by_month
    ])
    # 1 kcf of natural gas holds KWH_PER_KCF_NATURAL_GAS kWh.
    self._gas_prices = (
        prices_per_kcf
        / constants.KWH_PER_KCF_NATURAL_GAS
        * UNIT.USD
        / UNIT.kilowatt_hour
    ).to(UNIT.USD / UNIT.joule)
    self._carbon_rate = (
        units.check_finite('carbon_kg_per_mmbtu', carbon_kg_per_mmbtu)
        / (1.0e6 * constants.JOULES_PER_BTU)
        * UNIT.kilogram
        / UNIT.joule
    )

  def cost(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the cost in USD of the gas burned over the window."""
    dt = (end_time - start_time).total_seconds()
    price = self._gas_prices[start_time.month - 1]
    return (price * self._energy(energy_rate, dt)).to(UNIT.USD).magnitude

  def carbon(
      self, start_time: pd.Timestamp, end_time: pd.Timestamp, energy_rate: float
  ) -> float:
    """Returns the carbon mass in kg emitted by the gas burned."""
    dt = (end_time - start_time).total_seconds()
    return (
        (self._carbon_rate * self._energy(energy_rate, dt))
        .to(UNIT.kilogram)
        .magnitude
    )

  def _energy(self, energy_rate: float, dt: float):
    if energy_rate <= 0.0:
      return 0.0 * UNIT.joule
    return energy_rate * UNIT.watt * dt * UNIT.second
