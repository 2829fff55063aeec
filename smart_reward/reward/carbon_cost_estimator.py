"""Converts electrical and natural gas energy use into carbon mass and cost.

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

import gin
from smart_reward.models import reward_records
from smart_reward.models.base_energy_cost import BaseEnergyCost
from smart_reward.utils import units


@dataclasses.dataclass(frozen=True)
class CarbonResult:
  """Carbon emitted [kg] per source and its total cost [USD]."""

  electricity_carbon_emission: float
  natural_gas_carbon_emission: float
  carbon_cost: float

  @property
  def carbon_emitted(self) -> float:
    return self.electricity_carbon_emission + self.natural_gas_carbon_emission


@gin.configurable()
class CarbonCostEstimator:
  """Applies each source's emission factor and prices the carbon emitted.

  Attributes:
    electricity_energy_cost: emission model for electricity
    natural_gas_energy_cost: emission model for natural gas
    carbon_cost_factor: cost value in $ per kg carbon emitted
  """

  def __init__(
      self,
      electricity_energy_cost: BaseEnergyCost,
      natural_gas_energy_cost: BaseEnergyCost,
      carbon_cost_factor: float = 0.0,
  ):
    if carbon_cost_factor < 0.0:
      raise ValueError('Carbon cost factor must be >= 0.')
    self._electricity_energy_cost = electricity_energy_cost
    self._natural_gas_energy_cost = natural_gas_energy_cost
    self._carbon_cost_factor = units.check_finite(
        'carbon_cost_factor', carbon_cost_factor
    )

  @property
  def carbon_cost_factor(self) -> float:
    return self._carbon_cost_factor

  def estimate(
      self,
      electricity_energy_rate: float,
      natural_gas_energy_rate: float,
      interval: reward_records.TimeInterval,
  ) -> CarbonResult:
    """Returns the carbon emitted by the two energy rates over the interval.

    Raises:
      NonFiniteValueError: if a rate, or a resulting mass, is not finite.
    """
    electricity_energy_rate = units.check_finite(
        'electricity_energy_rate', electricity_energy_rate
    )
    natural_gas_energy_rate = units.check_finite(
        'natural_gas_energy_rate', natural_gas_energy_rate
    )

    electricity_carbon_emission = units.check_finite(
        'electricity_carbon_emission',
        self._electricity_energy_cost.carbon(
            start_time=interval.start,
            end_time=interval.end,
            energy_rate=electricity_energy_rate,
        ),
    )
    natural_gas_carbon_emission = units.check_finite(
        'natural_gas_carbon_emission',
        self._natural_gas_energy_cost.carbon(
            start_time=interval.start,
            end_time=interval.end,
            energy_rate=natural_gas_energy_rate,
        ),
    )
    return CarbonResult(
        electricity_carbon_emission=electricity_carbon_emission,
        natural_gas_carbon_emission=natural_gas_carbon_emission,
        carbon_cost=(electricity_carbon_emission + natural_gas_carbon_emission)
        * self._carbon_cost_factor,
    )
