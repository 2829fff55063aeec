"""Aggregates electricity and natural gas cost across air handlers and boilers.

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

Energy rate is divided into electricity and natural gas because the two
sources are priced and emit carbon differently. All electricity is assumed to
come from the same source.

  electricity [W] = sum(blower + air conditioning) + sum(boiler pumps)
  natural gas [W] = sum(boiler natural gas heating)

Each rate is held constant over the interval and priced by its cost model.
"""

import dataclasses
from typing import Mapping, Optional

import gin
from smart_reward.models import reward_records
from smart_reward.models.base_energy_cost import BaseEnergyCost
from smart_reward.utils import units


@dataclasses.dataclass(frozen=True)
class EnergyCostResult:
  """Energy use and cost over one interval.

  Rates are in W, energy in kWh and costs in USD. The rates are the ones that
  were priced, i.e. after capping.
  """

  electricity_energy_rate: float
  natural_gas_energy_rate: float
  electricity_energy_kwh: float
  natural_gas_energy_kwh: float
  electricity_energy_cost: float
  natural_gas_energy_cost: float

  @property
  def combined_energy_cost(self) -> float:
    return self.electricity_energy_cost + self.natural_gas_energy_cost


def sum_electricity_energy_rate(
    air_handler_reward_infos: Mapping[
        str, reward_records.AirHandlerRewardInfo
    ],
    boiler_reward_infos: Mapping[str, reward_records.BoilerRewardInfo],
) -> float:
  """Returns the sum of electrical energy rate over the interval in W.

  Raises:
    NegativeEnergyError: if any electrical rate is negative.
    NonFiniteValueError: if any electrical rate is NaN or infinite.
  """
  electrical_energy_rate = 0.0
  for air_handler_id in sorted(air_handler_reward_infos):
    air_handler_info = air_handler_reward_infos[air_handler_id]
    electrical_energy_rate += units.check_energy_rate(
        f'{air_handler_id}.blower_electrical_energy_rate',
        air_handler_info.blower_electrical_energy_rate,
    )
    electrical_energy_rate += units.check_energy_rate(
        f'{air_handler_id}.air_conditioning_electrical_energy_rate',
        air_handler_info.air_conditioning_electrical_energy_rate,
    )

  for boiler_id in sorted(boiler_reward_infos):
    electrical_energy_rate += units.check_energy_rate(
        f'{boiler_id}.pump_electrical_energy_rate',
        boiler_reward_infos[boiler_id].pump_electrical_energy_rate,
    )
  return electrical_energy_rate


def sum_natural_gas_energy_rate(
    boiler_reward_infos: Mapping[str, reward_records.BoilerRewardInfo],
) -> float:
  """Returns the sum of nat gas energy rate over the interval in W."""
  gas_energy_rate = 0.0
  for boiler_id in sorted(boiler_reward_infos):
    gas_energy_rate += units.check_energy_rate(
        f'{boiler_id}.natural_gas_heating_energy_rate',
        boiler_reward_infos[boiler_id].natural_gas_heating_energy_rate,
    )
  return gas_energy_rate


@gin.configurable()
class EnergyCostAggregator:
  """Prices the building's electricity and natural gas use.

  Attributes:
    electricity_energy_cost: cost and carbon model for electricity
    natural_gas_energy_cost: cost and carbon model for natural gas
    max_electricity_rate: optional cap in W on the priced electricity rate
    max_natural_gas_rate: optional cap in W on the priced natural gas rate
  """

  def __init__(
      self,
      electricity_energy_cost: BaseEnergyCost,
      natural_gas_energy_cost: BaseEnergyCost,
      max_electricity_rate: Optional[float] = None,
      max_natural_gas_rate: Optional[float] = None,
  ):
    self._electricity_energy_cost = electricity_energy_cost
    self._natural_gas_energy_cost = natural_gas_energy_cost
    self._max_electricity_rate = _check_max_rate(
        'max_electricity_rate', max_electricity_rate
    )
    self._max_natural_gas_rate = _check_max_rate(
        'max_natural_gas_rate', max_natural_gas_rate
    )

  @property
  def electricity_energy_cost(self) -> BaseEnergyCost:
    return self._electricity_energy_cost

  @property
  def natural_gas_energy_cost(self) -> BaseEnergyCost:
    return self._natural_gas_energy_cost

  @property
  def max_electricity_rate(self) -> Optional[float]:
    return self._max_electricity_rate

  @property
  def max_natural_gas_rate(self) -> Optional[float]:
    return self._max_natural_gas_rate

  def compute(
      self,
      air_handler_reward_infos: Mapping[
          str, reward_records.AirHandlerRewardInfo
      ],
      boiler_reward_infos: Mapping[str, reward_records.BoilerRewardInfo],
      interval: reward_records.TimeInterval,
  ) -> EnergyCostResult:
    """Returns the electricity and natural gas cost over the interval."""
    electricity_energy_rate = _cap(
        sum_electricity_energy_rate(
            air_handler_reward_infos, boiler_reward_infos
        ),
        self._max_electricity_rate,
    )
    natural_gas_energy_rate = _cap(
        sum_natural_gas_energy_rate(boiler_reward_infos),
        self._max_natural_gas_rate,
    )
    return self.price(
        electricity_energy_rate, natural_gas_energy_rate, interval
    )

  def compute_max(
      self, interval: reward_records.TimeInterval
  ) -> EnergyCostResult:
    """Returns the cost of running at the capped rates for the interval.

    Raises:
      ValueError: if the aggregator was built without maximum rates.
    """
    if None in (self._max_electricity_rate, self._max_natural_gas_rate):
      raise ValueError('Maximum energy rates are not configured.')
    return self.price(
        self._max_electricity_rate, self._max_natural_gas_rate, interval
    )

  def price(
      self,
      electricity_energy_rate: float,
      natural_gas_energy_rate: float,
      interval: reward_records.TimeInterval,
  ) -> EnergyCostResult:
    duration_sec = interval.duration_sec
    return EnergyCostResult(
        electricity_energy_rate=electricity_energy_rate,
        natural_gas_energy_rate=natural_gas_energy_rate,
        electricity_energy_kwh=units.energy_rate_to_kwh(
            electricity_energy_rate, duration_sec
        ),
        natural_gas_energy_kwh=units.energy_rate_to_kwh(
            natural_gas_energy_rate, duration_sec
        ),
        electricity_energy_cost=self._electricity_energy_cost.cost(
            start_time=interval.start,
            end_time=interval.end,
            energy_rate=electricity_energy_rate,
        ),
        natural_gas_energy_cost=self._natural_gas_energy_cost.cost(
            start_time=interval.start,
            end_time=interval.end,
            energy_rate=natural_gas_energy_rate,
        ),
    )


def _check_max_rate(name: str, max_rate: Optional[float]) -> Optional[float]:
  if max_rate is None:
    return None
  max_rate = units.check_finite(name, max_rate)
  if max_rate <= 0.0:
    raise ValueError(f'{name} must be > 0.')
  return max_rate


def _cap(energy_rate: float, max_rate: Optional[float]) -> float:
  if max_rate is None:
    return energy_rate
  return min(energy_rate, max_rate)

