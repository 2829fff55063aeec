"""Reward (Regret) Function for Smart Buildings.

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

A bounded variant of r = s(setpoint) - u x f(cost) - w x g(carbon). Each
factor is expressed as a regret relative to its best and worst achievable
value in the timestep, and the weighted regret is mapped onto
[reward_shift, reward_shift + reward_scale] by reward_combiner.RewardCombiner.

The worst energy cost and carbon emission are those of running the building
at max_electricity_rate and max_natural_gas_rate for the whole timestep.
Energy rates above these maxima are capped, so the normalized cost and
emission stay within [0, 1].
"""

from typing import Sequence

import gin
from smart_reward.models import reward_records
from smart_reward.models.base_energy_cost import BaseEnergyCost
from smart_reward.reward import reward_combiner
from smart_reward.reward.base_setpoint_energy_carbon_reward import BaseSetpointEnergyCarbonRewardFunction


@gin.configurable()
class SetpointEnergyCarbonRegretFunction(
    BaseSetpointEnergyCarbonRewardFunction
):
  """Reward function based on productivity, energy cost and carbon emission.

  Attributes:
    max_productivity_personhour_usd: max occupant hourly productivity in $
    min_productivity_personhour_usd: min occupant hourly productivity in $
    max_electricity_rate: electrical power in W of the worst case
    max_natural_gas_rate: natural gas power in W of the worst case
    productivity_midpoint_delta: temp difference from setpoint of half prod.
    productivity_decay_stiffness: midpoint slope of the decay curve
    electricity_energy_cost: cost and carbon model for electricity
    natural_gas_energy_cost: cost and carbon model for natural gas
    productivity_weight: weight of the productivity regret
    energy_cost_weight: u-coefficient described above
    carbon_emission_weight: w-coefficient described above
    carbon_cost_factor: cost value in $ per kg carbon emitted
    reward_shift: lowest reward, earned at maximum regret
    reward_scale: width of the reward range
  """

  def __init__(
      self,
      max_productivity_personhour_usd: float,
      min_productivity_personhour_usd: float,
      max_electricity_rate: float,
      max_natural_gas_rate: float,
      productivity_midpoint_delta: float,
      productivity_decay_stiffness: float,
      electricity_energy_cost: BaseEnergyCost,
      natural_gas_energy_cost: BaseEnergyCost,
      productivity_weight: float,
      energy_cost_weight: float,
      carbon_emission_weight: float,
      carbon_cost_factor: float = 0.0,
      reward_shift: float = -1.0,
      reward_scale: float = 1.0,
      zone_ids: Sequence[str] = (),
      air_handler_ids: Sequence[str] = (),
      boiler_ids: Sequence[str] = (),
  ):
    if max_productivity_personhour_usd <= min_productivity_personhour_usd:
      raise ValueError(
          'max_productivity_personhour_usd must exceed'
          ' min_productivity_personhour_usd.'
      )
    super().__init__(
        max_productivity_personhour_usd=max_productivity_personhour_usd,
        productivity_midpoint_delta=productivity_midpoint_delta,
        productivity_decay_stiffness=productivity_decay_stiffness,
        electricity_energy_cost=electricity_energy_cost,
        natural_gas_energy_cost=natural_gas_energy_cost,
        carbon_cost_factor=carbon_cost_factor,
        max_electricity_rate=max_electricity_rate,
        max_natural_gas_rate=max_natural_gas_rate,
        zone_ids=zone_ids,
        air_handler_ids=air_handler_ids,
        boiler_ids=boiler_ids,
    )
    self._max_productivity_personhour_usd = max_productivity_personhour_usd
    self._reward_combiner = reward_combiner.RewardCombiner(
        productivity_weight=productivity_weight,
        energy_cost_weight=energy_cost_weight,
        carbon_emission_weight=carbon_emission_weight,
        min_productivity_personhour_usd=min_productivity_personhour_usd,
        reward_shift=reward_shift,
        reward_scale=reward_scale,
    )

  def compute_reward_record(
      self, reward_info: reward_records.RewardInfo
  ) -> reward_records.RewardResponse:
    """Returns the bounded reward for the current state of the building."""
    factors = self._evaluate_factors(reward_info)
    interval = reward_info.interval

    max_energy = self._energy_cost_aggregator.compute_max(interval)
    max_carbon = self._carbon_cost_estimator.estimate(
        max_energy.electricity_energy_rate,
        max_energy.natural_gas_energy_rate,
        interval,
    )

    return self._reward_combiner.combine(
        interval=interval,
        person_productivity=self._max_productivity_personhour_usd,
        setpoint=factors.setpoint,
        energy=factors.energy,
        max_energy=max_energy,
        carbon=factors.carbon,
        max_carbon=max_carbon,
    )
