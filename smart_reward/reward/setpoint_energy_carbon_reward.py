"""Reward Function for Smart Buildings.

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
Dollar-valued reward for a building control step.

Each step trades occupant comfort against the money and carbon spent to
provide it. Comfort is valued as the productivity of the occupants (USD),
energy as what the utilities bill for it (USD), and carbon as the emitted
mass priced at carbon_cost_factor (USD/kg):

        r = s - u * f - w * g

with s the productivity, f the energy cost, g the carbon cost and u, w the
energy and carbon weights. The agent receives
(r - reward_normalizer_shift) / reward_normalizer_scale, which is unbounded.
SetpointEnergyCarbonRegretFunction is the bounded alternative.
"""

import gin
from smart_reward.models import reward_records
from smart_reward.models.base_energy_cost import BaseEnergyCost
from smart_reward.reward.base_setpoint_energy_carbon_reward import BaseSetpointEnergyCarbonRewardFunction


@gin.configurable()
class SetpointEnergyCarbonRewardFunction(
    BaseSetpointEnergyCarbonRewardFunction
):
  """Reward in USD: productivity minus weighted energy and carbon costs.

  Attributes:
    max_productivity_personhour_usd: hourly value of a comfortable occupant
    productivity_midpoint_delta: K outside the band that halves productivity
    productivity_decay_stiffness: steepness of the productivity falloff
    electricity_energy_cost: prices and emissions of grid electricity
    natural_gas_energy_cost: prices and emissions of boiler gas
    energy_cost_weight: u, multiplies the energy bill
    carbon_cost_weight: w, multiplies the carbon cost
    carbon_cost_factor: USD charged per kg of CO2
    reward_normalizer_shift: subtracted from r before scaling
    reward_normalizer_scale: nonzero divisor applied after the shift
  """

  def __init__(
      self,
      max_productivity_personhour_usd: float,
      productivity_midpoint_delta: float,
      productivity_decay_stiffness: float,
      electricity_energy_cost: BaseEnergyCost,
      natural_gas_energy_cost: BaseEnergyCost,
      energy_cost_weight: float,
      carbon_cost_weight: float,
      carbon_cost_factor: float,
      reward_normalizer_shift: float = 0.0,
      reward_normalizer_scale: float = 1.0,
      **kwargs,
  ):
    super().__init__(
        max_productivity_personhour_usd=max_productivity_personhour_usd,
        productivity_midpoint_delta=productivity_midpoint_delta,
        productivity_decay_stiffness=productivity_decay_stiffness,
        electricity_energy_cost=electricity_energy_cost,
        natural_gas_energy_cost=natural_gas_energy_cost,
        carbon_cost_factor=carbon_cost_factor,
        **kwargs,
    )
    if reward_normalizer_scale == 0.0:
      raise ValueError('reward_normalizer_scale must be non-zero.')
    self._max_productivity_personhour_usd = max_productivity_personhour_usd
    self._energy_cost_weight = energy_cost_weight
    self._carbon_cost_weight = carbon_cost_weight
    self._reward_normalizer_shift = reward_normalizer_shift
    self._reward_normalizer_scale = reward_normalizer_scale

  def compute_reward_record(
      self, reward_info: reward_records.RewardInfo
  ) -> reward_records.RewardResponse:
    """Returns the real-valued reward for the current state of the building."""
    factors = self._evaluate_factors(reward_info)
    setpoint = factors.setpoint
    energy = factors.energy
    carbon = factors.carbon

    raw_reward_value = (
        setpoint.productivity
        - self._energy_cost_weight * energy.combined_energy_cost
        - self._carbon_cost_weight * carbon.carbon_cost
    )

    return reward_records.RewardResponse(
        interval=reward_info.interval,
        agent_reward_value=(raw_reward_value - self._reward_normalizer_shift)
        / self._reward_normalizer_scale,
        productivity_reward=setpoint.productivity,
        electricity_energy_cost=energy.electricity_energy_cost,
        natural_gas_energy_cost=energy.natural_gas_energy_cost,
        carbon_emitted=carbon.carbon_emitted,
        carbon_cost=carbon.carbon_cost,
        productivity_weight=1.0,
        energy_cost_weight=self._energy_cost_weight,
        carbon_emission_weight=self._carbon_cost_weight,
        person_productivity=self._max_productivity_personhour_usd,
        total_occupancy=setpoint.total_occupancy,
        reward_scale=self._reward_normalizer_scale,
        reward_shift=self._reward_normalizer_shift,
        productivity_regret=setpoint.max_productivity - setpoint.productivity,
    )
