"""Combines productivity, energy cost and carbon into one bounded reward.

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

Each factor is first normalized to a regret in [0, 1]:

  productivity regret  = 1 - (s - s_min) / (s_max - s_min)
  energy cost          = f(cost) / f_max
  carbon emission      = g(carbon) / g_max

where s_max = occupancy x productivity is the maximum possible productivity,
s_min the productivity floor, and f_max, g_max the cost and emission when
running at the maximum energy rates. The weighted average

  regret = [u_p x productivity regret + u x energy cost + w x carbon emission]
           / [u_p + u + w]

is mapped affinely onto [reward_shift, reward_shift + reward_scale], so that
zero regret earns reward_shift + reward_scale and maximum regret earns
reward_shift.
"""

from absl import logging
import gin
from smart_reward.models import reward_records
from smart_reward.reward import carbon_cost_estimator
from smart_reward.reward import energy_cost_aggregator
from smart_reward.reward import errors
from smart_reward.reward import setpoint_reward_calculator
from smart_reward.utils import constants
from smart_reward.utils import units


def _normalize(value: float, max_value: float) -> float:
  """Returns value / max_value clipped to [0, 1], or 0 when max_value is 0."""
  if max_value <= 0.0:
    return 0.0
  return min(max(value / max_value, 0.0), 1.0)


@gin.configurable()
class RewardCombiner:
  """Weights and normalizes the reward factors into a RewardResponse.

  Attributes:
    productivity_weight: weight of the productivity regret.
    energy_cost_weight: u-coefficient described above.
    carbon_emission_weight: w-coefficient described above.
    min_productivity_personhour_usd: productivity floor of one occupant.
    reward_shift: lowest reward, earned at maximum regret.
    reward_scale: width of the reward range.
  """

  def __init__(
      self,
      productivity_weight: float,
      energy_cost_weight: float,
      carbon_emission_weight: float,
      min_productivity_personhour_usd: float = 0.0,
      reward_shift: float = -1.0,
      reward_scale: float = 1.0,
  ):
    weights = {
        'productivity_weight': productivity_weight,
        'energy_cost_weight': energy_cost_weight,
        'carbon_emission_weight': carbon_emission_weight,
    }
    for name, weight in weights.items():
      if units.check_finite(name, weight) < 0.0:
        raise errors.InvalidRangeError(f'{name} must be >= 0, got {weight}.')
    if sum(weights.values()) <= 0.0:
      raise errors.InvalidRangeError('At least one weight must be positive.')
    if units.check_finite('reward_scale', reward_scale) <= 0.0:
      raise errors.InvalidRangeError(
          f'reward_scale must be > 0, got {reward_scale}.'
      )
    if (
        units.check_finite(
            'min_productivity_personhour_usd', min_productivity_personhour_usd
        )
        < 0.0
    ):
      raise errors.InvalidRangeError('Min productivity must be >= 0.')

    self._productivity_weight = productivity_weight
    self._energy_cost_weight = energy_cost_weight
    self._carbon_emission_weight = carbon_emission_weight
    self._min_productivity_personhour_usd = min_productivity_personhour_usd
    self._reward_shift = units.check_finite('reward_shift', reward_shift)
    self._reward_scale = reward_scale

  @property
  def min_productivity_personhour_usd(self) -> float:
    return self._min_productivity_personhour_usd

  def combine(
      self,
      interval: reward_records.TimeInterval,
      person_productivity: float,
      setpoint: setpoint_reward_calculator.SetpointResult,
      energy: energy_cost_aggregator.EnergyCostResult,
      max_energy: energy_cost_aggregator.EnergyCostResult,
      carbon: carbon_cost_estimator.CarbonResult,
      max_carbon: carbon_cost_estimator.CarbonResult,
  ) -> reward_records.RewardResponse:
    """Returns the fully populated response for one timestep.

    Args:
      interval: the timestep.
      person_productivity: max productivity of one occupant per hour in USD.
      setpoint: zone productivity for the timestep.
      energy: actual energy cost for the timestep.
      max_energy: energy cost at the maximum energy rates.
      carbon: actual carbon emission for the timestep.
      max_carbon: carbon emission at the maximum energy rates.
    """
    min_productivity = (
        self._min_productivity_personhour_usd
        * setpoint.total_occupancy
        * interval.duration_sec
        / constants.HOUR_SEC
    )
    max_productivity = setpoint.max_productivity
    actual_productivity = max(setpoint.productivity, min_productivity)

    if setpoint.total_occupancy > 0.0 and max_productivity > min_productivity:
      normalized_productivity_regret = 1.0 - _normalize(
          actual_productivity - min_productivity,
          max_productivity - min_productivity,
      )
    else:
      normalized_productivity_regret = 0.0

    normalized_energy_cost = _normalize(
        energy.combined_energy_cost, max_energy.combined_energy_cost
    )
    normalized_carbon_emission = _normalize(
        carbon.carbon_emitted, max_carbon.carbon_emitted
    )

    total_weight = (
        self._productivity_weight
        + self._energy_cost_weight
        + self._carbon_emission_weight
    )
    regret = (
        normalized_productivity_regret * self._productivity_weight
        + normalized_energy_cost * self._energy_cost_weight
        + normalized_carbon_emission * self._carbon_emission_weight
    ) / total_weight
    agent_reward_value = self._reward_shift + self._reward_scale * (
        1.0 - regret
    )

    logging.debug(
        'Reward %.4f: productivity regret %.4f, energy cost %.4f, carbon'
        ' emission %.4f.',
        agent_reward_value,
        normalized_productivity_regret,
        normalized_energy_cost,
        normalized_carbon_emission,
    )

    return reward_records.RewardResponse(
        interval=interval,
        agent_reward_value=agent_reward_value,
        productivity_reward=actual_productivity,
        electricity_energy_cost=energy.electricity_energy_cost,
        natural_gas_energy_cost=energy.natural_gas_energy_cost,
        carbon_emitted=carbon.carbon_emitted,
        carbon_cost=carbon.carbon_cost,
        productivity_weight=self._productivity_weight,
        energy_cost_weight=self._energy_cost_weight,
        carbon_emission_weight=self._carbon_emission_weight,
        person_productivity=person_productivity,
        total_occupancy=setpoint.total_occupancy,
        reward_scale=self._reward_scale,
        reward_shift=self._reward_shift,
        productivity_regret=max_productivity - actual_productivity,
        normalized_productivity_regret=normalized_productivity_regret,
        normalized_energy_cost=normalized_energy_cost,
        normalized_carbon_emission=normalized_carbon_emission,
    )
