"""Base Reward Function for Smart Buildings.

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
from typing import Optional, Sequence

from smart_reward.models import reward_records
from smart_reward.models.base_energy_cost import BaseEnergyCost
from smart_reward.models.base_reward_function import BaseRewardFunction
from smart_reward.proto import smart_control_reward_pb2
from smart_reward.reward import carbon_cost_estimator
from smart_reward.reward import energy_cost_aggregator
from smart_reward.reward import setpoint_reward_calculator


@dataclasses.dataclass(frozen=True)
class RewardFactors:
  """The three reward factors evaluated for one RewardInfo."""

  setpoint: setpoint_reward_calculator.SetpointResult
  energy: energy_cost_aggregator.EnergyCostResult
  carbon: carbon_cost_estimator.CarbonResult


class BaseSetpointEnergyCarbonRewardFunction(BaseRewardFunction):
  """Reward function based on productivity, energy cost and carbon emission.

  Subclasses combine the factors in compute_reward_record(). This class wires
  the proto contract to the records, and checks that every zone, air handler
  and boiler the building is expected to report is present.

  Attributes:
    max_productivity_personhour_usd: max productivity for average occupancy in $
    productivity_midpoint_delta: temp difference from setpoint of half prod.
    productivity_decay_stiffness: midpoint slope of the decay curve
    electricity_energy_cost: cost and carbon model for electricity
    natural_gas_energy_cost: cost and carbon model for natural gas
    carbon_cost_factor: cost value in $ per kg carbon emitted
    max_electricity_rate: optional cap in W on the priced electricity rate
    max_natural_gas_rate: optional cap in W on the priced natural gas rate
    zone_ids: zone ids every RewardInfo must contain
    air_handler_ids: air handler ids every RewardInfo must contain
    boiler_ids: boiler ids every RewardInfo must contain
  """

  def __init__(
      self,
      max_productivity_personhour_usd: float,
      productivity_midpoint_delta: float,
      productivity_decay_stiffness: float,
      electricity_energy_cost: BaseEnergyCost,
      natural_gas_energy_cost: BaseEnergyCost,
      carbon_cost_factor: float = 0.0,
      max_electricity_rate: Optional[float] = None,
      max_natural_gas_rate: Optional[float] = None,
      zone_ids: Sequence[str] = (),
      air_handler_ids: Sequence[str] = (),
      boiler_ids: Sequence[str] = (),
  ):
    self._setpoint_calculator = (
        setpoint_reward_calculator.SetpointRewardCalculator(
            max_productivity_personhour_usd=max_productivity_personhour_usd,
            productivity_midpoint_delta=productivity_midpoint_delta,
            productivity_decay_stiffness=productivity_decay_stiffness,
        )
    )
    self._energy_cost_aggregator = energy_cost_aggregator.EnergyCostAggregator(
        electricity_energy_cost=electricity_energy_cost,
        natural_gas_energy_cost=natural_gas_energy_cost,
        max_electricity_rate=max_electricity_rate,
        max_natural_gas_rate=max_natural_gas_rate,
    )
    self._carbon_cost_estimator = carbon_cost_estimator.CarbonCostEstimator(
        electricity_energy_cost=electricity_energy_cost,
        natural_gas_energy_cost=natural_gas_energy_cost,
        carbon_cost_factor=carbon_cost_factor,
    )
    self._zone_ids = tuple(zone_ids)
    self._air_handler_ids = tuple(air_handler_ids)
    self._boiler_ids = tuple(boiler_ids)

  def compute_reward(
      self, energy_reward_info: smart_control_reward_pb2.RewardInfo
  ) -> smart_control_reward_pb2.RewardResponse:
    """Returns the real-valued reward for the current state of the building."""
    reward_info = reward_records.RewardInfo.from_proto(energy_reward_info)
    return self.compute_reward_record(reward_info).to_proto()

  def compute_reward_record(
      self, reward_info: reward_records.RewardInfo
  ) -> reward_records.RewardResponse:
    """Same as compute_reward(), on immutable records."""
    raise NotImplementedError()

  def _check_required_ids(self, reward_info: reward_records.RewardInfo):
    """Raises MissingMappingEntryError if an expected id is not reported."""
    for zone_id in self._zone_ids:
      reward_info.zone(zone_id)
    for air_handler_id in self._air_handler_ids:
      reward_info.air_handler(air_handler_id)
    for boiler_id in self._boiler_ids:
      reward_info.boiler(boiler_id)

  def _evaluate_factors(
      self, reward_info: reward_records.RewardInfo
  ) -> RewardFactors:
    """Validates reward_info and evaluates setpoint, energy and carbon."""
    self._check_required_ids(reward_info)
    interval = reward_info.interval
    setpoint = self._setpoint_calculator.compute(
        reward_info.zone_reward_infos, interval.duration_sec
    )
    energy = self._energy_cost_aggregator.compute(
        reward_info.air_handler_reward_infos,
        reward_info.boiler_reward_infos,
        interval,
    )
    carbon = self._carbon_cost_estimator.estimate(
        energy.electricity_energy_rate,
        energy.natural_gas_energy_rate,
        interval,
    )
    return RewardFactors(setpoint=setpoint, energy=energy, carbon=carbon)
