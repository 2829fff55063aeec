"""Tests for reward_combiner.

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

import itertools

from absl.testing import absltest
from absl.testing import parameterized
import pandas as pd
from smart_reward.models import reward_records
from smart_reward.reward import carbon_cost_estimator
from smart_reward.reward import energy_cost_aggregator
from smart_reward.reward import errors
from smart_reward.reward import reward_combiner
from smart_reward.reward import setpoint_reward_calculator

_ONE_HOUR = reward_records.TimeInterval(
    start=pd.Timestamp('2021-05-06 10:00:00+0'),
    end=pd.Timestamp('2021-05-06 11:00:00+0'),
)


def _setpoint(productivity, max_productivity=1000.0, total_occupancy=2.0):
  return setpoint_reward_calculator.SetpointResult(
      setpoint_penalty=0.0,
      productivity=productivity,
      max_productivity=max_productivity,
      total_occupancy=total_occupancy,
      zones={},
  )


def _energy(cost):
  return energy_cost_aggregator.EnergyCostResult(
      electricity_energy_rate=0.0,
      natural_gas_energy_rate=0.0,
      electricity_energy_kwh=0.0,
      natural_gas_energy_kwh=0.0,
      electricity_energy_cost=cost / 2.0,
      natural_gas_energy_cost=cost / 2.0,
  )


def _carbon(emitted):
  return carbon_cost_estimator.CarbonResult(
      electricity_carbon_emission=emitted,
      natural_gas_carbon_emission=0.0,
      carbon_cost=0.0,
  )


class RewardCombinerTest(parameterized.TestCase):

  @parameterized.named_parameters([
      ('no_regret', 1000.0, 0.0, 0.0, 0.0),
      ('max_regret', 0.0, 10.0, 5.0, -1.0),
      ('half_productivity', 500.0, 0.0, 0.0, -0.5 / 3.0),
      ('full_energy', 1000.0, 10.0, 0.0, -1.0 / 3.0),
      ('full_carbon', 1000.0, 0.0, 5.0, -1.0 / 3.0),
  ])
  def test_combine(self, productivity, cost, emitted, expected):
    response = self._combine(
        reward_combiner.RewardCombiner(1.0, 1.0, 1.0),
        productivity,
        cost,
        emitted,
    )
    self.assertAlmostEqual(expected, response.agent_reward_value)

  def test_response_fields(self):
    response = self._combine(
        reward_combiner.RewardCombiner(
            productivity_weight=0.6,
            energy_cost_weight=0.2,
            carbon_emission_weight=0.2,
            reward_shift=2.0,
            reward_scale=3.0,
        ),
        productivity=750.0,
        cost=4.0,
        emitted=1.0,
    )
    self.assertEqual(_ONE_HOUR, response.interval)
    self.assertAlmostEqual(750.0, response.productivity_reward)
    self.assertAlmostEqual(250.0, response.productivity_regret)
    self.assertAlmostEqual(0.25, response.normalized_productivity_regret)
    self.assertAlmostEqual(0.4, response.normalized_energy_cost)
    self.assertAlmostEqual(0.2, response.normalized_carbon_emission)
    self.assertAlmostEqual(2.0, response.electricity_energy_cost)
    self.assertAlmostEqual(1.0, response.carbon_emitted)
    self.assertAlmostEqual(500.0, response.person_productivity)
    self.assertAlmostEqual(2.0, response.total_occupancy)
    self.assertEqual(2.0, response.reward_shift)
    self.assertEqual(3.0, response.reward_scale)
    # regret = 0.6 x 0.25 + 0.2 x 0.4 + 0.2 x 0.2 = 0.27
    self.assertAlmostEqual(2.0 + 3.0 * 0.73, response.agent_reward_value)

  def test_min_productivity_floor(self):
    combiner = reward_combiner.RewardCombiner(
        1.0, 0.0, 0.0, min_productivity_personhour_usd=100.0
    )
    response = self._combine(combiner, productivity=50.0, cost=0.0, emitted=0)
    # Floor is 100 USD x 2 people x 1 h.
    self.assertAlmostEqual(200.0, response.productivity_reward)
    self.assertAlmostEqual(1.0, response.normalized_productivity_regret)
    self.assertAlmostEqual(-1.0, response.agent_reward_value)

  def test_unoccupied_has_no_productivity_regret(self):
    response = reward_combiner.RewardCombiner(1.0, 1.0, 1.0).combine(
        interval=_ONE_HOUR,
        person_productivity=500.0,
        setpoint=_setpoint(0.0, max_productivity=0.0, total_occupancy=0.0),
        energy=_energy(0.0),
        max_energy=_energy(10.0),
        carbon=_carbon(0.0),
        max_carbon=_carbon(5.0),
    )
    self.assertEqual(0.0, response.normalized_productivity_regret)
    self.assertAlmostEqual(0.0, response.agent_reward_value)

  def test_reward_is_bounded(self):
    combiner = reward_combiner.RewardCombiner(
        0.5, 0.3, 0.2, reward_shift=-4.0, reward_scale=2.5
    )
    for productivity, cost, emitted in itertools.product(
        (-100.0, 0.0, 400.0, 1000.0, 2000.0),
        (0.0, 3.0, 10.0, 50.0),
        (0.0, 2.5, 5.0, 80.0),
    ):
      value = self._combine(
          combiner, productivity, cost, emitted
      ).agent_reward_value
      self.assertBetween(value, -4.0, -1.5)

  def test_zero_maxima_do_not_divide_by_zero(self):
    response = reward_combiner.RewardCombiner(1.0, 1.0, 1.0).combine(
        interval=_ONE_HOUR,
        person_productivity=500.0,
        setpoint=_setpoint(1000.0),
        energy=_energy(0.0),
        max_energy=_energy(0.0),
        carbon=_carbon(0.0),
        max_carbon=_carbon(0.0),
    )
    self.assertEqual(0.0, response.normalized_energy_cost)
    self.assertEqual(0.0, response.normalized_carbon_emission)

  @parameterized.named_parameters([
      ('negative_weight', dict(productivity_weight=-1.0)),
      ('all_zero_weights', dict(
          productivity_weight=0.0,
          energy_cost_weight=0.0,
          carbon_emission_weight=0.0,
      )),
      ('zero_scale', dict(reward_scale=0.0)),
      ('negative_scale', dict(reward_scale=-1.0)),
      ('negative_min_productivity', dict(min_productivity_personhour_usd=-1)),
  ])
  def test_invalid_configuration(self, overrides):
    kwargs = dict(
        productivity_weight=1.0,
        energy_cost_weight=1.0,
        carbon_emission_weight=1.0,
    )
    kwargs.update(overrides)
    with self.assertRaises(errors.InvalidRangeError):
      reward_combiner.RewardCombiner(**kwargs)

  def _combine(self, combiner, productivity, cost, emitted):
    return combiner.combine(
        interval=_ONE_HOUR,
        person_productivity=500.0,
        setpoint=_setpoint(productivity),
        energy=_energy(cost),
        max_energy=_energy(10.0),
        carbon=_carbon(emitted),
        max_carbon=_carbon(5.0),
    )


if __name__ == '__main__':
  absltest.main()
