"""Tests for energy_cost_aggregator.

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

from absl.testing import absltest
from absl.testing import parameterized
import numpy as np
import pandas as pd
from smart_reward.models import reward_records
from smart_reward.reward import energy_cost_aggregator
from smart_reward.reward import errors
from smart_reward.reward import flat_rate_energy_cost

_ONE_HOUR = reward_records.TimeInterval(
    start=pd.Timestamp('2021-05-06 10:00:00+0'),
    end=pd.Timestamp('2021-05-06 11:00:00+0'),
)


def _air_handlers(blower=100.0, ac=200.0):
  return {
      'air_handler_0': reward_records.AirHandlerRewardInfo(
          blower_electrical_energy_rate=blower,
          air_conditioning_electrical_energy_rate=ac,
      )
  }


def _boilers(gas=500.0, pump=50.0):
  return {
      'boiler_0': reward_records.BoilerRewardInfo(
          natural_gas_heating_energy_rate=gas,
          pump_electrical_energy_rate=pump,
      )
  }


class EnergyCostAggregatorTest(parameterized.TestCase):

  def test_compute(self):
    result = self._get_aggregator().compute(
        _air_handlers(), _boilers(), _ONE_HOUR
    )
    self.assertAlmostEqual(350.0, result.electricity_energy_rate)
    self.assertAlmostEqual(500.0, result.natural_gas_energy_rate)
    self.assertAlmostEqual(0.35, result.electricity_energy_kwh)
    self.assertAlmostEqual(0.5, result.natural_gas_energy_kwh)
    self.assertAlmostEqual(0.035, result.electricity_energy_cost, 9)
    self.assertAlmostEqual(0.025, result.natural_gas_energy_cost, 9)
    self.assertAlmostEqual(0.06, result.combined_energy_cost, 9)

  def test_zero_energy_costs_nothing(self):
    result = self._get_aggregator().compute(
        _air_handlers(0.0, 0.0), _boilers(0.0, 0.0), _ONE_HOUR
    )
    self.assertEqual(0.0, result.electricity_energy_cost)
    self.assertEqual(0.0, result.natural_gas_energy_cost)

  def test_no_devices(self):
    result = self._get_aggregator().compute({}, {}, _ONE_HOUR)
    self.assertEqual(0.0, result.combined_energy_cost)

  def test_sum_electricity_energy_rate(self):
    air_handlers = {
        'ah_1': reward_records.AirHandlerRewardInfo(10.0, 20.0),
        'ah_0': reward_records.AirHandlerRewardInfo(30.0, 40.0),
    }
    self.assertAlmostEqual(
        150.0,
        energy_cost_aggregator.sum_electricity_energy_rate(
            air_handlers, _boilers(pump=50.0)
        ),
    )

  def test_sum_natural_gas_energy_rate(self):
    boilers = {
        'b0': reward_records.BoilerRewardInfo(100.0, 1.0),
        'b1': reward_records.BoilerRewardInfo(250.0, 1.0),
    }
    self.assertAlmostEqual(
        350.0, energy_cost_aggregator.sum_natural_gas_energy_rate(boilers)
    )

  @parameterized.named_parameters([
      ('negative_pump', _air_handlers(), _boilers(pump=-1.0)),
      ('negative_gas', _air_handlers(), _boilers(gas=-1.0)),
      ('negative_blower', _air_handlers(blower=-1.0), _boilers()),
      ('negative_ac', _air_handlers(ac=-1.0), _boilers()),
  ])
  def test_negative_energy_raises(self, air_handlers, boilers):
    with self.assertRaises(errors.NegativeEnergyError):
      self._get_aggregator().compute(air_handlers, boilers, _ONE_HOUR)

  def test_nan_energy_raises(self):
    with self.assertRaises(errors.NonFiniteValueError):
      self._get_aggregator().compute(
          _air_handlers(blower=np.nan), _boilers(), _ONE_HOUR
      )

  def test_rates_are_capped(self):
    aggregator = self._get_aggregator(
        max_electricity_rate=200.0, max_natural_gas_rate=1000.0
    )
    result = aggregator.compute(_air_handlers(), _boilers(), _ONE_HOUR)
    self.assertAlmostEqual(200.0, result.electricity_energy_rate)
    self.assertAlmostEqual(500.0, result.natural_gas_energy_rate)
    self.assertAlmostEqual(0.02, result.electricity_energy_cost, 9)

  def test_compute_max(self):
    aggregator = self._get_aggregator(
        max_electricity_rate=10000.0, max_natural_gas_rate=20000.0
    )
    result = aggregator.compute_max(_ONE_HOUR)
    self.assertAlmostEqual(1.0, result.electricity_energy_cost, 9)
    self.assertAlmostEqual(1.0, result.natural_gas_energy_cost, 9)
    self.assertEqual(10000.0, aggregator.max_electricity_rate)
    self.assertEqual(20000.0, aggregator.max_natural_gas_rate)

  def test_compute_max_without_maxima_raises(self):
    with self.assertRaises(ValueError):
      self._get_aggregator().compute_max(_ONE_HOUR)

  @parameterized.named_parameters([
      ('zero', 0.0),
      ('negative', -10.0),
  ])
  def test_invalid_max_rate_raises(self, max_rate):
    with self.assertRaises(ValueError):
      self._get_aggregator(max_electricity_rate=max_rate)

  def test_device_order_does_not_matter(self):
    air_handlers = {
        'b': reward_records.AirHandlerRewardInfo(0.1, 1e6),
        'a': reward_records.AirHandlerRewardInfo(1e-3, 7.7),
        'c': reward_records.AirHandlerRewardInfo(3.3, 0.2),
    }
    reordered = {key: air_handlers[key] for key in ('c', 'a', 'b')}
    aggregator = self._get_aggregator()
    self.assertEqual(
        aggregator.compute(air_handlers, _boilers(), _ONE_HOUR),
        aggregator.compute(reordered, _boilers(), _ONE_HOUR),
    )

  def _get_aggregator(self, **kwargs):
    return energy_cost_aggregator.EnergyCostAggregator(
        electricity_energy_cost=flat_rate_energy_cost.FlatRateEnergyCost(
            usd_per_kwh=0.1
        ),
        natural_gas_energy_cost=flat_rate_energy_cost.FlatRateEnergyCost(
            usd_per_kwh=0.05
        ),
        **kwargs,
    )


if __name__ == '__main__':
  absltest.main()
