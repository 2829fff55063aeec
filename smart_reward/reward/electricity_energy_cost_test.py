"""Tests for the time-of-use electricity cost model.

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
from smart_reward.reward import electricity_energy_cost

# Distinct prices per hour make the selected hour visible in the cost.
_RAMP_PRICES = tuple(float(hour + 1) for hour in range(24))
_FLAT_WEEKEND_PRICES = (50.0,) * 24


def _ramp_cost_model() -> electricity_energy_cost.ElectricityEnergyCost:
  return electricity_energy_cost.ElectricityEnergyCost(
      weekday_energy_prices=_RAMP_PRICES,
      weekend_energy_prices=_FLAT_WEEKEND_PRICES,
  )


class ElectricityEnergyCostTest(parameterized.TestCase):

  @parameterized.named_parameters(
      ('midnight', '2021-06-03 00:00-7', 1.0),
      ('morning', '2021-06-03 07:30-7', 8.0),
      ('afternoon', '2021-06-03 15:00-7', 16.0),
      ('last_hour', '2021-06-03 23:59-7', 24.0),
  )
  def test_weekday_price_follows_local_hour(self, start, cents_per_kwh):
    start_time = pd.Timestamp(start)
    end_time = start_time + pd.Timedelta(1, unit='hour')

    # 1 kW for one hour is 1 kWh.
    cost = _ramp_cost_model().cost(start_time, end_time, 1000.0)

    self.assertAlmostEqual(cents_per_kwh / 100.0, cost, places=6)

  @parameterized.named_parameters(
      ('saturday', '2021-06-05 10:00-7'),
      ('sunday', '2021-06-06 18:00-7'),
      ('independence_day_observed', '2021-07-05 13:00-7'),
      ('thanksgiving', '2021-11-25 09:00-8'),
  )
  def test_weekend_and_holiday_use_weekend_prices(self, start):
    start_time = pd.Timestamp(start)
    end_time = start_time + pd.Timedelta(30, unit='minute')

    cost = _ramp_cost_model().cost(start_time, end_time, 4000.0)

    # 4 kW for half an hour at 50 cents/kWh.
    self.assertAlmostEqual(1.0, cost, places=6)

  def test_default_schedule_peak_afternoon(self):
    cost_model = electricity_energy_cost.ElectricityEnergyCost()
    start_time = pd.Timestamp('2021-06-03 13:00-7')

    cost = cost_model.cost(
        start_time, start_time + pd.Timedelta(3, unit='hour'), 10000.0
    )

    # The price of the starting hour applies to the whole window.
    expected = electricity_energy_cost.WEEKDAY_PRICE_BY_HOUR[13] * 30.0 / 100.0
    self.assertAlmostEqual(expected, cost, places=4)

  def test_cooling_draw_is_priced_like_heating(self):
    cost_model = electricity_energy_cost.ElectricityEnergyCost()
    start_time = pd.Timestamp('2022-05-31 11:00-7')
    end_time = pd.Timestamp('2022-05-31 13:00-7')

    self.assertAlmostEqual(
        cost_model.cost(start_time, end_time, 20000.0),
        cost_model.cost(start_time, end_time, -20000.0),
    )
    self.assertAlmostEqual(
        7.2, cost_model.cost(start_time, end_time, -20000.0), places=4
    )

  def test_zero_energy_is_free_and_clean(self):
    cost_model = electricity_energy_cost.ElectricityEnergyCost()
    start_time = pd.Timestamp('2021-05-06 10:00+0')
    end_time = pd.Timestamp('2021-05-06 11:00+0')

    self.assertEqual(0.0, cost_model.cost(start_time, end_time, 0.0))
    self.assertEqual(0.0, cost_model.carbon(start_time, end_time, 0.0))

  @parameterized.named_parameters(
      ('early_morning', 0, 30, 10000.0),
      ('late_morning', 10, 60, 2500.0),
      ('evening', 21, 15, -8000.0),
  )
  def test_carbon_uses_hourly_intensity(self, hour, minutes, energy_rate):
    cost_model = electricity_energy_cost.ElectricityEnergyCost()
    start_time = pd.Timestamp('2021-06-03 00:00-7') + pd.Timedelta(
        hour, unit='hour'
    )
    end_time = start_time + pd.Timedelta(minutes, unit='minute')

    carbon = cost_model.carbon(start_time, end_time, energy_rate)

    mwh = abs(energy_rate) * minutes / 60.0 / 1.0e6
    expected = electricity_energy_cost.CARBON_EMISSION_BY_HOUR[hour] * mwh
    self.assertAlmostEqual(expected, carbon, places=6)

  def test_carbon_ignores_weekend(self):
    cost_model = electricity_energy_cost.ElectricityEnergyCost()
    weekday = pd.Timestamp('2021-06-04 14:00-7')
    saturday = pd.Timestamp('2021-06-05 14:00-7')
    step = pd.Timedelta(5, unit='minute')

    self.assertAlmostEqual(
        cost_model.carbon(weekday, weekday + step, 3000.0),
        cost_model.carbon(saturday, saturday + step, 3000.0),
    )

  def test_long_window_logs_warning(self):
    cost_model = electricity_energy_cost.ElectricityEnergyCost()
    start_time = pd.Timestamp('2021-06-03 00:00-7')

    with self.assertLogs(level='WARNING'):
      cost_model.cost(
          start_time, start_time + pd.Timedelta(2, unit='day'), 1000.0
      )

  @parameterized.named_parameters(
      ('short_weekday', {'weekday_energy_prices': (16.0,) * 23}),
      ('long_weekend', {'weekend_energy_prices': (16.0,) * 25}),
      ('short_carbon', {'carbon_emission_rates': (90.0,) * 6}),
      ('nan_weekday', {'weekday_energy_prices': (np.nan,) + (16.0,) * 23}),
      ('inf_carbon', {'carbon_emission_rates': (np.inf,) * 24}),
  )
  def test_invalid_schedule_raises(self, kwargs):
    with self.assertRaises(ValueError):
      electricity_energy_cost.ElectricityEnergyCost(**kwargs)


if __name__ == '__main__':
  absltest.main()
