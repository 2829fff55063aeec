"""Unit registry and physical range checks for reward inputs.

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

Reward inputs are carried in fixed units (K, W, m^3/s) and are never
converted implicitly. The check_* functions pass a value through unchanged,
or raise the matching reward error.
"""

import math

import pint
from smart_reward.reward import errors

UNIT = pint.UnitRegistry()
UNIT.define('USD = [currency]')
UNIT.define('US_cent = 0.01 * USD')


def check_finite(name: str, value: float) -> float:
  """Returns value as a float, raising NonFiniteValueError for NaN or Inf."""
  value = float(value)
  if not math.isfinite(value):
    raise errors.NonFiniteValueError(f'{name} must be finite, got {value}.')
  return value


def check_temperature(name: str, kelvin: float) -> float:
  """Returns a temperature in K, which must lie above absolute zero."""
  kelvin = check_finite(name, kelvin)
  if kelvin <= 0.0:
    raise errors.InvalidRangeError(
        f'{name} must be greater than absolute zero, got {kelvin} K.'
    )
  return kelvin


def check_energy_rate(name: str, watts: float) -> float:
  """Returns a non-negative energy rate in W."""
  watts = check_finite(name, watts)
  if watts < 0.0:
    raise errors.NegativeEnergyError(
        f'{name} must be non-negative, got {watts} W.'
    )
  return watts


def check_air_flow_rate(name: str, m3_per_s: float) -> float:
  """Returns a non-negative air flow rate in m^3/s."""
  m3_per_s = check_finite(name, m3_per_s)
  if m3_per_s < 0.0:
    raise errors.InvalidRangeError(
        f'{name} must be non-negative, got {m3_per_s} m^3/s.'
    )
  return m3_per_s


def check_occupancy(name: str, people: float) -> float:
  """Returns a non-negative average occupancy."""
  people = check_finite(name, people)
  if people < 0.0:
    raise errors.InvalidRangeError(
        f'{name} must be non-negative, got {people}.'
    )
  return people


def energy_rate_to_kwh(energy_rate: float, duration_sec: float) -> float:
  """Converts a constant power [W] held for duration_sec [s] into kWh."""
  energy = energy_rate * UNIT.watt * duration_sec * UNIT.second
  return energy.to(UNIT.kilowatt_hour).magnitude
