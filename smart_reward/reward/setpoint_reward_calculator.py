"""Setpoint reward: comfort deviation and occupant productivity per zone.

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

Setpoint reward is the incremental reward for maintaining comfort conditions
inside each zone. Two views of the same deviation are computed:

  * The setpoint penalty, in K: the distance of the zone air temperature from
  the deadband [heating setpoint, cooling setpoint]. It is zero inside the
  deadband, grows linearly outside, and is averaged over zones weighted by
  occupancy plus a small floor, so a vacant zone outside its band still
  counts.

  * Productivity, in USD: s(setpoint) in the reward equation. Productivity is
  adversely affected when the zone air temperature is outside the deadband.
  Near the deadband, individual productivity decreases a little, but decreases
  smoothly and monotonically the farther the zone air temperature is away from
  the deadband, following a logistic curve:

      p(d) = p_max / (1 + exp(-k (delta - d)))

  where d is the deviation outside the deadband, delta is the deviation at
  which productivity halves and k is the decay stiffness. Inside the deadband
  p = p_max.
"""

import dataclasses
from typing import Mapping

import gin
import numpy as np
from smart_reward.models import reward_records
from smart_reward.reward import errors
from smart_reward.utils import constants
from smart_reward.utils import units

# Weight of an empty zone in the setpoint penalty, in occupants.
DEFAULT_MIN_ZONE_WEIGHT = 0.1


@dataclasses.dataclass(frozen=True)
class ZoneSetpointResult:
  """Setpoint evaluation of a single zone."""

  deviation: float
  productivity: float
  max_productivity: float
  ventilation_shortfall: float
  occupancy: float


@dataclasses.dataclass(frozen=True)
class SetpointResult:
  """Setpoint evaluation over all zones.

  Attributes:
    setpoint_penalty: mean deviation [K] outside the band, each zone weighted
      by its occupancy plus min_zone_weight.
    productivity: total occupant productivity over the interval [USD].
    max_productivity: productivity if every zone were inside its band [USD].
    total_occupancy: sum of average occupancy across zones.
    zones: per-zone results keyed by zone id.
  """

  setpoint_penalty: float
  productivity: float
  max_productivity: float
  total_occupancy: float
  zones: Mapping[str, ZoneSetpointResult]


def get_zone_deviation(zone_info: reward_records.ZoneRewardInfo) -> float:
  """Returns how far [K] the zone air temperature is outside its deadband.

  Raises:
    InvalidRangeError: if the heating setpoint exceeds the cooling setpoint,
      or a temperature is not above absolute zero.
    NonFiniteValueError: if a temperature is NaN or infinite.
  """
  heating_setpoint = units.check_temperature(
      'heating_setpoint_temperature', zone_info.heating_setpoint_temperature
  )
  cooling_setpoint = units.check_temperature(
      'cooling_setpoint_temperature', zone_info.cooling_setpoint_temperature
  )
  zone_temp = units.check_temperature(
      'zone_air_temperature', zone_info.zone_air_temperature
  )
  if heating_setpoint > cooling_setpoint:
    raise errors.InvalidRangeError(
        f'Heating setpoint {heating_setpoint} K is above cooling setpoint'
        f' {cooling_setpoint} K.'
    )
  if zone_temp < heating_setpoint:
    return heating_setpoint - zone_temp
  if zone_temp > cooling_setpoint:
    return zone_temp - cooling_setpoint
  return 0.0


@gin.configurable()
class SetpointRewardCalculator:
  """Computes s(setpoint) and the setpoint penalty from zone conditions.

  Attributes:
    max_productivity_personhour_usd: productivity of one occupant per hour
      inside the deadband, in USD.
    productivity_midpoint_delta: deviation [K] at which productivity halves.
    productivity_decay_stiffness: midpoint slope of the decay curve.
    min_zone_weight: weight added to every zone occupancy in the setpoint
      penalty; must be > 0 so that vacant zones outside their band count.
  """

  def __init__(
      self,
      max_productivity_personhour_usd: float,
      productivity_midpoint_delta: float,
      productivity_decay_stiffness: float,
      min_zone_weight: float = DEFAULT_MIN_ZONE_WEIGHT,
  ):
    if max_productivity_personhour_usd < 0.0:
      raise ValueError('Max productivity must be >= 0.')
    if productivity_decay_stiffness <= 0.0:
      raise ValueError('Productivity decay stiffness must be > 0.')
    if not min_zone_weight > 0.0:
      raise ValueError('Minimum zone weight must be > 0.')
    self._max_productivity_personhour_usd = units.check_finite(
        'max_productivity_personhour_usd', max_productivity_personhour_usd
    )
    self._productivity_midpoint_delta = units.check_finite(
        'productivity_midpoint_delta', productivity_midpoint_delta
    )
    self._productivity_decay_stiffness = units.check_finite(
        'productivity_decay_stiffness', productivity_decay_stiffness
    )
    self._min_zone_weight = units.check_finite(
        'min_zone_weight', min_zone_weight
    )

  @property
  def max_productivity_personhour_usd(self) -> float:
    return self._max_productivity_personhour_usd

  def compute(
      self,
      zone_reward_infos: Mapping[str, reward_records.ZoneRewardInfo],
      time_interval_sec: float,
  ) -> SetpointResult:
    """Evaluates every zone, iterating over sorted zone ids."""
    zones = {
        zone_id: self.compute_zone(
            zone_reward_infos[zone_id], time_interval_sec
        )
        for zone_id in sorted(zone_reward_infos)
    }

    productivity = 0.0
    max_productivity = 0.0
    total_occupancy = 0.0
    weighted_deviation = 0.0
    total_weight = 0.0
    for result in zones.values():
      productivity += result.productivity
      max_productivity += result.max_productivity
      total_occupancy += result.occupancy
      weight = result.occupancy + self._min_zone_weight
      weighted_deviation += result.deviation * weight
      total_weight += weight

    setpoint_penalty = (
        weighted_deviation / total_weight if total_weight > 0.0 else 0.0
    )

    return SetpointResult(
        setpoint_penalty=setpoint_penalty,
        productivity=productivity,
        max_productivity=max_productivity,
        total_occupancy=total_occupancy,
        zones=zones,
    )

  def compute_zone(
      self,
      zone_info: reward_records.ZoneRewardInfo,
      time_interval_sec: float,
  ) -> ZoneSetpointResult:
    deviation = get_zone_deviation(zone_info)
    occupancy = units.check_occupancy(
        'average_occupancy', zone_info.average_occupancy
    )
    air_flow_rate_setpoint = units.check_air_flow_rate(
        'air_flow_rate_setpoint', zone_info.air_flow_rate_setpoint
    )
    air_flow_rate = units.check_air_flow_rate(
        'air_flow_rate', zone_info.air_flow_rate
    )

    person_hours = occupancy * time_interval_sec / constants.HOUR_SEC
    return ZoneSetpointResult(
        deviation=deviation,
        productivity=self.get_productivity_personhour(deviation)
        * person_hours,
        max_productivity=self._max_productivity_personhour_usd * person_hours,
        ventilation_shortfall=max(air_flow_rate_setpoint - air_flow_rate, 0.0),
        occupancy=occupancy,
    )

  def get_productivity_personhour(self, deviation: float) -> float:
    """Returns the hourly productivity [USD] of one occupant."""
    if deviation <= 0.0:
      return self._max_productivity_personhour_usd
    return self._max_productivity_personhour_usd / (
        1.0
        + np.exp(
            -self._productivity_decay_stiffness
            * (self._productivity_midpoint_delta - deviation)
        )
    )
