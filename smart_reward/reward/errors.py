"""Errors raised while validating reward inputs.

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

All reward errors are local and deterministic: the same RewardInfo always
raises the same error, so callers should not retry.
"""


class RewardError(ValueError):
  """Base class for invalid reward inputs."""


class InvalidRangeError(RewardError):
  """A value is outside its physical range, or a setpoint band is inverted."""


class NegativeEnergyError(RewardError):
  """A power or energy rate is negative."""


class MissingMappingEntryError(RewardError, KeyError):
  """A zone, air handler or boiler id is absent from its mapping."""

  def __str__(self) -> str:
    # KeyError quotes its message; keep the plain ValueError formatting.
    return ValueError.__str__(self)


class NonFiniteValueError(RewardError):
  """A numeric field is NaN or infinite."""
