"""Constants shared by the smart building reward modules.

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

from typing import Final

HOUR_SEC: Final[float] = 3600.0

# International Table Btu.
JOULES_PER_BTU: Final[float] = 1055.05585262

# Heat content of natural gas, 1000 cubic feet = 293.071 kWh.
KWH_PER_KCF_NATURAL_GAS: Final[float] = 293.071

# File prefixes for the serialized reward shards.
REWARD_INFO_PREFIX: Final[str] = 'reward_info'
REWARD_RESPONSE_PREFIX: Final[str] = 'reward_response'
