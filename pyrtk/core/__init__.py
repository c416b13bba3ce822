# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core Module.

Fundamental components shared by the stochastic models:

- **Constants**: satellite system identifiers and time reference epochs
- **Time**: ``GNSSTime`` with a ``BEGINNING_OF_TIME`` sentinel and
  elapsed-seconds arithmetic that accepts either GNSSTime or GPS seconds
- **Identifiers**: ``SourceID`` (station), ``SatID`` (satellite) and
  ``TypeID`` (parameter/auxiliary type), all hashable and ordered
- **Data Structures**: per-epoch records keyed by station, satellite and type
- **Statistical Parameters**: default process spectral densities and presets

Example Usage:
    >>> from pyrtk.core import *
    >>>
    >>> epoch = GNSSTime(2200, 432000.0, 'GPS')
    >>> data = GnssEpochData(epoch)
    >>> data.insert(SourceID('WUHN'), SatID('G', 5), TypeID.satArc, 1)
    >>> gnss_time_diff(epoch, BEGINNING_OF_TIME) > 0
    True
"""

from .constants import *
from .data_structures import *
from .identifiers import *
from .stats import *
from .time import *
