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

"""Core data structures for per-epoch GNSS data records"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .identifiers import SatID, SourceID, TypeID
from .time import Epoch


class TypeValueMap(dict):
    """Mapping from TypeID to a numeric value for one station/satellite.

    Besides observations, the map carries auxiliary signals produced upstream
    such as cycle-slip flags (``TypeID.CSFlag``) and satellite arc numbers
    (``TypeID.satArc``). Any of them may be absent.
    """

    def get_value(self, type_id: TypeID, default: Optional[float] = None) -> Optional[float]:
        """Get a value as float, or ``default`` if the type is missing.

        Parameters
        ----------
        type_id : TypeID
            Type to look up
        default : float, optional
            Value returned when the type is not present

        Returns
        -------
        float or None
            Stored value converted to float, or ``default``
        """
        value = self.get(type_id)
        if value is None:
            return default
        return float(value)


class SatTypeValueMap(dict):
    """Mapping from SatID to TypeValueMap for one station."""

    def satellites(self) -> List[SatID]:
        """Sorted list of satellites present."""
        return sorted(self.keys())


@dataclass
class GnssEpochData:
    """All per-station, per-satellite data for a single epoch.

    Attributes
    ----------
    time : GNSSTime or float
        Epoch of the data (floats are GPS seconds)
    body : Dict[SourceID, SatTypeValueMap]
        Nested station -> satellite -> type -> value records

    Notes
    -----
    Station-level records (without a satellite) are not carried; parameters
    that are not tied to a satellite receive an empty TypeValueMap.
    """
    time: Epoch
    body: Dict[SourceID, SatTypeValueMap] = field(default_factory=dict)

    def get(self, source: Optional[SourceID], sat: Optional[SatID]) -> TypeValueMap:
        """Get the record for a station/satellite pair, empty if absent."""
        if source is None or sat is None:
            return TypeValueMap()
        sat_data = self.body.get(source)
        if sat_data is None:
            return TypeValueMap()
        return sat_data.get(sat, TypeValueMap())

    def insert(self, source: SourceID, sat: SatID, type_id: TypeID, value: float):
        """Insert a single value, creating intermediate maps as needed."""
        sat_data = self.body.setdefault(source, SatTypeValueMap())
        sat_data.setdefault(sat, TypeValueMap())[type_id] = float(value)

    def sources(self) -> List[SourceID]:
        """Sorted list of stations present."""
        return sorted(self.body.keys())

    def satellites(self) -> List[SatID]:
        """Sorted list of all satellites seen by any station."""
        sats = set()
        for sat_data in self.body.values():
            sats.update(sat_data.keys())
        return sorted(sats)

    def iter_records(self) -> Iterator[Tuple[SourceID, SatID, TypeValueMap]]:
        """Iterate over (station, satellite, record) in sorted order."""
        for source in self.sources():
            sat_data = self.body[source]
            for sat in sat_data.satellites():
                yield source, sat, sat_data[sat]

    def __len__(self):
        return sum(len(sat_data) for sat_data in self.body.values())
