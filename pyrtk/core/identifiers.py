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

"""Identifiers for stations, satellites and parameter types.

All identifiers are immutable, hashable and totally ordered so that they can be
used as dictionary keys and sorted deterministically.

The satellite identifier uses the RINEX convention of a one-letter system code
followed by the PRN:

- GPS (G), GLONASS (R), Galileo (E), BeiDou (C), QZSS (J), SBAS (S), IRNSS (I)
"""

from dataclasses import dataclass
from enum import Enum

from .constants import CHAR_TO_SYS, MAXPRN


@dataclass(frozen=True, order=True)
class SourceID:
    """Station (receiver) identifier.

    Attributes
    ----------
    name : str
        Station name, usually the 4-character marker (e.g. 'WUHN')
    source_type : str
        Kind of data source ('GNSS' for a receiver)
    """
    name: str
    source_type: str = 'GNSS'

    @classmethod
    def from_string(cls, text):
        """Parse 'NAME' or 'TYPE:NAME' into a SourceID."""
        text = str(text).strip()
        if not text:
            raise ValueError("Empty station identifier")
        if ':' in text:
            source_type, name = text.split(':', 1)
            return cls(name.strip().upper(), source_type.strip().upper())
        return cls(text.upper())

    def __str__(self):
        return self.name


@dataclass(frozen=True, order=True)
class SatID:
    """Satellite identifier.

    Attributes
    ----------
    system : str
        RINEX system character ('G', 'R', 'E', 'C', 'J', 'S', 'I')
    prn : int
        PRN number within the constellation
    """
    system: str
    prn: int

    def __post_init__(self):
        if self.system not in CHAR_TO_SYS:
            raise ValueError(f"Unknown satellite system: {self.system}")
        if not 1 <= self.prn <= MAXPRN[self.system]:
            raise ValueError(f"PRN {self.prn} out of range for system {self.system}")

    @property
    def sys_id(self):
        """System bit mask (SYS_GPS, SYS_GLO, ...)."""
        return CHAR_TO_SYS[self.system]

    @classmethod
    def from_string(cls, text):
        """Parse a RINEX satellite string such as 'G05' or 'R 7'.

        Parameters
        ----------
        text : str
            Satellite string; a bare number is taken as GPS

        Returns
        -------
        SatID
            Parsed identifier

        Raises
        ------
        ValueError
            If the string cannot be parsed
        """
        text = str(text).strip().upper()
        if not text:
            raise ValueError("Empty satellite identifier")
        if text[0].isdigit():
            system, number = 'G', text
        else:
            system, number = text[0], text[1:].strip()
        try:
            prn = int(number)
        except ValueError:
            raise ValueError(f"Invalid satellite identifier: {text}") from None
        return cls(system, prn)

    def __str__(self):
        return f"{self.system}{self.prn:02d}"


class TypeID(str, Enum):
    """Parameter and auxiliary data types.

    The string value doubles as the column name used by tabular inputs.
    """
    # Coordinates and clock
    dx = 'dx'
    dy = 'dy'
    dz = 'dz'
    cdt = 'cdt'

    # Troposphere
    wetMap = 'wetMap'               # zenith wet delay
    wetMapNorth = 'wetMapNorth'     # north gradient
    wetMapEast = 'wetMapEast'       # east gradient

    # Ionosphere (slant delay on L1)
    ionoL1 = 'ionoL1'

    # Hardware biases
    recBias = 'recBias'
    satBias = 'satBias'
    ISB = 'ISB'
    IFCB = 'IFCB'

    # Carrier-phase ambiguities
    BL1 = 'BL1'
    BL2 = 'BL2'
    BL5 = 'BL5'

    # Auxiliary signals produced upstream
    satArc = 'satArc'
    CSFlag = 'CSFlag'
    CSL1 = 'CSL1'
    CSL2 = 'CSL2'
    CSL5 = 'CSL5'

    @classmethod
    def from_name(cls, name):
        """Look up a type by its name, raising ValueError if unknown."""
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown type identifier: {name}") from None

    def __str__(self):
        return self.value
