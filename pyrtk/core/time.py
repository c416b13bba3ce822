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

"""GNSS Time Systems and elapsed-time arithmetic"""

import numbers
from datetime import datetime, timedelta
from typing import Union

from .constants import (BDT0, GLO_UTC_OFFSET, GPS_UTC_OFFSET, GPST0, GST0,
                        MJD0, SECONDS_IN_DAY, SECONDS_IN_WEEK)

# 'ANY' is a wildcard system compatible with every other one (used by sentinels)
VALID_TIME_SYSTEMS = ['GPS', 'GAL', 'BDS', 'GLO', 'UTC', 'ANY']


class GNSSTime:
    """GNSS Time representation with type safety

    This class ensures that time systems are not accidentally mixed.
    All arithmetic operations check for compatible time systems; the
    'ANY' system is compatible with all of them.
    """

    def __init__(self, week: int = 0, tow: float = 0.0, time_sys: str = 'GPS'):
        """
        Initialize GNSS time

        Parameters:
        -----------
        week : int
            Week number (may be negative for epochs before the reference)
        tow : float
            Time of week in seconds
        time_sys : str
            Time system ('GPS', 'GAL', 'BDS', 'GLO', 'UTC', 'ANY')
        """
        self.week = int(week)
        self.tow = float(tow)
        self.time_sys = time_sys.upper()

        if self.time_sys not in VALID_TIME_SYSTEMS:
            raise ValueError(f"Invalid time system: {time_sys}. Must be one of {VALID_TIME_SYSTEMS}")

        # Normalize TOW to [0, 604800)
        while self.tow >= SECONDS_IN_WEEK:
            self.week += 1
            self.tow -= SECONDS_IN_WEEK
        while self.tow < 0:
            self.week -= 1
            self.tow += SECONDS_IN_WEEK

    @staticmethod
    def _reference_date(time_sys):
        """Start of week 0 of a time system, on the GPS time scale

        UTC and GLONASS weeks are counted from 1980-01-06 00:00 of their own
        scale; the fixed leap-second offset makes the conversion approximate
        for epochs before the last leap second.
        """
        if time_sys in ('GPS', 'ANY'):
            return datetime(*GPST0)
        elif time_sys == 'GAL':
            return datetime(*GST0)
        elif time_sys == 'BDS':
            return datetime(*BDT0)
        elif time_sys == 'UTC':
            return datetime(*GPST0) + timedelta(seconds=GPS_UTC_OFFSET)
        elif time_sys == 'GLO':
            return datetime(*GPST0) + timedelta(seconds=GPS_UTC_OFFSET - GLO_UTC_OFFSET)
        raise ValueError(f"Unknown time system: {time_sys}")

    @classmethod
    def from_datetime(cls, dt, time_sys='GPS'):
        """Create GNSSTime from a datetime on the GPS time scale"""
        delta = dt - cls._reference_date(time_sys)
        weeks = delta.days // 7
        tow = (delta.days % 7) * 86400 + delta.seconds + delta.microseconds * 1e-6

        return cls(weeks, tow, time_sys)

    @classmethod
    def from_gps_seconds(cls, gps_seconds, time_sys='GPS'):
        """Create GNSSTime from GPS seconds since GPS epoch"""
        week = int(gps_seconds // SECONDS_IN_WEEK)
        tow = gps_seconds % SECONDS_IN_WEEK
        return cls(week, tow, time_sys)

    @classmethod
    def from_mjd(cls, mjd, time_sys='GPS'):
        """Create GNSSTime from Modified Julian Day"""
        dt = datetime(*MJD0) + timedelta(days=mjd)
        return cls.from_datetime(dt, time_sys)

    def to_datetime(self):
        """Convert to a datetime on the GPS time scale"""
        return self._reference_date(self.time_sys) + timedelta(weeks=self.week, seconds=self.tow)

    def to_mjd(self):
        """Convert to Modified Julian Day"""
        delta = self.to_datetime() - datetime(*MJD0)
        return delta.total_seconds() / SECONDS_IN_DAY

    def to_gps_seconds(self):
        """Convert to seconds since the reference epoch of the time system"""
        return self.week * SECONDS_IN_WEEK + self.tow

    def add_seconds(self, seconds: float) -> 'GNSSTime':
        """Add seconds to time"""
        return GNSSTime(self.week, self.tow + seconds, self.time_sys)

    def is_compatible(self, other: 'GNSSTime') -> bool:
        """Check whether two times may be compared or subtracted"""
        return (self.time_sys == other.time_sys
                or self.time_sys == 'ANY' or other.time_sys == 'ANY')

    def _check_compatible(self, other: 'GNSSTime', operation: str):
        if not self.is_compatible(other):
            raise ValueError(f"Cannot {operation} times with different systems: "
                             f"{self.time_sys} and {other.time_sys}")

    def __add__(self, seconds: float) -> 'GNSSTime':
        """Add seconds using + operator"""
        if isinstance(seconds, numbers.Real):
            return self.add_seconds(float(seconds))
        raise TypeError(f"Cannot add {type(seconds)} to GNSSTime")

    def _seconds_since(self, other: 'GNSSTime', operation: str) -> float:
        """Signed seconds from ``other`` to ``self``"""
        self._check_compatible(other, operation)
        if self.time_sys == other.time_sys:
            return (self.week - other.week) * SECONDS_IN_WEEK + (self.tow - other.tow)
        # One side is 'ANY': the reference epochs differ, go through calendar time
        return (self.to_datetime() - other.to_datetime()).total_seconds()

    def __sub__(self, other: Union['GNSSTime', float]) -> Union[float, 'GNSSTime']:
        """Subtract time (giving seconds) or seconds (giving a time)"""
        if isinstance(other, GNSSTime):
            return self._seconds_since(other, 'subtract')
        elif isinstance(other, numbers.Real):
            return self.add_seconds(-float(other))
        raise TypeError(f"Cannot subtract {type(other)} from GNSSTime")

    def __lt__(self, other: 'GNSSTime') -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return self._seconds_since(other, 'compare') < 0

    def __le__(self, other: 'GNSSTime') -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return self._seconds_since(other, 'compare') <= 0

    def __gt__(self, other: 'GNSSTime') -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return self._seconds_since(other, 'compare') > 0

    def __ge__(self, other: 'GNSSTime') -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return self._seconds_since(other, 'compare') >= 0

    def __eq__(self, other: 'GNSSTime') -> bool:
        if not isinstance(other, GNSSTime):
            return NotImplemented
        return (self.is_compatible(other) and self.week == other.week
                and abs(self.tow - other.tow) < 1e-9)

    def __hash__(self):
        return hash((self.week, round(self.tow, 9)))

    def __str__(self):
        return f"{self.time_sys} Week: {self.week}, TOW: {self.tow:.3f}"

    def __repr__(self):
        return f"GNSSTime({self.week}, {self.tow}, '{self.time_sys}')"

    def copy(self) -> 'GNSSTime':
        """Create a copy of this time instance"""
        return GNSSTime(self.week, self.tow, self.time_sys)


# Earliest representable epoch (MJD 0). Elapsed time measured from it is
# huge, which gives a freshly introduced parameter a wide-open variance.
BEGINNING_OF_TIME = GNSSTime.from_mjd(0.0, 'ANY')

Epoch = Union[GNSSTime, float]


def to_seconds(t: Epoch) -> float:
    """
    Express an epoch as seconds since the GPS reference epoch

    Parameters:
    -----------
    t : GNSSTime or float
        Epoch; plain numbers are taken as GPS seconds

    Returns:
    --------
    float
        Seconds since 1980-01-06 (negative before it)
    """
    if isinstance(t, GNSSTime):
        if t.time_sys in ('GPS', 'ANY'):
            return t.to_gps_seconds()
        return (t.to_datetime() - datetime(*GPST0)).total_seconds()
    if isinstance(t, numbers.Real):
        return float(t)
    raise TypeError(f"Unsupported epoch type: {type(t)}")


def gnss_time_diff(t1: Epoch, t2: Epoch) -> float:
    """
    Compute time difference t1 - t2 in seconds with automatic type handling

    Parameters:
    -----------
    t1, t2 : GNSSTime or float
        Times to compare (floats are GPS seconds)

    Returns:
    --------
    float
        Time difference t1 - t2 in seconds
    """
    if isinstance(t1, GNSSTime) and isinstance(t2, GNSSTime):
        return t1 - t2
    return to_seconds(t1) - to_seconds(t2)
