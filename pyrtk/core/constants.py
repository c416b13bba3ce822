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

"""GNSS Constants and System Parameters"""

# GNSS System IDs
SYS_GPS = 0x01    # GPS
SYS_GLO = 0x02    # GLONASS
SYS_GAL = 0x04    # Galileo
SYS_BDS = 0x08    # BeiDou
SYS_QZS = 0x10    # QZSS
SYS_SBS = 0x20    # SBAS
SYS_IRN = 0x40    # IRNSS

# RINEX system characters
SYS_TO_CHAR = {
    SYS_GPS: 'G',
    SYS_GLO: 'R',
    SYS_GAL: 'E',
    SYS_BDS: 'C',
    SYS_QZS: 'J',
    SYS_SBS: 'S',
    SYS_IRN: 'I',
}
CHAR_TO_SYS = {v: k for k, v in SYS_TO_CHAR.items()}

# Maximum PRN per system (used to validate satellite identifiers)
MAXPRN = {
    'G': 32,
    'R': 27,
    'E': 36,
    'C': 63,
    'J': 10,
    'S': 58,
    'I': 14,
}

# Time System Parameters
GPST0 = [1980, 1, 6, 0, 0, 0]  # GPS time reference epoch
GST0 = [1999, 8, 22, 0, 0, 0]  # Galileo time reference epoch
BDT0 = [2006, 1, 1, 0, 0, 0]   # BeiDou time reference epoch
MJD0 = [1858, 11, 17, 0, 0, 0] # Modified Julian Day reference epoch

SECONDS_IN_DAY = 86400.0       # seconds per day
SECONDS_IN_WEEK = 604800.0     # seconds per GPS week
MJD_GPST0 = 44244              # MJD of GPS time reference epoch
GPS_UTC_OFFSET = 18.0          # GPS-UTC leap seconds (as of 2025)
GLO_UTC_OFFSET = 10800.0       # GLONASS time is UTC + 3 hours
