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

"""Per-epoch auxiliary data reading utilities"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional

import pandas as pd

from ..core.data_structures import GnssEpochData
from ..core.identifiers import SatID, SourceID, TypeID

logger = logging.getLogger(__name__)

COLUMN_MAPPING = {
    'timestamp': 'time',
    'gps_time': 'time',
    'epoch': 'time',
    'source': 'station',
    'site': 'station',
    'receiver': 'station',
    'satellite': 'sat',
    'prn': 'sat',
    'svid': 'sat',
}

KEY_COLUMNS = ['time', 'station', 'sat']


def _normalize_column(name: str) -> str:
    """Map a raw column header to its standard name.

    Key columns are matched case-insensitively; type columns keep the case of
    their TypeID name (``satArc``, ``CSFlag``) but also accept any casing.
    """
    stripped = name.strip()
    lowered = stripped.lower()
    if lowered in KEY_COLUMNS:
        return lowered
    if lowered in COLUMN_MAPPING:
        return COLUMN_MAPPING[lowered]
    for type_id in TypeID:
        if type_id.value.lower() == lowered:
            return type_id.value
    return stripped


def epoch_data_from_dataframe(df: pd.DataFrame) -> List[GnssEpochData]:
    """
    Convert a table of auxiliary fields to per-epoch records

    Parameters
    ----------
    df : pd.DataFrame
        Columns ``time`` (GPS seconds), ``station``, ``sat`` and one column
        per TypeID name. Empty (NaN) cells are left out of the records.

    Returns
    -------
    List[GnssEpochData]
        One entry per distinct time, in increasing time order

    Raises
    ------
    ValueError
        If a key column is missing or a station/satellite cannot be parsed
    """
    missing_cols = [col for col in KEY_COLUMNS if col not in df.columns]
    if missing_cols:
        raise ValueError(f"Missing required columns: {missing_cols}")

    type_columns = []
    for col in df.columns:
        if col in KEY_COLUMNS:
            continue
        try:
            type_columns.append((col, TypeID.from_name(col)))
        except ValueError:
            logger.warning(f"Ignoring column '{col}': not a known type")

    epochs = []
    for time, group in df.sort_values('time', kind='stable').groupby('time', sort=True):
        epoch = GnssEpochData(float(time))
        for row in group.to_dict('records'):
            source = SourceID.from_string(row['station'])
            sat = SatID.from_string(row['sat'])
            for col, type_id in type_columns:
                value = row[col]
                if pd.isna(value):
                    continue
                epoch.insert(source, sat, type_id, value)
        epochs.append(epoch)
    return epochs


class EpochDataReader:
    """Reader for tables of per-epoch auxiliary fields (arc numbers, slip flags)"""

    def __init__(self, file_path: str, format: str = 'csv'):
        """
        Initialize epoch data reader

        Parameters:
        -----------
        file_path : str
            Path to data file
        format : str
            File format ('csv')
        """
        self.file_path = Path(file_path)
        self.format = format.lower()
        self._data_cache = None

        if not self.file_path.exists():
            raise FileNotFoundError(f"Epoch data file not found: {file_path}")

    def read(self, start_time: Optional[float] = None, duration: Optional[float] = None) -> pd.DataFrame:
        """
        Read the table from file

        Parameters:
        -----------
        start_time : float, optional
            Start time in GPS seconds
        duration : float, optional
            Duration in seconds (only used together with start_time)

        Returns:
        --------
        pd.DataFrame
            Table with columns time, station, sat and type columns,
            sorted by time
        """
        if self.format == 'csv':
            df = self._read_csv()
        else:
            raise ValueError(f"Unsupported format: {self.format}")

        if start_time is not None:
            df = df[df['time'] >= start_time]
        if duration is not None and start_time is not None:
            df = df[df['time'] <= start_time + duration]

        return df.reset_index(drop=True)

    def _read_csv(self) -> pd.DataFrame:
        """
        Read a CSV file and standardize its columns

        Returns
        -------
        pd.DataFrame
            Standardized table sorted by time

        Raises
        ------
        ValueError
            If a key column is missing
        RuntimeError
            If the file cannot be parsed
        """
        try:
            # Read as text so station names such as '0001' keep their zeros
            df = pd.read_csv(self.file_path, dtype=str)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise RuntimeError(f"Error reading epoch data CSV file: {e}") from e

        df.columns = [_normalize_column(col) for col in df.columns]

        missing_cols = [col for col in KEY_COLUMNS if col not in df.columns]
        if missing_cols:
            raise ValueError(f"Missing required columns: {missing_cols}")

        df['station'] = df['station'].str.strip()
        df['sat'] = df['sat'].str.strip()
        try:
            df['time'] = pd.to_numeric(df['time'])
        except (ValueError, TypeError) as e:
            raise RuntimeError(f"Error reading epoch data CSV file: bad time value ({e})") from e
        for col in df.columns:
            if col not in KEY_COLUMNS:
                df[col] = pd.to_numeric(df[col], errors='coerce')
        df = df.sort_values('time', kind='stable').reset_index(drop=True)

        logger.info(f"Loaded {len(df)} epoch records from {self.file_path.name}")
        if len(df) > 0:
            logger.info(f"  Time range: {df['time'].min():.3f} - {df['time'].max():.3f}")
            logger.info(f"  Stations: {df['station'].nunique()}, satellites: {df['sat'].nunique()}")

        return df

    def epochs(self, start_time: Optional[float] = None,
               duration: Optional[float] = None) -> Iterator[GnssEpochData]:
        """
        Iterate over per-epoch records in time order

        The table is read once and cached.
        """
        if self._data_cache is None:
            self._data_cache = epoch_data_from_dataframe(self.read())
        for epoch in self._data_cache:
            if start_time is not None and epoch.time < start_time:
                continue
            if duration is not None and start_time is not None and epoch.time > start_time + duration:
                continue
            yield epoch
