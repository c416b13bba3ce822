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

"""
Random walk models with independent state per station and/or satellite

Each model keeps a map from an entity key to the previous/current epoch of
that entity, so a single instance can serve e.g. the zenith wet delay of
every station in a network. Entries are created on first use and never
removed; callers that track a changing set of entities for a long time
must accept this growth (``len(model)`` reports the number of entries).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, List, Optional

from ..core.identifiers import SatID, SourceID
from ..core.stats import check_qprime
from ..core.time import BEGINNING_OF_TIME, Epoch
from ..logger import LogLevel
from .base import StochasticModel, elapsed_seconds

logger = logging.getLogger(__name__)

# Default of get_qprime when no entity is named
MODEL_WIDE = object()


class EntityScope(Enum):
    """Granularity at which independent state is kept.

    Attributes
    ----------
    STATION : int
        One state per SourceID
    SATELLITE : int
        One state per SatID
    STATION_SATELLITE : int
        One state per (SourceID, SatID) pair
    """
    STATION = 1
    SATELLITE = 2
    STATION_SATELLITE = 3


@dataclass
class EntityState:
    """Time history of one entity.

    Attributes
    ----------
    previous_time : GNSSTime or float
        Epoch of the previous measurement
    current_time : GNSSTime or float
        Epoch of the current measurement
    qprime : float or None
        Entity-specific process spectral density, None for the model default
    """
    previous_time: Epoch = BEGINNING_OF_TIME
    current_time: Epoch = BEGINNING_OF_TIME
    qprime: Optional[float] = None


class EntityRandomWalkModel(StochasticModel):
    """
    Random walk model with one time history per entity

    For each ``prepare(epoch, source, sat, data)``:

    1. the state of the entity is looked up (created if new)
    2. current_time = epoch
    3. variance = qprime * max(0, current_time - previous_time)
    4. previous_time = current_time

    ``get_q`` returns the variance of the last prepared entity and
    ``get_phi`` is always 1.

    Subclasses set ``scope`` and ``default_qprime``; ``single_station`` marks
    models whose state is only valid for one station.
    """

    scope = EntityScope.STATION
    default_qprime = 0.0
    single_station = False

    def __init__(self, qprime: Optional[float] = None):
        """
        Parameters:
        -----------
        qprime : float, optional
            Process spectral density in m²/s (class default if None).
            Beware of units: time MUST be in seconds.
        """
        self.qprime = check_qprime(self.default_qprime if qprime is None else qprime)
        self.variance = 0.0
        self._states: Dict[Hashable, EntityState] = {}

    def entity_key(self, source: Optional[SourceID], sat: Optional[SatID]) -> Hashable:
        """Key under which the state of (source, sat) is kept"""
        if self.scope is EntityScope.STATION:
            return source
        if self.scope is EntityScope.SATELLITE:
            return sat
        return (source, sat)

    def _state(self, key: Hashable) -> EntityState:
        state = self._states.get(key)
        if state is None:
            state = self._states[key] = EntityState()
            logger.log(LogLevel.TRACE.value, f"{type(self).__name__}: new entity {key}")
        return state

    def get_state(self, key: Hashable) -> Optional[EntityState]:
        """State of an entity, or None if it was never referenced"""
        return self._states.get(key)

    def keys(self) -> List[Hashable]:
        return list(self._states.keys())

    def __len__(self):
        return len(self._states)

    def __contains__(self, key):
        return key in self._states

    def set_previous_time(self, key: Hashable, prev_time: Epoch):
        self._state(key).previous_time = prev_time

    def set_current_time(self, key: Hashable, curr_time: Epoch):
        self._state(key).current_time = curr_time

    def set_qprime(self, qprime: float):
        """
        Set the model-wide process spectral density

        Entities with their own value (``set_entity_qprime``) keep it.
        Variances already computed are not changed.
        """
        self.qprime = check_qprime(qprime)

    def set_entity_qprime(self, key: Hashable, qprime: Optional[float]):
        """Set (or clear with None) the spectral density of one entity"""
        self._state(key).qprime = None if qprime is None else check_qprime(qprime)

    def get_qprime(self, key: Hashable = MODEL_WIDE) -> float:
        """Spectral density used for ``key`` (model-wide if no key is given)

        ``None`` is a valid key: it is where a station-scoped model keeps the
        state of parameters prepared without a station.
        """
        if key is not MODEL_WIDE:
            state = self._states.get(key)
            if state is not None and state.qprime is not None:
                return state.qprime
        return self.qprime

    def get_q(self) -> float:
        return self.variance

    def prepare(self, epoch, source, sat, data=None):
        key = self.entity_key(source, sat)
        state = self._state(key)
        state.current_time = epoch
        self.variance = self._compute_q(key, state, data)
        state.previous_time = state.current_time

    def _compute_q(self, key, state: EntityState, data) -> float:
        return self.get_qprime(key) * elapsed_seconds(state.current_time, state.previous_time)
