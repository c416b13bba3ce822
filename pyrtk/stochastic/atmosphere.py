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

"""Troposphere and ionosphere random walk models"""

import logging
import math

from ..core.stats import (IONO_INSERT_INTERRUPT, IONO_INTERRUPT_SIGMA,
                          IONO_SAMPLING, IONO_TOLERANCE, QPRIME_IONO,
                          QPRIME_TROPO, QPRIME_TROPO_GRADIENT, check_sigma)
from ..core.time import BEGINNING_OF_TIME, Epoch, gnss_time_diff
from .entity import EntityRandomWalkModel, EntityScope, EntityState

logger = logging.getLogger(__name__)


class TropoRandomWalkModel(EntityRandomWalkModel):
    """
    Zenith wet tropospheric delay as a random walk, one state per station

    Default qprime is 5e-8 m²/s (about 1.8 cm² per hour).
    """
    scope = EntityScope.STATION
    default_qprime = QPRIME_TROPO


class TropoGradRandomWalkModel(EntityRandomWalkModel):
    """Wet tropospheric gradient as a random walk, one state per station"""
    scope = EntityScope.STATION
    default_qprime = QPRIME_TROPO_GRADIENT


class IonoRandomWalkModel(EntityRandomWalkModel):
    """
    Slant ionospheric delay on L1 as a random walk, one state per satellite

    Warning: states are keyed by satellite only, so one instance supports a
    SINGLE station. Use a separate instance for every station;
    StochasticModelSet does this automatically. A warning is logged the
    first time an instance is prepared for a second station.

    A pure random walk under-estimates how fast the slant delay changes over
    a long arc. Optionally, every ``sampling`` seconds counted from
    ``initial_time`` (within ``tolerance``) an interrupt re-opens the variance
    to ``interrupt_sigma²``.
    """
    scope = EntityScope.SATELLITE
    default_qprime = QPRIME_IONO
    single_station = True

    def __init__(self, qprime=None,
                 insert_interrupt: bool = IONO_INSERT_INTERRUPT,
                 sampling: float = IONO_SAMPLING,
                 tolerance: float = IONO_TOLERANCE,
                 initial_time: Epoch = BEGINNING_OF_TIME,
                 interrupt_sigma: float = IONO_INTERRUPT_SIGMA):
        """
        Initialize ionosphere random walk model

        Parameters:
        -----------
        qprime : float, optional
            Process spectral density (m²/s), default 1e-3
        insert_interrupt : bool
            Whether to insert periodic interrupts
        sampling : float
            Interval between interrupts (s)
        tolerance : float
            Half-width of the window around each interrupt epoch (s)
        initial_time : GNSSTime or float
            Epoch from which interrupts are counted
        interrupt_sigma : float
            Sigma injected at an interrupt (m)
        """
        super().__init__(qprime)
        self.insert_interrupt = bool(insert_interrupt)
        self.set_sampling(sampling)
        self.set_tolerance(tolerance)
        self.initial_time = initial_time
        self.interrupt_variance = check_sigma(interrupt_sigma) ** 2
        self.station = None
        self._foreign_stations = set()

    def prepare(self, epoch, source, sat, data=None):
        if source is not None:
            if self.station is None:
                self.station = source
            elif source != self.station and source not in self._foreign_stations:
                self._foreign_stations.add(source)
                logger.warning(f"{type(self).__name__} bound to station {self.station} "
                               f"is also prepared for {source}; the stations share "
                               f"per-satellite state")
        super().prepare(epoch, source, sat, data)

    def set_insert_interrupt(self, insert: bool):
        self.insert_interrupt = bool(insert)

    def set_initial_epoch(self, initial_epoch: Epoch):
        """Set the epoch from which interrupts are counted"""
        self.initial_time = initial_epoch

    def set_sampling(self, sampling: float):
        sampling = float(sampling)
        if not sampling > 0:
            raise ValueError(f"Interrupt sampling must be positive: {sampling}")
        self.sampling = sampling

    def set_tolerance(self, tolerance: float):
        tolerance = float(tolerance)
        if not tolerance >= 0:
            raise ValueError(f"Interrupt tolerance cannot be negative: {tolerance}")
        self.tolerance = tolerance

    def set_interrupt_sigma(self, sigma: float):
        self.interrupt_variance = check_sigma(sigma) ** 2

    def is_interrupt_epoch(self, epoch: Epoch) -> bool:
        """
        Check whether an epoch falls on an interrupt boundary

        Parameters:
        -----------
        epoch : GNSSTime or float
            Epoch to check

        Returns:
        --------
        bool
            True if interrupts are enabled and the epoch lies within
            ``tolerance`` of ``initial_time + k * sampling`` for some k >= 0
        """
        if not self.insert_interrupt:
            return False
        interval = gnss_time_diff(epoch, self.initial_time)
        if interval < -self.tolerance:
            return False
        remainder = math.fmod(abs(interval), self.sampling)
        return remainder <= self.tolerance or self.sampling - remainder <= self.tolerance

    def _compute_q(self, key, state: EntityState, data) -> float:
        variance = super()._compute_q(key, state, data)
        if self.is_interrupt_epoch(state.current_time):
            logger.debug(f"Ionosphere interrupt for {key} at {state.current_time}")
            return max(variance, self.interrupt_variance)
        return variance
