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

"""Base stochastic model and the elapsed-time clamping policy"""

import logging
from abc import ABC
from typing import Optional

from ..core.data_structures import TypeValueMap
from ..core.identifiers import SatID, SourceID
from ..core.time import Epoch, gnss_time_diff

logger = logging.getLogger(__name__)


def clamp_elapsed(dt: float) -> float:
    """
    Clamp an elapsed time to be non-negative

    Out-of-order or duplicated epochs give a non-positive elapsed time.
    The result is clamped to zero so that the process noise is never
    negative; the event is logged but not reported as an error.

    Parameters
    ----------
    dt : float
        Elapsed time in seconds (may be negative or NaN)

    Returns
    -------
    float
        ``dt`` if positive, otherwise 0.0
    """
    if dt > 0.0:
        return float(dt)
    if dt < 0.0:
        logger.debug(f"Backward time step of {dt:.3f} s clamped to zero")
    elif dt != dt:
        logger.debug("Undefined elapsed time clamped to zero")
    return 0.0


def elapsed_seconds(current: Epoch, previous: Epoch) -> float:
    """Non-negative seconds from ``previous`` to ``current``"""
    return clamp_elapsed(gnss_time_diff(current, previous))


class StochasticModel(ABC):
    """
    Base class of stochastic models

    A stochastic model supplies, for one scalar filter parameter, the
    state-transition coefficient (Phi) and the process-noise variance (Q)
    used to propagate the parameter from one epoch to the next. The
    estimator calls ``prepare`` once per epoch and parameter, then reads
    ``get_phi`` and ``get_q``.

    The base behaviour is a constant model: Phi = 1, Q = 0.
    """

    def get_phi(self) -> float:
        """State-transition coefficient"""
        return 1.0

    def get_q(self) -> float:
        """Process-noise variance"""
        return 0.0

    def prepare(self,
                epoch: Epoch,
                source: Optional[SourceID],
                sat: Optional[SatID],
                data: Optional[TypeValueMap] = None):
        """
        Provide the model with the information of the current epoch

        Parameters
        ----------
        epoch : GNSSTime or float
            Current epoch
        source : SourceID or None
            Station the parameter belongs to
        sat : SatID or None
            Satellite the parameter belongs to
        data : TypeValueMap, optional
            Record for this station/satellite at the current epoch
        """
        return None

    def __repr__(self):
        return f"{type(self).__name__}(phi={self.get_phi()}, q={self.get_q()})"


class ConstantModel(StochasticModel):
    """Constant parameter: never changes, no process noise"""
