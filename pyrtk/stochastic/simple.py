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

"""Random walk and white noise stochastic models"""

from ..core.stats import (QPRIME_RANDOM_WALK, SIGMA_WHITE_NOISE, check_qprime,
                          check_sigma)
from ..core.time import BEGINNING_OF_TIME, Epoch
from .base import StochasticModel, elapsed_seconds


class RandomWalkModel(StochasticModel):
    """
    Random walk stochastic model with a single time history

    Q = qprime * (current_time - previous_time), Phi = 1.

    Warning: the object stores its previous epoch, so the SAME instance
    must not be used for DIFFERENT data streams or parameters.
    """

    def __init__(self, qprime: float = QPRIME_RANDOM_WALK,
                 previous_time: Epoch = BEGINNING_OF_TIME):
        """
        Initialize random walk model

        Parameters:
        -----------
        qprime : float
            Process spectral density d(sigma²)/dt in m²/s.
            Beware of units: time MUST be in seconds.
        previous_time : GNSSTime or float
            Epoch of the previous measurement
        """
        self.qprime = check_qprime(qprime)
        self.previous_time = previous_time
        self.current_time = previous_time
        self.variance = 0.0

    def set_previous_time(self, prev_time: Epoch):
        self.previous_time = prev_time

    def set_current_time(self, curr_time: Epoch):
        self.current_time = curr_time

    def set_qprime(self, qprime: float):
        """Set the process spectral density (affects future epochs only)"""
        self.qprime = check_qprime(qprime)

    def get_q(self) -> float:
        return self.variance

    def prepare(self, epoch, source=None, sat=None, data=None):
        self.current_time = epoch
        self.variance = self.qprime * elapsed_seconds(self.current_time, self.previous_time)
        self.previous_time = self.current_time


class WhiteNoiseModel(StochasticModel):
    """
    White noise stochastic model

    The parameter has no memory between epochs: Phi = 0 and Q = sigma².
    """

    def __init__(self, sigma: float = SIGMA_WHITE_NOISE):
        self.variance = check_sigma(sigma) ** 2

    def set_sigma(self, sigma: float):
        self.variance = check_sigma(sigma) ** 2

    def get_phi(self) -> float:
        return 0.0

    def get_q(self) -> float:
        return self.variance
