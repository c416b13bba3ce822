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
PyRTK - Stochastic process-noise models for RTK parameter estimation

For every scalar parameter tracked by a recursive RTK estimator
(troposphere, ionosphere, hardware biases, ISB/IFCB, carrier-phase
ambiguities, coordinates) the package supplies the state-transition
coefficient Phi and the process-noise variance Q for each epoch transition,
keeping independent state per station and/or satellite.
"""

__version__ = "1.0.0"
__author__ = "PyRTK Development Team"
__title__ = "pyrtk"
__description__ = "Stochastic process-noise models for RTK GNSS estimation"

from .core import *
from .stochastic import *
