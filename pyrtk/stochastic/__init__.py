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

"""Stochastic models supplying Phi and Q for each filter parameter."""

from .ambiguity import CycleSlipPolicy, PhaseAmbiguityModel
from .atmosphere import (IonoRandomWalkModel, TropoGradRandomWalkModel,
                         TropoRandomWalkModel)
from .base import (ConstantModel, StochasticModel, clamp_elapsed,
                   elapsed_seconds)
from .bias import (IFCBRandomWalkModel, ISBRandomWalkModel,
                   RecBiasRandomWalkModel, SatBiasRandomWalkModel)
from .entity import EntityRandomWalkModel, EntityScope, EntityState
from .factory import (DEFAULT_BINDINGS, MODEL_CLASSES, ModelKind,
                      StochasticConfig, create_model)
from .simple import RandomWalkModel, WhiteNoiseModel
from .transition import Parameter, StochasticModelSet

__all__ = [
    'StochasticModel', 'ConstantModel', 'clamp_elapsed', 'elapsed_seconds',
    'RandomWalkModel', 'WhiteNoiseModel',
    'PhaseAmbiguityModel', 'CycleSlipPolicy',
    'EntityRandomWalkModel', 'EntityScope', 'EntityState',
    'TropoRandomWalkModel', 'TropoGradRandomWalkModel', 'IonoRandomWalkModel',
    'RecBiasRandomWalkModel', 'SatBiasRandomWalkModel',
    'ISBRandomWalkModel', 'IFCBRandomWalkModel',
    'ModelKind', 'MODEL_CLASSES', 'DEFAULT_BINDINGS',
    'create_model', 'StochasticConfig',
    'Parameter', 'StochasticModelSet',
]
