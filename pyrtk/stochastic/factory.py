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
Closed set of stochastic model kinds and configuration-driven construction

Example config:
{
    'tropo': {'qprime': 1e-8},
    'iono': {'sampling': 3600.0, 'insert_interrupt': False},
    'phase_ambiguity': {'watch_sat_arc': False, 'cs_flag_type': 'CSL1'},
}
"""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional

from ..core.identifiers import TypeID
from ..core.stats import DEFAULT_STOCHASTIC
from .ambiguity import CycleSlipPolicy, PhaseAmbiguityModel
from .atmosphere import (IonoRandomWalkModel, TropoGradRandomWalkModel,
                         TropoRandomWalkModel)
from .base import ConstantModel, StochasticModel
from .bias import (IFCBRandomWalkModel, ISBRandomWalkModel,
                   RecBiasRandomWalkModel, SatBiasRandomWalkModel)
from .simple import RandomWalkModel, WhiteNoiseModel
from .transition import StochasticModelSet

logger = logging.getLogger(__name__)


class ModelKind(Enum):
    """The stochastic behaviours available to the estimator"""
    CONSTANT = 'constant'
    RANDOM_WALK = 'random_walk'
    WHITE_NOISE = 'white_noise'
    PHASE_AMBIGUITY = 'phase_ambiguity'
    TROPO = 'tropo'
    TROPO_GRADIENT = 'tropo_gradient'
    IONO = 'iono'
    REC_BIAS = 'rec_bias'
    SAT_BIAS = 'sat_bias'
    ISB = 'isb'
    IFCB = 'ifcb'

    @classmethod
    def parse(cls, kind):
        """Accept a ModelKind or its string value"""
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).lower())
        except ValueError:
            raise ValueError(f"Unknown stochastic model kind: {kind}") from None


MODEL_CLASSES = {
    ModelKind.CONSTANT: ConstantModel,
    ModelKind.RANDOM_WALK: RandomWalkModel,
    ModelKind.WHITE_NOISE: WhiteNoiseModel,
    ModelKind.PHASE_AMBIGUITY: PhaseAmbiguityModel,
    ModelKind.TROPO: TropoRandomWalkModel,
    ModelKind.TROPO_GRADIENT: TropoGradRandomWalkModel,
    ModelKind.IONO: IonoRandomWalkModel,
    ModelKind.REC_BIAS: RecBiasRandomWalkModel,
    ModelKind.SAT_BIAS: SatBiasRandomWalkModel,
    ModelKind.ISB: ISBRandomWalkModel,
    ModelKind.IFCB: IFCBRandomWalkModel,
}

# Which model drives each parameter type by default
DEFAULT_BINDINGS = {
    TypeID.dx: ModelKind.WHITE_NOISE,
    TypeID.dy: ModelKind.WHITE_NOISE,
    TypeID.dz: ModelKind.WHITE_NOISE,
    TypeID.cdt: ModelKind.WHITE_NOISE,
    TypeID.wetMap: ModelKind.TROPO,
    TypeID.wetMapNorth: ModelKind.TROPO_GRADIENT,
    TypeID.wetMapEast: ModelKind.TROPO_GRADIENT,
    TypeID.ionoL1: ModelKind.IONO,
    TypeID.recBias: ModelKind.REC_BIAS,
    TypeID.satBias: ModelKind.SAT_BIAS,
    TypeID.ISB: ModelKind.ISB,
    TypeID.IFCB: ModelKind.IFCB,
    TypeID.BL1: ModelKind.PHASE_AMBIGUITY,
    TypeID.BL2: ModelKind.PHASE_AMBIGUITY,
    TypeID.BL5: ModelKind.PHASE_AMBIGUITY,
}


def create_model(kind, **options) -> StochasticModel:
    """
    Create a fresh stochastic model

    Parameters
    ----------
    kind : ModelKind or str
        Model kind
    **options
        Constructor options of the model. For the phase ambiguity model,
        ``watch_sat_arc`` (bool) selects the cycle-slip policy and
        ``cs_flag_type`` may be given as a TypeID name.

    Returns
    -------
    StochasticModel
        New, unshared model instance

    Raises
    ------
    ValueError
        If the kind is unknown
    """
    kind = ModelKind.parse(kind)
    options = dict(options)

    if kind is ModelKind.PHASE_AMBIGUITY:
        if 'watch_sat_arc' in options:
            watch = options.pop('watch_sat_arc')
            options['policy'] = CycleSlipPolicy.SAT_ARC if watch else CycleSlipPolicy.CS_FLAG
        if 'cs_flag_type' in options:
            options['cs_flag_type'] = TypeID.from_name(options['cs_flag_type'])

    return MODEL_CLASSES[kind](**options)


@dataclass
class StochasticConfig:
    """
    Stochastic model configuration

    Attributes
    ----------
    options : Dict[ModelKind, dict]
        Constructor options per model kind
    """
    options: Dict[ModelKind, dict] = field(
        default_factory=lambda: {ModelKind.parse(k): dict(v)
                                 for k, v in copy.deepcopy(DEFAULT_STOCHASTIC).items()})

    @classmethod
    def from_dict(cls, config: Optional[Mapping] = None, base: Optional[Mapping] = None):
        """
        Build a configuration from dictionaries

        Parameters
        ----------
        config : Mapping, optional
            Options per kind, merged over ``base``
        base : Mapping, optional
            Starting options per kind (DEFAULT_STOCHASTIC if None)

        Returns
        -------
        StochasticConfig
            Merged configuration
        """
        base = DEFAULT_STOCHASTIC if base is None else base
        result = cls({ModelKind.parse(k): dict(v) for k, v in copy.deepcopy(base).items()})
        for kind, opts in (config or {}).items():
            result.update(kind, **opts)
        return result

    def update(self, kind, **options):
        """Override options of one kind"""
        kind = ModelKind.parse(kind)
        self.options.setdefault(kind, {}).update(options)

    def create(self, kind) -> StochasticModel:
        """Create a new model of ``kind`` with the configured options"""
        kind = ModelKind.parse(kind)
        return create_model(kind, **self.options.get(kind, {}))

    def build_model_set(self, bindings: Optional[Mapping] = None) -> StochasticModelSet:
        """
        Create a StochasticModelSet with one new model per bound type

        Parameters
        ----------
        bindings : Mapping[TypeID, ModelKind or str], optional
            Parameter type to model kind (DEFAULT_BINDINGS if None)

        Returns
        -------
        StochasticModelSet
            Model set ready for the estimator
        """
        bindings = DEFAULT_BINDINGS if bindings is None else bindings
        model_set = StochasticModelSet()
        for type_id, kind in bindings.items():
            model_set.bind(TypeID.from_name(type_id), self.create(kind))
        logger.info(f"Stochastic models bound for {len(model_set)} parameter types")
        return model_set
