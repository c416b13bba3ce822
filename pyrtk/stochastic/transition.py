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

"""State-transition and process-noise assembly for the estimator"""

import copy
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse

from ..core.data_structures import GnssEpochData, TypeValueMap
from ..core.identifiers import SatID, SourceID, TypeID
from ..core.time import Epoch
from .base import ConstantModel, StochasticModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Parameter:
    """One scalar element of the filter state vector.

    Attributes
    ----------
    type_id : TypeID
        Parameter type
    source : SourceID or None
        Station the parameter belongs to (None for network-wide parameters)
    sat : SatID or None
        Satellite the parameter belongs to (None for station parameters)
    """
    type_id: TypeID
    source: Optional[SourceID] = None
    sat: Optional[SatID] = None

    def __str__(self):
        parts = [str(self.type_id)]
        if self.source is not None:
            parts.append(str(self.source))
        if self.sat is not None:
            parts.append(str(self.sat))
        return '/'.join(parts)


class StochasticModelSet:
    """
    Binding of parameter types to stochastic models

    For every parameter the estimator tracks, the bound model is prepared
    and its Phi/Q read immediately afterwards, which is the order the
    multi-entity models require. Types without a binding use a constant
    model (Phi = 1, Q = 0).

    Models that keep state for a single station (``single_station = True``,
    e.g. the slant ionosphere) are used as templates: each station gets its
    own copy on first use.
    """

    def __init__(self, default_model: Optional[StochasticModel] = None):
        self.models: Dict[TypeID, StochasticModel] = {}
        self.default_model = ConstantModel() if default_model is None else default_model
        self._station_models: Dict[Tuple[TypeID, Optional[SourceID]], StochasticModel] = {}

    def bind(self, type_id: TypeID, model: StochasticModel):
        """Bind a model to a parameter type, replacing any previous one"""
        if not isinstance(model, StochasticModel):
            raise TypeError(f"Expected a StochasticModel, got {type(model)}")
        self.models[type_id] = model
        for key in [k for k in self._station_models if k[0] == type_id]:
            del self._station_models[key]

    def get_model(self, type_id: TypeID, source: Optional[SourceID] = None) -> StochasticModel:
        """
        Model that prepares parameters of ``type_id`` for ``source``

        For a single-station model this is the copy owned by ``source``;
        otherwise the bound model itself, or the default model if unbound.
        """
        model = self.models.get(type_id)
        if model is None:
            return self.default_model
        if not getattr(model, 'single_station', False):
            return model
        key = (type_id, source)
        station_model = self._station_models.get(key)
        if station_model is None:
            station_model = self._station_models[key] = copy.deepcopy(model)
            logger.debug(f"New {type(model).__name__} for {type_id} at station {source}")
        return station_model

    def __contains__(self, type_id):
        return type_id in self.models

    def __len__(self):
        return len(self.models)

    def prepare(self,
                epoch: Epoch,
                parameters: Sequence[Parameter],
                epoch_data: Optional[GnssEpochData] = None) -> Tuple[np.ndarray, np.ndarray]:
        """
        Prepare every parameter and collect its Phi and Q

        Parameters
        ----------
        epoch : GNSSTime or float
            Current epoch
        parameters : Sequence[Parameter]
            Parameters in state-vector order
        epoch_data : GnssEpochData, optional
            Records of the current epoch

        Returns
        -------
        phi : np.ndarray
            State-transition coefficients, shape (n,)
        q : np.ndarray
            Process-noise variances, shape (n,)
        """
        n = len(parameters)
        phi = np.ones(n)
        q = np.zeros(n)

        for i, param in enumerate(parameters):
            model = self.get_model(param.type_id, param.source)
            if epoch_data is None:
                data = TypeValueMap()
            else:
                data = epoch_data.get(param.source, param.sat)
            model.prepare(epoch, param.source, param.sat, data)
            phi[i] = model.get_phi()
            q[i] = model.get_q()

        logger.debug(f"Prepared {n} parameters: {int(np.sum(phi == 0.0))} reset, "
                     f"max Q = {q.max() if n else 0.0:.3e}")
        return phi, q

    def transition_matrices(self,
                            epoch: Epoch,
                            parameters: Sequence[Parameter],
                            epoch_data: Optional[GnssEpochData] = None,
                            use_sparse: bool = False):
        """
        Diagonal state-transition and process-noise matrices

        Parameters
        ----------
        epoch : GNSSTime or float
            Current epoch
        parameters : Sequence[Parameter]
            Parameters in state-vector order
        epoch_data : GnssEpochData, optional
            Records of the current epoch
        use_sparse : bool
            Return scipy CSR matrices instead of dense arrays

        Returns
        -------
        Phi, Q
            (n, n) diagonal matrices
        """
        phi, q = self.prepare(epoch, parameters, epoch_data)
        if use_sparse:
            return sparse.diags(phi, format='csr'), sparse.diags(q, format='csr')
        return np.diag(phi), np.diag(q)
