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

"""Carrier-phase ambiguity stochastic model"""

import logging
from enum import Enum
from typing import Dict, Optional, Tuple

from ..core.data_structures import TypeValueMap
from ..core.identifiers import SatID, SourceID, TypeID
from ..core.stats import SIGMA_AMBIGUITY, check_sigma
from .base import StochasticModel

logger = logging.getLogger(__name__)


class CycleSlipPolicy(Enum):
    """How the ambiguity model learns about cycle slips.

    Attributes
    ----------
    SAT_ARC : int
        Compare the satellite arc number (``TypeID.satArc``) with the last
        one seen for the station/satellite pair; a new arc is a slip
    CS_FLAG : int
        Read a cycle-slip flag (``TypeID.CSFlag`` by default) directly
    """
    SAT_ARC = 1
    CS_FLAG = 2


class PhaseAmbiguityModel(StochasticModel):
    """
    Phase ambiguity stochastic model

    Constant model between cycle slips (Phi = 1, Q = 0). When a cycle slip
    happens the ambiguity becomes a new unknown: Phi = 0 and Q = sigma².

    By default each satellite is expected to carry a ``TypeID.satArc`` value
    in its record, and a change of arc number marks a cycle slip. Use
    ``set_cycle_slip_policy(CycleSlipPolicy.CS_FLAG)`` (or
    ``set_watch_sat_arc(False)``) to use cycle-slip flags instead.

    Notes
    -----
    ``get_phi``/``get_q`` refer to the station/satellite of the last
    ``prepare`` call.
    """

    def __init__(self, sigma: float = SIGMA_AMBIGUITY,
                 policy: CycleSlipPolicy = CycleSlipPolicy.SAT_ARC,
                 cs_flag_type: TypeID = TypeID.CSFlag):
        """
        Initialize phase ambiguity model

        Parameters:
        -----------
        sigma : float
            Standard deviation of the ambiguity after a cycle slip
        policy : CycleSlipPolicy
            Cycle-slip detection policy
        cs_flag_type : TypeID
            Type of the cycle-slip flag read under ``CycleSlipPolicy.CS_FLAG``
        """
        self.variance = check_sigma(sigma) ** 2
        self.cycle_slip = False
        self.policy = CycleSlipPolicy(policy)
        self.cs_flag_type = cs_flag_type
        self.sat_arc_map: Dict[Tuple[SourceID, SatID], float] = {}

    @property
    def watch_sat_arc(self) -> bool:
        return self.policy is CycleSlipPolicy.SAT_ARC

    def set_sigma(self, sigma: float):
        self.variance = check_sigma(sigma) ** 2

    def set_cycle_slip_policy(self, policy: CycleSlipPolicy):
        self.policy = CycleSlipPolicy(policy)

    def set_watch_sat_arc(self, watch_arc: bool):
        """Select arc watching (True) or flag watching (False)"""
        self.policy = CycleSlipPolicy.SAT_ARC if watch_arc else CycleSlipPolicy.CS_FLAG

    def set_cs_flag_type(self, type_id: TypeID):
        """
        Set the type of the cycle-slip flag to read

        Only used under ``CycleSlipPolicy.CS_FLAG``.
        """
        if self.watch_sat_arc:
            logger.warning(f"Cycle-slip flag type set to {type_id} while watching "
                           f"satellite arcs; it is ignored until flag watching is selected")
        self.cs_flag_type = type_id

    def get_cs_flag_type(self) -> TypeID:
        return self.cs_flag_type

    def set_cs(self, cs: bool):
        """Feed the model with the cycle-slip state of the current epoch"""
        self.cycle_slip = bool(cs)

    def get_cs(self) -> bool:
        return self.cycle_slip

    def get_sat_arc(self, source: SourceID, sat: SatID) -> Optional[float]:
        """Last arc number seen for a station/satellite pair"""
        return self.sat_arc_map.get((source, sat))

    def get_phi(self) -> float:
        return 0.0 if self.cycle_slip else 1.0

    def get_q(self) -> float:
        return self.variance if self.cycle_slip else 0.0

    def prepare(self, epoch, source, sat, data=None):
        if not isinstance(data, TypeValueMap):
            data = TypeValueMap(data or {})
        self._check_cs(source, sat, data)

    def _check_cs(self, source: SourceID, sat: SatID, data: TypeValueMap):
        """
        Update the cycle-slip state from the record

        Missing fields leave the state as previously set.
        """
        if self.watch_sat_arc:
            arc = data.get_value(TypeID.satArc)
            if arc is None:
                return
            key = (source, sat)
            previous_arc = self.sat_arc_map.get(key)
            if previous_arc is None:
                self.sat_arc_map[key] = arc
                self.cycle_slip = False
            elif arc != previous_arc:
                logger.debug(f"New arc {arc:g} for {source} {sat} (was {previous_arc:g}): cycle slip")
                self.sat_arc_map[key] = arc
                self.cycle_slip = True
            else:
                self.cycle_slip = False
        else:
            flag = data.get_value(self.cs_flag_type)
            if flag is None:
                return
            self.set_cs(flag != 0.0)
            if self.cycle_slip:
                logger.debug(f"Cycle slip flag {self.cs_flag_type} set for {source} {sat}")
