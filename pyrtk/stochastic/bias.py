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

"""Hardware bias random walk models (UHD, ISB, IFCB)"""

from ..core.stats import (QPRIME_IFCB, QPRIME_ISB, QPRIME_REC_BIAS,
                          QPRIME_SAT_BIAS)
from .entity import EntityRandomWalkModel, EntityScope


class RecBiasRandomWalkModel(EntityRandomWalkModel):
    """Receiver uncalibrated hardware delay, one state per station"""
    scope = EntityScope.STATION
    default_qprime = QPRIME_REC_BIAS


class SatBiasRandomWalkModel(EntityRandomWalkModel):
    """
    Satellite uncalibrated hardware delay, one state per satellite

    The satellite bias is assumed to be the same for every station.
    """
    scope = EntityScope.SATELLITE
    default_qprime = QPRIME_SAT_BIAS


class ISBRandomWalkModel(EntityRandomWalkModel):
    """
    Inter-system bias, one state per station

    Meant for BDS/GAL-GPS biases. Suitable for GLONASS only when its FDMA
    channels are not modelled separately (see IFCBRandomWalkModel).
    """
    scope = EntityScope.STATION
    default_qprime = QPRIME_ISB


class IFCBRandomWalkModel(EntityRandomWalkModel):
    """
    Inter-frequency bias, one state per station/satellite pair

    Mainly for GLONASS FDMA, where every satellite has its own channel.
    """
    scope = EntityScope.STATION_SATELLITE
    default_qprime = QPRIME_IFCB
