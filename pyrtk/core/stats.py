#!/usr/bin/env python
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
Stochastic Model Parameters and Constants
=========================================

Default process spectral densities and white-noise sigmas for the
stochastic models used by the RTK estimator.

Units: spectral densities (qprime) are m²/s, sigmas are m (cycles for
ambiguities), times are seconds.
"""

import numpy as np

# ============================================================================
# GENERIC MODELS
# ============================================================================
QPRIME_RANDOM_WALK = 9.0e10    # Effectively unconstrained parameter (m²/s)
SIGMA_WHITE_NOISE = 3.0e5      # White noise sigma (m)

# ============================================================================
# CARRIER-PHASE AMBIGUITY
# ============================================================================
SIGMA_AMBIGUITY = 2.0e4        # Ambiguity sigma after a cycle slip

# ============================================================================
# PROCESS SPECTRAL DENSITIES
# ============================================================================
QPRIME_TROPO = 5.0e-8          # Zenith wet delay, per station
QPRIME_TROPO_GRADIENT = 5.0e-10  # Wet delay gradient, per station
QPRIME_IONO = 1.0e-3           # Slant ionosphere on L1, per satellite
QPRIME_REC_BIAS = 1.0e-4       # Receiver hardware delay, per station
QPRIME_SAT_BIAS = 3.0e-6       # Satellite hardware delay, per satellite
QPRIME_ISB = 9.0e-4            # Inter-system bias, per station
QPRIME_IFCB = 1.0e-4           # Inter-frequency bias, per station/satellite

# ============================================================================
# IONOSPHERE INTERRUPTS
# ============================================================================
IONO_INSERT_INTERRUPT = True   # Re-open slant ionosphere variance periodically
IONO_SAMPLING = 7200.0         # Interval between interrupts (s)
IONO_TOLERANCE = 0.5           # Window around each interrupt epoch (s)
IONO_INTERRUPT_SIGMA = 100.0   # Sigma injected at an interrupt (m)

# ============================================================================
# DEFAULT CONFIGURATIONS
# ============================================================================

DEFAULT_STOCHASTIC = {
    'constant': {},
    'random_walk': {'qprime': QPRIME_RANDOM_WALK},
    'white_noise': {'sigma': SIGMA_WHITE_NOISE},
    'phase_ambiguity': {'sigma': SIGMA_AMBIGUITY, 'watch_sat_arc': True},
    'tropo': {'qprime': QPRIME_TROPO},
    'tropo_gradient': {'qprime': QPRIME_TROPO_GRADIENT},
    'iono': {
        'qprime': QPRIME_IONO,
        'insert_interrupt': IONO_INSERT_INTERRUPT,
        'sampling': IONO_SAMPLING,
        'tolerance': IONO_TOLERANCE,
        'interrupt_sigma': IONO_INTERRUPT_SIGMA,
    },
    'rec_bias': {'qprime': QPRIME_REC_BIAS},
    'sat_bias': {'qprime': QPRIME_SAT_BIAS},
    'isb': {'qprime': QPRIME_ISB},
    'ifcb': {'qprime': QPRIME_IFCB},
}

# Static receiver, quiet atmosphere
STATIC_STOCHASTIC = {
    'tropo': {'qprime': 1.0e-8},
    'iono': {'qprime': 4.0e-4, 'sampling': 3600.0},
    'rec_bias': {'qprime': 1.0e-5},
    'isb': {'qprime': 1.0e-4},
}

# Moving receiver, disturbed atmosphere
KINEMATIC_STOCHASTIC = {
    'tropo': {'qprime': 1.0e-7},
    'tropo_gradient': {'qprime': 1.0e-9},
    'iono': {'qprime': 4.0e-3, 'sampling': 1800.0},
    'rec_bias': {'qprime': 1.0e-3},
}

# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def qprime_from_sigma_rate(sigma, interval=3600.0):
    """
    Convert an accumulated sigma over an interval to a spectral density

    Parameters
    ----------
    sigma : float
        Standard deviation accumulated over ``interval`` (m)
    interval : float
        Interval in seconds (default: one hour)

    Returns
    -------
    float
        Process spectral density (m²/s)

    Examples
    --------
    >>> qprime_from_sigma_rate(0.01, 3600.0)  # 1 cm per sqrt(hour)
    2.777...e-08
    """
    if interval <= 0:
        raise ValueError(f"Interval must be positive: {interval}")
    if sigma < 0:
        raise ValueError(f"Sigma cannot be negative: {sigma}")
    return sigma ** 2 / interval


def sigma_rate_from_qprime(qprime, interval=3600.0):
    """
    Sigma (m) accumulated by a random walk over ``interval`` seconds

    Parameters
    ----------
    qprime : float
        Process spectral density (m²/s)
    interval : float
        Interval in seconds (default: one hour)

    Returns
    -------
    float
        Accumulated standard deviation (m)
    """
    if qprime < 0:
        raise ValueError(f"Process spectral density cannot be negative: {qprime}")
    return float(np.sqrt(qprime * abs(interval)))


def check_qprime(qprime):
    """Validate a process spectral density and return it as float"""
    qprime = float(qprime)
    if not np.isfinite(qprime) or qprime < 0:
        raise ValueError(f"Process spectral density must be finite and non-negative: {qprime}")
    return qprime


def check_sigma(sigma):
    """Validate a standard deviation and return it as float"""
    sigma = float(sigma)
    if not np.isfinite(sigma) or sigma < 0:
        raise ValueError(f"Sigma must be finite and non-negative: {sigma}")
    return sigma
