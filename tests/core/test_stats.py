#!/usr/bin/env python3
"""Test suite for default stochastic parameters"""

import unittest

import numpy as np

from pyrtk.core import stats


class TestDefaults(unittest.TestCase):
    """Test default spectral densities"""

    def test_default_values(self):
        self.assertEqual(stats.QPRIME_RANDOM_WALK, 9.0e10)
        self.assertEqual(stats.SIGMA_WHITE_NOISE, 3.0e5)
        self.assertEqual(stats.SIGMA_AMBIGUITY, 2.0e4)
        self.assertEqual(stats.QPRIME_TROPO, 5.0e-8)
        self.assertEqual(stats.QPRIME_TROPO_GRADIENT, 5.0e-10)
        self.assertEqual(stats.QPRIME_IONO, 1.0e-3)
        self.assertEqual(stats.QPRIME_REC_BIAS, 1.0e-4)
        self.assertEqual(stats.QPRIME_SAT_BIAS, 3.0e-6)
        self.assertEqual(stats.QPRIME_ISB, 9.0e-4)
        self.assertEqual(stats.QPRIME_IFCB, 1.0e-4)

    def test_presets_use_known_models(self):
        for preset in [stats.STATIC_STOCHASTIC, stats.KINEMATIC_STOCHASTIC]:
            for name in preset:
                self.assertIn(name, stats.DEFAULT_STOCHASTIC)


class TestConversions(unittest.TestCase):
    """Test sigma / spectral density conversions"""

    def test_qprime_from_sigma_rate(self):
        self.assertAlmostEqual(stats.qprime_from_sigma_rate(0.01, 3600.0), 1e-4 / 3600.0)
        with self.assertRaises(ValueError):
            stats.qprime_from_sigma_rate(0.01, 0.0)
        with self.assertRaises(ValueError):
            stats.qprime_from_sigma_rate(-1.0)

    def test_sigma_rate_from_qprime(self):
        qprime = stats.qprime_from_sigma_rate(0.02, 1800.0)
        self.assertAlmostEqual(stats.sigma_rate_from_qprime(qprime, 1800.0), 0.02)
        with self.assertRaises(ValueError):
            stats.sigma_rate_from_qprime(-1e-8)

    def test_checks(self):
        self.assertEqual(stats.check_qprime(0), 0.0)
        self.assertEqual(stats.check_sigma("2"), 2.0)
        for bad in [-1.0, np.nan, np.inf]:
            with self.assertRaises(ValueError):
                stats.check_qprime(bad)
            with self.assertRaises(ValueError):
                stats.check_sigma(bad)


if __name__ == '__main__':
    unittest.main()
