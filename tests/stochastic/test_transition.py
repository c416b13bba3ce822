#!/usr/bin/env python3
"""Test suite for state-transition and process-noise assembly"""

import unittest

import numpy as np
from scipy import sparse

from pyrtk.core.data_structures import GnssEpochData
from pyrtk.core.identifiers import SatID, SourceID, TypeID
from pyrtk.stochastic.ambiguity import PhaseAmbiguityModel
from pyrtk.stochastic.atmosphere import IonoRandomWalkModel, TropoRandomWalkModel
from pyrtk.stochastic.factory import StochasticConfig
from pyrtk.stochastic.simple import WhiteNoiseModel
from pyrtk.stochastic.transition import Parameter, StochasticModelSet

STATION = SourceID('WUHN')
G01 = SatID('G', 1)
G02 = SatID('G', 2)


def epoch_data(time, arcs):
    data = GnssEpochData(time)
    for sat, value in arcs.items():
        data.insert(STATION, sat, TypeID.satArc, value)
    return data


class TestParameter(unittest.TestCase):
    """Test parameter identifiers"""

    def test_str(self):
        self.assertEqual(str(Parameter(TypeID.BL1, STATION, G01)), 'BL1/WUHN/G01')
        self.assertEqual(str(Parameter(TypeID.wetMap, STATION)), 'wetMap/WUHN')

    def test_hashable(self):
        params = {Parameter(TypeID.dx), Parameter(TypeID.dx)}
        self.assertEqual(len(params), 1)


class TestStochasticModelSet(unittest.TestCase):
    """Test StochasticModelSet"""

    def setUp(self):
        self.model_set = StochasticModelSet()
        self.model_set.bind(TypeID.dx, WhiteNoiseModel(sigma=10.0))
        self.model_set.bind(TypeID.wetMap, TropoRandomWalkModel(qprime=1e-4))
        self.model_set.bind(TypeID.BL1, PhaseAmbiguityModel(sigma=5.0))
        self.params = [
            Parameter(TypeID.dx, STATION),
            Parameter(TypeID.wetMap, STATION),
            Parameter(TypeID.BL1, STATION, G01),
            Parameter(TypeID.BL1, STATION, G02),
        ]

    def test_bind_rejects_non_models(self):
        with self.assertRaises(TypeError):
            self.model_set.bind(TypeID.dy, object())

    def test_prepare(self):
        self.model_set.prepare(0.0, self.params, epoch_data(0.0, {G01: 1, G02: 1}))
        phi, q = self.model_set.prepare(30.0, self.params, epoch_data(30.0, {G01: 1, G02: 2}))
        np.testing.assert_array_equal(phi, [0.0, 1.0, 1.0, 0.0])
        np.testing.assert_allclose(q, [100.0, 3e-3, 0.0, 25.0])

    def test_unbound_type_is_constant(self):
        phi, q = self.model_set.prepare(0.0, [Parameter(TypeID.cdt, STATION)])
        np.testing.assert_array_equal(phi, [1.0])
        np.testing.assert_array_equal(q, [0.0])

    def test_transition_matrices(self):
        self.model_set.prepare(0.0, self.params)
        Phi, Q = self.model_set.transition_matrices(60.0, self.params)
        self.assertEqual(Phi.shape, (4, 4))
        np.testing.assert_array_equal(np.diag(Phi), [0.0, 1.0, 1.0, 1.0])
        self.assertAlmostEqual(Q[1, 1], 6e-3)
        self.assertEqual(Q[0, 1], 0.0)

    def test_sparse_matrices(self):
        Phi, Q = self.model_set.transition_matrices(0.0, self.params, use_sparse=True)
        self.assertTrue(sparse.issparse(Phi))
        self.assertTrue(sparse.issparse(Q))
        self.assertEqual(Phi.shape, (4, 4))
        self.assertEqual(Q.toarray()[0, 0], 100.0)

    def test_empty_parameters(self):
        phi, q = self.model_set.prepare(0.0, [])
        self.assertEqual(phi.shape, (0,))
        self.assertEqual(q.shape, (0,))


class TestPerStationIonosphere(unittest.TestCase):
    """Ionosphere states of different stations are kept apart"""

    def setUp(self):
        self.model_set = StochasticConfig().build_model_set()
        self.station_a = SourceID('A')
        self.station_b = SourceID('B')
        self.params = [
            Parameter(TypeID.ionoL1, self.station_a, G01),
            Parameter(TypeID.ionoL1, self.station_b, G01),
        ]

    def test_two_stations_same_satellite(self):
        self.model_set.prepare(100.0, self.params)
        phi, q = self.model_set.prepare(130.0, self.params)
        np.testing.assert_array_equal(phi, [1.0, 1.0])
        np.testing.assert_allclose(q, [0.03, 0.03])

    def test_one_model_per_station(self):
        model_a = self.model_set.get_model(TypeID.ionoL1, self.station_a)
        model_b = self.model_set.get_model(TypeID.ionoL1, self.station_b)
        self.assertIsNot(model_a, model_b)
        self.assertIs(self.model_set.get_model(TypeID.ionoL1, self.station_a), model_a)
        self.assertIsInstance(model_a, IonoRandomWalkModel)

    def test_rebind_drops_station_models(self):
        self.model_set.prepare(100.0, self.params)
        old_a = self.model_set.get_model(TypeID.ionoL1, self.station_a)
        self.model_set.bind(TypeID.ionoL1, IonoRandomWalkModel(qprime=2e-3))
        new_a = self.model_set.get_model(TypeID.ionoL1, self.station_a)
        self.assertIsNot(new_a, old_a)
        self.assertEqual(new_a.get_qprime(), 2e-3)

    def test_shared_instance_warns(self):
        model = IonoRandomWalkModel()
        model.prepare(100.0, self.station_a, G01)
        with self.assertLogs('pyrtk.stochastic.atmosphere', level='WARNING'):
            model.prepare(100.0, self.station_b, G01)


if __name__ == '__main__':
    unittest.main()
