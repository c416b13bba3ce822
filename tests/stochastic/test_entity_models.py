#!/usr/bin/env python3
"""Test suite for random walk models with per-entity state"""

import unittest

from pyrtk.core.identifiers import SatID, SourceID
from pyrtk.core.time import BEGINNING_OF_TIME, GNSSTime
from pyrtk.stochastic.atmosphere import (IonoRandomWalkModel,
                                         TropoGradRandomWalkModel,
                                         TropoRandomWalkModel)
from pyrtk.stochastic.bias import (IFCBRandomWalkModel, ISBRandomWalkModel,
                                   RecBiasRandomWalkModel,
                                   SatBiasRandomWalkModel)
from pyrtk.stochastic.entity import EntityRandomWalkModel, EntityScope

STATION_A = SourceID('STATION_A')
STATION_B = SourceID('STATION_B')
G01 = SatID('G', 1)
G02 = SatID('G', 2)
R03 = SatID('R', 3)


class TestEntityRandomWalk(unittest.TestCase):
    """Behaviour shared by every entity-keyed random walk"""

    MODELS = [
        TropoRandomWalkModel,
        TropoGradRandomWalkModel,
        RecBiasRandomWalkModel,
        SatBiasRandomWalkModel,
        ISBRandomWalkModel,
        IFCBRandomWalkModel,
    ]

    def test_variance_is_qprime_times_elapsed(self):
        for cls in self.MODELS:
            with self.subTest(model=cls.__name__):
                model = cls(qprime=2.0)
                model.prepare(100.0, STATION_A, G01)
                model.prepare(130.0, STATION_A, G01)
                self.assertEqual(model.get_phi(), 1.0)
                self.assertAlmostEqual(model.get_q(), 60.0)

    def test_backward_epoch_gives_zero(self):
        for cls in self.MODELS:
            with self.subTest(model=cls.__name__):
                model = cls(qprime=2.0)
                model.prepare(130.0, STATION_A, G01)
                model.prepare(100.0, STATION_A, G01)
                self.assertEqual(model.get_q(), 0.0)
                self.assertEqual(model.get_phi(), 1.0)

    def test_first_epoch_is_nearly_unconstrained(self):
        model = RecBiasRandomWalkModel(qprime=1.0)
        model.prepare(0.0, STATION_A, None)
        self.assertGreater(model.get_q(), 3.8e9)
        state = model.get_state(STATION_A)
        self.assertEqual(state.previous_time, 0.0)

    def test_default_qprimes(self):
        self.assertEqual(TropoRandomWalkModel().get_qprime(), 5.0e-8)
        self.assertEqual(TropoGradRandomWalkModel().get_qprime(), 5.0e-10)
        self.assertEqual(IonoRandomWalkModel().get_qprime(), 1.0e-3)
        self.assertEqual(RecBiasRandomWalkModel().get_qprime(), 1.0e-4)
        self.assertEqual(SatBiasRandomWalkModel().get_qprime(), 3.0e-6)
        self.assertEqual(ISBRandomWalkModel().get_qprime(), 9.0e-4)
        self.assertEqual(IFCBRandomWalkModel().get_qprime(), 1.0e-4)

    def test_scopes(self):
        self.assertIs(TropoRandomWalkModel.scope, EntityScope.STATION)
        self.assertIs(IonoRandomWalkModel.scope, EntityScope.SATELLITE)
        self.assertIs(SatBiasRandomWalkModel.scope, EntityScope.SATELLITE)
        self.assertIs(IFCBRandomWalkModel.scope, EntityScope.STATION_SATELLITE)
        self.assertTrue(issubclass(ISBRandomWalkModel, EntityRandomWalkModel))

    def test_invalid_qprime(self):
        with self.assertRaises(ValueError):
            TropoRandomWalkModel(qprime=-1e-8)
        model = TropoRandomWalkModel()
        with self.assertRaises(ValueError):
            model.set_qprime(float('nan'))


class TestTropoRandomWalk(unittest.TestCase):
    """Zenith wet delay, one state per station"""

    def test_one_hour(self):
        model = TropoRandomWalkModel()
        model.prepare(0.0, STATION_A, None)
        model.prepare(3600.0, STATION_A, None)
        self.assertAlmostEqual(model.get_q(), 1.8e-4)

    def test_stations_are_independent(self):
        model = TropoRandomWalkModel(qprime=1.0)
        model.prepare(0.0, STATION_A, None)
        model.prepare(0.0, STATION_B, None)
        model.prepare(30.0, STATION_A, None)
        self.assertAlmostEqual(model.get_q(), 30.0)
        model.prepare(10.0, STATION_B, None)
        self.assertAlmostEqual(model.get_q(), 10.0)
        model.prepare(60.0, STATION_A, None)
        self.assertAlmostEqual(model.get_q(), 30.0)
        self.assertEqual(len(model), 2)
        self.assertIn(STATION_A, model)

    def test_satellite_is_ignored(self):
        model = TropoRandomWalkModel(qprime=1.0)
        model.prepare(0.0, STATION_A, G01)
        model.prepare(30.0, STATION_A, G02)
        self.assertAlmostEqual(model.get_q(), 30.0)
        self.assertEqual(model.keys(), [STATION_A])

    def test_glonass_and_utc_epochs(self):
        for sys in ['GLO', 'UTC']:
            with self.subTest(time_sys=sys):
                model = TropoRandomWalkModel()
                t0 = GNSSTime(2200, 0.0, sys)
                model.prepare(t0, STATION_A, None)
                self.assertGreater(model.get_q(), 0.0)
                model.prepare(t0 + 3600.0, STATION_A, None)
                self.assertAlmostEqual(model.get_q(), 1.8e-4)

    def test_gnss_time_epochs(self):
        model = TropoRandomWalkModel()
        t0 = GNSSTime(2200, 0.0)
        model.prepare(t0, STATION_A, None)
        model.prepare(t0 + 3600.0, STATION_A, None)
        self.assertAlmostEqual(model.get_q(), 1.8e-4)


class TestSatelliteKeyedModels(unittest.TestCase):
    """Satellite bias shares state across stations"""

    def test_shared_across_stations(self):
        model = SatBiasRandomWalkModel(qprime=1.0)
        model.prepare(0.0, STATION_A, G01)
        model.prepare(20.0, STATION_B, G01)
        self.assertAlmostEqual(model.get_q(), 20.0)
        model.prepare(5.0, STATION_B, G02)
        model.prepare(25.0, STATION_A, G02)
        self.assertAlmostEqual(model.get_q(), 20.0)
        self.assertEqual(sorted(model.keys()), [G01, G02])


class TestIFCBRandomWalk(unittest.TestCase):
    """Inter-frequency bias, one state per station/satellite pair"""

    def test_pairs_are_independent(self):
        model = IFCBRandomWalkModel(qprime=1.0)
        model.prepare(0.0, STATION_A, R03)
        model.prepare(10.0, STATION_B, R03)
        model.prepare(10.0, STATION_A, G01)
        self.assertEqual(len(model), 3)
        model.prepare(40.0, STATION_A, R03)
        self.assertAlmostEqual(model.get_q(), 40.0)
        model.prepare(40.0, STATION_B, R03)
        self.assertAlmostEqual(model.get_q(), 30.0)
        self.assertIn((STATION_A, G01), model)


class TestQprimeChanges(unittest.TestCase):
    """Model-wide and per-entity spectral densities"""

    def test_set_qprime_not_retroactive(self):
        model = ISBRandomWalkModel(qprime=1.0)
        model.prepare(0.0, STATION_A, None)
        model.prepare(10.0, STATION_A, None)
        model.set_qprime(3.0)
        self.assertAlmostEqual(model.get_q(), 10.0)
        model.prepare(20.0, STATION_A, None)
        self.assertAlmostEqual(model.get_q(), 30.0)

    def test_entity_qprime(self):
        model = TropoRandomWalkModel(qprime=1.0)
        model.set_entity_qprime(STATION_B, 4.0)
        for station in [STATION_A, STATION_B]:
            model.prepare(0.0, station, None)
        model.prepare(10.0, STATION_A, None)
        self.assertAlmostEqual(model.get_q(), 10.0)
        model.prepare(10.0, STATION_B, None)
        self.assertAlmostEqual(model.get_q(), 40.0)
        self.assertEqual(model.get_qprime(STATION_B), 4.0)
        self.assertEqual(model.get_qprime(STATION_A), 1.0)

    def test_entity_qprime_without_station(self):
        model = RecBiasRandomWalkModel(qprime=1.0)
        model.set_entity_qprime(None, 4.0)
        model.prepare(0.0, None, None)
        model.prepare(10.0, None, None)
        self.assertAlmostEqual(model.get_q(), 40.0)
        self.assertEqual(model.get_qprime(None), 4.0)
        self.assertEqual(model.get_qprime(), 1.0)

    def test_entity_qprime_survives_model_change(self):
        model = TropoRandomWalkModel(qprime=1.0)
        model.set_entity_qprime(STATION_B, 4.0)
        model.set_qprime(2.0)
        self.assertEqual(model.get_qprime(STATION_B), 4.0)
        model.set_entity_qprime(STATION_B, None)
        self.assertEqual(model.get_qprime(STATION_B), 2.0)

    def test_explicit_times(self):
        model = RecBiasRandomWalkModel(qprime=1.0)
        model.set_previous_time(STATION_A, 100.0)
        model.prepare(150.0, STATION_A, None)
        self.assertAlmostEqual(model.get_q(), 50.0)
        model.set_current_time(STATION_B, 5.0)
        state = model.get_state(STATION_B)
        self.assertEqual(state.current_time, 5.0)
        self.assertIs(state.previous_time, BEGINNING_OF_TIME)
        self.assertIsNone(model.get_state(SourceID('UNKNOWN')))


if __name__ == '__main__':
    unittest.main()
