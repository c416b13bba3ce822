#!/usr/bin/env python3
"""Test suite for logging configuration"""

import logging
import os
import shutil
import tempfile
import unittest

from pyrtk.logger import (ColoredFormatter, LogContext, LoggerConfig, LogLevel,
                          get_logger, setup_logger)


class TestLogLevel(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(LogLevel.parse('debug'), logging.DEBUG)
        self.assertEqual(LogLevel.parse('TRACE'), 5)
        self.assertEqual(LogLevel.parse(logging.WARNING), logging.WARNING)
        with self.assertRaises(ValueError):
            LogLevel.parse('verbose')

    def test_trace_level_registered(self):
        self.assertEqual(logging.getLevelName(5), 'TRACE')
        self.assertTrue(hasattr(logging.getLogger('pyrtk.test'), 'trace'))


class TestSetupLogger(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        logger = logging.getLogger('pyrtk.test_setup')
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
        shutil.rmtree(self.test_dir)

    def test_console_and_file(self):
        log_file = os.path.join(self.test_dir, 'rtk.log')
        logger = setup_logger('pyrtk.test_setup', 'DEBUG', log_file=log_file)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 2)
        self.assertIsInstance(logger.handlers[0].formatter, ColoredFormatter)

        logger.debug('arc change')
        for handler in logger.handlers:
            handler.flush()
        with open(log_file) as f:
            self.assertIn('arc change', f.read())

    def test_repeated_setup_replaces_handlers(self):
        setup_logger('pyrtk.test_setup', 'INFO')
        logger = setup_logger('pyrtk.test_setup', 'INFO')
        self.assertEqual(len(logger.handlers), 1)

    def test_get_logger(self):
        self.assertIs(get_logger('pyrtk.test_setup'), logging.getLogger('pyrtk.test_setup'))


class TestColoredFormatter(unittest.TestCase):

    def test_record_not_modified(self):
        record = logging.LogRecord('pyrtk', logging.WARNING, __file__, 1, 'slip', None, None)
        text = ColoredFormatter('%(levelname)s %(message)s').format(record)
        self.assertIn('\033[33m', text)
        self.assertEqual(record.levelname, 'WARNING')


class TestLogContext(unittest.TestCase):

    def test_restores_level(self):
        logger = logging.getLogger('pyrtk.test_context')
        logger.setLevel(logging.INFO)
        with LogContext(logger, 'TRACE') as ctx_logger:
            self.assertEqual(ctx_logger.level, 5)
        self.assertEqual(logger.level, logging.INFO)


class TestLoggerConfig(unittest.TestCase):

    def test_configure_from_dict(self):
        config = LoggerConfig()
        config.configure_from_dict({
            'default_level': 'WARNING',
            'console': False,
            'module_levels': {'pyrtk.stochastic.entity': 'TRACE'},
        })
        self.assertEqual(config.default_level, 'WARNING')
        self.assertFalse(config.console)
        self.assertEqual(config.get_level_for_module('pyrtk.stochastic.entity'), 'TRACE')
        self.assertEqual(config.get_level_for_module('pyrtk.io'), 'WARNING')

    def test_module_outside_package_warns(self):
        config = LoggerConfig()
        with self.assertLogs('pyrtk.logger', level='WARNING'):
            config.set_module_level('numpy', 'DEBUG')
        self.assertEqual(config.module_levels, {'numpy': 'DEBUG'})

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            LoggerConfig().set_module_level('pyrtk.io', 'loud')


if __name__ == '__main__':
    unittest.main()
