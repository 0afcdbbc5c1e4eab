#!/usr/bin/env python3
import json
import logging
import unittest

import structlog

from flux_pushover.logging import get_logger, setup_logging


class TestSetupLogging(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._handlers = root.handlers[:]
        self._level = root.level

    def tearDown(self):
        root = logging.getLogger()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)
        structlog.reset_defaults()

    def test_default_level_and_json_renderer(self):
        setup_logging()
        root = logging.getLogger()
        self.assertEqual(root.level, logging.INFO)
        self.assertEqual(len(root.handlers), 1)
        formatter = root.handlers[0].formatter
        self.assertIsInstance(formatter, structlog.stdlib.ProcessorFormatter)
        self.assertIsInstance(formatter.processors[-1], structlog.processors.JSONRenderer)

    def test_debug_mode(self):
        setup_logging(debug=True, fmt="console")
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertIsInstance(root.handlers[0].formatter.processors[-1], structlog.dev.ConsoleRenderer)

    def test_stdlib_records_get_level_and_timestamp(self):
        setup_logging()
        formatter = logging.getLogger().handlers[0].formatter
        record = logging.LogRecord('werkzeug', logging.INFO, __file__, 1, 'GET /health 200', None, None)
        event = json.loads(formatter.format(record))
        self.assertEqual(event["event"], 'GET /health 200')
        self.assertEqual(event["level"], 'info')
        self.assertIn("timestamp", event, "logs do werkzeug também precisam de timestamp")

    def test_logger_satisfies_port(self):
        setup_logging()
        logger = get_logger()
        self.assertTrue(callable(logger.info))
        self.assertTrue(callable(logger.error))


if __name__ == '__main__':
    unittest.main()
