#!/usr/bin/env python3
import os
import threading
import unittest
from unittest.mock import patch

from fakes import RecordingLogger

from flux_pushover.cli import main, run_app
from flux_pushover.config import load_from_env
from flux_pushover.exceptions import ConfigError, HealthCheckError


def env_loader(values):
    return load_from_env(lambda key: values.get(key, ""))


class TestRunApp(unittest.TestCase):
    def test_missing_credentials(self):
        with self.assertRaisesRegex(ConfigError, "PUSHOVER_USER_KEY is required"):
            run_app(env_loader({}), RecordingLogger())

    def test_missing_token(self):
        with self.assertRaisesRegex(ConfigError, "PUSHOVER_API_TOKEN is required"):
            run_app(env_loader({"PUSHOVER_USER_KEY": "u"}), RecordingLogger())

    def test_starts_and_stops(self):
        logger = RecordingLogger()
        stop = threading.Event()
        stop.set()
        run_app(
            env_loader({"PUSHOVER_USER_KEY": "u", "PUSHOVER_API_TOKEN": "test_api_token", "PORT": "0"}),
            logger,
            stop=stop,
        )
        names = logger.names()
        self.assertIn('server_started', names)
        self.assertIn('server_exited', names)


class TestMain(unittest.TestCase):
    @patch('flux_pushover.cli.health_check')
    def test_health_flag_ok(self, mock_health):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(main(['-health']), 0)
        mock_health.assert_called_once_with("http://localhost:8080/health")

    @patch('flux_pushover.cli.health_check')
    def test_health_flag_uses_port(self, mock_health):
        with patch.dict(os.environ, {"PORT": "9999"}, clear=True):
            main(['-health'])
        mock_health.assert_called_once_with("http://localhost:9999/health")

    @patch('flux_pushover.cli.health_check', side_effect=HealthCheckError("health check returned status 503"))
    def test_health_flag_failure(self, mock_health):
        self.assertEqual(main(['-health']), 1)

    @patch('flux_pushover.cli.setup_logging')
    def test_exits_non_zero_without_credentials(self, mock_setup):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(main([]), 1)
        mock_setup.assert_called_once_with(debug=False, fmt="json")

    @patch('flux_pushover.cli.setup_logging')
    def test_exits_non_zero_with_invalid_port(self, mock_setup):
        env = {"PUSHOVER_USER_KEY": "u", "PUSHOVER_API_TOKEN": "t", "PORT": "abc"}
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(main([]), 1)

    @patch('flux_pushover.cli.run_app')
    @patch('flux_pushover.cli.setup_logging')
    def test_debug_mode_and_format(self, mock_setup, mock_run):
        with patch.dict(os.environ, {"DEBUG_MODE": "true", "LOG_FORMAT": "console"}, clear=True):
            self.assertEqual(main([]), 0)
        mock_setup.assert_called_once_with(debug=True, fmt="console")
        mock_run.assert_called_once()


if __name__ == '__main__':
    unittest.main()
