"""
Unit Tests for Logging Configuration

Run with:
    python -m pytest tests/test_logging_config.py -v
"""

import logging
import os
import tempfile
import unittest
from unittest import mock

from orbit_catalog.config import PipelineConfig
from orbit_catalog.logging_config import PACKAGE_LOGGER, configure_logging, get_logger


class TestLoggingConfig(unittest.TestCase):
    """Test handler installation and logger naming."""

    def setUp(self):
        root = logging.getLogger()
        self.saved_handlers = root.handlers[:]
        self.saved_level = root.level

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers:
            if handler not in self.saved_handlers:
                handler.close()
        root.handlers[:] = self.saved_handlers
        root.setLevel(self.saved_level)

    def test_package_modules_keep_their_names(self):
        self.assertEqual(get_logger("orbit_catalog.pipeline").name, "orbit_catalog.pipeline")
        self.assertEqual(get_logger(PACKAGE_LOGGER).name, PACKAGE_LOGGER)

    def test_outside_names_nested_under_package(self):
        self.assertEqual(get_logger("__main__").name, "orbit_catalog.__main__")
        self.assertEqual(get_logger("orbit_catalogue").name, "orbit_catalog.orbit_catalogue")

    def test_default_level_from_environment_setting(self):
        with mock.patch.object(PipelineConfig, "LOG_LEVEL", "WARNING"):
            configure_logging()
        self.assertEqual(logging.getLogger().level, logging.WARNING)

    def test_reconfigure_replaces_handlers(self):
        configure_logging(level=logging.INFO)
        configure_logging(level=logging.DEBUG)

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)

    def test_log_file_receives_package_records(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "catalog.log")
            configure_logging(level=logging.INFO, log_file=path)

            get_logger("orbit_catalog.resolver").warning("Checksum mismatch in TLE for satellite 25544")
            for handler in logging.getLogger().handlers:
                handler.flush()
                if isinstance(handler, logging.FileHandler):
                    handler.close()

            with open(path) as f:
                content = f.read()

        self.assertIn("orbit_catalog.resolver - WARNING - Checksum mismatch", content)


if __name__ == "__main__":
    unittest.main()
