#!/usr/bin/env python3
"""Tests for console logging setup."""

import logging
import unittest

from card_wiki.logging_utils import CLI_FORMAT, setup_cli_logging


class TestLoggingSetup(unittest.TestCase):
    """Test setup_cli_logging."""

    def setUp(self):
        """Remember root logger state so each test can restore it."""
        root_logger = logging.getLogger()
        self.addCleanup(root_logger.setLevel, root_logger.level)
        pil_logger = logging.getLogger("PIL")
        self.addCleanup(pil_logger.setLevel, pil_logger.level)

    def attach(self, verbose):
        handler = setup_cli_logging(verbose=verbose)
        self.addCleanup(logging.getLogger().removeHandler, handler)
        return handler

    def test_default_level_is_info(self):
        handler = self.attach(verbose=False)

        self.assertEqual(handler.level, logging.INFO)
        self.assertEqual(handler.formatter._fmt, CLI_FORMAT)
        self.assertIn(handler, logging.getLogger().handlers)

    def test_verbose_shows_debug(self):
        handler = self.attach(verbose=True)

        self.assertEqual(handler.level, logging.DEBUG)

    def test_pil_is_capped_at_info(self):
        self.attach(verbose=True)

        self.assertEqual(logging.getLogger("PIL").level, logging.INFO)


if __name__ == "__main__":
    unittest.main()
