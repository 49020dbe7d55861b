"""
Tests for the colored console formatter and logger helpers.
"""

import logging
import tempfile
import unittest
from pathlib import Path

from colorama import Fore, Style

from treekit.utils.logger import DEFAULT_LOG_FORMAT, ColoredFormatter, set_log_level, setup_logger


def _record(level, msg):
    return logging.LogRecord('test', level, __file__, 1, msg, None, None)


class TestColoredFormatter(unittest.TestCase):

    def test_plain_info_is_unchanged(self):
        formatter = ColoredFormatter()
        self.assertEqual(formatter.format(_record(logging.INFO, "hello")), "hello")

    def test_plain_debug_prefix(self):
        formatter = ColoredFormatter(use_colors=False)
        self.assertEqual(formatter.format(_record(logging.DEBUG, "detail")), "DEBUG: detail")

    def test_warning_is_colored(self):
        formatter = ColoredFormatter()
        self.assertEqual(
            formatter.format(_record(logging.WARNING, "careful")),
            f"{Fore.YELLOW}careful{Style.RESET_ALL}"
        )

    def test_no_colors(self):
        formatter = ColoredFormatter(use_colors=False)
        self.assertEqual(formatter.format(_record(logging.ERROR, "broken")), "broken")

    def test_format_string(self):
        formatter = ColoredFormatter('%(levelname)s:%(message)s', use_colors=False)
        self.assertEqual(formatter.format(_record(logging.ERROR, "broken")), "ERROR:broken")


class TestSetupLogger(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        logger = logging.getLogger('treekit.test_setup')
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        self.temp_dir.cleanup()

    def test_file_output(self):
        log_file = Path(self.temp_dir.name) / "nested" / "run.log"
        logger = setup_logger('treekit.test_setup', logging.DEBUG, log_file=log_file, use_colors=False)

        logger.info("written to file")
        for handler in logger.handlers:
            handler.flush()

        self.assertEqual(len(logger.handlers), 2)
        self.assertIn("written to file", log_file.read_text(encoding='utf-8'))

    def test_setup_replaces_handlers(self):
        setup_logger('treekit.test_setup')
        logger = setup_logger('treekit.test_setup')
        self.assertEqual(len(logger.handlers), 1)

    def test_plain_console_keeps_formatted_file(self):
        log_file = Path(self.temp_dir.name) / "run.log"
        logger = setup_logger('treekit.test_setup', log_file=log_file, log_format=None, use_colors=False)

        console, file_handler = logger.handlers
        record = _record(logging.WARNING, "careful")
        self.assertEqual(console.formatter.format(record), "careful")
        self.assertEqual(file_handler.formatter._fmt, DEFAULT_LOG_FORMAT)

    def test_set_log_level_by_name(self):
        logger = setup_logger('treekit.test_setup', logging.INFO)
        set_log_level('treekit.test_setup', 'warning')
        self.assertEqual(logger.level, logging.WARNING)
        self.assertTrue(all(h.level == logging.WARNING for h in logger.handlers))


if __name__ == '__main__':
    unittest.main()
