import logging
import os
import tempfile
import unittest

# Ensure local imports work when running this file directly.
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
if THIS_DIR not in os.sys.path:
    os.sys.path.insert(0, THIS_DIR)

from utils.logger import LOGGER_NAME, apply_logging_config, log_info, setup_logging


class TestApplyLoggingConfig(unittest.TestCase):
    def tearDown(self):
        setup_logging("INFO")

    def test_level_change_takes_effect_without_restart(self):
        apply_logging_config({"log_level": "INFO", "log_file": ""})
        self.assertEqual(logging.getLogger(LOGGER_NAME).level, logging.INFO)

        apply_logging_config({"log_level": "ERROR", "log_file": ""})
        self.assertEqual(logging.getLogger(LOGGER_NAME).level, logging.ERROR)
        self.assertEqual(logging.getLogger("soundcloud_api").level, logging.ERROR)

    def test_handlers_are_replaced_not_stacked(self):
        apply_logging_config({"log_level": "INFO"})
        apply_logging_config({"log_level": "DEBUG"})
        self.assertEqual(len(logging.getLogger(LOGGER_NAME).handlers), 1)

    def test_log_file_is_written(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "app.log")
            apply_logging_config({"log_level": "INFO", "log_file": path})
            log_info("hello from the log file")
            setup_logging("INFO")  # closes the file handler

            with open(path, "r", encoding="utf-8") as f:
                self.assertIn("hello from the log file", f.read())


if __name__ == "__main__":
    unittest.main(verbosity=2)
