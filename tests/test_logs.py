"""Tests for session log-file configuration."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from kiloview.logs import LOGGER_NAME, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_records_go_to_log_file_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "kiloview.log"
            logger = configure_logging("INFO", log_path)
            logging.getLogger("kiloview.document").info("loaded %d rows", 3)
            logging.getLogger("kiloview.document").debug("hidden")
            for handler in logger.handlers:
                handler.flush()
                handler.close()

            text = log_path.read_text(encoding="utf-8")

        self.assertFalse(logger.propagate)
        self.assertIn("kiloview.document - INFO - loaded 3 rows", text)
        self.assertNotIn("hidden", text)

    def test_default_level_is_warning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(None, Path(tmp) / "kiloview.log")
            level = logger.level
            for handler in logger.handlers:
                handler.close()

        self.assertEqual(level, logging.WARNING)

    def test_reconfiguring_replaces_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging("DEBUG", Path(tmp) / "a.log")
            logger = configure_logging("DEBUG", Path(tmp) / "b.log")
            handlers = list(logger.handlers)
            for handler in handlers:
                handler.close()

        self.assertEqual(len(handlers), 1)
        self.assertTrue(handlers[0].baseFilename.endswith("b.log"))

    def test_log_directory_is_created_on_first_record(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_dir = Path(tmp) / "state" / "logs"
            logger = configure_logging("WARNING", log_dir / "kiloview.log")
            created_before_record = log_dir.exists()
            logging.getLogger("kiloview.cli").warning("first record")
            created_after_record = log_dir.exists()
            for handler in logger.handlers:
                handler.close()

        self.assertFalse(created_before_record)
        self.assertTrue(created_after_record)

    def test_unwritable_log_location_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "not-a-directory"
            blocker.write_text("", encoding="utf-8")
            logger = configure_logging("WARNING", blocker / "logs" / "kiloview.log")

            logging.getLogger("kiloview.cli").warning("dropped")
            for handler in logger.handlers:
                handler.close()

            self.assertEqual(blocker.read_text(encoding="utf-8"), "")


if __name__ == "__main__":
    unittest.main()
