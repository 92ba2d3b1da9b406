"""Tests for src/common/log_config.py"""

import logging
import sys

from src.common.log_config import setup_logging


class TestSetupLogging:
    def teardown_method(self):
        """Reset logger between tests."""
        logger = logging.getLogger("src")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)

    def test_default_level_is_info(self):
        setup_logging()
        logger = logging.getLogger("src")
        assert logger.level == logging.INFO

    def test_verbose_sets_debug(self):
        setup_logging(verbose=True)
        logger = logging.getLogger("src")
        assert logger.level == logging.DEBUG

    def test_quiet_sets_warning(self):
        setup_logging(quiet=True)
        logger = logging.getLogger("src")
        assert logger.level == logging.WARNING

    def test_handler_outputs_to_stderr(self):
        setup_logging()
        logger = logging.getLogger("src")
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert handler.stream is sys.stderr

    def test_log_file_receives_records(self, tmp_path):
        log_file = tmp_path / "logs" / "import-2026-01-01.log"
        setup_logging(log_file=log_file)

        logging.getLogger("src.sync.importer").info("Processing 1/1: UAP-AC-PRO")
        for handler in logging.getLogger("src").handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "[INFO] Processing 1/1: UAP-AC-PRO" in content

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path):
        setup_logging(log_file=tmp_path / "run.log")
        setup_logging(log_file=tmp_path / "run.log")
        assert len(logging.getLogger("src").handlers) == 2
