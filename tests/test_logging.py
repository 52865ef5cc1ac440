"""Tests for logging setup."""

import logging
from pathlib import Path

from codenarrator.utils.logging import setup_logging


class TestSetupLogging:
    """Tests for the setup_logging function."""

    def test_returns_logger(self) -> None:
        logger = setup_logging()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "codenarrator"

    def test_default_level_is_info(self) -> None:
        logger = setup_logging()
        assert logger.level == logging.INFO

    def test_custom_level(self) -> None:
        logger = setup_logging(level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        logger = setup_logging(level="LOUD")
        assert logger.level == logging.INFO

    def test_console_handler_present(self) -> None:
        logger = setup_logging()
        handler_types = [type(h) for h in logger.handlers]
        assert logging.StreamHandler in handler_types

    def test_module_loggers_inherit(self) -> None:
        setup_logging(level="DEBUG")
        child = logging.getLogger("codenarrator.generators.batch_gen")
        assert child.getEffectiveLevel() == logging.DEBUG

    def test_no_file_handler_by_default(self) -> None:
        logger = setup_logging()
        handler_types = [type(h) for h in logger.handlers]
        assert logging.FileHandler not in handler_types

    def test_clears_existing_handlers(self) -> None:
        logger = setup_logging()
        initial_count = len(logger.handlers)
        logger = setup_logging()
        assert len(logger.handlers) == initial_count

    def test_file_handler_writes(self, tmp_path: Path) -> None:
        log_file = tmp_path / "test.log"
        logger = setup_logging(level="INFO", log_file=str(log_file))
        logger.info("test message")
        for handler in logger.handlers:
            handler.flush()
        assert "test message" in log_file.read_text()
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
