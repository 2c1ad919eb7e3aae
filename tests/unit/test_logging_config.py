"""
Unit tests for logging configuration.
"""
import logging
from pathlib import Path
from typing import Iterator

import pytest

from molopt.logging_config import setup_logging


@pytest.fixture
def molopt_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("molopt")
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_console_handler(self, molopt_logger: logging.Logger) -> None:
        setup_logging(logging.DEBUG)
        assert molopt_logger.level == logging.DEBUG
        assert len(molopt_logger.handlers) == 1

    def test_repeated_setup_does_not_duplicate(self, molopt_logger: logging.Logger) -> None:
        setup_logging()
        setup_logging()
        assert len(molopt_logger.handlers) == 1

    def test_log_file(self, molopt_logger: logging.Logger, tmp_path: Path) -> None:
        log_file = tmp_path / "molopt.log"
        setup_logging(logging.INFO, log_file=str(log_file))
        logging.getLogger("molopt.optimizer").info("hello from the optimizer")
        for handler in molopt_logger.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "molopt.optimizer - INFO - hello from the optimizer" in text
