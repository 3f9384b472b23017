"""Tests for logging setup."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from podgrab.config.logging import LOGGER_NAME, setup_logging


def console_handler(logger: logging.Logger) -> RichHandler:
    return next(h for h in logger.handlers if isinstance(h, RichHandler))


class TestSetupLogging:
    def test_quiet_by_default(self) -> None:
        logger = setup_logging()

        assert logger.name == LOGGER_NAME
        assert console_handler(logger).level == logging.WARNING
        assert logger.propagate is False

    def test_verbose_shows_info(self) -> None:
        logger = setup_logging(verbose=True)

        assert console_handler(logger).level == logging.INFO

    def test_handlers_replaced_between_runs(self) -> None:
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_console_output(self) -> None:
        console = Console(record=True, width=200)
        logger = setup_logging(verbose=False, console=console)

        logger.info("hidden line")
        logger.warning("File already exists: Ep 1")

        text = console.export_text()
        assert "hidden line" not in text
        assert "File already exists: Ep 1" in text

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging(log_file=log_file, console=Console(record=True))

        logger.info("Feed Title: My Show")
        for handler in logger.handlers:
            handler.flush()

        contents = log_file.read_text()
        assert "INFO - Feed Title: My Show" in contents
        setup_logging()  # release the file handle
