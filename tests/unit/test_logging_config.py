"""Unit tests for application log handler setup."""

import logging

import pytest

from docfill.core.config import Settings
from docfill.core.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test runner left it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_log_files_written_to_configured_directory(self, tmp_path, restore_root_logger):
        """Test that the log directory comes from settings."""
        log_dir = tmp_path / "nested" / "logs"
        settings = Settings(upload_dir=tmp_path / "uploads", log_dir=log_dir)

        setup_logging(settings)
        logging.getLogger("docfill.test").error("disk full")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "disk full" in (log_dir / "info.log").read_text(encoding="utf-8")
        assert "disk full" in (log_dir / "error.log").read_text(encoding="utf-8")

    def test_info_not_written_to_error_log(self, tmp_path, restore_root_logger):
        """Test the level split between the two files."""
        settings = Settings(upload_dir=tmp_path / "uploads", log_dir=tmp_path / "logs")

        setup_logging(settings)
        logging.getLogger("docfill.test").info("session opened")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "session opened" in (tmp_path / "logs" / "info.log").read_text(encoding="utf-8")
        assert "session opened" not in (tmp_path / "logs" / "error.log").read_text(
            encoding="utf-8"
        )

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path, restore_root_logger):
        """Test that calling setup twice leaves one set of handlers."""
        settings = Settings(upload_dir=tmp_path / "uploads", log_dir=tmp_path / "logs")

        setup_logging(settings)
        setup_logging(settings)

        assert len(restore_root_logger.handlers) == 3

    def test_debug_level(self, tmp_path, restore_root_logger):
        """Test that a DEBUG log level lowers the root level."""
        settings = Settings(
            upload_dir=tmp_path / "uploads", log_dir=tmp_path / "logs", log_level="debug"
        )

        root = setup_logging(settings)

        assert root.level == logging.DEBUG
