"""
Tests for logging setup.
"""

import logging

import pytest

from aidl2.log import LOGGER_NAME, get_logger, setup_logging


class TestLogging:
    """Test cases for setup_logging and get_logger"""

    def test_get_logger_is_below_package_logger(self):
        """Test logger naming"""
        assert get_logger("aidl2.pipeline.generator").name == "aidl2.pipeline.generator"
        assert get_logger("tools").name == "aidl2.tools"
        assert get_logger(LOGGER_NAME).name == LOGGER_NAME

    def test_level(self):
        """Test an explicit level"""
        setup_logging("warning")
        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.WARNING
        assert not logger.propagate

    def test_level_from_environment(self, monkeypatch):
        """Test the environment fallback"""
        monkeypatch.setenv("AIDL2_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        """Test an invalid level name"""
        monkeypatch.delenv("AIDL2_LOG_LEVEL", raising=False)
        setup_logging("chatty")
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        """Test that handlers don't accumulate"""
        setup_logging("INFO", str(tmp_path / "first.log"))
        setup_logging("INFO")
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1

    def test_log_file(self, tmp_path):
        """Test that messages reach the log file"""
        log_file = tmp_path / "aidl2.log"
        setup_logging("INFO", str(log_file))
        get_logger("tests").info("hello")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        assert "aidl2.tests - INFO - hello" in log_file.read_text()


if __name__ == "__main__":
    pytest.main([__file__])
