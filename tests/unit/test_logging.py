"""
Tests for logging setup.
"""

import logging

import pytest
from rich.logging import RichHandler

from llm_web_inspector.config.settings import LoggingSettings
from llm_web_inspector.utils.logging import get_logger, setup_logging, setup_logging_from_settings


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test logging configuration."""
    
    def test_console_handler(self):
        setup_logging(level="WARNING")
        
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h, RichHandler) for h in root.handlers)
    
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "inspector.log"
        setup_logging(level="INFO", log_file=str(log_file))
        
        get_logger("llm_web_inspector.test").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        
        assert "hello file" in log_file.read_text()
    
    def test_noisy_loggers_quieted(self):
        setup_logging(level="DEBUG")
        
        assert logging.getLogger("httpx").level == logging.WARNING
    
    def test_verbose_forces_debug(self):
        setup_logging_from_settings(LoggingSettings(level="ERROR"), verbose=True)
        
        assert logging.getLogger().level == logging.DEBUG
