#!/usr/bin/env python3
"""
Unit Tests for Logging Configuration
Tests for docgate/core/logging.py
"""

import logging

import pytest
from loguru import logger as loguru_logger

from docgate.core.config import Settings
from docgate.core.logging import InterceptHandler, get_logger, setup_logging


@pytest.fixture
def captured():
    """Collect loguru output in memory"""
    messages = []
    handler_id = loguru_logger.add(
        messages.append,
        format="{level} {extra[name]} {message}",
        level="DEBUG",
        filter=lambda record: "name" in record["extra"],
    )
    yield messages
    loguru_logger.remove(handler_id)


class TestSetupLogging:

    def test_writes_log_file(self, tmp_path):
        log_file = tmp_path / "docgate.log"
        setup_logging(Settings(LOG_FILE=str(log_file)))

        get_logger("test").info("file sink check")

        assert log_file.exists()

    def test_standard_logging_is_intercepted(self):
        setup_logging(Settings())

        root = logging.getLogger()
        assert any(isinstance(h, InterceptHandler) for h in root.handlers)
        assert logging.getLogger("sqlalchemy").level == logging.WARNING


class TestGetLogger:

    def test_binds_module_name(self, captured):
        get_logger("docgate.services.access").info("Permission granted")

        assert len(captured) == 1
        assert "INFO docgate.services.access Permission granted" in captured[0]

    def test_levels(self, captured):
        logger = get_logger("test.levels")
        logger.debug("debug message")
        logger.warning("warning message")
        logger.error("error message")

        levels = [message.split(" ", 1)[0] for message in captured]
        assert levels == ["DEBUG", "WARNING", "ERROR"]
