import logging

import pytest

from app.components.logger.logger import DEFAULT_LOG_FORMAT, Logger


def test_logger_uses_configured_level() -> None:
    logger = Logger(log_level="warning").get_logger("LoggerTestLevel")

    assert logger.level == logging.WARNING


def test_logger_defaults() -> None:
    component = Logger()

    assert component.log_format == DEFAULT_LOG_FORMAT
    assert component.log_level == logging.INFO


def test_handler_is_added_once() -> None:
    component = Logger(log_level="INFO")

    first = component.get_logger("LoggerTestHandlers")
    second = component.get_logger("LoggerTestHandlers")

    assert first is second
    assert first.handlers.count(component.handler) == 1


def test_invalid_level_raises() -> None:
    with pytest.raises(ValueError):
        Logger(log_level="LOUD")
