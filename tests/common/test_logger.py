# tests/common/test_logger.py
"""
Unit тесты для модуля логирования (mapbox_distance/common/logger.py).
"""

import json
import logging
import sys
from unittest.mock import Mock, patch

import pytest

from mapbox_distance.common.constants import TypeMsg
from mapbox_distance.common.logger import (
    ColoredFormatter,
    JsonFormatter,
    _find_caller,
    _loggers,
    get_logger,
    log_debug,
    log_error,
    log_info,
    log_warning,
    setup_logging,
)


def _record(level: int = logging.INFO, msg: str = "Геокодирование адреса", **attrs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="mapbox_distance",
        level=level,
        pathname="client.py",
        lineno=180,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Тесты для JsonFormatter."""

    def test_fields_are_nested_object(self) -> None:
        """Поля запроса попадают в отдельный объект fields."""
        record = _record(
            caller="mapbox_distance.core.distance.client.get_address_coordinates():180",
            fields={"address": "1 Infinite Loop", "status_code": 404},
        )

        result = json.loads(JsonFormatter().format(record))

        assert result["level"] == "INFO"
        assert result["message"] == "Геокодирование адреса"
        assert result["caller"].endswith("get_address_coordinates():180")
        assert result["fields"] == {"address": "1 Infinite Loop", "status_code": 404}
        assert result["timestamp"].endswith("Z")

    def test_without_fields(self) -> None:
        """Запись без полей: ключа fields нет, caller берётся из записи."""
        result = json.loads(JsonFormatter().format(_record()))

        assert "fields" not in result
        assert result["caller"].endswith(":180")

    def test_exception(self) -> None:
        """Трейсбек сериализуется строкой."""
        try:
            raise ValueError("broken body")
        except ValueError:
            exc_info = sys.exc_info()

        result = json.loads(JsonFormatter().format(_record(logging.ERROR, exc_info=exc_info)))

        assert "ValueError: broken body" in result["exception"]


class TestColoredFormatter:
    """Тесты для ColoredFormatter."""

    def test_caller_and_fields_in_line(self) -> None:
        """Место вызова в скобках, поля в виде key=value после сообщения."""
        record = _record(
            logging.WARNING,
            "Матрица расстояний вернула ошибку",
            caller="client.compute_distance_miles():257",
            fields={"origin": "1,2", "status_code": 500},
        )

        result = ColoredFormatter().format(record)

        assert "[WARNING]" in result
        assert "[client.compute_distance_miles():257]" in result
        assert result.endswith("Матрица расстояний вернула ошибку origin=1,2 status_code=500")

    def test_plain_record(self) -> None:
        """Без caller и полей остаётся только уровень и сообщение."""
        result = ColoredFormatter().format(_record())

        assert "\033[32m[INFO]" in result
        assert result.endswith("Геокодирование адреса")


class TestGetLogger:
    """Тесты для get_logger."""

    def setup_method(self) -> None:
        """Очистка кэша логгеров перед каждым тестом."""
        _loggers.clear()
        for name in ("test_logger", "test_with_settings", "test_no_settings"):
            logging.getLogger(name).handlers.clear()

    def teardown_method(self) -> None:
        _loggers.clear()

    def test_single_handler_and_cache(self) -> None:
        """Один хендлер на имя, повторный вызов возвращает тот же объект."""
        logger = get_logger("test_logger")

        assert get_logger("test_logger") is logger
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    @patch("mapbox_distance.config.get_settings")
    def test_level_and_format_from_settings(self, mock_get_settings: Mock) -> None:
        """Уровень и формат берутся из настроек."""
        mock_get_settings.return_value.logging.LOG_LEVEL = "WARNING"
        mock_get_settings.return_value.logging.LOG_FORMAT = "json"

        logger = get_logger("test_with_settings")

        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_defaults_without_settings(self) -> None:
        """Без модуля настроек: INFO и цветной вывод."""
        with patch.dict("sys.modules", {"mapbox_distance.config": None}):
            logger = get_logger("test_no_settings")

        assert logger.level == logging.INFO
        assert isinstance(logger.handlers[0].formatter, ColoredFormatter)


class TestSetupLogging:
    """Тесты для setup_logging."""

    def test_quiets_httpx(self) -> None:
        """httpx и httpcore поднимаются до WARNING: их INFO содержит URL с токеном."""
        with patch("mapbox_distance.common.logger._LOGGING_INITIALIZED", False):
            setup_logging()

        assert "mapbox_distance" in _loggers
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestLogFunctions:
    """Тесты для асинхронных функций логирования."""

    def test_find_caller_skips_logger_module(self) -> None:
        """Место вызова указывает на код за пределами логгера."""
        assert "test_find_caller_skips_logger_module()" in _find_caller()

    @pytest.mark.asyncio
    async def test_log_debug_passes_fields_and_caller(self) -> None:
        """log_debug передаёт поля и реальное место вызова."""
        with patch.object(logging.Logger, "log") as mock_log, \
                patch.object(logging.Logger, "isEnabledFor", return_value=True):
            await log_debug("Геокодирование адреса", extra={"address": "Main St"})

        level, message = mock_log.call_args[0]
        record_extra = mock_log.call_args[1]["extra"]
        assert level == logging.DEBUG
        assert message == "Геокодирование адреса"
        assert record_extra["fields"] == {"address": "Main St"}
        assert "test_log_debug_passes_fields_and_caller()" in record_extra["caller"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "func,level",
        [(log_warning, logging.WARNING), (log_error, logging.ERROR)],
    )
    async def test_level_helpers(self, func, level: int) -> None:
        """Каждый помощник пишет своим уровнем."""
        with patch.object(logging.Logger, "log") as mock_log, \
                patch.object(logging.Logger, "isEnabledFor", return_value=True):
            await func("message")

        assert mock_log.call_args[0][0] == level
        assert mock_log.call_args[1]["extra"]["fields"] == {}

    @pytest.mark.asyncio
    async def test_log_info_type_msg(self) -> None:
        """type_msg задаёт уровень записи."""
        with patch.object(logging.Logger, "log") as mock_log, \
                patch.object(logging.Logger, "isEnabledFor", return_value=True):
            await log_info("message", type_msg=TypeMsg.CRITICAL)

        assert mock_log.call_args[0][0] == logging.CRITICAL

    @pytest.mark.asyncio
    async def test_disabled_level_is_skipped(self) -> None:
        """Отключённый уровень не доходит до логгера."""
        with patch.object(logging.Logger, "log") as mock_log, \
                patch.object(logging.Logger, "isEnabledFor", return_value=False):
            await log_debug("message")

        mock_log.assert_not_called()
