# mapbox_distance/common/logger.py
"""
Логирование клиента Mapbox.

Каждая запись несёт место вызова (caller) и структурированные поля
запроса (fields): адрес, координаты маршрута, код ответа и т.п.
JsonFormatter кладёт поля в отдельный объект, ColoredFormatter
дописывает их к сообщению в виде key=value.
"""

from __future__ import annotations

import inspect
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from mapbox_distance.common.constants import TypeMsg


DEFAULT_LOGGER_NAME = "mapbox_distance"

_LEVELS = {
    TypeMsg.DEBUG: logging.DEBUG,
    TypeMsg.INFO: logging.INFO,
    TypeMsg.WARNING: logging.WARNING,
    TypeMsg.ERROR: logging.ERROR,
    TypeMsg.CRITICAL: logging.CRITICAL,
}

_LOGGING_INITIALIZED: bool = False


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields = getattr(record, "fields", None)
    return fields if isinstance(fields, dict) else {}


# =============================================================================
# ФОРМАТТЕРЫ
# =============================================================================

class JsonFormatter(logging.Formatter):
    """Одна запись - один JSON объект в строке."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "caller": getattr(record, "caller", f"{record.module}.{record.funcName}():{record.lineno}"),
        }

        fields = _record_fields(record)
        if fields:
            payload["fields"] = fields

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Цветной вывод для консоли."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    GRAY = "\033[90m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.GRAY)
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        parts = [f"{timestamp} {color}[{record.levelname}]{self.RESET}"]
        caller = getattr(record, "caller", None)
        if caller:
            parts.append(f"{self.GRAY}[{caller}]{self.RESET}")
        parts.append(record.getMessage())

        fields = _record_fields(record)
        if fields:
            parts.append(" ".join(f"{key}={value}" for key, value in fields.items()))

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# =============================================================================
# ЛОГГЕР
# =============================================================================

_loggers: dict[str, logging.Logger] = {}


def setup_logging() -> None:
    """
    Настраивает логгер пакета. Повторные вызовы ничего не делают.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED:
        return
    _LOGGING_INITIALIZED = True

    get_logger()

    # httpx пишет каждый запрос в INFO вместе с URL (а в URL есть токен)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Возвращает логгер с уровнем и форматом из настроек.
    Хендлер добавляется один раз на имя.
    """
    if name in _loggers:
        return _loggers[name]

    # Ленивый импорт: config импортирует common
    try:
        from mapbox_distance.config import get_settings
        logging_settings = get_settings().logging
        log_level = logging_settings.LOG_LEVEL
        log_format = logging_settings.LOG_FORMAT
    except Exception:
        log_level, log_format = "INFO", "colored"

    # Защита от MagicMock в тестах
    if not isinstance(log_level, str):
        log_level = "INFO"
    if not isinstance(log_format, str):
        log_format = "colored"

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter() if log_format == "json" else ColoredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[name] = logger
    return logger


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ ЛОГИРОВАНИЯ
# =============================================================================

def _find_caller() -> str:
    """Первый кадр стека за пределами этого модуля в виде module.func():line."""
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_globals.get("__name__") == __name__:
            frame = frame.f_back
        if frame is None:
            return "unknown"
        module = frame.f_globals.get("__name__", "unknown")
        return f"{module}.{frame.f_code.co_name}():{frame.f_lineno}"
    finally:
        del frame


def _emit(level: int, message: str, extra: dict[str, Any] | None) -> None:
    logger = get_logger()
    if not logger.isEnabledFor(level):
        return
    logger.log(
        level,
        message,
        extra={"caller": _find_caller(), "fields": dict(extra or {})},
    )


async def log_info(
    message: str,
    *,
    type_msg: TypeMsg = TypeMsg.INFO,
    extra: dict[str, Any] | None = None,
) -> None:
    """
    Пишет сообщение с уровнем type_msg.

    Args:
        message: Текст сообщения (без URL: в URL есть токен)
        type_msg: Уровень
        extra: Структурированные поля (address, origin, status_code, ...)
    """
    _emit(_LEVELS.get(type_msg, logging.INFO), message, extra)


async def log_debug(message: str, extra: dict[str, Any] | None = None) -> None:
    _emit(logging.DEBUG, message, extra)


async def log_warning(message: str, extra: dict[str, Any] | None = None) -> None:
    _emit(logging.WARNING, message, extra)


async def log_error(message: str, extra: dict[str, Any] | None = None) -> None:
    _emit(logging.ERROR, message, extra)
