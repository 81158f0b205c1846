"""Модуль структурированного логирования.

Предоставляет единый интерфейс для логирования во всем приложении:
- trace_id текущего HTTP запроса в каждой записи
- JSON формат для production structured logging
- Human-readable формат для development

Основное использование:
    >>> from src.shared.logging import setup_logging, get_logger
    >>> setup_logging()  # Вызвать один раз при старте
    >>> logger = get_logger()
    >>> logger.info("Задача создана", task_id=task_id)
"""

from src.shared.logging.config import (
    InterceptHandler,
    configure_third_party_loggers,
    get_logger,
    setup_logging,
)
from src.shared.logging.formatters import (
    console_formatter,
    json_formatter,
    sanitize_sensitive_data,
    serialize_record,
)

__all__ = [
    "InterceptHandler",
    "configure_third_party_loggers",
    "console_formatter",
    "get_logger",
    "json_formatter",
    "sanitize_sensitive_data",
    "serialize_record",
    "setup_logging",
]
