"""Logging configuration.

Настройка логирования через Loguru.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from config.settings import settings
from src.shared.errors.context import peek_trace_id
from src.shared.logging.formatters import console_formatter, json_formatter

if TYPE_CHECKING:
    from loguru import Logger


class InterceptHandler(logging.Handler):
    """Обработчик для перехвата логов стандартной библиотеки logging.

    Библиотеки (uvicorn, httpx, openai, redis) используют стандартный logging,
    этот handler перенаправляет их записи в Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Перехват и отправка логов в Loguru.

        Args:
            record: Запись лога из стандартного logging.

        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level,
            record.getMessage(),
        )


def trace_id_patcher(record: dict) -> None:
    """Добавить trace_id текущего запроса в запись лога.

    Args:
        record: Запись лога.

    """
    record["extra"].setdefault("trace_id", peek_trace_id() or "no-trace")


def setup_logging() -> None:
    """Настроить логирование приложения.

    - development: human-readable в stdout с цветами
    - staging/production: JSON в stdout
    - log_file: дополнительный JSON файл с ротацией
    """
    logger.remove()
    logger.configure(patcher=trace_id_patcher)

    if settings.app_env == "development":
        logger.add(
            sys.stdout,
            format=console_formatter,
            level=settings.log_level,
            colorize=True,
            backtrace=True,
            diagnose=settings.debug,
        )
    else:
        logger.add(
            sys.stdout,
            format=json_formatter,
            level=settings.log_level,
            colorize=False,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.log_file,
            format=json_formatter,
            level=settings.log_level,
            rotation="50 MB",
            retention="7 days",
            compression="zip",
            backtrace=True,
            diagnose=False,
        )

    configure_third_party_loggers()

    logger.info("Логгер настроен", log_level=settings.log_level, env=settings.app_env)


def configure_third_party_loggers() -> None:
    """Настроить логирование сторонних библиотек."""
    loggers_to_intercept = [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "fastapi",
        "httpx",
        "openai",
        "redis",
    ]

    for logger_name in loggers_to_intercept:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    # Шумные библиотеки
    noisy_level = logging.WARNING if settings.app_env == "production" else logging.INFO
    logging.getLogger("uvicorn.access").setLevel(noisy_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> "Logger":
    """Получить настроенный logger instance.

    Args:
        name: Имя логгера (обычно __name__ модуля)

    Returns:
        Настроенный Loguru logger
    """
    if name:
        return logger.bind(name=name)
    return logger
