"""Форматтеры логов для Loguru.

Предоставляет форматтеры для структурированного логирования:
- JSON формат для production (structured logging с trace_id)
- Human-readable формат для development
- Маскирование чувствительных данных (credentials)
"""

import re
from typing import Any

import orjson

# Ключи extra, значения которых никогда не попадают в логи
REDACTED_KEYS = frozenset({"password", "token", "secret", "api_key", "access_token", "authorization"})

# Паттерны для sanitization чувствительных данных
SENSITIVE_PATTERNS = [
    (re.compile(r'"(password|pwd)"\s*:\s*"[^"]*"', re.IGNORECASE), r'"\1": "***"'),
    (re.compile(r'"(api_key|apikey|secret|token|auth)"\s*:\s*"[^"]*"', re.IGNORECASE), r'"\1": "***"'),
    (re.compile(r"(password|pwd|api_key|apikey|secret|token|auth)=\S+", re.IGNORECASE), r"\1=***"),
    (re.compile(r"Bearer\s+[A-Za-z0-9._\-]+"), "Bearer ***"),
]


def sanitize_sensitive_data(text: str) -> str:
    """Удалить чувствительные данные из строки.

    Заменяет пароли, API ключи, токены и другие credentials на '***'.

    Args:
        text: Текст для sanitization

    Returns:
        Текст с замаскированными чувствительными данными
    """
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def serialize_record(record: dict[str, Any]) -> str:
    """Сериализовать запись лога в JSON строку.

    Поля: timestamp, level, logger, function, line, message, trace_id,
    все extra-поля (из logger.bind() или logger.info(..., key=value)) и exception.

    Args:
        record: Loguru record dictionary

    Returns:
        JSON строка без перевода строки
    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        "message": record["message"],
    }

    for key, value in record["extra"].items():
        if key == "serialized":
            continue
        log_entry[key] = "***REDACTED***" if key in REDACTED_KEYS else value

    if record["exception"] is not None:
        exception_info = record["exception"]
        log_entry["exception"] = {
            "type": exception_info.type.__name__ if exception_info.type else None,
            "value": str(exception_info.value) if exception_info.value else None,
        }

    json_str = orjson.dumps(log_entry, default=str).decode("utf-8")
    return sanitize_sensitive_data(json_str)


def json_formatter(record: dict[str, Any]) -> str:
    """JSON форматтер для production structured logging.

    Loguru интерпретирует возвращаемое значение как шаблон, поэтому готовый
    JSON кладётся в extra и подставляется через ``{extra[serialized]}``.

    Args:
        record: Loguru record dictionary

    Returns:
        Шаблон форматтера для Loguru
    """
    record["extra"]["serialized"] = serialize_record(record)
    return "{extra[serialized]}\n"


def console_formatter(record: dict[str, Any]) -> str:
    """Human-readable форматтер для development.

    Формат:
    2024-01-06 12:34:56.789 | INFO     | module:function:42 | [trace_id] - Message

    Args:
        record: Loguru record dictionary

    Returns:
        Шаблон форматтера для Loguru
    """
    base_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    )

    trace_id = record["extra"].get("trace_id")
    if trace_id:
        base_format += f" | <yellow>[{trace_id[:8]}]</yellow>"

    base_format += " - <level>{message}</level>\n"

    if record["exception"] is not None:
        base_format += "{exception}\n"

    return base_format
