"""Enums для JD Generator.

Централизованное хранилище всех enum'ов проекта.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Статус задачи генерации."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Финальный статус (дальнейшие изменения запрещены)."""
        return self is not TaskStatus.PROCESSING


class CountAction(str, Enum):
    """Действие над счётчиком."""

    INC = "inc"  # Увеличить на 1
    CLEAR = "clear"  # Сбросить в 0


class HealthStatus(str, Enum):
    """Статус здоровья сервиса."""

    OK = "ok"  # Все компоненты работают
    DEGRADED = "degraded"  # Redis недоступен
