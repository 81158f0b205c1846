"""JD Generator - Core module.

Ядро приложения: константы, перечисления, зависимости.
"""

from src.core.constants import API_PREFIX
from src.core.enums import CountAction, HealthStatus, TaskStatus

__all__ = [
    "API_PREFIX",
    "CountAction",
    "HealthStatus",
    "TaskStatus",
]
