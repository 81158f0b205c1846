"""Response Schemas для JD Generator API.

Pydantic models для API responses.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.core.enums import HealthStatus
from src.services.task.models import Task


class GenerateResponse(BaseModel):
    """Ответ на создание задачи генерации.

    Используется в:
    - POST /api/generate
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True)
    task_id: str = Field(alias="taskId", description="ID созданной задачи")


class TaskStatusResponse(BaseModel):
    """Ответ со статусом задачи.

    Используется в:
    - GET /api/task/{taskId}
    """

    success: bool = Field(default=True)
    data: Task = Field(description="Документ задачи")


class CountResponse(BaseModel):
    """Текущее значение счётчика."""

    code: int = Field(default=0, description="0 = успех")
    data: int = Field(description="Значение счётчика")


class HealthCheckResponse(BaseModel):
    """Ответ health check."""

    status: HealthStatus = Field(description="Общий статус")
    redis: bool = Field(description="Redis доступен")
    active_generations: int = Field(default=0, description="Выполняющиеся фоновые генерации")
