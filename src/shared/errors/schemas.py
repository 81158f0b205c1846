"""Error schemas.

Pydantic схемы для ошибок.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Детальная информация об ошибке."""

    field: str | None = Field(default=None, description="Поле с ошибкой")
    message: str | None = Field(default=None, description="Сообщение об ошибке")
    code: str | None = Field(default=None, description="Код ошибки")
    context: dict[str, Any] | None = Field(default=None, description="Дополнительный контекст")
    task_id: str | None = Field(default=None, description="ID задачи")


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой.

    Совместим с форматом ответов API: ``{"success": false, "error": ...}``.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Задача с ID 'task_1700000000000_abc123xyz' не найдена",
                "code": "TASK_NOT_FOUND",
                "details": {"task_id": "task_1700000000000_abc123xyz"},
                "traceId": "a1b2c3d4-e5f6-4789-9012-345678901234",
            }
        },
    )

    success: bool = Field(default=False, description="Всегда false для ошибок")
    error: str = Field(..., description="Человекочитаемое сообщение")
    code: str = Field(..., description="Код ошибки")
    details: dict[str, Any] = Field(default_factory=dict, description="Дополнительные детали")
    trace_id: str = Field(default="", alias="traceId", description="ID трассировки для отладки")
