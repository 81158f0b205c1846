"""Модели задачи генерации.

Task хранится как документ с camelCase полями (``jobDescription``,
``currentContent``, ...), в Python используются snake_case атрибуты.
"""

import secrets
import time
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.constants import TASK_ID_ALPHABET, TASK_ID_PREFIX, TASK_ID_SUFFIX_LENGTH
from src.core.enums import TaskStatus


def generate_task_id() -> str:
    """Сгенерировать уникальный ID задачи.

    Формат: ``task_{epoch_ms}_{9 символов base36}``.

    Returns:
        Новый task_id

    """
    suffix = "".join(secrets.choice(TASK_ID_ALPHABET) for _ in range(TASK_ID_SUFFIX_LENGTH))
    return f"{TASK_ID_PREFIX}{int(time.time() * 1000)}_{suffix}"


class Task(BaseModel):
    """Документ задачи генерации."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    id: str = Field(alias="_id", description="ID задачи")
    status: TaskStatus = Field(description="Статус задачи")
    job_description: str = Field(description="Описание вакансии (вход генерации)")
    current_content: str = Field(default="", description="Накопленный сгенерированный текст")
    total_tokens: int = Field(default=0, ge=0, description="Длина current_content в символах")
    elapsed_time: int | None = Field(default=None, ge=0, description="Секунд с начала генерации")
    error: str | None = Field(default=None, description="Описание ошибки (только для failed)")
    create_time: datetime | None = Field(default=None, description="Время создания (сервер)")
    update_time: datetime | None = Field(default=None, description="Время обновления (сервер)")

    @classmethod
    def processing(cls, task_id: str, job_description: str) -> "Task":
        """Новая задача со streaming генерацией."""
        return cls(id=task_id, status=TaskStatus.PROCESSING, job_description=job_description)

    @classmethod
    def completed_with_fallback(cls, task_id: str, job_description: str, content: str) -> "Task":
        """Новая задача, сразу завершённая контентом по умолчанию."""
        return cls(
            id=task_id,
            status=TaskStatus.COMPLETED,
            job_description=job_description,
            current_content=content,
            total_tokens=len(content),
        )


class TaskUpdate(BaseModel):
    """Частичное обновление документа задачи.

    Поля со значением None не записываются.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: TaskStatus | None = None
    current_content: str | None = None
    total_tokens: int | None = Field(default=None, ge=0)
    elapsed_time: int | None = Field(default=None, ge=0)
    error: str | None = None

    @classmethod
    def snapshot(cls, content: str, elapsed_time: int) -> "TaskUpdate":
        """Промежуточный снимок прогресса."""
        return cls(current_content=content, total_tokens=len(content), elapsed_time=elapsed_time)

    @classmethod
    def completed(cls, content: str, elapsed_time: int) -> "TaskUpdate":
        """Успешное завершение генерации."""
        return cls(
            status=TaskStatus.COMPLETED,
            current_content=content,
            total_tokens=len(content),
            elapsed_time=elapsed_time,
        )

    @classmethod
    def failed(cls, error: str, fallback_content: str | None, elapsed_time: int | None = None) -> "TaskUpdate":
        """Провал генерации с подстановкой контента по умолчанию.

        Если контент по умолчанию недоступен, content не перезаписывается.
        """
        return cls(
            status=TaskStatus.FAILED,
            error=error,
            current_content=fallback_content,
            total_tokens=len(fallback_content) if fallback_content is not None else None,
            elapsed_time=elapsed_time,
        )
