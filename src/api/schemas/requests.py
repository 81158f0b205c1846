"""Request Schemas для JD Generator API.

Pydantic models для валидации входящих запросов.
Пустое описание вакансии проверяется в orchestrator (400 INVALID_ARGUMENT),
а не здесь: так ответ одинаков для отсутствующего и пустого поля.
"""

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """Запрос на генерацию описания вакансии.

    POST /api/generate
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"jobDescription": "Senior Backend Engineer"},
            ]
        },
    )

    job_description: str | None = Field(
        default=None,
        alias="jobDescription",
        description="Описание вакансии (непустая строка)",
    )


class CountRequest(BaseModel):
    """Запрос на изменение счётчика.

    POST /api/count
    """

    action: str | None = Field(
        default=None,
        description="inc - увеличить, clear - сбросить, иначе без изменений",
        examples=["inc", "clear"],
    )
