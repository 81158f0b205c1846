"""Base exception class for application errors.

Все доменные ошибки наследуют AppException: HTTP статус, машинный код
и сообщение описываются атрибутами класса, а не в обработчиках.
"""

import re
from typing import Any, ClassVar

from loguru import logger
from pydantic import ValidationError

from src.shared.errors.context import get_trace_id
from src.shared.errors.schemas import ErrorDetail, ErrorResponse

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class AppException(Exception):
    """Базовый класс для всех бизнес-ошибок.

    Для наследников без явных атрибутов:
    - code выводится из имени класса (TaskNotFoundError -> TASK_NOT_FOUND)
    - default_message берётся из первой строки docstring

    details проверяются схемой ErrorDetail и попадают в тело ответа.
    """

    status_code: ClassVar[int] = 500
    code: ClassVar[str] = "INTERNAL_ERROR"
    default_message: ClassVar[str] = "Внутренняя ошибка сервера"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | ErrorDetail | None = None,
    ) -> None:
        """Инициализация исключения.

        Args:
            message: Сообщение об ошибке (по умолчанию default_message).
            details: Дополнительные детали (поля ErrorDetail).

        Raises:
            ValueError: details не соответствуют ErrorDetail.

        """
        self.message = message or self.default_message
        self.details = self._validate_details(details)
        super().__init__(self.message)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        if "code" not in cls.__dict__:
            name = cls.__name__.removesuffix("Exception").removesuffix("Error")
            cls.code = _CAMEL_BOUNDARY.sub("_", name).upper()

        if "default_message" not in cls.__dict__ and cls.__doc__:
            cls.default_message = cls.__doc__.strip().splitlines()[0]

    @classmethod
    def _validate_details(cls, details: dict[str, Any] | ErrorDetail | None) -> dict[str, Any]:
        if details is None:
            return {}
        if isinstance(details, ErrorDetail):
            return details.model_dump(exclude_none=True)

        try:
            return ErrorDetail.model_validate(details).model_dump(exclude_none=True)
        except ValidationError as e:
            logger.error("Некорректные details исключения", exception_class=cls.__name__, error=str(e))
            msg = f"Некорректный формат details для {cls.__name__}"
            raise ValueError(msg) from e

    @property
    def is_server_error(self) -> bool:
        """Ошибка на стороне сервиса или его зависимостей (5xx)."""
        return self.status_code >= 500

    def to_log_context(self) -> dict[str, Any]:
        """Поля для структурированного лога."""
        return {"error_code": self.code, "error": self.message, "details": self.details}

    def to_response(self) -> ErrorResponse:
        """Тело ответа ``{"success": false, ...}`` с trace_id запроса.

        Returns:
            ErrorResponse с данными ошибки.

        """
        return ErrorResponse(
            error=self.message,
            code=self.code,
            details=self.details,
            trace_id=get_trace_id(),
        )

    @classmethod
    def openapi_response(cls) -> dict[str, Any]:
        """Описание ответа для ``responses=`` в декораторе роута.

        Returns:
            Словарь с OpenAPI схемой ответа.

        """
        return {
            "model": ErrorResponse,
            "description": cls.default_message,
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": cls.default_message,
                        "code": cls.code,
                        "details": {},
                        "traceId": "a1b2c3d4-e5f6-4789-9012-345678901234",
                    }
                }
            },
        }
