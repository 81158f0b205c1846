"""Domain errors.

Доменные исключения приложения.
"""

from src.shared.errors.base import AppException


class InvalidArgumentError(AppException):
    """Некорректные входные данные."""

    status_code = 400
    code = "INVALID_ARGUMENT"

    def __init__(self, field: str, message: str | None = None) -> None:
        """Инициализация исключения.

        Args:
            field: Поле запроса с ошибкой.
            message: Описание ошибки.

        """
        super().__init__(
            message=message or f"Отсутствует обязательный параметр '{field}'",
            details={"field": field},
        )


class NotFoundError(AppException):
    """Ресурс не найден."""

    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppException):
    """Конфликт данных."""

    status_code = 409
    code = "CONFLICT"


class StorageError(AppException):
    """Ошибка хранилища документов."""

    status_code = 500


class UpstreamError(AppException):
    """Ошибка внешнего сервиса."""

    status_code = 502
    code = "UPSTREAM_ERROR"


class TaskNotFoundError(NotFoundError):
    """Задача не найдена."""

    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str) -> None:
        """Инициализация исключения.

        Args:
            task_id: Идентификатор задачи.

        """
        super().__init__(
            message=f"Задача с ID '{task_id}' не найдена",
            details={"task_id": task_id},
        )


class TaskAlreadyExistsError(ConflictError):
    """Задача уже существует."""

    code = "TASK_ALREADY_EXISTS"

    def __init__(self, task_id: str) -> None:
        """Инициализация исключения.

        Args:
            task_id: Идентификатор задачи.

        """
        super().__init__(
            message=f"Задача с ID '{task_id}' уже существует",
            details={"task_id": task_id},
        )


class StreamFailureError(UpstreamError):
    """Ошибка streaming генерации."""

    code = "STREAM_FAILURE"


class StreamTimeoutError(StreamFailureError):
    """Превышено время streaming генерации."""

    code = "STREAM_TIMEOUT"

    def __init__(self, timeout_seconds: float) -> None:
        """Инициализация исключения.

        Args:
            timeout_seconds: Лимит длительности генерации.

        """
        super().__init__(
            message=f"Генерация не завершилась за {timeout_seconds:g} с",
            details={"context": {"timeout_seconds": timeout_seconds}},
        )


class BlobFetchError(UpstreamError):
    """Не удалось загрузить документ из хранилища."""

    code = "BLOB_FETCH_FAILED"

    def __init__(self, url: str, reason: str) -> None:
        """Инициализация исключения.

        Args:
            url: Адрес документа.
            reason: Причина ошибки.

        """
        super().__init__(
            message=f"Не удалось загрузить документ '{url}': {reason}",
            details={"context": {"url": url, "reason": reason}},
        )
