"""Error handling decorators.

Декораторы для обработки ошибок.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from loguru import logger

from src.shared.errors.base import AppException
from src.shared.errors.domain_errors import StorageError

P = ParamSpec("P")
T = TypeVar("T")


def storage_errors(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Декоратор для операций с хранилищем документов.

    Перехватывает технические исключения (Redis, сеть) и преобразует их
    в StorageError. Доменные исключения пробрасываются как есть.

    Args:
        func: Асинхронная функция для декорирования.

    Returns:
        Обернутая функция.

    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except AppException:
            raise
        except Exception as e:
            logger.error(
                "Ошибка хранилища",
                operation=func.__name__,
                exception_type=type(e).__name__,
                exception_message=str(e),
            )
            details: dict[str, Any] = {"context": {"operation": func.__name__, "error": str(e)}}
            raise StorageError(
                message=f"Ошибка хранилища ({func.__name__}): {e}",
                details=details,
            ) from e

    return wrapper
