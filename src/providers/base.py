"""Base types и Protocol для Content Providers.

Использует typing.Protocol для duck typing вместо ABC.
"""

from collections.abc import AsyncIterator, Callable
from typing import Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Сообщение chat completion контекста."""

    role: Literal["system", "user", "assistant"] = Field(description="Роль автора сообщения")
    content: str = Field(description="Текст сообщения")


class StreamChunk(BaseModel):
    """Фрагмент streaming генерации."""

    text: str = Field(default="", description="Текст фрагмента")
    finish_reason: Literal["stop", "length", "error"] | None = Field(
        default=None,
        description="Причина завершения (только в последнем фрагменте)",
    )


@runtime_checkable
class ContentProvider(Protocol):
    """Protocol для streaming провайдеров генерации.

    Все providers должны реализовать эти методы.
    """

    def generate_stream(self, messages: list[ChatMessage]) -> AsyncIterator[StreamChunk]:
        """Сгенерировать текст (streaming).

        Args:
            messages: Контекст генерации (system + user)

        Yields:
            Фрагменты в порядке генерации

        Raises:
            StreamFailureError: Ошибка запуска или чтения stream

        """
        ...

    async def cleanup(self) -> None:
        """Очистить ресурсы (close connections)."""
        ...


# Фабрика провайдера по API ключу (ключ читается из хранилища на каждый запрос)
ProviderFactory = Callable[[str], ContentProvider]
