"""OpenAI-Compatible Provider для JD Generator.

Streaming provider для OpenAI-совместимых Chat Completions API
(по умолчанию Volcengine Ark с моделью doubao).
"""

from collections.abc import AsyncIterator

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletionChunk

from config.settings import settings
from src.providers.base import ChatMessage, StreamChunk
from src.shared.errors import StreamFailureError
from src.shared.logging import get_logger

logger = get_logger()


class OpenAICompatibleProvider:
    """Provider для OpenAI-совместимых API.

    Работает с любым сервером, реализующим OpenAI Chat Completions API.
    Создаётся на один запрос генерации: ключ читается из хранилища.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str | None = None,
        base_url: str | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Инициализировать OpenAI-Compatible Provider.

        Args:
            api_key: API ключ провайдера
            model_name: Название модели (если None, используется из settings)
            base_url: Base URL API (если None, используется из settings)
            client: Готовый AsyncOpenAI клиент (для тестов)

        """
        if not api_key:
            msg = "API ключ провайдера не задан"
            raise ValueError(msg)

        self.model_name = model_name or settings.provider_model
        self.base_url = base_url or settings.provider_base_url

        self.client = client or AsyncOpenAI(
            base_url=self.base_url,
            api_key=api_key,
            timeout=settings.http_timeout_seconds,
            max_retries=settings.http_max_retries,
        )

        logger.debug(
            "OpenAICompatibleProvider инициализирован",
            model_name=self.model_name,
            base_url=self.base_url,
        )

    async def generate_stream(self, messages: list[ChatMessage]) -> AsyncIterator[StreamChunk]:
        """Сгенерировать текст (streaming).

        Args:
            messages: Контекст генерации

        Yields:
            Непустые фрагменты текста, последним идёт фрагмент с finish_reason

        Raises:
            StreamFailureError: Ошибка запуска или чтения stream
        """
        logger.debug(
            "Начало streaming генерации",
            model=self.model_name,
            messages=len(messages),
        )

        try:
            stream = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[message.model_dump() for message in messages],  # type: ignore[misc]
                stream=True,
            )

            async for chunk in stream:
                if not isinstance(chunk, ChatCompletionChunk):
                    continue

                choice = chunk.choices[0] if chunk.choices else None
                if choice is None:
                    continue

                text = (choice.delta.content or "") if choice.delta else ""
                finish_reason = choice.finish_reason

                if finish_reason:
                    logger.debug(
                        "Streaming завершён",
                        model=self.model_name,
                        finish_reason=finish_reason,
                    )
                    yield StreamChunk(
                        text=text,
                        finish_reason=finish_reason if finish_reason in ("stop", "length") else "error",
                    )
                elif text:
                    yield StreamChunk(text=text)

        except StreamFailureError:
            raise
        except Exception as e:
            logger.error(
                "Ошибка streaming генерации",
                model=self.model_name,
                error=str(e),
            )
            raise StreamFailureError(
                message=f"Ошибка streaming: {e}",
                details={"context": {"model": self.model_name, "error_type": type(e).__name__}},
            ) from e

    async def cleanup(self) -> None:
        """Закрыть HTTP соединения клиента."""
        await self.client.close()


def create_openai_compatible_provider(api_key: str) -> OpenAICompatibleProvider:
    """Фабрика провайдера для TaskOrchestrator.

    Args:
        api_key: API ключ из коллекции keys

    Returns:
        OpenAICompatibleProvider instance
    """
    return OpenAICompatibleProvider(api_key=api_key)
