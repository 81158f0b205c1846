"""Fallback Content Source - загрузка документов из blob хранилища.

Два документа:
- default content: контент по умолчанию (нет ключа провайдера / ошибка генерации)
- system prompt: system инструкция для генерации

Ошибки загрузки не фатальны: логируются, а вызывающий получает None.

Example:
    >>> source = ContentSource(http_client)
    >>> prompt = await source.get_system_prompt()  # None при ошибке

"""

import httpx

from config.settings import settings
from src.shared.errors import BlobFetchError
from src.shared.logging import get_logger

logger = get_logger()


class ContentSource:
    """Загрузчик документов из HTTP blob хранилища.

    Attributes:
        client: Общий httpx.AsyncClient
        default_content_url: Адрес документа по умолчанию
        system_prompt_url: Адрес документа с system prompt

    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        default_content_url: str | None = None,
        system_prompt_url: str | None = None,
    ) -> None:
        """Инициализировать ContentSource.

        Args:
            client: HTTP клиент (таймауты настраиваются на клиенте)
            default_content_url: URL документа по умолчанию (defaults из settings)
            system_prompt_url: URL system prompt (defaults из settings)

        """
        self.client = client
        self.default_content_url = default_content_url or settings.default_content_url
        self.system_prompt_url = system_prompt_url or settings.system_prompt_url

    async def fetch(self, url: str) -> str:
        """Загрузить документ как UTF-8 текст.

        Args:
            url: Адрес документа

        Returns:
            Содержимое документа

        Raises:
            BlobFetchError: Сетевая ошибка или не-2xx ответ

        """
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise BlobFetchError(url, str(e) or type(e).__name__) from e

        return response.content.decode("utf-8", errors="replace")

    async def get_default_content(self) -> str | None:
        """Получить контент по умолчанию.

        Returns:
            Текст документа или None если загрузка не удалась

        """
        try:
            return await self.fetch(self.default_content_url)
        except BlobFetchError as e:
            logger.error("Не удалось загрузить контент по умолчанию", error=e.message)
            return None

    async def get_system_prompt(self) -> str | None:
        """Получить system prompt.

        Returns:
            Текст инструкции или None если загрузка не удалась

        """
        try:
            return await self.fetch(self.system_prompt_url)
        except BlobFetchError as e:
            logger.error("Не удалось загрузить system prompt", error=e.message)
            return None


def create_http_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Создать HTTP клиент для blob хранилища.

    Args:
        timeout: Таймаут запроса в секундах (по умолчанию из settings)

    Returns:
        httpx.AsyncClient

    """
    return httpx.AsyncClient(
        timeout=timeout or settings.blob_timeout_seconds,
        follow_redirects=True,
    )
