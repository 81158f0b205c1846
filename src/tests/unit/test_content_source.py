"""Unit тесты для services/content_source.py."""

import httpx
import pytest

from src.services.content_source import ContentSource
from src.shared.errors import BlobFetchError

DEFAULT_URL = "http://blobs.test/defaultJson.txt"
PROMPT_URL = "http://blobs.test/systemPrompt.txt"


def make_source(handler) -> ContentSource:
    """ContentSource поверх httpx.MockTransport."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ContentSource(client, default_content_url=DEFAULT_URL, system_prompt_url=PROMPT_URL)


class TestContentSource:
    """Тесты для ContentSource."""

    @pytest.mark.asyncio
    async def test_get_default_content(self) -> None:
        """Тест загрузки документа по умолчанию."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == DEFAULT_URL
            return httpx.Response(200, content="DEFAULT".encode())

        source = make_source(handler)

        assert await source.get_default_content() == "DEFAULT"

    @pytest.mark.asyncio
    async def test_get_system_prompt_utf8(self) -> None:
        """Тест загрузки system prompt в UTF-8."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content="你是招聘专家".encode())

        source = make_source(handler)

        assert await source.get_system_prompt() == "你是招聘专家"

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self) -> None:
        """Тест: 404 -> None (мягкая ошибка)."""
        source = make_source(lambda request: httpx.Response(404))

        assert await source.get_default_content() is None
        assert await source.get_system_prompt() is None

    @pytest.mark.asyncio
    async def test_network_error_returns_none(self) -> None:
        """Тест: сетевая ошибка -> None."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        source = make_source(handler)

        assert await source.get_default_content() is None

    @pytest.mark.asyncio
    async def test_fetch_raises_blob_fetch_error(self) -> None:
        """Тест: fetch поднимает BlobFetchError с адресом документа."""
        source = make_source(lambda request: httpx.Response(500))

        with pytest.raises(BlobFetchError) as exc_info:
            await source.fetch(DEFAULT_URL)

        assert exc_info.value.status_code == 502
        assert exc_info.value.details["context"]["url"] == DEFAULT_URL
