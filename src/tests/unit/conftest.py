"""Pytest configuration для unit тестов."""

import asyncio
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.providers.base import ChatMessage, StreamChunk
from src.services.task.models import Task, TaskUpdate
from src.services.task.task_orchestrator import TaskOrchestrator
from src.services.task.task_state_manager import TaskStateManager
from src.shared.errors import StorageError, TaskAlreadyExistsError, TaskNotFoundError


@pytest.fixture
def mock_redis() -> MagicMock:
    """Mock Redis client для тестирования."""
    redis = MagicMock()
    redis.hset = AsyncMock()
    redis.eval = AsyncMock(return_value=1)
    redis.hget = AsyncMock(return_value=None)
    redis.hgetall = AsyncMock(return_value={})
    redis.exists = AsyncMock(return_value=1)
    redis.time = AsyncMock(return_value=(1700000000, 250000))
    redis.get = AsyncMock(return_value=None)
    redis.incr = AsyncMock(return_value=1)
    redis.delete = AsyncMock()
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    return redis


class InMemoryTaskStore:
    """TaskStore в памяти с историей записей."""

    def __init__(self, api_key: str | None = "test-key") -> None:
        self.api_key = api_key
        self.tasks: dict[str, Task] = {}
        self.inserts: list[Task] = []
        self.updates: list[tuple[str, TaskUpdate]] = []
        self.fail_updates = 0
        self.fail_matching: set[str] = set()

    async def get_api_key(self) -> str | None:
        return self.api_key

    async def create_task(self, task: Task) -> Task:
        if task.id in self.tasks:
            raise TaskAlreadyExistsError(task.id)
        now = datetime.now(UTC)
        stored = task.model_copy(update={"create_time": now, "update_time": now})
        self.tasks[task.id] = stored
        self.inserts.append(stored)
        return stored

    async def update_task(self, task_id: str, update: TaskUpdate) -> None:
        if self.fail_updates > 0:
            self.fail_updates -= 1
            raise StorageError("Redis недоступен")
        if update.status is not None and update.status.value in self.fail_matching:
            raise StorageError("Redis недоступен")
        if task_id not in self.tasks:
            raise TaskNotFoundError(task_id)

        changes = update.model_dump(exclude_none=True)
        changes["update_time"] = datetime.now(UTC)
        self.tasks[task_id] = self.tasks[task_id].model_copy(update=changes)
        self.updates.append((task_id, update))

    async def get_task(self, task_id: str) -> Task:
        if task_id not in self.tasks:
            raise TaskNotFoundError(task_id)
        return self.tasks[task_id]

    def snapshots(self, task_id: str) -> list[TaskUpdate]:
        """Промежуточные записи (без статуса)."""
        return [u for tid, u in self.updates if tid == task_id and u.status is None]


class FakeContentSource:
    """ContentSource с заданными документами (None = загрузка не удалась)."""

    def __init__(self, default_content: str | None = "DEFAULT", system_prompt: str | None = "SYSTEM") -> None:
        self.default_content = default_content
        self.system_prompt = system_prompt
        self.default_requests = 0

    async def get_default_content(self) -> str | None:
        self.default_requests += 1
        return self.default_content

    async def get_system_prompt(self) -> str | None:
        return self.system_prompt


class FakeProvider:
    """Streaming провайдер со сценарием фрагментов."""

    def __init__(
        self,
        fragments: list[str],
        interval: float = 0.0,
        error: Exception | None = None,
        fail_after: int | None = None,
    ) -> None:
        self.fragments = fragments
        self.interval = interval
        self.error = error
        self.fail_after = fail_after
        self.received: list[ChatMessage] = []
        self.cleaned_up = False

    async def generate_stream(self, messages: list[ChatMessage]) -> AsyncIterator[StreamChunk]:
        self.received = messages
        if self.error is not None and self.fail_after is None:
            raise self.error

        for index, fragment in enumerate(self.fragments):
            if self.error is not None and index == self.fail_after:
                raise self.error
            if self.interval:
                await asyncio.sleep(self.interval)
            yield StreamChunk(text=fragment)

        yield StreamChunk(finish_reason="stop")

    async def cleanup(self) -> None:
        self.cleaned_up = True


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    """TaskStore в памяти с настроенным ключом."""
    return InMemoryTaskStore()


@pytest.fixture
def content_source() -> FakeContentSource:
    """ContentSource с документом "DEFAULT"."""
    return FakeContentSource()


@pytest.fixture
def make_orchestrator(task_store: InMemoryTaskStore, content_source: FakeContentSource):
    """Фабрика TaskOrchestrator с заданным провайдером."""

    def factory(
        provider: FakeProvider,
        snapshot_delay: float = 0.05,
        stream_timeout: float = 5.0,
        max_retries: int = 3,
    ) -> TaskOrchestrator:
        return TaskOrchestrator(
            task_store=task_store,  # type: ignore[arg-type]
            content_source=content_source,  # type: ignore[arg-type]
            provider_factory=lambda api_key: provider,
            state_manager=TaskStateManager(task_store, max_retries=max_retries, backoff_seconds=0),  # type: ignore[arg-type]
            snapshot_delay=snapshot_delay,
            stream_timeout=stream_timeout,
        )

    return factory


@pytest.fixture
def make_provider() -> type[FakeProvider]:
    """Класс FakeProvider для сценариев streaming."""
    return FakeProvider


@pytest.fixture
def wait_background():
    """Дождаться завершения фоновых генераций orchestrator."""

    async def wait(orchestrator: TaskOrchestrator) -> None:
        while orchestrator._background:
            await asyncio.gather(*list(orchestrator._background), return_exceptions=True)

    return wait
