"""Task Orchestrator - координация задач генерации.

Orchestrator координирует TaskStore, ContentSource, провайдер и TaskStateManager.
Синхронная часть (ключ, создание записи) выполняется в запросе, streaming
генерация отсоединяется в фоновую asyncio задачу.

Example:
    >>> orchestrator = TaskOrchestrator(task_store, content_source, provider_factory, state_manager)
    >>> task_id = await orchestrator.start_generation("Senior Backend Engineer")
    >>> task = await orchestrator.get_status(task_id)
    >>> await orchestrator.shutdown()

"""

import asyncio
import time
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from config.settings import settings
from src.core.constants import ROLE_SYSTEM, ROLE_USER
from src.providers.base import ChatMessage, ContentProvider, ProviderFactory
from src.services.content_source import ContentSource
from src.services.task.models import Task, generate_task_id
from src.services.task.snapshot_debouncer import SnapshotDebouncer
from src.services.task.task_state_manager import TaskStateManager
from src.shared.errors import AppException, InvalidArgumentError, StreamTimeoutError
from src.shared.logging import get_logger

if TYPE_CHECKING:
    from src.services.task_store import TaskStore

logger = get_logger()


@dataclass
class StreamState:
    """Состояние одной фоновой генерации."""

    task_id: str
    started: float = field(default_factory=time.monotonic)
    parts: list[str] = field(default_factory=list)
    fragments: int = 0

    @property
    def content(self) -> str:
        return "".join(self.parts)

    @property
    def elapsed_seconds(self) -> int:
        return int(time.monotonic() - self.started)

    def append(self, text: str) -> None:
        self.parts.append(text)
        self.fragments += 1


def _describe_error(error: BaseException) -> str:
    if isinstance(error, AppException):
        return error.message
    return str(error) or type(error).__name__


class TaskOrchestrator:
    """Orchestrator жизненного цикла задач генерации.

    Делегирует ответственности:
    - TaskStore: создание и чтение записей
    - ContentSource: system prompt и контент по умолчанию
    - ProviderFactory: streaming провайдер по ключу
    - TaskStateManager: снимки и финальные записи

    Фоновые генерации хранятся в ``_background`` (сильные ссылки), чтобы
    задачи не собирались GC до завершения.

    Attributes:
        task_store: Хранилище задач
        content_source: Источник документов
        provider_factory: Фабрика провайдера (api_key -> ContentProvider)
        state_manager: Запись состояния задач
        snapshot_delay: Задержка debounce в секундах
        stream_timeout: Максимальная длительность генерации в секундах

    """

    def __init__(
        self,
        task_store: "TaskStore",
        content_source: ContentSource,
        provider_factory: ProviderFactory,
        state_manager: TaskStateManager,
        snapshot_delay: float | None = None,
        stream_timeout: float | None = None,
    ) -> None:
        """Инициализировать TaskOrchestrator.

        Args:
            task_store: TaskStore instance
            content_source: ContentSource instance
            provider_factory: Фабрика провайдера
            state_manager: TaskStateManager instance
            snapshot_delay: Задержка debounce (defaults из settings)
            stream_timeout: Таймаут генерации (defaults из settings)

        """
        self.task_store = task_store
        self.content_source = content_source
        self.provider_factory = provider_factory
        self.state_manager = state_manager
        self.snapshot_delay = (
            settings.snapshot_debounce_seconds if snapshot_delay is None else snapshot_delay
        )
        self.stream_timeout = (
            settings.stream_timeout_seconds if stream_timeout is None else stream_timeout
        )

        self._background: set[asyncio.Task[None]] = set()

        logger.info(
            "TaskOrchestrator инициализирован",
            snapshot_delay=self.snapshot_delay,
            stream_timeout=self.stream_timeout,
        )

    @property
    def active_tasks(self) -> int:
        """Количество выполняющихся фоновых генераций."""
        return len(self._background)

    async def start_generation(self, job_description: str | None) -> str:
        """Создать задачу генерации.

        Возвращает task_id сразу после создания записи, не дожидаясь генерации.

        Args:
            job_description: Описание вакансии

        Returns:
            task_id созданной задачи

        Raises:
            InvalidArgumentError: Пустое описание
            StorageError: Ошибка хранилища при создании записи

        """
        if not job_description:
            raise InvalidArgumentError("jobDescription")

        system_prompt = await self.content_source.get_system_prompt()
        if system_prompt is None:
            logger.warning("System prompt недоступен, генерация без system инструкции")

        task_id = generate_task_id()
        api_key = await self.task_store.get_api_key()

        if api_key is None:
            content = await self.content_source.get_default_content() or ""
            await self.task_store.create_task(
                Task.completed_with_fallback(task_id, job_description, content)
            )
            logger.info(
                "Ключ провайдера не настроен, задача завершена контентом по умолчанию",
                task_id=task_id,
                total_tokens=len(content),
            )
            return task_id

        await self.task_store.create_task(Task.processing(task_id, job_description))
        self._launch(self._run_stream(task_id, job_description, system_prompt, api_key), task_id)

        logger.info("Задача создана, генерация запущена", task_id=task_id)
        return task_id

    async def get_status(self, task_id: str) -> Task:
        """Получить текущую запись задачи.

        Raises:
            TaskNotFoundError: Задача не найдена
            StorageError: Ошибка хранилища

        """
        return await self.task_store.get_task(task_id)

    async def shutdown(self) -> None:
        """Отменить выполняющиеся генерации (при остановке приложения)."""
        if not self._background:
            return

        running = list(self._background)
        logger.warning("Отмена фоновых генераций", count=len(running))

        for task in running:
            task.cancel()
        await asyncio.gather(*running, return_exceptions=True)

        logger.info("Фоновые генерации остановлены")

    def _launch(self, coro: Coroutine[Any, Any, None], task_id: str) -> None:
        task = asyncio.create_task(coro, name=f"generation:{task_id}")
        self._background.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Task[None]) -> None:
        self._background.discard(task)
        if task.cancelled():
            return

        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error(
                "Фоновая генерация завершилась с необработанной ошибкой",
                task_name=task.get_name(),
            )

    async def _run_stream(
        self,
        task_id: str,
        job_description: str,
        system_prompt: str | None,
        api_key: str,
    ) -> None:
        """Фоновая генерация: stream -> снимки -> финальная запись.

        Всегда заканчивается записью completed или failed.
        """
        state = StreamState(task_id=task_id)

        async def write_snapshot() -> None:
            await self.state_manager.save_snapshot(task_id, state.content, state.elapsed_seconds)

        debouncer = SnapshotDebouncer(write_snapshot, self.snapshot_delay, name=task_id)

        try:
            provider = self.provider_factory(api_key)
            await self._consume_stream(
                provider, self._build_messages(job_description, system_prompt), state, debouncer
            )

        except asyncio.CancelledError:
            await debouncer.cancel()
            await self._fail(state, "Генерация прервана остановкой сервиса")
            raise

        except Exception as e:
            logger.error(
                "Ошибка streaming генерации",
                task_id=task_id,
                error=_describe_error(e),
                error_type=type(e).__name__,
                fragments=state.fragments,
            )
            await debouncer.cancel()
            await self._fail(state, _describe_error(e))

        else:
            await debouncer.cancel()
            logger.debug(
                "Streaming завершён",
                task_id=task_id,
                fragments=state.fragments,
                snapshot_writes=debouncer.writes,
            )
            await self.state_manager.mark_as_completed(
                task_id, state.content, state.elapsed_seconds
            )

    async def _consume_stream(
        self,
        provider: ContentProvider,
        messages: list[ChatMessage],
        state: StreamState,
        debouncer: SnapshotDebouncer,
    ) -> None:
        try:
            async with asyncio.timeout(self.stream_timeout):
                async for chunk in provider.generate_stream(messages):
                    if not chunk.text:
                        continue
                    state.append(chunk.text)
                    debouncer.trigger()
        except TimeoutError as e:
            raise StreamTimeoutError(self.stream_timeout) from e
        finally:
            try:
                await provider.cleanup()
            except Exception as e:
                logger.warning("Ошибка освобождения провайдера", task_id=state.task_id, error=str(e))

    async def _fail(self, state: StreamState, error_message: str) -> None:
        fallback = await self.content_source.get_default_content()
        await self.state_manager.mark_as_failed(
            state.task_id,
            error_message,
            fallback,
            state.elapsed_seconds,
        )

    @staticmethod
    def _build_messages(job_description: str, system_prompt: str | None) -> list[ChatMessage]:
        messages = []
        if system_prompt:
            messages.append(ChatMessage(role=ROLE_SYSTEM, content=system_prompt))
        messages.append(ChatMessage(role=ROLE_USER, content=job_description))
        return messages
