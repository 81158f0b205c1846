"""Task State Manager - управление состоянием задач.

Отвечает ТОЛЬКО за запись состояния задач в TaskStore.
НЕ отвечает за streaming, fallback контент (SRP).

Example:
    >>> manager = TaskStateManager(task_store)
    >>> await manager.save_snapshot(task_id, content, elapsed_time)
    >>> await manager.mark_as_completed(task_id, content, elapsed_time)

"""

import asyncio
from typing import TYPE_CHECKING

from config.settings import settings
from src.services.task.models import TaskUpdate
from src.shared.errors import StorageError
from src.shared.logging import get_logger

if TYPE_CHECKING:
    from src.services.task_store import TaskStore

logger = get_logger()


class TaskStateManager:
    """Manager для управления состоянием задач.

    Промежуточные снимки пишутся один раз (ошибка пробрасывается вызывающему),
    финальные записи повторяются с exponential backoff: без них задача
    навсегда останется в статусе processing.

    Attributes:
        task_store: Хранилище документов задач
        max_retries: Повторы финальной записи
        backoff_seconds: Базовая задержка между повторами

    """

    def __init__(
        self,
        task_store: "TaskStore",
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
    ) -> None:
        """Инициализировать TaskStateManager.

        Args:
            task_store: TaskStore instance
            max_retries: Повторы финальной записи (defaults из settings)
            backoff_seconds: Базовая задержка (defaults из settings)

        """
        self.task_store = task_store
        self.max_retries = settings.final_write_retries if max_retries is None else max_retries
        self.backoff_seconds = (
            settings.final_write_backoff_seconds if backoff_seconds is None else backoff_seconds
        )

    async def save_snapshot(self, task_id: str, content: str, elapsed_time: int) -> None:
        """Записать промежуточный снимок прогресса.

        Args:
            task_id: ID задачи
            content: Накопленный текст
            elapsed_time: Секунд с начала генерации

        Raises:
            StorageError: Ошибка записи

        """
        await self.task_store.update_task(task_id, TaskUpdate.snapshot(content, elapsed_time))

    async def mark_as_completed(self, task_id: str, content: str, elapsed_time: int) -> bool:
        """Отметить задачу как завершённую успешно.

        Args:
            task_id: ID задачи
            content: Полный сгенерированный текст
            elapsed_time: Секунд с начала генерации

        Returns:
            True если запись выполнена

        """
        written = await self._write_final(task_id, TaskUpdate.completed(content, elapsed_time))
        if written:
            logger.info(
                "Задача отмечена как completed",
                task_id=task_id,
                total_tokens=len(content),
                elapsed_time=elapsed_time,
            )
        return written

    async def mark_as_failed(
        self,
        task_id: str,
        error_message: str,
        fallback_content: str | None,
        elapsed_time: int | None = None,
    ) -> bool:
        """Отметить задачу как провалившуюся.

        Args:
            task_id: ID задачи
            error_message: Описание ошибки
            fallback_content: Контент по умолчанию (None = не перезаписывать)
            elapsed_time: Секунд с начала генерации

        Returns:
            True если запись выполнена

        """
        update = TaskUpdate.failed(error_message, fallback_content, elapsed_time)
        written = await self._write_final(task_id, update)
        if written:
            logger.error(
                "Задача отмечена как failed",
                task_id=task_id,
                error=error_message,
                has_fallback=fallback_content is not None,
            )
        return written

    async def _write_final(self, task_id: str, update: TaskUpdate) -> bool:
        """Записать финальное состояние с повторами.

        Returns:
            True если запись выполнена, False если все попытки провалились

        Note:
            НЕ бросает исключения - логирует ошибки и возвращает False.

        """
        for attempt in range(self.max_retries + 1):
            try:
                await self.task_store.update_task(task_id, update)
                return True

            except StorageError as e:
                if attempt < self.max_retries:
                    backoff = self.backoff_seconds * 2**attempt
                    logger.warning(
                        "Финальная запись не удалась, повтор",
                        task_id=task_id,
                        attempt=attempt + 1,
                        max_retries=self.max_retries,
                        backoff_seconds=backoff,
                        error=e.message,
                    )
                    await asyncio.sleep(backoff)
                else:
                    logger.error(
                        "Финальная запись не удалась после всех повторов, задача останется processing",
                        task_id=task_id,
                        total_attempts=self.max_retries + 1,
                        status=update.status.value if update.status else None,
                        error=e.message,
                    )

            except Exception as e:
                logger.exception(
                    "Финальная запись невозможна",
                    task_id=task_id,
                    error=str(e),
                )
                return False

        return False
