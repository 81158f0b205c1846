"""Snapshot Debouncer - trailing debounce для промежуточных записей.

Каждый новый фрагмент перезапускает таймер; запись выполняется только
когда таймер отработал без перезапуска. Таймер принадлежит одной
фоновой генерации и не разделяется между задачами.

Example:
    >>> debouncer = SnapshotDebouncer(write_snapshot, delay=0.2)
    >>> debouncer.trigger()      # на каждый фрагмент
    >>> await debouncer.cancel() # перед финальной записью

"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable

from src.shared.logging import get_logger

logger = get_logger()


class SnapshotDebouncer:
    """Отменяемый отложенный вызов записи снимка.

    Гарантии:
    - не более одного ожидающего таймера
    - запись, которая уже началась, не отменяется
    - записи выполняются строго последовательно (asyncio.Lock)
    - после ``cancel()`` нет ни ожидающих, ни выполняющихся записей

    Attributes:
        delay: Задержка debounce в секундах
        writes: Количество выполненных записей

    """

    def __init__(
        self,
        write: Callable[[], Awaitable[None]],
        delay: float,
        name: str = "",
    ) -> None:
        """Инициализировать debouncer.

        Args:
            write: Корутина записи (читает актуальное состояние в момент вызова)
            delay: Задержка в секундах
            name: Имя для логов (обычно task_id)

        """
        self.delay = delay
        self.name = name
        self.writes = 0

        self._write = write
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()
        self._lock = asyncio.Lock()

    @property
    def pending(self) -> bool:
        """Есть ли ожидающий таймер."""
        return self._timer is not None

    def trigger(self) -> None:
        """Перезапустить таймер (отменяет ожидающий, если есть)."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.create_task(self._fire())

    async def cancel(self) -> None:
        """Отменить ожидающий таймер и дождаться начатых записей."""
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await timer

        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    async def _fire(self) -> None:
        await asyncio.sleep(self.delay)

        # Таймер отработал: с этого момента запись не отменяется
        current = asyncio.current_task()
        if self._timer is current:
            self._timer = None
        if current is not None:
            self._in_flight.add(current)  # type: ignore[arg-type]

        try:
            async with self._lock:
                await self._write()
                self.writes += 1
        except Exception as e:
            logger.warning(
                "Не удалось записать промежуточный снимок",
                task_id=self.name,
                error=str(e),
            )
        finally:
            if current is not None:
                self._in_flight.discard(current)  # type: ignore[arg-type]
