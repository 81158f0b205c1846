"""Unit тесты для services/task/snapshot_debouncer.py."""

import asyncio

import pytest

from src.services.task.snapshot_debouncer import SnapshotDebouncer


class WriteRecorder:
    """Записывающая корутина с опциональной задержкой и ошибкой."""

    def __init__(self, duration: float = 0.0, error: Exception | None = None) -> None:
        self.duration = duration
        self.error = error
        self.calls = 0
        self.finished = 0

    async def __call__(self) -> None:
        self.calls += 1
        if self.duration:
            await asyncio.sleep(self.duration)
        if self.error is not None:
            raise self.error
        self.finished += 1


class TestSnapshotDebouncer:
    """Тесты для SnapshotDebouncer."""

    @pytest.mark.asyncio
    async def test_burst_produces_single_write(self) -> None:
        """Тест: серия триггеров быстрее задержки -> одна запись."""
        write = WriteRecorder()
        debouncer = SnapshotDebouncer(write, delay=0.03)

        for _ in range(10):
            debouncer.trigger()
            await asyncio.sleep(0.001)

        await asyncio.sleep(0.08)

        assert write.calls == 1
        assert debouncer.writes == 1
        assert debouncer.pending is False

    @pytest.mark.asyncio
    async def test_separate_quiet_periods(self) -> None:
        """Тест: каждый период тишины даёт запись."""
        write = WriteRecorder()
        debouncer = SnapshotDebouncer(write, delay=0.01)

        debouncer.trigger()
        await asyncio.sleep(0.05)
        debouncer.trigger()
        await asyncio.sleep(0.05)

        assert write.calls == 2

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_write(self) -> None:
        """Тест: cancel до срабатывания -> записи нет."""
        write = WriteRecorder()
        debouncer = SnapshotDebouncer(write, delay=0.05)

        debouncer.trigger()
        assert debouncer.pending is True

        await debouncer.cancel()
        await asyncio.sleep(0.08)

        assert write.calls == 0
        assert debouncer.pending is False

    @pytest.mark.asyncio
    async def test_cancel_waits_for_in_flight_write(self) -> None:
        """Тест: начатая запись не отменяется, cancel её дожидается."""
        write = WriteRecorder(duration=0.05)
        debouncer = SnapshotDebouncer(write, delay=0.01)

        debouncer.trigger()
        await asyncio.sleep(0.03)
        assert write.calls == 1
        assert write.finished == 0

        await debouncer.cancel()

        assert write.finished == 1
        assert debouncer.writes == 1

    @pytest.mark.asyncio
    async def test_trigger_during_write_does_not_cancel_it(self) -> None:
        """Тест: новый триггер во время записи не прерывает её."""
        write = WriteRecorder(duration=0.04)
        debouncer = SnapshotDebouncer(write, delay=0.01)

        debouncer.trigger()
        await asyncio.sleep(0.02)
        debouncer.trigger()
        await asyncio.sleep(0.1)

        assert write.finished == 2

    @pytest.mark.asyncio
    async def test_write_error_is_swallowed(self) -> None:
        """Тест: ошибка записи логируется и не пробрасывается."""
        write = WriteRecorder(error=RuntimeError("redis down"))
        debouncer = SnapshotDebouncer(write, delay=0.01, name="task_1")

        debouncer.trigger()
        await asyncio.sleep(0.03)
        await debouncer.cancel()

        assert write.calls == 1
        assert debouncer.writes == 0

    @pytest.mark.asyncio
    async def test_cancel_without_trigger(self) -> None:
        """Тест: cancel без таймера безопасен."""
        debouncer = SnapshotDebouncer(WriteRecorder(), delay=0.01)

        await debouncer.cancel()

        assert debouncer.writes == 0
