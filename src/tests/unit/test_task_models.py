"""Unit тесты для services/task/models.py."""

import re

from src.core.enums import TaskStatus
from src.services.task.models import Task, TaskUpdate, generate_task_id


class TestGenerateTaskId:
    """Тесты генерации task_id."""

    def test_format(self) -> None:
        """Тест формата task_{ms}_{base36}."""
        assert re.fullmatch(r"task_\d{13}_[0-9a-z]{9}", generate_task_id())

    def test_unique(self) -> None:
        """Тест уникальности."""
        assert len({generate_task_id() for _ in range(1000)}) == 1000


class TestTask:
    """Тесты модели Task."""

    def test_processing(self) -> None:
        """Тест новой задачи в статусе processing."""
        task = Task.processing("task_1", "Senior Backend Engineer")

        assert task.status == TaskStatus.PROCESSING
        assert task.current_content == ""
        assert task.total_tokens == 0
        assert task.error is None

    def test_completed_with_fallback(self) -> None:
        """Тест задачи, завершённой контентом по умолчанию."""
        task = Task.completed_with_fallback("task_1", "Senior Backend Engineer", "DEFAULT")

        assert task.status == TaskStatus.COMPLETED
        assert task.current_content == "DEFAULT"
        assert task.total_tokens == 7

    def test_document_field_names(self) -> None:
        """Тест имён полей документа (camelCase и _id)."""
        document = Task.processing("task_1", "x").model_dump(mode="json", by_alias=True, exclude_none=True)

        assert document == {
            "_id": "task_1",
            "status": "processing",
            "jobDescription": "x",
            "currentContent": "",
            "totalTokens": 0,
        }

    def test_status_is_terminal(self) -> None:
        """Тест терминальных статусов."""
        assert TaskStatus.PROCESSING.is_terminal is False
        assert TaskStatus.COMPLETED.is_terminal is True
        assert TaskStatus.FAILED.is_terminal is True


class TestTaskUpdate:
    """Тесты модели TaskUpdate."""

    def test_snapshot_has_no_status(self) -> None:
        """Тест: снимок не меняет статус."""
        update = TaskUpdate.snapshot("abc", 2)

        assert update.model_dump(by_alias=True, exclude_none=True) == {
            "currentContent": "abc",
            "totalTokens": 3,
            "elapsedTime": 2,
        }

    def test_failed_with_fallback(self) -> None:
        """Тест провала с контентом по умолчанию."""
        update = TaskUpdate.failed("boom", "DEFAULT", 5)

        assert update.status == TaskStatus.FAILED
        assert update.current_content == "DEFAULT"
        assert update.total_tokens == 7
        assert update.elapsed_time == 5
