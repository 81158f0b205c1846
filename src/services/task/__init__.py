"""Task Management Module - жизненный цикл задач генерации.

- TaskOrchestrator: создание задач и фоновая streaming генерация
- TaskStateManager: снимки и финальные записи состояния
- SnapshotDebouncer: trailing debounce промежуточных записей

Архитектура:
    ┌─────────────────────┐
    │  TaskOrchestrator   │  (координатор)
    └──────────┬──────────┘
               │
       ┌───────┼────────────┬──────────────┐
       │       │            │              │
       ▼       ▼            ▼              ▼
    TaskStore ContentSource Provider  TaskStateManager
                                           │
                                    SnapshotDebouncer

Example:
    >>> from src.services.task import TaskOrchestrator
    >>> task_id = await orchestrator.start_generation(job_description)

"""

from src.services.task.models import Task, TaskUpdate, generate_task_id
from src.services.task.snapshot_debouncer import SnapshotDebouncer
from src.services.task.task_orchestrator import TaskOrchestrator
from src.services.task.task_state_manager import TaskStateManager

__all__ = [
    "SnapshotDebouncer",
    "Task",
    "TaskOrchestrator",
    "TaskStateManager",
    "TaskUpdate",
    "generate_task_id",
]
