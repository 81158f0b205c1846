"""JD Generator - Dependencies.

Dependency Injection для FastAPI. Компоненты создаются в lifespan
и хранятся в ``app.state``; тесты подменяют их напрямую.
"""

from typing import Annotated

from fastapi import Depends, Request

from src.services.counter_store import CounterStore
from src.services.task import TaskOrchestrator
from src.services.task_store import TaskStore

# ==================== Service Dependencies ====================


def get_task_orchestrator(request: Request) -> TaskOrchestrator:
    """Получить TaskOrchestrator из состояния приложения.

    Args:
        request: HTTP запрос FastAPI.

    Returns:
        Экземпляр TaskOrchestrator.

    """
    return request.app.state.orchestrator


def get_task_store(request: Request) -> TaskStore:
    """Получить TaskStore из состояния приложения."""
    return request.app.state.task_store


def get_counter_store(request: Request) -> CounterStore:
    """Получить CounterStore из состояния приложения."""
    return request.app.state.counter_store


# ==================== Type Aliases ====================
# Используются для более чистого кода в route handlers

TaskOrchestratorDep = Annotated[TaskOrchestrator, Depends(get_task_orchestrator)]
TaskStoreDep = Annotated[TaskStore, Depends(get_task_store)]
CounterStoreDep = Annotated[CounterStore, Depends(get_counter_store)]
