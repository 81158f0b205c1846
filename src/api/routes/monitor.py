"""Monitor API Routes для JD Generator.

Health check для оркестратора и балансировщика.
"""

from fastapi import APIRouter

from src.api.schemas.responses import HealthCheckResponse
from src.core.dependencies import TaskOrchestratorDep, TaskStoreDep
from src.core.enums import HealthStatus

router = APIRouter(tags=["monitor"])


@router.get(
    "/health",
    summary="Health check",
    description="Проверяет доступность Redis",
)
async def health_check(task_store: TaskStoreDep, orchestrator: TaskOrchestratorDep) -> HealthCheckResponse:
    """Health check сервиса.

    Returns:
        HealthCheckResponse: ok если Redis отвечает, иначе degraded

    """
    redis_ok = await task_store.health_check()

    return HealthCheckResponse(
        status=HealthStatus.OK if redis_ok else HealthStatus.DEGRADED,
        redis=redis_ok,
        active_generations=orchestrator.active_tasks,
    )
