"""Generation API Routes для JD Generator.

Endpoints для создания задач генерации и чтения их статуса.
"""

from fastapi import APIRouter

from src.api.schemas.requests import GenerateRequest
from src.api.schemas.responses import GenerateResponse, TaskStatusResponse
from src.core.dependencies import TaskOrchestratorDep
from src.shared.errors import InvalidArgumentError, StorageError, TaskNotFoundError
from src.shared.logging import get_logger

logger = get_logger()

router = APIRouter(tags=["generation"])


@router.post(
    "/generate",
    summary="Создать задачу генерации",
    description="Создаёт задачу и сразу возвращает её ID; генерация идёт в фоне",
    responses={
        400: InvalidArgumentError.openapi_response(),
        500: StorageError.openapi_response(),
    },
)
async def generate(request: GenerateRequest, orchestrator: TaskOrchestratorDep) -> GenerateResponse:
    """Создать задачу генерации.

    Args:
        request: Тело запроса с описанием вакансии
        orchestrator: TaskOrchestrator

    Returns:
        GenerateResponse с taskId

    """
    task_id = await orchestrator.start_generation(request.job_description)
    return GenerateResponse(task_id=task_id)


@router.get(
    "/task/{task_id}",
    summary="Получить статус задачи",
    description="Возвращает текущий документ задачи (прогресс или результат)",
    response_model_exclude_none=True,
    responses={
        404: TaskNotFoundError.openapi_response(),
        500: StorageError.openapi_response(),
    },
)
async def get_task(task_id: str, orchestrator: TaskOrchestratorDep) -> TaskStatusResponse:
    """Получить статус задачи.

    Args:
        task_id: ID задачи
        orchestrator: TaskOrchestrator

    Returns:
        TaskStatusResponse с документом задачи

    """
    task = await orchestrator.get_status(task_id)
    logger.debug("Статус задачи прочитан", task_id=task_id, status=task.status.value)
    return TaskStatusResponse(data=task)
