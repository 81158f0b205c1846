"""Counter API Routes для JD Generator."""

from fastapi import APIRouter

from src.api.schemas.requests import CountRequest
from src.api.schemas.responses import CountResponse
from src.core.dependencies import CounterStoreDep
from src.core.enums import CountAction
from src.shared.errors import StorageError
from src.shared.logging import get_logger

logger = get_logger()

router = APIRouter(prefix="/count", tags=["counter"])


@router.post(
    "",
    summary="Изменить счётчик",
    responses={500: StorageError.openapi_response()},
)
async def update_count(request: CountRequest, counter_store: CounterStoreDep) -> CountResponse:
    """Увеличить или сбросить счётчик.

    Неизвестное действие не меняет значение.

    Args:
        request: Действие над счётчиком
        counter_store: CounterStore

    Returns:
        CountResponse с текущим значением

    """
    if request.action == CountAction.INC:
        value = await counter_store.increment()
    elif request.action == CountAction.CLEAR:
        await counter_store.clear()
        value = 0
    else:
        logger.debug("Неизвестное действие счётчика", action=request.action)
        value = await counter_store.count()

    return CountResponse(data=value)


@router.get(
    "",
    summary="Получить счётчик",
    responses={500: StorageError.openapi_response()},
)
async def get_count(counter_store: CounterStoreDep) -> CountResponse:
    """Получить текущее значение счётчика."""
    return CountResponse(data=await counter_store.count())
