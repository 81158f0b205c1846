"""Exception handlers for FastAPI.

Обработчики исключений для FastAPI приложения.
Все ответы с ошибкой имеют формат ``{"success": false, "error": ...}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from src.shared.errors.base import AppException
from src.shared.errors.context import get_trace_id
from src.shared.errors.schemas import ErrorResponse


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Обработчик доменных исключений.

    Args:
        request: HTTP запрос.
        exc: Исключение AppException.

    Returns:
        JSON ответ с ошибкой.

    """
    log = logger.error if exc.is_server_error else logger.warning
    log("Ошибка обработки запроса", path=request.url.path, **exc.to_log_context())

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(by_alias=True),
        headers={"X-Error-Code": exc.code, "X-Trace-Id": get_trace_id()},
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Обработчик ошибок валидации Pydantic.

    Невалидное тело запроса отдаётся как 400, как и отсутствующие параметры.

    Args:
        request: HTTP запрос.
        exc: Исключение валидации.

    Returns:
        JSON ответ с ошибкой валидации.

    """
    trace_id = get_trace_id()

    logger.warning(
        "Validation error",
        errors=exc.errors(),
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error="Ошибка валидации входных данных",
            code="VALIDATION_ERROR",
            details={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
            trace_id=trace_id,
        ).model_dump(by_alias=True),
        headers={"X-Trace-Id": trace_id},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Последний обработчик для непредвиденных ошибок.

    Args:
        request: HTTP запрос.
        exc: Любое исключение.

    Returns:
        JSON ответ с общей ошибкой.

    """
    trace_id = get_trace_id()

    logger.exception(
        "Unhandled exception",
        exception_type=type(exc).__name__,
        exception_message=str(exc),
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error=str(exc) or "Внутренняя ошибка сервера",
            code="INTERNAL_SERVER_ERROR",
            trace_id=trace_id,
        ).model_dump(by_alias=True),
        headers={"X-Trace-Id": trace_id},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Зарегистрировать обработчики исключений в FastAPI.

    Args:
        app: Экземпляр FastAPI приложения.

    """
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
