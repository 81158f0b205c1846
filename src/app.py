"""JD Generator - FastAPI Application.

Главное приложение с инициализацией всех компонентов.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from config.settings import settings
from src.api import router as api_router
from src.api.routes import monitor
from src.core.constants import API_PREFIX, DEFAULT_APP_VERSION, TRACE_ID_HEADER
from src.providers import create_openai_compatible_provider
from src.services.content_source import ContentSource, create_http_client
from src.services.counter_store import CounterStore
from src.services.task import TaskOrchestrator, TaskStateManager
from src.services.task_store import TaskStore, create_redis_client
from src.shared.errors import setup_exception_handlers
from src.shared.errors.context import set_trace_id
from src.shared.logging import get_logger, setup_logging

logger = get_logger()


class TraceContextMiddleware:
    """Middleware для установки trace_id в контекст запроса.

    trace_id берётся из заголовка ``x-trace-id`` или генерируется,
    возвращается в ``X-Trace-Id`` и попадает во все логи запроса
    (включая фоновую генерацию, запущенную из него).
    """

    def __init__(self, app: Any) -> None:
        """Инициализация middleware.

        Args:
            app: ASGI приложение.

        """
        self.app = app

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        """Обработка запроса с установкой trace_id.

        Args:
            scope: ASGI scope.
            receive: ASGI receive callable.
            send: ASGI send callable.

        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        trace_id = headers.get(TRACE_ID_HEADER.encode(), b"").decode() or str(uuid4())
        set_trace_id(trace_id)

        start_time = time.perf_counter()
        status_code = 500

        async def send_with_trace(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_headers = list(message.get("headers", []))
                if not any(name.lower() == b"x-trace-id" for name, _ in response_headers):
                    response_headers.append((b"x-trace-id", trace_id.encode()))
                message["headers"] = response_headers
            await send(message)

        try:
            await self.app(scope, receive, send_with_trace)
        finally:
            logger.info(
                "HTTP запрос",
                method=scope.get("method"),
                path=scope.get("path"),
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager для startup/shutdown.

    Все компоненты создаются здесь и кладутся в ``app.state``.

    Args:
        app: FastAPI application

    Yields:
        None

    """
    # =================================================================
    # Startup
    # =================================================================
    logger.info(
        "JD Generator запускается",
        env=settings.app_env,
        debug=settings.debug,
        log_level=settings.log_level,
    )

    redis_client = create_redis_client()
    task_store = TaskStore(redis_client)
    counter_store = CounterStore(redis_client)

    if not await task_store.health_check():
        logger.warning("Redis недоступен при старте, запросы к хранилищу будут завершаться ошибкой")

    http_client = create_http_client()
    content_source = ContentSource(http_client)

    orchestrator = TaskOrchestrator(
        task_store=task_store,
        content_source=content_source,
        provider_factory=create_openai_compatible_provider,
        state_manager=TaskStateManager(task_store),
    )

    app.state.task_store = task_store
    app.state.counter_store = counter_store
    app.state.orchestrator = orchestrator

    logger.info(
        "JD Generator готов",
        server_host=settings.server_host,
        server_port=settings.server_port,
    )

    yield

    # =================================================================
    # Shutdown
    # =================================================================
    logger.info("JD Generator останавливается")

    await orchestrator.shutdown()

    await http_client.aclose()
    logger.info("HTTP клиент закрыт")

    await task_store.close()
    logger.info("Redis connection закрыт")

    logger.info("JD Generator остановлен")


def create_app() -> FastAPI:
    """Создание и настройка FastAPI приложения.

    Returns:
        Настроенный экземпляр FastAPI приложения.

    """
    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Асинхронная генерация описаний вакансий через streaming провайдер",
        version=DEFAULT_APP_VERSION,
        lifespan=lifespan,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,  # Swagger UI только в debug
        redoc_url="/redoc" if settings.debug else None,
    )

    # =================================================================
    # Middleware
    # =================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Добавляется последним, чтобы быть внешним
    app.add_middleware(TraceContextMiddleware)

    # Prometheus metrics
    if settings.app_env != "development":
        Instrumentator().instrument(app).expose(app)
        logger.info("Prometheus metrics enabled на /metrics")

    setup_exception_handlers(app)

    # =================================================================
    # Routes
    # =================================================================

    app.include_router(api_router, prefix=API_PREFIX)
    app.include_router(monitor.router)

    @app.get("/", tags=["root"])
    async def root() -> dict[str, str]:
        """Root endpoint.

        Returns:
            Информация о сервисе

        """
        return {
            "service": settings.app_name,
            "version": DEFAULT_APP_VERSION,
            "environment": settings.app_env,
            "status": "running",
            "api": API_PREFIX,
            "docs": "/docs" if settings.debug else "disabled",
        }

    return app


app = create_app()
