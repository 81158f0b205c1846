"""JD Generator - API Module.

Главный API роутер; подключается в приложении с префиксом ``/api``.
"""

from fastapi import APIRouter

from src.api.routes import counter, generate, wechat
from src.core.constants import API_PREFIX

# Создаем главный API роутер
router = APIRouter()

router.include_router(generate.router)
router.include_router(counter.router)
router.include_router(wechat.router)

__all__ = ["API_PREFIX", "router"]
