"""Counter Store - простой счётчик поверх Redis."""

from redis.asyncio import Redis

from config.settings import settings
from src.shared.errors import storage_errors
from src.shared.logging import get_logger

logger = get_logger()


class CounterStore:
    """Счётчик с операциями increment/clear/count."""

    def __init__(self, redis_client: Redis, key: str | None = None) -> None:
        self.redis = redis_client
        self.key = key or settings.counter_key

    @storage_errors
    async def increment(self) -> int:
        """Увеличить счётчик на 1 и вернуть новое значение."""
        value = await self.redis.incr(self.key)
        logger.debug("Счётчик увеличен", value=value)
        return int(value)

    @storage_errors
    async def clear(self) -> None:
        """Сбросить счётчик."""
        await self.redis.delete(self.key)
        logger.info("Счётчик сброшен")

    @storage_errors
    async def count(self) -> int:
        """Текущее значение счётчика (0 если не задан)."""
        value = await self.redis.get(self.key)
        return int(value) if value else 0
