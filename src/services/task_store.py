"""Task Store для JD Generator.

Документное хранилище поверх Redis. Каждый документ хранится как Hash,
поля документа соответствуют полям хэша.

Redis Schema:
    {tasks_collection}:{task_id}    -> Hash (документ задачи, поля camelCase)
    {keys_collection}:{doc_id}      -> Hash (документ с ключом провайдера)

Временные метки createTime/updateTime назначаются сервером (команда TIME).
"""

from datetime import UTC, datetime
from typing import Any

from redis.asyncio import Redis

from config.settings import settings
from src.core.constants import TASK_DOC_ID_FIELD
from src.services.task.models import Task, TaskUpdate
from src.shared.errors import TaskAlreadyExistsError, TaskNotFoundError, storage_errors
from src.shared.logging import get_logger

logger = get_logger()

# Вставка документа одной командой: либо весь хэш, либо ничего
_INSERT_DOCUMENT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], unpack(ARGV))
return 1
"""


def _to_mapping(document: dict[str, Any]) -> dict[str, str]:
    """Подготовить документ к записи в Redis Hash."""
    return {key: str(value) for key, value in document.items()}


class TaskStore:
    """Redis-based хранилище документов задач.

    Обеспечивает:
    - Создание документа задачи (единственная вставка)
    - Частичные обновления существующего документа
    - Чтение документа по ID
    - Чтение ключа провайдера из коллекции keys
    """

    def __init__(
        self,
        redis_client: Redis,
        tasks_collection: str | None = None,
        keys_collection: str | None = None,
        api_key_doc_id: str | None = None,
        api_key_field: str | None = None,
    ) -> None:
        """Инициализировать Task Store.

        Args:
            redis_client: Async Redis client
            tasks_collection: Префикс коллекции задач
            keys_collection: Префикс коллекции ключей
            api_key_doc_id: ID документа с ключом провайдера
            api_key_field: Поле документа с ключом

        """
        self.redis = redis_client
        self.tasks_collection = tasks_collection or settings.tasks_collection
        self.keys_collection = keys_collection or settings.keys_collection
        self.api_key_doc_id = api_key_doc_id or settings.api_key_doc_id
        self.api_key_field = api_key_field or settings.api_key_field

    def _task_key(self, task_id: str) -> str:
        return f"{self.tasks_collection}:{task_id}"

    async def server_time(self) -> datetime:
        """Получить текущее время сервера Redis.

        Returns:
            Время сервера в UTC

        """
        seconds, microseconds = await self.redis.time()
        return datetime.fromtimestamp(int(seconds) + int(microseconds) / 1_000_000, tz=UTC)

    @storage_errors
    async def create_task(self, task: Task) -> Task:
        """Создать документ задачи.

        Args:
            task: Новая задача (createTime/updateTime назначаются сервером)

        Returns:
            Сохранённая задача с временными метками

        Raises:
            TaskAlreadyExistsError: Документ с таким ID уже существует
            StorageError: Ошибка Redis

        """
        key = self._task_key(task.id)
        now = await self.server_time()
        stored = task.model_copy(update={"create_time": now, "update_time": now})

        document = stored.model_dump(mode="json", by_alias=True, exclude_none=True)
        document[TASK_DOC_ID_FIELD] = task.id
        fields = [item for pair in _to_mapping(document).items() for item in pair]

        inserted = await self.redis.eval(  # type: ignore[misc]
            _INSERT_DOCUMENT_SCRIPT, 1, key, *fields
        )
        if not inserted:
            raise TaskAlreadyExistsError(task.id)

        logger.info(
            "Задача создана в хранилище",
            task_id=task.id,
            status=task.status.value,
            total_tokens=task.total_tokens,
        )
        return stored

    @storage_errors
    async def update_task(self, task_id: str, update: TaskUpdate) -> None:
        """Обновить поля существующего документа задачи.

        Args:
            task_id: ID задачи
            update: Изменяемые поля (None-поля не записываются)

        Raises:
            TaskNotFoundError: Документ не существует
            StorageError: Ошибка Redis

        """
        key = self._task_key(task_id)

        if not await self.redis.exists(key):
            raise TaskNotFoundError(task_id)

        document = update.model_dump(mode="json", by_alias=True, exclude_none=True)
        document["updateTime"] = (await self.server_time()).isoformat()

        await self.redis.hset(key, mapping=_to_mapping(document))  # type: ignore[misc]

        logger.debug(
            "Задача обновлена",
            task_id=task_id,
            fields=sorted(document),
        )

    @storage_errors
    async def get_task(self, task_id: str) -> Task:
        """Получить документ задачи.

        Args:
            task_id: ID задачи

        Returns:
            Текущее сохранённое состояние задачи

        Raises:
            TaskNotFoundError: Документ не существует
            StorageError: Ошибка Redis

        """
        data = await self.redis.hgetall(self._task_key(task_id))  # type: ignore[misc]

        if not data:
            raise TaskNotFoundError(task_id)

        document = {k.decode("utf-8"): v.decode("utf-8") for k, v in data.items()}
        return Task.model_validate(document)

    @storage_errors
    async def get_api_key(self) -> str | None:
        """Получить ключ провайдера из коллекции keys.

        Returns:
            Ключ или None если документ/поле отсутствует или пусто

        """
        value = await self.redis.hget(  # type: ignore[misc]
            f"{self.keys_collection}:{self.api_key_doc_id}",
            self.api_key_field,
        )

        if not value:
            return None

        api_key = value.decode("utf-8").strip()
        return api_key or None

    async def health_check(self) -> bool:
        """Проверить доступность Redis.

        Returns:
            True если Redis доступен

        """
        try:
            await self.redis.ping()  # type: ignore[misc]
            return True
        except Exception as e:
            logger.warning("Redis недоступен", error=str(e))
            return False

    async def close(self) -> None:
        """Закрыть соединение с Redis."""
        await self.redis.aclose()


def create_redis_client(redis_url: str | None = None) -> Redis:
    """Создать async Redis клиент.

    Args:
        redis_url: URL подключения (по умолчанию из settings)

    Returns:
        Redis client (ответы не декодируются, декодируем сами)

    """
    return Redis.from_url(
        redis_url or settings.redis_url,
        decode_responses=False,
    )
