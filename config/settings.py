"""JD Generator - Configuration Settings.

Pydantic Settings для управления конфигурацией через env vars.
API ключ и документы (system prompt, default content) сюда НЕ попадают:
они читаются из внешних хранилищ в момент запроса, здесь только их адреса.
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Главные настройки приложения."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =================================================================
    # Application
    # =================================================================
    app_name: str = Field(default="JD Generator", description="Название приложения")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Окружение"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Уровень логирования"
    )
    log_file: str | None = Field(
        default=None,
        description="Путь к файлу логов (None = только stdout)"
    )
    debug: bool = Field(default=False, description="Режим отладки")

    # =================================================================
    # Server
    # =================================================================
    server_host: str = Field(default="0.0.0.0", description="Хост сервера")
    server_port: int = Field(
        default=80,
        validation_alias=AliasChoices("port", "server_port"),
        description="Порт сервера (env PORT)"
    )

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Валидация порта."""
        if not 1 <= v <= 65535:
            msg = f"Порт должен быть в диапазоне 1-65535, получено: {v}"
            raise ValueError(msg)
        return v

    cors_allowed_origins: list[str] = Field(default=["*"], description="Разрешённые origins для CORS")

    # =================================================================
    # Redis (document store)
    # =================================================================
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="URL подключения к Redis"
    )
    tasks_collection: str = Field(default="gen_tasks", description="Коллекция задач генерации")
    keys_collection: str = Field(default="keys", description="Коллекция с API ключами")
    api_key_doc_id: str = Field(
        default="1c5ac29f67c3bb4600311a493a34ede8",
        description="ID документа с ключом провайдера"
    )
    api_key_field: str = Field(default="theKey", description="Поле документа с ключом")
    counter_key: str = Field(default="counter:value", description="Ключ счётчика")

    # =================================================================
    # Content Provider (OpenAI-compatible)
    # =================================================================
    provider_base_url: str = Field(
        default="https://ark.cn-beijing.volces.com/api/v3",
        description="Base URL OpenAI-совместимого API"
    )
    provider_model: str = Field(
        default="doubao-1-5-pro-32k-250115",
        description="Модель генерации"
    )
    http_timeout_seconds: int = Field(
        default=120,
        ge=1,
        le=600,
        description="Timeout HTTP запросов к провайдеру"
    )
    http_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Максимум повторов HTTP запросов к провайдеру"
    )

    # =================================================================
    # Fallback Content Source (blob storage)
    # =================================================================
    default_content_url: str = Field(
        default="http://localhost:9000/jd-generator/defaultJson.txt",
        description="URL документа с контентом по умолчанию"
    )
    system_prompt_url: str = Field(
        default="http://localhost:9000/jd-generator/systemPrompt.txt",
        description="URL документа с system prompt"
    )
    blob_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout загрузки документов"
    )

    # =================================================================
    # Task orchestration
    # =================================================================
    snapshot_debounce_ms: int = Field(
        default=200,
        ge=1,
        description="Задержка debounce для промежуточных снимков (мс)"
    )
    stream_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Максимальная длительность streaming генерации"
    )
    final_write_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Повторы финальной записи задачи"
    )
    final_write_backoff_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Базовая задержка между повторами финальной записи"
    )

    @property
    def snapshot_debounce_seconds(self) -> float:
        """Задержка debounce в секундах."""
        return self.snapshot_debounce_ms / 1000


# Singleton instance
settings = Settings()
