"""Unit тесты для shared/logging."""

import logging
from unittest.mock import patch

import orjson
import pytest
from loguru import logger

from src.shared.errors.context import set_trace_id
from src.shared.logging import (
    InterceptHandler,
    configure_third_party_loggers,
    get_logger,
    json_formatter,
    sanitize_sensitive_data,
    setup_logging,
)


@pytest.fixture
def json_records():
    """Собрать записи, отформатированные json_formatter."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(str(message)), format=json_formatter, level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)


class TestInterceptHandler:
    """Тесты для InterceptHandler."""

    def test_intercept_handler_emit(self) -> None:
        """Тест обработки лог записи стандартного logging."""
        handler = InterceptHandler()
        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="test.py",
            lineno=10,
            msg="Test message",
            args=(),
            exc_info=None,
        )

        try:
            handler.emit(record)
        except Exception as e:
            pytest.fail(f"emit() raised an exception: {e}")


class TestSetupLogging:
    """Тесты для setup_logging."""

    def test_setup_logging_development(self) -> None:
        """Тест настройки логирования для development."""
        with patch("src.shared.logging.config.settings") as mock_settings:
            mock_settings.app_env = "development"
            mock_settings.log_level = "INFO"
            mock_settings.log_file = None
            mock_settings.debug = False

            setup_logging()

        get_logger().info("Проверка логгера")

    def test_setup_logging_with_file(self, tmp_path) -> None:
        """Тест: файловый sink создаёт файл логов."""
        log_file = tmp_path / "logs" / "app.log"

        with patch("src.shared.logging.config.settings") as mock_settings:
            mock_settings.app_env = "development"
            mock_settings.log_level = "INFO"
            mock_settings.log_file = str(log_file)
            mock_settings.debug = False

            setup_logging()

        get_logger().info("Запись в файл")
        logger.complete()

        assert log_file.exists()
        setup_logging()


class TestConfigureThirdPartyLoggers:
    """Тесты для configure_third_party_loggers."""

    @pytest.mark.parametrize("name", ["uvicorn", "fastapi", "httpx", "openai", "redis"])
    def test_logger_intercepted(self, name: str) -> None:
        """Тест что логгеры библиотек перенаправлены в Loguru."""
        configure_third_party_loggers()

        std_logger = logging.getLogger(name)
        assert any(isinstance(h, InterceptHandler) for h in std_logger.handlers)
        assert std_logger.propagate is False


class TestJsonFormatter:
    """Тесты JSON формата."""

    def test_json_record_contains_extra(self, json_records: list[str]) -> None:
        """Тест: kwargs попадают в JSON запись."""
        get_logger().info("Задача создана", task_id="task_1", total_tokens=7)

        entry = orjson.loads(json_records[0])
        assert entry["message"] == "Задача создана"
        assert entry["level"] == "INFO"
        assert entry["task_id"] == "task_1"
        assert entry["total_tokens"] == 7

    def test_json_record_redacts_secrets(self, json_records: list[str]) -> None:
        """Тест: чувствительные ключи маскируются."""
        get_logger().warning("Ключ прочитан", api_key="sk-secret")

        entry = orjson.loads(json_records[0])
        assert entry["api_key"] == "***REDACTED***"
        assert "sk-secret" not in json_records[0]

    def test_json_record_has_trace_id(self) -> None:
        """Тест: trace_id запроса добавляется patcher."""
        setup_logging()
        records: list[str] = []
        handler_id = logger.add(
            lambda message: records.append(str(message)), format=json_formatter, level="DEBUG"
        )
        set_trace_id("trace-xyz")

        try:
            get_logger().info("С trace_id")
        finally:
            logger.remove(handler_id)
            set_trace_id("")

        entry = orjson.loads(records[-1])
        assert entry["trace_id"] == "trace-xyz"

    def test_json_record_with_exception(self, json_records: list[str]) -> None:
        """Тест: исключение сериализуется типом и текстом."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            get_logger().exception("Ошибка")

        entry = orjson.loads(json_records[0])
        assert entry["exception"] == {"type": "RuntimeError", "value": "boom"}


class TestSanitize:
    """Тесты маскирования credentials."""

    @pytest.mark.parametrize(
        ("text", "secret"),
        [
            ('{"api_key": "sk-123"}', "sk-123"),
            ("Authorization: Bearer abc.def-ghi", "abc.def-ghi"),
            ("redis://host?password=hunter2", "hunter2"),
        ],
    )
    def test_sanitize_sensitive_data(self, text: str, secret: str) -> None:
        """Тест удаления секретов из строки."""
        assert secret not in sanitize_sensitive_data(text)
