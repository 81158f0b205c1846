"""Shared errors module.

Система обработки ошибок приложения.
"""

from src.shared.errors.base import AppException
from src.shared.errors.context import get_trace_id, peek_trace_id, set_trace_id, trace_id_var
from src.shared.errors.decorators import storage_errors
from src.shared.errors.domain_errors import (
    BlobFetchError,
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
    StreamFailureError,
    StreamTimeoutError,
    TaskAlreadyExistsError,
    TaskNotFoundError,
    UpstreamError,
)
from src.shared.errors.handlers import setup_exception_handlers
from src.shared.errors.schemas import ErrorDetail, ErrorResponse

__all__ = [
    # Base
    "AppException",
    # Context
    "trace_id_var",
    "get_trace_id",
    "peek_trace_id",
    "set_trace_id",
    # Domain errors
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "UpstreamError",
    "TaskNotFoundError",
    "TaskAlreadyExistsError",
    "StreamFailureError",
    "StreamTimeoutError",
    "BlobFetchError",
    # Handlers
    "setup_exception_handlers",
    # Decorators
    "storage_errors",
    # Schemas
    "ErrorDetail",
    "ErrorResponse",
]
