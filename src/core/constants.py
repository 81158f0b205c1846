"""Константы для JD Generator.

Централизованное хранилище всех магических чисел и строк.
"""

# === HTTP и API ===
API_PREFIX = "/api"

# === Заголовки ===
TRACE_ID_HEADER = "x-trace-id"
WX_SOURCE_HEADER = "x-wx-source"
WX_OPENID_HEADER = "x-wx-openid"

# === Идентификаторы задач ===
TASK_ID_PREFIX = "task_"
TASK_ID_SUFFIX_LENGTH = 9
TASK_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

# === Поля документов задач ===
TASK_DOC_ID_FIELD = "_id"

# === Роли сообщений ===
ROLE_SYSTEM = "system"
ROLE_USER = "user"

# === Server ===
DEFAULT_APP_VERSION = "1.0.0"
