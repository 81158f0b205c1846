"""JD Generator - Entry Point.

Запускает FastAPI приложение через uvicorn.
"""

import uvicorn

from config.settings import settings


def main() -> None:
    """Запустить JD Generator."""
    uvicorn.run(
        "src.app:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,  # Auto-reload только в debug
        log_level=settings.log_level.lower(),
        access_log=settings.debug,  # Access log только в debug
        workers=1,  # Фоновые генерации живут в процессе, который их запустил
    )


if __name__ == "__main__":
    main()
