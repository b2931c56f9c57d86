"""Command-line entry point: serve the application with uvicorn."""

from __future__ import annotations

import uvicorn

from postboard.core.settings import get_app_settings


def main() -> None:
    settings = get_app_settings()
    uvicorn.run(
        "postboard.app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
