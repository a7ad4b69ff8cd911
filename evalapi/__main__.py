"""Run the API with uvicorn: ``python -m evalapi``."""

from __future__ import annotations

import structlog
import uvicorn

from evalapi.api.main import DOCS_URL, app

logger = structlog.get_logger()


def main() -> None:
    settings = app.state.settings
    logger.info(
        "server_listening",
        url=f"http://{settings.host}:{settings.port}",
        docs=f"http://localhost:{settings.port}{DOCS_URL}",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
