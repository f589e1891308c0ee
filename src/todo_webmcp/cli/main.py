# src/todo_webmcp/cli/main.py

"""
CLI entrypoint.

Initializes logging, opens the store, builds the FastAPI app and serves it
with uvicorn until interrupted. Failing to open the store or to bind the
listener aborts the process.
"""

from __future__ import annotations

import logging

import uvicorn

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..logging_setup import setup_logging
from ..web.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logging.getLogger("multipart").setLevel(logging.WARNING)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except Exception:
        logger.exception("Failed to open todo store at %s", settings.db_path)
        raise SystemExit(1)

    app = create_app(state)

    logger.info("Server running on http://localhost:%s", settings.port)
    try:
        # log_config=None: uvicorn's loggers propagate into our handlers.
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
