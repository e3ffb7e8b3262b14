from __future__ import annotations

import logging
import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.routers.billing import router as billing_router
from app.shared.config import DEFAULT_ENV_FILE, Settings, SettingsError, load_settings


logger = logging.getLogger(__name__)

LISTEN_HOST = "0.0.0.0"
LISTEN_PORT = 8080


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title="Checkout Gateway")
    app.state.settings = settings
    app.include_router(billing_router)
    if not Path(settings.static_dir).is_dir():
        logger.warning("create_app: static directory not found static_dir=%s", settings.static_dir)
    # Mounted last so the API routes take precedence over files with the same path.
    app.mount(
        "/",
        StaticFiles(directory=settings.static_dir, html=True, check_dir=False),
        name="static",
    )
    return app


def run(env_file: str = DEFAULT_ENV_FILE) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )
    try:
        settings = load_settings(env_file)
    except SettingsError as exc:
        logger.critical("load_settings: %s", exc)
        sys.exit(1)

    app = create_app(settings)
    logger.info("Listening on :%s ...", LISTEN_PORT)
    uvicorn.run(app, host=LISTEN_HOST, port=LISTEN_PORT)


if __name__ == "__main__":
    run()
