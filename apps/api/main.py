# apps/api/main.py
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from apps.api.routers.health import router as health_router
from apps.api.routers.weapons import router as weapons_router
from weapon_calculator import __version__
from weapon_calculator.defaults import REGULATION_BASE_URL, REGULATION_DATA_DIR


def _setup_logger() -> logging.Logger:
    logger = logging.getLogger("api")
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[API] %(asctime)s | %(levelname)s | %(message)s"))
        logger.addHandler(h)
    logger.propagate = False
    return logger


def create_app(data_dir: str | Path | None = None, base_url: str | None = None) -> FastAPI:
    app = FastAPI(title="Weapon Calculator API", version=__version__)

    # ---- Logger ----
    logger = _setup_logger()
    app.state.logger = logger

    # ---- Regulation data ----
    app.state.data_dir = Path(data_dir or REGULATION_DATA_DIR)
    app.state.base_url = REGULATION_BASE_URL if base_url is None else base_url
    app.state.regulations = {}
    if app.state.base_url:
        logger.info("Regulation data served from %s", app.state.base_url)
    else:
        logger.info("Regulation data read from %s", app.state.data_dir)

    # ---- Middleware ----
    app.add_middleware(GZipMiddleware, minimum_size=1024)

    # ---- Routers ----
    app.include_router(weapons_router, tags=["weapons"])
    app.include_router(health_router, tags=["meta"])

    return app


app = create_app()
