from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from sqlalchemy.orm import Session

from grocery_manager.app.api.v1.router import router as v1_router
from grocery_manager.app.core.config import Settings, get_settings
from grocery_manager.app.core.logging_config import setup_logging
from grocery_manager.app.db.session import SessionLocal
from grocery_manager.app.web.views import router as web_router
from grocery_manager.services.ingestion import ReadingIngestor

logger = logging.getLogger("grocery.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    ingestor = None

    if settings.ingest_enabled:
        ingestor = ReadingIngestor(app.state.session_factory, interval=settings.ingest_interval_seconds)
        ingestor.start()
    app.state.ingestor = ingestor

    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    yield

    if ingestor:
        await ingestor.stop()
    logger.info("Shutting down %s", settings.app_name)


def create_app(
    settings: Settings | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.ingestor = None

    app.include_router(v1_router, prefix="/v1")
    app.include_router(web_router)
    return app


app = create_app()
