from __future__ import annotations

from typing import Generator

from fastapi import Request

from grocery_manager.app.core.config import Settings, get_settings
from grocery_manager.app.db.session import SessionLocal


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_app_settings(request: Request) -> Settings:
    # create_app(settings=...) pose l'instance sur app.state
    return getattr(request.app.state, "settings", None) or get_settings()
