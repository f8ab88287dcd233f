"""
Accès à la table settings (clé / valeur).

Seule clé utilisée : lastOrderDate, stockée en ISO-8601.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from grocery_manager.app.db.models.models_v1 import Setting
from grocery_manager.app.db.models.core_types import LAST_ORDER_DATE_KEY

logger = logging.getLogger("grocery.settings")

# Valeur initiale quand aucune commande n'a encore été passée
DEFAULT_ORDER_LOOKBACK = timedelta(days=7)


def _parse(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _find(db: Session, key: str) -> Setting | None:
    return db.execute(select(Setting).where(Setting.key == key)).scalar_one_or_none()


def get_last_order_date(db: Session, *, now: datetime | None = None) -> datetime:
    """
    Get-or-create de lastOrderDate.

    Si la ligne n'existe pas, on l'insère à now - 7 jours. L'unicité est
    garantie par uq_settings_key : si un autre process gagne la course,
    l'INSERT lève IntegrityError et on relit sa valeur.
    """
    setting = _find(db, LAST_ORDER_DATE_KEY)
    if setting:
        return _parse(setting.value)

    now = now or datetime.now(timezone.utc)
    initial = now - DEFAULT_ORDER_LOOKBACK
    db.add(Setting(key=LAST_ORDER_DATE_KEY, value=initial.isoformat()))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        setting = _find(db, LAST_ORDER_DATE_KEY)
        if setting is None:
            raise
        return _parse(setting.value)

    logger.info("Inserted lastOrderDate as 1 week ago (%s)", initial.isoformat())
    return initial


def set_last_order_date(db: Session, when: datetime) -> None:
    """Upsert de lastOrderDate. Ne commit pas : l'appelant garde la transaction."""
    setting = _find(db, LAST_ORDER_DATE_KEY)
    if not setting:
        setting = Setting(key=LAST_ORDER_DATE_KEY, value=when.isoformat())
        db.add(setting)
        db.flush()
        return

    setting.value = when.isoformat()
