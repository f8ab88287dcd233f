from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from grocery_manager.app.db.models.models_v1 import Reading
from grocery_manager.app.db.models.core_types import ReadingOutcome
from grocery_manager.app.schemas.reading import ReadingCreate

logger = logging.getLogger("grocery.readings")


def record_readings(db: Session, payloads: Iterable[ReadingCreate]) -> list[Reading]:
    """
    Insère des readings bruts, processed absent (NULL).

    Une seule transaction pour tout le lot.
    """
    rows = [Reading(input=p.input, timestamp=p.timestamp) for p in payloads]
    try:
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        raise

    for row in rows:
        db.refresh(row)
    logger.info("Inserted %d reading(s)", len(rows))
    return rows


def list_readings(
    db: Session,
    *,
    processed: bool | None = None,
    outcome: ReadingOutcome | None = None,
    limit: int = 200,
) -> list[Reading]:
    stmt = select(Reading).order_by(Reading.id.desc()).limit(limit)

    if processed is True:
        stmt = stmt.where(Reading.processed.is_(True))
    elif processed is False:
        stmt = stmt.where(Reading.processed.is_not(True))

    if outcome is not None:
        stmt = stmt.where(Reading.outcome == outcome)

    return list(db.execute(stmt).scalars().all())
