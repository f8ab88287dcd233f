"""
Cycle de réapprovisionnement ("Order").

Remet chaque article en manque à son niveau désiré puis recale
lastOrderDate sur maintenant. Tout se fait dans UNE transaction :
soit tout est commité, soit rien.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from grocery_manager.services.app_settings import set_last_order_date
from grocery_manager.services.inventory import ShortfallLine, shortfall_query

logger = logging.getLogger("grocery.replenishment")


@dataclass
class ReplenishmentResult:
    ordered_at: datetime
    lines: list[ShortfallLine] = field(default_factory=list)


def replenish(db: Session, *, now: datetime | None = None) -> ReplenishmentResult:
    """
    Règle métier :
        pour chaque article où current < desired :
            current = current + (desired - current)   # = desired
        puis lastOrderDate = now, même si la liste est vide.

    La liste est recalculée ici (pas de réutilisation de la vue précédente),
    avec verrouillage des lignes (FOR UPDATE) pendant la transaction.
    """
    now = now or datetime.now(timezone.utc)
    result = ReplenishmentResult(ordered_at=now)

    try:
        items = db.execute(shortfall_query().with_for_update()).scalars().all()

        for item in items:
            line = ShortfallLine.from_item(item)
            item.current_stock_level = item.current_stock_level + line.needed_qty
            item.last_updated = now
            result.lines.append(line)

        set_last_order_date(db, now)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error updating order")
        raise

    logger.info("Replenished %d item(s), lastOrderDate=%s", len(result.lines), now.isoformat())
    return result
