from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from grocery_manager.app.db.models.models_v1 import Item
from grocery_manager.app.schemas.item import ItemUpsert

logger = logging.getLogger("grocery.inventory")


@dataclass(frozen=True)
class ShortfallLine:
    item_no: str
    item_name: str
    size: str
    current_stock_level: int
    desired_stock_level: int
    needed_qty: int

    @classmethod
    def from_item(cls, item: Item) -> "ShortfallLine":
        return cls(
            item_no=item.item_no,
            item_name=item.item_name,
            size=item.size,
            current_stock_level=item.current_stock_level,
            desired_stock_level=item.desired_stock_level,
            needed_qty=item.desired_stock_level - item.current_stock_level,
        )


def shortfall_query():
    """Articles en rupture : current < desired (strict, égalité = pas en manque)."""
    return (
        select(Item)
        .where(Item.current_stock_level < Item.desired_stock_level)
        .order_by(Item.item_no)
    )


def compute_shortfall(db: Session) -> list[ShortfallLine]:
    """
    Liste de courses calculée à la lecture.

    Lecture pure, aucune écriture. needed_qty = desired - current, toujours > 0.
    """
    items = db.execute(shortfall_query()).scalars().all()
    return [ShortfallLine.from_item(item) for item in items]


def list_items(db: Session) -> list[Item]:
    return list(db.execute(select(Item).order_by(Item.item_no)).scalars().all())


def get_item(db: Session, item_no: str) -> Item | None:
    return db.execute(select(Item).where(Item.item_no == item_no)).scalar_one_or_none()


def upsert_item(
    db: Session,
    payload: ItemUpsert,
    *,
    now: datetime | None = None,
) -> tuple[Item, bool]:
    """
    Crée ou écrase un article, clé = item_no.

    Les niveaux de stock arrivent déjà validés (entiers >= 0) par ItemUpsert.
    Retourne (item, created).
    """
    now = now or datetime.now(timezone.utc)

    try:
        item = (
            db.execute(
                select(Item)
                .where(Item.item_no == payload.item_no)
                .with_for_update()
            )
            .scalar_one_or_none()
        )
        created = item is None
        if created:
            item = Item(item_no=payload.item_no)
            db.add(item)

        item.item_name = payload.item_name
        item.size = payload.size
        item.desired_stock_level = payload.desired_stock_level
        item.current_stock_level = payload.current_stock_level
        item.last_updated = now

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(item)
    logger.info("%s item %s", "Created" if created else "Updated", item.item_no)
    return item, created
