from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from grocery_manager.app.db.session import SessionLocal
from grocery_manager.app.db.models.models_v1 import Item
from grocery_manager.services.app_settings import get_last_order_date

# (item_no, name, size, current, desired)
DEMO_ITEMS = [
    ("101", "Milk", "1 L", 2, 4),
    ("102", "Eggs", "12 pcs", 1, 2),
    ("103", "Bread", "800 g", 1, 1),
    ("104", "Coffee", "500 g", 0, 2),
]


def seed(db: Session) -> int:
    """Insère les articles de démo manquants + lastOrderDate. Idempotent."""
    created = 0
    for item_no, name, size, current, desired in DEMO_ITEMS:
        exists = db.scalar(select(Item).where(Item.item_no == item_no))
        if exists:
            continue
        db.add(
            Item(
                item_no=item_no,
                item_name=name,
                size=size,
                current_stock_level=current,
                desired_stock_level=desired,
            )
        )
        created += 1
    db.commit()

    get_last_order_date(db)
    return created


def run_seed():
    db = SessionLocal()
    try:
        created = seed(db)
        print(f"SEED OK: {created} item(s) created")
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()
