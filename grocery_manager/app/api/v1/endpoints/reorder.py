from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from grocery_manager.app.api.deps import get_db
from grocery_manager.app.schemas.reorder import ReplenishmentRead, ShortfallRead
from grocery_manager.services.app_settings import get_last_order_date
from grocery_manager.services.inventory import compute_shortfall
from grocery_manager.services.replenishment import replenish

router = APIRouter()


@router.get("/shortfall", response_model=ShortfallRead)
def get_shortfall(db: Session = Depends(get_db)):
    """
    Liste de courses (READ ONLY sur items)
    - needed_qty = desired - current, calculé à la volée
    - lastOrderDate est créé au premier appel s'il manque
    """
    last_order_date = get_last_order_date(db)
    return {
        "last_order_date": last_order_date,
        "lines": compute_shortfall(db),
    }


@router.post("/replenishments", response_model=ReplenishmentRead)
def create_replenishment(db: Session = Depends(get_db)):
    try:
        return replenish(db)
    except Exception as e:
        raise HTTPException(status_code=500, detail="Error updating order") from e
