from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from grocery_manager.app.api.deps import get_db
from grocery_manager.app.schemas.item import ItemRead, ItemUpsert
from grocery_manager.services.inventory import get_item, list_items, upsert_item

router = APIRouter(prefix="/items")


@router.get("", response_model=list[ItemRead])
def list_all_items(db: Session = Depends(get_db)):
    return list_items(db)


@router.get("/{item_no}", response_model=ItemRead)
def get_one_item(item_no: str, db: Session = Depends(get_db)):
    item = get_item(db, item_no)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.post("")
def upsert(payload: ItemUpsert, db: Session = Depends(get_db)):
    item, created = upsert_item(db, payload)
    return {
        "created": created,
        "item": ItemRead.model_validate(item),
    }
