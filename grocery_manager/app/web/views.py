from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from grocery_manager.app.api.deps import get_app_settings, get_db
from grocery_manager.app.core.config import Settings
from grocery_manager.app.schemas.item import ItemUpsert
from grocery_manager.app.web import pages
from grocery_manager.app.web.pdf import render_shopping_list_pdf
from grocery_manager.services.app_settings import get_last_order_date
from grocery_manager.services.inventory import compute_shortfall, list_items, upsert_item
from grocery_manager.services.replenishment import replenish

logger = logging.getLogger("grocery.web")

router = APIRouter()


def _to_main() -> RedirectResponse:
    # 303 : le navigateur refait un GET après un POST
    return RedirectResponse("/main", status_code=303)


@router.get("/", response_class=HTMLResponse)
def login_page():
    return pages.render_login()


@router.post("/authenticate")
def authenticate(
    customerNumber: str = Form(default=""),
    settings: Settings = Depends(get_app_settings),
):
    # égalité stricte, pas de trim ; aucun numéro configuré = personne n'entre
    if settings.customer_number is not None and customerNumber == settings.customer_number:
        return _to_main()
    logger.warning("Authentication failed")
    return HTMLResponse(pages.render_auth_error())


@router.get("/main", response_class=HTMLResponse)
def main_view(db: Session = Depends(get_db)):
    last_order_date = get_last_order_date(db)
    return pages.render_main(compute_shortfall(db), last_order_date)


@router.get("/main/shopping-list.pdf")
def shopping_list_pdf(db: Session = Depends(get_db)):
    last_order_date = get_last_order_date(db)
    content = render_shopping_list_pdf(compute_shortfall(db), last_order_date)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="shopping-list.pdf"'},
    )


@router.get("/my-products", response_class=HTMLResponse)
def products_view(db: Session = Depends(get_db)):
    return pages.render_products(list_items(db))


@router.get("/update-stock", response_class=HTMLResponse)
def update_stock_form():
    return pages.render_update_stock_form()


@router.post("/update-order-date")
def update_order_date(db: Session = Depends(get_db)):
    try:
        replenish(db)
    except Exception:
        return PlainTextResponse("Error updating order", status_code=500)
    return _to_main()


@router.post("/update-stock")
def update_stock(
    itemNo: str = Form(default=""),
    itemName: str = Form(default=""),
    size: str = Form(default=""),
    desiredStockLevel: str = Form(default=""),
    currentStockLevel: str = Form(default=""),
    db: Session = Depends(get_db),
):
    try:
        payload = ItemUpsert(
            item_no=itemNo,
            item_name=itemName,
            size=size,
            desired_stock_level=desiredStockLevel,
            current_stock_level=currentStockLevel,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        return HTMLResponse(
            pages.render_error("Invalid product", f"Invalid value for: {fields}", retry_href="/update-stock"),
            status_code=400,
        )

    upsert_item(db, payload)
    return _to_main()
