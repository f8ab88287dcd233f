from datetime import datetime

from pydantic import BaseModel


class ShortfallLineRead(BaseModel):
    item_no: str
    item_name: str
    size: str
    current_stock_level: int
    desired_stock_level: int
    needed_qty: int

    class Config:
        from_attributes = True


class ShortfallRead(BaseModel):
    last_order_date: datetime
    lines: list[ShortfallLineRead]


class ReplenishmentRead(BaseModel):
    ordered_at: datetime
    lines: list[ShortfallLineRead]

    class Config:
        from_attributes = True
