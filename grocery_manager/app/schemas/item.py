from datetime import datetime

from pydantic import BaseModel, Field


class ItemUpsert(BaseModel):
    item_no: str = Field(min_length=1, max_length=64)
    item_name: str = Field(min_length=1, max_length=255)
    size: str = Field(default="", max_length=64)
    # entiers >= 0 : "abc", "2.5" ou -1 sont refusés (pas de NaN en base)
    desired_stock_level: int = Field(ge=0)
    current_stock_level: int = Field(ge=0)

    class Config:
        str_strip_whitespace = True


class ItemRead(BaseModel):
    item_no: str
    item_name: str
    size: str
    current_stock_level: int
    desired_stock_level: int
    last_updated: datetime

    class Config:
        from_attributes = True
