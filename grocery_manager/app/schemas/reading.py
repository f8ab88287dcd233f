from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from grocery_manager.app.db.models.core_types import ReadingOutcome


class ReadingCreate(BaseModel):
    input: str | None = Field(default=None, max_length=64)
    timestamp: datetime

    @field_validator("input", mode="before")
    @classmethod
    def _numbers_as_text(cls, v):
        # data.json édité à la main : {"input": 123} au lieu de "123"
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ReadingRead(BaseModel):
    id: int
    input: str | None
    timestamp: datetime
    processed: bool | None
    processed_at: datetime | None
    outcome: ReadingOutcome | None
    error: str | None

    class Config:
        from_attributes = True


class IngestReportRead(BaseModel):
    scanned: int
    decremented: int
    missing_input: int
    unknown_item: int
    failed: int
    unmarked: int
    skipped: int

    class Config:
        from_attributes = True
