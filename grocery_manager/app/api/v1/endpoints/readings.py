from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from grocery_manager.app.api.deps import get_db
from grocery_manager.app.db.models.core_types import ReadingOutcome
from grocery_manager.app.schemas.reading import IngestReportRead, ReadingCreate, ReadingRead
from grocery_manager.services.ingestion import process_new_readings
from grocery_manager.services.readings import list_readings, record_readings

router = APIRouter(prefix="/readings")


class ReadingBatch(BaseModel):
    readings: list[ReadingCreate] = Field(default_factory=list)


@router.get("", response_model=list[ReadingRead])
def get_readings(
    processed: bool | None = None,
    outcome: ReadingOutcome | None = None,
    limit: int = Query(200, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    # outcome=UNKNOWN_ITEM / MISSING_INPUT / FAILED : readings écartés par l'ingestor
    return list_readings(db, processed=processed, outcome=outcome, limit=limit)


@router.post("", response_model=list[ReadingRead])
def post_readings(payload: ReadingBatch, db: Session = Depends(get_db)):
    return record_readings(db, payload.readings)


@router.post("/ingest", response_model=IngestReportRead)
def run_ingest(db: Session = Depends(get_db)):
    """Passe d'ingestion immédiate, sans attendre le prochain tick."""
    return process_new_readings(db)
