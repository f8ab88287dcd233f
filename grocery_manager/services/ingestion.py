"""
Ingestion des readings (capteur / simulateur).

Chaque reading non traité identifie un article à décrémenter de 1.
Politique : au plus une fois, best-effort. Chaque passe réclame le reading
(UPDATE conditionnel) avant de toucher au stock. Un reading est TOUJOURS marqué
processed après son passage, même en erreur, pour ne jamais bloquer la
file sur un enregistrement empoisonné. L'erreur reste visible via
Reading.outcome / Reading.error et via l'IngestReport retourné.

Usage:
    ingestor = ReadingIngestor(SessionLocal, interval=60)
    ingestor.start()      # tâche asyncio en arrière-plan
    ingestor.run_once()   # passe manuelle (tests, endpoint /v1/readings/ingest)
    await ingestor.stop()  # attend la fin de la tâche
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from grocery_manager.app.db.models.models_v1 import Item, Reading
from grocery_manager.app.db.models.core_types import ReadingOutcome

logger = logging.getLogger("grocery.ingestor")


@dataclass
class IngestReport:
    scanned: int = 0
    decremented: int = 0
    missing_input: int = 0
    unknown_item: int = 0
    failed: int = 0
    # lectures qu'on n'a même pas pu marquer (store KO) : reprises au prochain tick
    unmarked: int = 0
    # déjà réclamées par une passe concurrente
    skipped: int = 0

    def record(self, outcome: ReadingOutcome) -> None:
        name = outcome.name
        setattr(self, name, getattr(self, name) + 1)

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def unprocessed_query():
    # ids des readings processed = false OU absent (NULL)
    return (
        select(Reading.id)
        .where(or_(Reading.processed.is_(False), Reading.processed.is_(None)))
        .order_by(Reading.id.asc())
    )


def _mark(reading: Reading, outcome: ReadingOutcome, now: datetime, error: str | None = None) -> None:
    reading.processed = True
    reading.processed_at = now
    reading.outcome = outcome
    reading.error = error


def _apply_reading(db: Session, reading: Reading, now: datetime) -> ReadingOutcome:
    item_no = (reading.input or "").strip()

    if not item_no:
        logger.error("'input' is missing in reading id=%s", reading.id)
        _mark(reading, ReadingOutcome.missing_input, now, error="missing input")
        return ReadingOutcome.missing_input

    item = (
        db.execute(
            select(Item)
            .where(Item.item_no == item_no)
            .with_for_update()
        )
        .scalar_one_or_none()
    )
    if not item:
        logger.error("No item found with item_no=%s (reading id=%s)", item_no, reading.id)
        _mark(reading, ReadingOutcome.unknown_item, now, error=f"unknown item {item_no}")
        return ReadingOutcome.unknown_item

    new_level = item.current_stock_level - 1
    if new_level < 0:
        new_level = 0

    item.current_stock_level = new_level
    item.last_updated = now
    _mark(reading, ReadingOutcome.decremented, now)

    logger.info("Item %s stock -> %d (reading id=%s)", item_no, new_level, reading.id)
    return ReadingOutcome.decremented


def _claim(db: Session, reading_id: int, now: datetime) -> Reading | None:
    """
    Prend le reading pour cette passe : UPDATE conditionnel, une seule
    passe concurrente voit rowcount == 1. Le claim vit dans la transaction
    du reading, un rollback le libère.
    """
    result = db.execute(
        update(Reading)
        .where(Reading.id == reading_id, Reading.processed.is_not(True))
        .values(processed=True, processed_at=now)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        return None
    return db.get(Reading, reading_id, populate_existing=True)


def _mark_failed(db: Session, reading_id: int, now: datetime, error: str) -> bool:
    result = db.execute(
        update(Reading)
        .where(Reading.id == reading_id, Reading.processed.is_not(True))
        .values(
            processed=True,
            processed_at=now,
            outcome=ReadingOutcome.failed,
            error=error[:1000],
        )
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1


def process_new_readings(db: Session, *, now: datetime | None = None) -> IngestReport:
    """
    Une passe d'ingestion.

    - séquentiel, une transaction par reading
    - chaque reading est d'abord réclamé ; déjà pris par une autre passe => skipped
    - une erreur sur un reading => rollback de CE reading, puis marqué FAILED
    - une erreur sur la requête initiale remonte à l'appelant
    """
    now = now or datetime.now(timezone.utc)
    report = IngestReport()

    reading_ids = db.execute(unprocessed_query()).scalars().all()
    db.commit()
    report.scanned = len(reading_ids)
    logger.info("Found %d unprocessed reading(s)", report.scanned)

    for reading_id in reading_ids:
        try:
            reading = _claim(db, reading_id, now)
            if reading is None:
                db.rollback()
                logger.info("Reading id=%s already taken by another pass", reading_id)
                report.skipped += 1
                continue
            outcome = _apply_reading(db, reading, now)
            db.commit()
        except Exception as exc:
            db.rollback()
            logger.exception("Error processing reading id=%s", reading_id)
            try:
                marked = _mark_failed(db, reading_id, now, f"{type(exc).__name__}: {exc}")
            except Exception:
                db.rollback()
                logger.exception("Could not mark reading id=%s as processed", reading_id)
                report.unmarked += 1
                continue
            if not marked:
                report.skipped += 1
                continue
            outcome = ReadingOutcome.failed

        report.record(outcome)

    if report.scanned:
        logger.info("Finished processing %d reading(s): %s", report.scanned, report.as_dict())
    else:
        logger.info("No new readings to process")
    return report


class ReadingIngestor:
    """Tâche périodique d'ingestion, avec start / stop et déclenchement manuel."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        interval: float = 60,
    ):
        self.session_factory = session_factory
        self.interval = interval
        self.last_report: IngestReport | None = None
        self._task: asyncio.Task | None = None
        # passe en cours dans le thread pool
        self._pass: asyncio.Future | None = None

    def start(self) -> None:
        """Lance la boucle en tâche de fond (nécessite une event loop active)."""
        if self._task and not self._task.done():
            logger.warning("Ingestor already running")
            return
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Reading ingestor started (interval=%ss)", self.interval)

    async def stop(self) -> None:
        """Annule la boucle puis attend la passe éventuellement en cours."""
        task = self._task
        if task is None:
            return
        if not task.done():
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

        current = self._pass
        if current is not None and not current.done():
            try:
                await current
            except Exception:
                logger.exception("Ingestor pass failed during shutdown")
        logger.info("Reading ingestor stopped")

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> IngestReport:
        db = self.session_factory()
        try:
            report = process_new_readings(db)
        finally:
            db.close()
        self.last_report = report
        return report

    async def _run_loop(self) -> None:
        while True:
            # Session SQLAlchemy synchrone : on sort de l'event loop.
            # shield : une annulation n'abandonne pas la passe, stop() l'attend
            self._pass = asyncio.ensure_future(asyncio.to_thread(self.run_once))
            try:
                await asyncio.shield(self._pass)
            except asyncio.CancelledError:
                break
            except Exception:
                # store KO : on log, le timer continue
                logger.exception("Ingestor tick failed")
            await asyncio.sleep(self.interval)
