from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    String,
    Integer,
    BigInteger,
    DateTime,
    Boolean,
    Text,
    Enum,
    UniqueConstraint,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from grocery_manager.app.db.base import Base
from grocery_manager.app.db.models.core_types import ReadingOutcome

# BIGINT en Postgres, INTEGER en SQLite (sinon pas d'autoincrement)
PK = BigInteger().with_variant(Integer, "sqlite")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------- SETTINGS ----------
class Setting(Base):
    __tablename__ = "settings"
    id: Mapped[int] = mapped_column(PK, primary_key=True)
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    value: Mapped[str] = mapped_column(String(64), nullable=False)  # ISO-8601

    __table_args__ = (UniqueConstraint("key", name="uq_settings_key"),)


# ---------- INVENTORY ----------
class Item(Base):
    __tablename__ = "items"
    id: Mapped[int] = mapped_column(PK, primary_key=True)
    item_no: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[str] = mapped_column(String(64), default="", nullable=False)

    current_stock_level: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    desired_stock_level: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("current_stock_level >= 0", name="ck_items_current_nonneg"),
        CheckConstraint("desired_stock_level >= 0", name="ck_items_desired_nonneg"),
    )


# ---------- READINGS (capteur / simulateur) ----------
class Reading(Base):
    __tablename__ = "grocery_items"
    id: Mapped[int] = mapped_column(PK, primary_key=True)

    # Numéro d'article attendu, mais rien n'est garanti côté producteur
    input: Mapped[str | None] = mapped_column(String(64))
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    # NULL = "absent" = pas encore traité
    processed: Mapped[bool | None] = mapped_column(Boolean)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    outcome: Mapped[ReadingOutcome | None] = mapped_column(Enum(ReadingOutcome, name="reading_outcome"))
    error: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (Index("ix_grocery_items_processed", "processed"),)
