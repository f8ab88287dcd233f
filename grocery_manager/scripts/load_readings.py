"""
Chargement en masse : data.json -> table grocery_items.

Chaque enregistrement doit fournir "input" et "timestamp" ; processed
reste absent, c'est l'ingestor qui le posera.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

from pydantic import ValidationError
from sqlalchemy.orm import Session

from grocery_manager.app.core.config import get_settings
from grocery_manager.app.core.logging_config import setup_logging
from grocery_manager.app.schemas.reading import ReadingCreate
from grocery_manager.services.readings import record_readings

logger = logging.getLogger("grocery.loader")


def parse_records(raw: list) -> tuple[list[ReadingCreate], int]:
    """Valide chaque enregistrement ; les invalides sont loggés et ignorés."""
    valid: list[ReadingCreate] = []
    rejected = 0
    for index, record in enumerate(raw):
        try:
            valid.append(ReadingCreate.model_validate(record))
        except ValidationError as e:
            rejected += 1
            logger.warning("Skipping record #%d: %s", index, e.errors()[0]["msg"])
    return valid, rejected


def load_readings(db: Session, path: Path) -> list[str | None]:
    """
    Lit le fichier et insère les readings valides.
    Retourne la liste des inputs enregistrés (vide si rien à faire).
    """
    if not path.exists():
        print(f"JSON file not found at {path}. Please make sure the file exists before running the script.")
        return []

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        print(f"Error reading JSON file: {e}")
        return []
    if not raw:
        print("No data to process.")
        return []

    payloads, rejected = parse_records(raw)
    rows = record_readings(db, payloads)
    if rejected:
        print(f"{rejected} invalid record(s) skipped.")
    return [row.input for row in rows]


def clear_file(path: Path) -> None:
    path.write_text("[]", encoding="utf-8")


def run_loader(
    path: Path,
    session_factory: Callable[[], Session],
    ask: Callable[[str], str] = input,
) -> list[str | None]:
    db = session_factory()
    try:
        saved = load_readings(db, path)
    finally:
        db.close()

    if not saved:
        return saved

    print("All data processed and sent to the database.")
    print("Successfully saved numbers:")
    print(", ".join(str(s) for s in saved))

    answer = ask("\nDo you want to delete the information in the JSON file? (yes/no): ")
    if answer.strip().lower() == "yes":
        clear_file(path)
        print("JSON file cleared.")
    else:
        print("JSON file was not cleared.")
    return saved


def main():
    from grocery_manager.app.db.session import SessionLocal

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    run_loader(Path(settings.readings_file), SessionLocal)


if __name__ == "__main__":
    main()
