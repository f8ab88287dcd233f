"""
Simulateur de capteur.

Demande un numéro à 3 chiffres et un décalage en jours, puis ajoute
{"input": "<numéro>", "timestamp": <maintenant - jours>} au fichier JSON
(data.json par défaut). "exit" pour quitter.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

from grocery_manager.app.core.config import get_settings

NUMBER_RE = re.compile(r"\d{3}")


def is_valid_number(value: str) -> bool:
    return NUMBER_RE.fullmatch(value) is not None


def parse_days(value: str) -> int | None:
    try:
        days = int(value)
    except ValueError:
        return None
    return days if days >= 0 else None


def append_reading(path: Path, number: str, days_back: int, *, now: datetime | None = None) -> dict:
    now = now or datetime.now(timezone.utc)
    record = {
        "input": str(number),
        "timestamp": (now - timedelta(days=days_back)).isoformat(),
    }

    data = json.loads(path.read_text(encoding="utf-8")) if path.exists() else []
    data.append(record)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return record


def run_simulator(path: Path, ask: Callable[[str], str] = input) -> int:
    """Boucle interactive. Retourne le nombre de readings écrits."""
    written = 0
    while True:
        number = ask('\nPlease enter a 3-digit number or type "exit" to quit: ').strip()
        if number.lower() == "exit":
            print("\nExiting...\n")
            return written

        if not is_valid_number(number):
            print("\nInvalid input. Please enter a 3-digit number.")
            continue

        days = parse_days(ask("\nHow many days in the past do you want to adjust the timestamp? ").strip())
        if days is None:
            print("\nInvalid input. Please enter a valid number of days.")
            continue

        append_reading(path, number, days)
        written += 1
        print(f"\nNumber {number} with adjusted timestamp saved to {path.name}\n")


def main():
    run_simulator(Path(get_settings().readings_file))


if __name__ == "__main__":
    main()
