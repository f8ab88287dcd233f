import json
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from grocery_manager.app.db.models.models_v1 import Item, Reading
from grocery_manager.app.db.seed import DEMO_ITEMS, seed
from grocery_manager.scripts.load_readings import load_readings, parse_records, run_loader
from grocery_manager.scripts.simulator import append_reading, is_valid_number, parse_days, run_simulator


def _answers(*values):
    it = iter(values)
    return lambda prompt: next(it)


# ---------- simulator ----------
def test_number_validation():
    assert is_valid_number("123")
    assert not is_valid_number("12")
    assert not is_valid_number("1234")
    assert not is_valid_number("12a")


def test_days_validation():
    assert parse_days("0") == 0
    assert parse_days("3") == 3
    assert parse_days("-1") is None
    assert parse_days("soon") is None


def test_append_reading_shifts_timestamp_into_the_past(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("[]", encoding="utf-8")
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    record = append_reading(path, "101", 2, now=now)

    assert record == {"input": "101", "timestamp": (now - timedelta(days=2)).isoformat()}
    assert json.loads(path.read_text(encoding="utf-8")) == [record]


def test_run_simulator_loops_until_exit(tmp_path, capsys):
    path = tmp_path / "data.json"

    written = run_simulator(path, ask=_answers("101", "0", "99", "102", "x", "102", "1", "exit"))

    assert written == 2
    assert [r["input"] for r in json.loads(path.read_text(encoding="utf-8"))] == ["101", "102"]
    out = capsys.readouterr().out
    assert "Please enter a 3-digit number" in out
    assert "valid number of days" in out


# ---------- loader ----------
def test_parse_records_skips_invalid_ones():
    valid, rejected = parse_records(
        [
            {"input": "101", "timestamp": "2026-10-18T10:00:00+00:00"},
            {"input": 102, "timestamp": "2026-10-18T10:00:00+00:00"},
            {"input": "103"},
        ]
    )

    assert [p.input for p in valid] == ["101", "102"]
    assert rejected == 1


def test_load_readings_inserts_unprocessed_rows(tmp_path, db_session):
    path = tmp_path / "data.json"
    path.write_text(
        json.dumps(
            [
                {"input": "101", "timestamp": "2026-10-18T10:00:00+00:00"},
                {"input": "102", "timestamp": "2026-10-17T10:00:00+00:00"},
            ]
        ),
        encoding="utf-8",
    )

    saved = load_readings(db_session, path)

    assert saved == ["101", "102"]
    rows = db_session.execute(select(Reading).order_by(Reading.id)).scalars().all()
    assert [(r.input, r.processed) for r in rows] == [("101", None), ("102", None)]


def test_load_readings_missing_or_empty_file(tmp_path, db_session):
    assert load_readings(db_session, tmp_path / "nope.json") == []

    empty = tmp_path / "empty.json"
    empty.write_text("[]", encoding="utf-8")
    assert load_readings(db_session, empty) == []
    assert db_session.execute(select(Reading)).scalars().all() == []


def test_load_readings_invalid_json(tmp_path, db_session, capsys):
    path = tmp_path / "data.json"
    path.write_text('[{"input": "101", ', encoding="utf-8")

    assert load_readings(db_session, path) == []
    assert "Error reading JSON file" in capsys.readouterr().out
    assert db_session.execute(select(Reading)).scalars().all() == []


def test_run_loader_clears_file_on_yes(tmp_path, session_factory):
    path = tmp_path / "data.json"
    path.write_text(json.dumps([{"input": "101", "timestamp": "2026-10-18T10:00:00+00:00"}]), encoding="utf-8")

    saved = run_loader(path, session_factory, ask=_answers("yes"))

    assert saved == ["101"]
    assert path.read_text(encoding="utf-8") == "[]"


def test_run_loader_keeps_file_on_no(tmp_path, session_factory):
    path = tmp_path / "data.json"
    content = json.dumps([{"input": "101", "timestamp": "2026-10-18T10:00:00+00:00"}])
    path.write_text(content, encoding="utf-8")

    run_loader(path, session_factory, ask=_answers("no"))

    assert path.read_text(encoding="utf-8") == content


# ---------- seed ----------
def test_seed_is_idempotent(db_session):
    assert seed(db_session) == len(DEMO_ITEMS)
    assert seed(db_session) == 0
    assert len(db_session.execute(select(Item)).scalars().all()) == len(DEMO_ITEMS)
