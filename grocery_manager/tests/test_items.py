from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from grocery_manager.app.schemas.item import ItemUpsert
from grocery_manager.services.inventory import get_item, list_items, upsert_item


def _payload(**overrides):
    data = {
        "item_no": "A1",
        "item_name": "Milk",
        "size": "1 L",
        "desired_stock_level": 4,
        "current_stock_level": 2,
    }
    data.update(overrides)
    return ItemUpsert(**data)


def test_upsert_creates_missing_item(db_session):
    now = datetime(2026, 10, 19, tzinfo=timezone.utc)

    item, created = upsert_item(db_session, _payload(), now=now)

    assert created is True
    assert item.item_no == "A1"
    assert item.current_stock_level == 2
    assert item.desired_stock_level == 4
    assert item.last_updated is not None


def test_upsert_overwrites_existing_item(db_session):
    upsert_item(db_session, _payload())

    item, created = upsert_item(
        db_session,
        _payload(item_name="Oat milk", size="2 L", desired_stock_level=6, current_stock_level=0),
    )

    assert created is False
    assert [i.item_no for i in list_items(db_session)] == ["A1"]
    stored = get_item(db_session, "A1")
    assert stored.item_name == "Oat milk"
    assert stored.size == "2 L"
    assert stored.desired_stock_level == 6
    assert stored.current_stock_level == 0


def test_numeric_strings_are_parsed():
    payload = _payload(desired_stock_level="7", current_stock_level="3")

    assert payload.desired_stock_level == 7
    assert payload.current_stock_level == 3


@pytest.mark.parametrize("bad", ["abc", "", "2.5", -1])
def test_malformed_stock_levels_are_rejected(bad):
    with pytest.raises(ValidationError):
        _payload(current_stock_level=bad)


def test_blank_item_no_is_rejected():
    with pytest.raises(ValidationError):
        _payload(item_no="   ")


def test_get_item_unknown_returns_none(db_session):
    assert get_item(db_session, "nope") is None
