from __future__ import annotations

import pytest

from catalog.models import VehicleRecord
from catalog.services.resolver import ById, ByKey, find_index, parse_identifier


def _record(id: int, key: str) -> VehicleRecord:
    return VehicleRecord(id_field="aircraftid", id=id, key=key, nation="usa", name=key.upper())


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12", ById(id=12, key="12")),
        ("-3", ById(id=-3, key="-3")),
        ("f-22-raptor", ByKey(key="f-22-raptor")),
        ("12abc", ByKey(key="12abc")),
        ("1.5", ByKey(key="1.5")),
        (" 7", ByKey(key=" 7")),
        ("1_000", ByKey(key="1_000")),
    ],
)
def test_parse_identifier_requires_whole_token_integer(raw: str, expected) -> None:
    assert parse_identifier(raw) == expected


def test_find_index_by_key_or_numeric_id() -> None:
    records = [_record(1, "p-26"), _record(2, "f-86")]

    assert find_index(records, parse_identifier("f-86")) == 1
    assert find_index(records, parse_identifier("1")) == 0
    assert find_index(records, parse_identifier("3")) is None
    assert find_index(records, parse_identifier("F-86")) is None


def test_numeric_token_also_matches_key_and_first_match_wins() -> None:
    records = [_record(5, "2"), _record(2, "b")]

    assert find_index(records, parse_identifier("2")) == 0
