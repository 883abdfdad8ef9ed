"""Resolution of user-supplied identifiers to vehicle records.

An identifier is either the human-readable id-field value (``"f-22-raptor"``)
or the numeric surrogate id (``"12"``). A numeric token still matches a
record whose id-field value is that same string.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ..models import VehicleRecord

_INTEGER = re.compile(r"-?[0-9]+")


@dataclass(frozen=True, slots=True)
class ByKey:
    key: str


@dataclass(frozen=True, slots=True)
class ById:
    id: int
    key: str


Identifier = Union[ByKey, ById]


def parse_identifier(raw: str) -> Identifier:
    """Classify ``raw``; only a token that is entirely a base-10 integer is numeric."""

    if _INTEGER.fullmatch(raw):
        return ById(id=int(raw), key=raw)
    return ByKey(key=raw)


def matches(record: VehicleRecord, identifier: Identifier) -> bool:
    if record.key == identifier.key:
        return True
    return isinstance(identifier, ById) and record.id == identifier.id


def find_index(records: Sequence[VehicleRecord], identifier: Identifier) -> Optional[int]:
    """Index of the first record matching ``identifier`` in list order, or None."""

    for index, record in enumerate(records):
        if matches(record, identifier):
            return index
    return None
