from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional, Union

Number = Union[int, float]

# Fields with a typed slot on VehicleRecord; everything else lives in ``extra``.
TYPED_FIELDS = ("id", "nation", "name", "rank", "br", "crew")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(slots=True)
class Nation:
    id: str
    name: str
    full_name: str
    flag: str

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Nation":
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name", "")),
            full_name=str(payload.get("fullName", "")),
            flag=str(payload.get("flag", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "fullName": self.full_name, "flag": self.flag}


@dataclass(slots=True)
class VehicleRecord:
    """One vehicle of a category, tagged with the category's id-field name.

    ``key`` holds the value of the human-readable id-field (``aircraftid``,
    ``tankid``...). Attributes the engine does not interpret are carried in
    ``extra`` in their original order.
    """

    id_field: str
    id: int
    key: str
    nation: str
    name: Optional[str] = None
    rank: Optional[Number] = None
    br: Optional[Number] = None
    crew: Optional[Number] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: dict[str, Any], *, id_field: str, nation: str) -> "VehicleRecord":
        if not isinstance(payload, dict):
            raise ValueError(f"Vehicle record must be an object, got {type(payload).__name__}")
        raw_id = payload.get("id")
        if not isinstance(raw_id, int) or isinstance(raw_id, bool):
            raise ValueError(f"Vehicle record has no integer id: {payload!r}")
        key = payload.get(id_field)
        if not isinstance(key, str):
            raise ValueError(f"Vehicle record {raw_id} has no string {id_field}")

        record = cls(
            id_field=id_field,
            id=raw_id,
            key=key,
            nation=payload["nation"] if isinstance(payload.get("nation"), str) else nation,
        )
        record._absorb(payload)
        return record

    def _absorb(self, payload: dict[str, Any]) -> None:
        for name, value in payload.items():
            if name in ("id", "nation", self.id_field):
                continue
            if name == "name" and isinstance(value, str):
                self.name = value
                self.extra.pop(name, None)
            elif name in ("rank", "br", "crew") and is_number(value):
                setattr(self, name, value)
                self.extra.pop(name, None)
            else:
                if name in ("name", "rank", "br", "crew"):
                    setattr(self, name, None)
                self.extra[name] = copy.deepcopy(value)

    def merged(self, changes: dict[str, Any]) -> "VehicleRecord":
        """Return a copy with ``changes`` applied; id, nation and key are kept."""

        record = VehicleRecord(
            id_field=self.id_field,
            id=self.id,
            key=self.key,
            nation=self.nation,
            name=self.name,
            rank=self.rank,
            br=self.br,
            crew=self.crew,
            extra=copy.deepcopy(self.extra),
        )
        record._absorb(changes)
        return record

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, self.id_field: self.key}
        if self.name is not None:
            payload["name"] = self.name
        payload["nation"] = self.nation
        for name in ("rank", "br", "crew"):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        payload.update(copy.deepcopy(self.extra))
        return payload


@dataclass(slots=True)
class Page:
    total: int
    page: int
    limit: int
    total_pages: int
    items: list[dict[str, Any]]

    def to_dict(self, items_key: str) -> dict[str, Any]:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            items_key: self.items,
        }
