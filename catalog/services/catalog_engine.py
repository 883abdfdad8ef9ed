from __future__ import annotations

import asyncio
import logging
import math
from datetime import UTC, datetime
from typing import Any, Callable, Optional

from ..config import Settings, settings as default_settings
from ..errors import Conflict, MalformedRequestBody, NotFound, NotLoaded, PersistenceError, ValidationFailed
from ..models import Nation, VehicleRecord, is_number
from .json_store import JsonStore
from .registry import CATEGORIES, CategorySpec, get_category
from .resolver import find_index, parse_identifier

logger = logging.getLogger(__name__)

Collection = dict[str, list[VehicleRecord]]


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(item) for item in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(item) for item in value)
    return False


def reject_non_finite(payload: dict[str, Any]) -> None:
    """NaN and Infinity are not JSON; refuse bodies that smuggled them in."""

    if _has_non_finite(payload):
        raise MalformedRequestBody("Invalid JSON format", "Request body must be valid JSON")


def _range_errors(payload: dict[str, Any]) -> list[str]:
    errors = []
    if "rank" in payload:
        rank = payload["rank"]
        if not is_number(rank) or not 1 <= rank <= 8:
            errors.append("rank must be a number between 1 and 8")
    if "br" in payload:
        br = payload["br"]
        if not is_number(br) or not 1.0 <= br <= 15.0:
            errors.append("br (battle rating) must be a number between 1.0 and 15.0")
    if "crew" in payload:
        crew = payload["crew"]
        if not is_number(crew) or not crew >= 1:
            errors.append("crew must be a positive number")
    return errors


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def validate_new(spec: CategorySpec, payload: dict[str, Any]) -> list[str]:
    errors = [
        f"{field} is required and must be a non-empty string"
        for field in (spec.id_field, "name")
        if _is_blank(payload.get(field))
    ]
    return errors + _range_errors(payload)


def validate_changes(payload: dict[str, Any]) -> list[str]:
    return _range_errors(payload)


class Catalog:
    """The loaded nations list and one nation-keyed collection per category."""

    def __init__(self) -> None:
        self.nations: Optional[list[Nation]] = None
        self.collections: dict[str, Optional[Collection]] = {name: None for name in CATEGORIES}
        self.last_loaded: Optional[datetime] = None

    def is_loaded(self, category: str) -> bool:
        return self.collections.get(category) is not None

    def document(self, category: str) -> dict[str, list[dict[str, Any]]]:
        collection = self.collections.get(category) or {}
        return {
            nation: [record.to_dict() for record in records]
            for nation, records in collection.items()
        }


class CatalogEngine:
    def __init__(self, store: JsonStore, *, nations_path: str = "nations/nations.json", catalog: Optional[Catalog] = None) -> None:
        self.store = store
        self.nations_path = nations_path
        self.catalog = catalog or Catalog()
        self._locks: dict[str, asyncio.Lock] = {name: asyncio.Lock() for name in CATEGORIES}

    # -- loading -----------------------------------------------------------

    def load(self) -> None:
        logger.info("Loading catalog data from %s", self.store.root)
        self.catalog.nations = self._parse_nations(self.store.load(self.nations_path))
        for spec in CATEGORIES.values():
            self.catalog.collections[spec.name] = self._parse_collection(spec, self.store.load(spec.path))
        self.catalog.last_loaded = datetime.now(UTC)
        for name, loaded in self.status()["categories"].items():
            if loaded:
                logger.info("Loaded %s", name)
            else:
                logger.warning("Category %s is not loaded", name)

    @property
    def loaded(self) -> bool:
        return self.catalog.last_loaded is not None

    def status(self) -> dict[str, Any]:
        last_loaded = self.catalog.last_loaded
        return {
            "nations": self.catalog.nations is not None,
            "categories": {name: self.catalog.is_loaded(name) for name in CATEGORIES},
            "last_loaded": last_loaded.isoformat() if last_loaded else None,
        }

    def _parse_nations(self, raw: Any) -> Optional[list[Nation]]:
        if raw is None:
            return None
        try:
            return [Nation.from_dict(item) for item in raw]
        except (TypeError, KeyError, AttributeError) as exc:
            logger.error("Malformed nations document %s: %s", self.nations_path, exc)
            return None

    def _parse_collection(self, spec: CategorySpec, raw: Any) -> Optional[Collection]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.error("Malformed %s document: expected an object keyed by nation", spec.name)
            return None
        collection: Collection = {}
        try:
            for nation, items in raw.items():
                if not isinstance(items, list):
                    raise ValueError(f"nation {nation} does not hold a list")
                collection[nation] = [
                    VehicleRecord.from_dict(item, id_field=spec.id_field, nation=nation)
                    for item in items
                ]
        except ValueError as exc:
            logger.error("Malformed %s document: %s", spec.name, exc)
            return None
        return collection

    # -- reads -------------------------------------------------------------

    def nations(self) -> list[Nation]:
        if self.catalog.nations is None:
            raise NotLoaded("Nations data not loaded")
        return list(self.catalog.nations)

    def get_nation(self, nation_id: str) -> Nation:
        for nation in self.nations():
            if nation.id == nation_id:
                return nation
        raise NotFound("Nation not found", f"Nation '{nation_id}' does not exist")

    def collection(self, category: str) -> Collection:
        spec = get_category(category)
        collection = self.catalog.collections.get(spec.name)
        if collection is None:
            raise NotLoaded(f"{spec.label} data not loaded")
        return collection

    def all_records(self, category: str) -> list[dict[str, Any]]:
        return [record.to_dict() for records in self.collection(category).values() for record in records]

    def list_by_nation(self, category: str, nation: str) -> list[dict[str, Any]]:
        collection = self.collection(category)
        if nation not in collection:
            raise NotFound(
                f"No {category} found for nation: {nation}",
                {"available_nations": list(collection)},
            )
        return [record.to_dict() for record in collection[nation]]

    def get(self, category: str, nation: str, identifier: str) -> dict[str, Any]:
        spec = get_category(category)
        records = self._nation_records(spec, nation)
        index = find_index(records, parse_identifier(identifier))
        if index is None:
            raise NotFound(
                f"{spec.label} not found with identifier: {identifier}",
                f"Use either {spec.id_field} or numeric id",
            )
        return records[index].to_dict()

    def _nation_records(self, spec: CategorySpec, nation: str) -> list[VehicleRecord]:
        collection = self.collection(spec.name)
        if nation not in collection:
            raise NotFound(f"Nation not found: {nation}")
        return collection[nation]

    # -- writes ------------------------------------------------------------

    async def create(self, category: str, nation: str, payload: dict[str, Any]) -> dict[str, Any]:
        spec = get_category(category)
        async with self._locks[spec.name]:
            collection = self.collection(spec.name)
            reject_non_finite(payload)
            errors = validate_new(spec, payload)
            if errors:
                raise ValidationFailed(errors, message="Missing required fields")

            key = payload[spec.id_field]
            records = collection.get(nation, [])
            if any(record.key == key for record in records):
                raise Conflict(
                    f"{spec.label} already exists",
                    f"{spec.label} with {spec.id_field} '{key}' already exists in {nation}",
                )

            next_id = max((record.id for record in records), default=0) + 1
            record = VehicleRecord.from_dict(
                {**payload, "id": next_id, "nation": nation},
                id_field=spec.id_field,
                nation=nation,
            )
            created_nation = nation not in collection
            collection.setdefault(nation, []).append(record)

            def rollback() -> None:
                collection[nation].pop()
                if created_nation:
                    del collection[nation]

            await self._commit(spec, rollback, f"Failed to save {spec.label.lower()}")
            logger.info("Created %s %s in %s", spec.label.lower(), key, nation)
            return record.to_dict()

    async def update(self, category: str, nation: str, identifier: str, payload: dict[str, Any]) -> dict[str, Any]:
        spec = get_category(category)
        async with self._locks[spec.name]:
            records = self._nation_records(spec, nation)
            reject_non_finite(payload)
            errors = validate_changes(payload)
            if errors:
                raise ValidationFailed(errors)
            index = self._resolve(spec, records, identifier)

            original = records[index]
            records[index] = original.merged(payload)

            def rollback() -> None:
                records[index] = original

            await self._commit(spec, rollback, f"Failed to update {spec.label.lower()}")
            logger.info("Updated %s %s in %s", spec.label.lower(), identifier, nation)
            return records[index].to_dict()

    async def delete(self, category: str, nation: str, identifier: str) -> dict[str, Any]:
        spec = get_category(category)
        async with self._locks[spec.name]:
            records = self._nation_records(spec, nation)
            index = self._resolve(spec, records, identifier)
            removed = records.pop(index)

            def rollback() -> None:
                records.insert(index, removed)

            await self._commit(spec, rollback, f"Failed to delete {spec.label.lower()}")
            logger.info("Deleted %s %s from %s", spec.label.lower(), identifier, nation)
            return removed.to_dict()

    def _resolve(self, spec: CategorySpec, records: list[VehicleRecord], identifier: str) -> int:
        index = find_index(records, parse_identifier(identifier))
        if index is None:
            raise NotFound(f"{spec.label} not found with identifier: {identifier}")
        return index

    async def _commit(self, spec: CategorySpec, rollback: Callable[[], None], failure: str) -> None:
        """Write the category document; undo the in-memory change unless it was saved.

        The write runs in an executor thread that cannot be interrupted, so a
        cancelled caller still waits for it, keeping the lock held and memory
        in step with what reached the disk.
        """

        document = self.catalog.document(spec.name)
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(None, self.store.save, spec.path, document)
        try:
            saved = await asyncio.shield(future)
        except asyncio.CancelledError:
            await asyncio.wait({future})
            if future.exception() is not None or not future.result():
                rollback()
            raise
        except Exception:
            rollback()
            raise
        if not saved:
            rollback()
            raise PersistenceError(failure)


def create_engine(config: Settings | None = None) -> CatalogEngine:
    config = config or default_settings
    return CatalogEngine(JsonStore(config.data_dir), nations_path=config.nations_file)
