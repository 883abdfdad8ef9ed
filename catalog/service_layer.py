from __future__ import annotations

import math
import re
from typing import Any, Optional

from .config import Settings, settings as default_settings
from .errors import NotLoaded
from .models import Page
from .services.catalog_engine import CatalogEngine
from .services.registry import GROUPS, categories_in_group, get_category

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _coerce_int(raw: Any, default: int) -> int:
    """Read the leading integer of ``raw`` ("2abc" -> 2); zero or no digits give ``default``."""

    if raw is None:
        return default
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return default
    return int(match.group(1)) or default


def matches_query(record: dict[str, Any], id_field: str, query: str) -> bool:
    needle = query.lower()
    for field in ("name", id_field, "nation"):
        value = record.get(field)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def paginate(items: list[dict[str, Any]], page: Any = None, limit: Any = None, *, config: Settings | None = None) -> Page:
    config = config or default_settings
    page_number = max(1, _coerce_int(page, 1))
    page_size = min(config.max_page_limit, max(1, _coerce_int(limit, config.default_page_limit)))
    start = (page_number - 1) * page_size
    return Page(
        total=len(items),
        page=page_number,
        limit=page_size,
        total_pages=math.ceil(len(items) / page_size),
        items=items[start : start + page_size],
    )


def search_category(
    engine: CatalogEngine,
    category: str,
    query: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
    *,
    config: Settings | None = None,
) -> dict[str, Any]:
    spec = get_category(category)
    records = engine.all_records(category)
    if query:
        records = [record for record in records if matches_query(record, spec.id_field, query)]
    return paginate(records, page, limit, config=config).to_dict(spec.name)


def _records_or_empty(engine: CatalogEngine, category: str) -> list[dict[str, Any]]:
    try:
        return engine.all_records(category)
    except NotLoaded:
        return []


def group_overview(engine: CatalogEngine, group: str) -> dict[str, Any]:
    payload: dict[str, Any] = {"total": 0}
    vehicles: list[dict[str, Any]] = []
    for spec in categories_in_group(group):
        records = [{**record, "type": spec.type_tag} for record in _records_or_empty(engine, spec.name)]
        payload[f"{spec.type_tag}_count"] = len(records)
        vehicles.extend(records)
    payload["total"] = len(vehicles)
    payload["vehicles"] = vehicles
    return payload


def vehicles_overview(engine: CatalogEngine) -> dict[str, Any]:
    return {
        group: {name: engine.catalog.document(name) for name in names}
        for group, names in GROUPS.items()
    }


def nation_vehicles(engine: CatalogEngine, nation_id: str) -> dict[str, Any]:
    nation = engine.get_nation(nation_id)
    vehicles: dict[str, Any] = {}
    for group, names in GROUPS.items():
        vehicles[group] = {}
        for name in names:
            document = engine.catalog.document(name)
            vehicles[group][name] = document.get(nation.id, [])
    return {"nation": nation.name, "vehicles": vehicles}


def api_documentation(engine: CatalogEngine, config: Settings | None = None) -> Any:
    config = config or default_settings
    document = engine.store.load(config.api_doc_file)
    if document is None:
        raise NotLoaded("API documentation not available")
    return document
