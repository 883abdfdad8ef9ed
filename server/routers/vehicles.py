"""Vehicle category endpoints: search, per-nation listing and CRUD."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Query, Response

from catalog.service_layer import group_overview, search_category, vehicles_overview
from catalog.services.registry import CATEGORIES, GROUPS, CategorySpec

from ..deps import EngineDep, SettingsDep

router = APIRouter()


@router.get("")
async def list_all_vehicles(engine=EngineDep) -> Dict[str, Any]:
    return vehicles_overview(engine)


def _add_group_overview(group: str) -> None:
    async def overview(engine=EngineDep) -> Dict[str, Any]:
        return group_overview(engine, group)

    router.add_api_route(f"/{group}", overview, methods=["GET"], name=f"{group}_overview")


for _group in GROUPS:
    _add_group_overview(_group)


def build_category_router(spec: CategorySpec) -> APIRouter:
    """Create the CRUD router for one vehicle category."""

    category_router = APIRouter()
    category = spec.name

    @category_router.get("")
    async def list_vehicles(
        q: Optional[str] = Query(None, description="Case-insensitive search over name, id-field and nation"),
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        engine=EngineDep,
        config=SettingsDep,
    ) -> Dict[str, Any]:
        return search_category(engine, category, q, page, limit, config=config)

    @category_router.get("/{nation}")
    async def list_by_nation(nation: str, engine=EngineDep) -> Dict[str, Any]:
        records = engine.list_by_nation(category, nation)
        return {"nation": nation, "count": len(records), category: records}

    @category_router.get("/{nation}/{identifier}")
    async def get_vehicle(nation: str, identifier: str, engine=EngineDep) -> Dict[str, Any]:
        return engine.get(category, nation, identifier)

    @category_router.post("/{nation}", status_code=201)
    async def create_vehicle(nation: str, payload: Dict[str, Any] = Body(...), engine=EngineDep) -> Dict[str, Any]:
        return await engine.create(category, nation, payload)

    @category_router.patch("/{nation}/{identifier}")
    async def update_vehicle(
        nation: str, identifier: str, payload: Dict[str, Any] = Body(...), engine=EngineDep
    ) -> Dict[str, Any]:
        return await engine.update(category, nation, identifier, payload)

    @category_router.delete("/{nation}/{identifier}", status_code=204)
    async def delete_vehicle(nation: str, identifier: str, engine=EngineDep) -> Response:
        await engine.delete(category, nation, identifier)
        return Response(status_code=204)

    return category_router


category_routers = {name: build_category_router(spec) for name, spec in CATEGORIES.items()}
