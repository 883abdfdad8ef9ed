"""Read-only nation endpoints."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter

from catalog.service_layer import nation_vehicles

from ..deps import EngineDep
from ..schemas import NationOut, NationVehicles

router = APIRouter()


@router.get("", response_model=List[NationOut])
async def list_nations(engine=EngineDep) -> List[NationOut]:
    return [NationOut.from_nation(nation) for nation in engine.nations()]


@router.get("/{nation_id}", response_model=NationOut)
async def get_nation(nation_id: str, engine=EngineDep) -> NationOut:
    return NationOut.from_nation(engine.get_nation(nation_id))


@router.get("/{nation_id}/vehicles", response_model=NationVehicles)
async def get_nation_vehicles(nation_id: str, engine=EngineDep) -> NationVehicles:
    return NationVehicles.model_validate(nation_vehicles(engine, nation_id))
