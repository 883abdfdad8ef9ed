"""API documentation and front-end page endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from catalog.service_layer import api_documentation

from ..deps import EngineDep, SettingsDep

router = APIRouter()


@router.get("/api")
async def get_api_documentation(engine=EngineDep, config=SettingsDep) -> Any:
    return api_documentation(engine, config)


def _page(config, filename: str) -> FileResponse:
    path = config.public_dir / filename
    if not path.is_file():
        raise HTTPException(status_code=404)
    return FileResponse(path)


@router.get("/", include_in_schema=False)
async def index_page(config=SettingsDep) -> FileResponse:
    return _page(config, "index.html")


@router.get("/about", include_in_schema=False)
async def about_page(config=SettingsDep) -> FileResponse:
    return _page(config, "about.html")
