"""Dependency wiring for the catalog engine and settings."""
from __future__ import annotations

from fastapi import Depends, Request

from catalog.config import Settings
from catalog.services.catalog_engine import CatalogEngine


def get_engine(request: Request) -> CatalogEngine:
    """Return the engine owned by the running application."""

    return request.app.state.engine


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


EngineDep = Depends(get_engine)
SettingsDep = Depends(get_settings)
