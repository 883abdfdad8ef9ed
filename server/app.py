"""FastAPI application exposing the vehicle catalog REST API."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from catalog.config import Settings, settings as default_settings
from catalog.services.catalog_engine import CatalogEngine, create_engine
from catalog.services.registry import CATEGORIES

from .handlers import register_exception_handlers
from .routers import docs, nations, vehicles

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None, engine: Optional[CatalogEngine] = None) -> FastAPI:
    config = config or default_settings
    engine = engine or create_engine(config)

    app = FastAPI(title="War Thunder Vehicle Catalog", version="0.1.0")
    app.state.settings = config
    app.state.engine = engine
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app, config)

    app.include_router(docs.router, tags=["docs"])
    app.include_router(nations.router, prefix="/api/nations", tags=["nations"])
    app.include_router(vehicles.router, prefix="/api/vehicles", tags=["vehicles"])
    for name, category_router in vehicles.category_routers.items():
        spec = CATEGORIES[name]
        app.include_router(category_router, prefix=spec.route, tags=[spec.group])

    if config.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=config.public_dir), name="public")

    @app.on_event("startup")
    async def _startup() -> None:
        if not engine.loaded:
            engine.load()
        loaded = [name for name, ok in engine.status()["categories"].items() if ok]
        logger.info(
            "Vehicle catalog ready on port %s (environment: %s)",
            config.port,
            config.environment or "production",
        )
        logger.info("Loaded categories: %s", ", ".join(loaded) or "none")

    return app


app = create_app(Settings.from_env())
