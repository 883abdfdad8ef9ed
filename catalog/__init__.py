"""War Thunder vehicle catalog core package."""

from .config import Settings, settings
from .services.catalog_engine import CatalogEngine, create_engine

__all__ = ["Settings", "settings", "CatalogEngine", "create_engine"]
