from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.services.catalog_engine import CatalogEngine, create_engine
from catalog.services.json_store import JsonStore
from server.app import create_app

NATIONS = [
    {"id": "usa", "name": "USA", "fullName": "United States of America", "flag": "usa.png"},
    {"id": "germany", "name": "Germany", "fullName": "Germany", "flag": "germany.png"},
]

AIRCRAFT = {
    "usa": [
        {"id": 1, "aircraftid": "p-26a-34m2", "name": "P-26A-34 M2", "nation": "usa", "rank": 1, "br": 1.0, "crew": 1},
        {"id": 2, "aircraftid": "f-86f-25", "name": "F-86F-25", "nation": "usa", "rank": 6, "br": 9.0, "role": "jet"},
    ],
    "germany": [
        {"id": 1, "aircraftid": "bf-109e-3", "name": "Bf 109 E-3", "nation": "germany", "rank": 1, "br": 2.7},
    ],
    "japan": [],
}

TANKS = {
    "germany": [
        {"id": 1, "tankid": "tiger-h1", "name": "Tiger H1", "nation": "germany", "rank": 3, "br": 5.7, "crew": 5},
    ],
}


class FailingStore(JsonStore):
    """Store whose writes always fail, leaving files untouched."""

    def __init__(self, root: Path) -> None:
        super().__init__(root)
        self.attempts = 0

    def save(self, path, document) -> bool:
        self.attempts += 1
        return False


def write_document(root: Path, relative: str, document) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    write_document(root, "nations/nations.json", NATIONS)
    write_document(root, "vehicles/aviation/aircraft.json", AIRCRAFT)
    write_document(root, "vehicles/aviation/helicopters.json", {"usa": []})
    write_document(root, "vehicles/ground/tanks.json", TANKS)
    write_document(root, "vehicles/naval/bluewater.json", {})
    # coastal.json is deliberately missing
    write_document(root, "api.json", {"name": "test api"})
    return root


@pytest.fixture()
def config(tmp_path: Path, data_dir: Path) -> Settings:
    return Settings(data_dir=data_dir, public_dir=tmp_path / "public")


@pytest.fixture()
def engine(config: Settings) -> CatalogEngine:
    engine = create_engine(config)
    engine.load()
    return engine


@pytest.fixture()
def failing_engine(config: Settings) -> CatalogEngine:
    engine = CatalogEngine(FailingStore(config.data_dir), nations_path=config.nations_file)
    engine.load()
    return engine


@pytest.fixture()
def client(config: Settings, engine: CatalogEngine) -> TestClient:
    return TestClient(create_app(config, engine))
