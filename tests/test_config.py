from __future__ import annotations

import logging
from pathlib import Path

import pytest

from catalog.config import Settings

ENV_NAMES = (
    "HOST",
    "PORT",
    "CATALOG_ENV",
    "CATALOG_DATA_DIR",
    "CATALOG_PUBLIC_DIR",
    "CATALOG_DEFAULT_PAGE_LIMIT",
    "CATALOG_MAX_PAGE_LIMIT",
    "CATALOG_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_from_env_defaults() -> None:
    config = Settings.from_env()

    assert config.port == 5000
    assert config.environment is None
    assert config.debug is False
    assert config.data_dir == Path("data")
    assert config.max_page_limit == 100


def test_from_env_reads_variables(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CATALOG_ENV", "development")
    monkeypatch.setenv("CATALOG_DATA_DIR", "/srv/catalog")
    monkeypatch.setenv("CATALOG_MAX_PAGE_LIMIT", "25")
    monkeypatch.setenv("CATALOG_LOG_LEVEL", "debug")

    config = Settings.from_env()

    assert config.port == 8080
    assert config.debug is True
    assert config.nations_path == Path("/srv/catalog/nations/nations.json")
    assert config.max_page_limit == 25
    assert config.log_level == "DEBUG"


def test_non_integer_falls_back_with_warning(monkeypatch, caplog) -> None:
    monkeypatch.setenv("PORT", "eighty")
    monkeypatch.setenv("CATALOG_DEFAULT_PAGE_LIMIT", " ")

    with caplog.at_level(logging.WARNING, logger="catalog.config"):
        config = Settings.from_env()

    assert config.port == 5000
    assert config.default_page_limit == 50
    assert "PORT" in caplog.text


def test_dotenv_file_is_read(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("PORT=6001\nCATALOG_ENV=staging\n", encoding="utf-8")

    config = Settings.from_env()

    assert config.port == 6001
    assert config.environment == "staging"
    assert config.debug is False
