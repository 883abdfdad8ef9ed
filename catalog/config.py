from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default


@dataclass(slots=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 5000
    environment: Optional[str] = None
    data_dir: Path = Path("data")
    public_dir: Path = Path("public")
    default_page_limit: int = 50
    max_page_limit: int = 100
    log_level: str = "INFO"
    nations_file: str = "nations/nations.json"
    api_doc_file: str = "api.json"

    @property
    def debug(self) -> bool:
        return self.environment == "development"

    @property
    def nations_path(self) -> Path:
        return self.data_dir / self.nations_file

    @property
    def api_doc_path(self) -> Path:
        return self.data_dir / self.api_doc_file

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))
        defaults = cls()
        return cls(
            host=os.environ.get("HOST", defaults.host),
            port=_env_int("PORT", defaults.port),
            environment=os.environ.get("CATALOG_ENV") or None,
            data_dir=Path(os.environ.get("CATALOG_DATA_DIR", str(defaults.data_dir))),
            public_dir=Path(os.environ.get("CATALOG_PUBLIC_DIR", str(defaults.public_dir))),
            default_page_limit=_env_int("CATALOG_DEFAULT_PAGE_LIMIT", defaults.default_page_limit),
            max_page_limit=_env_int("CATALOG_MAX_PAGE_LIMIT", defaults.max_page_limit),
            log_level=os.environ.get("CATALOG_LOG_LEVEL", defaults.log_level).upper(),
        )


settings = Settings()
