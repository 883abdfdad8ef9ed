from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


class JsonStore:
    """Reads and writes whole JSON documents under a data directory.

    ``save`` writes a sibling ``<name>.tmp`` file and renames it over the
    target, so readers see either the previous or the new document. This
    relies on ``os.replace`` being atomic, which holds on local POSIX and
    NTFS filesystems but not necessarily on network mounts.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str | Path) -> Path:
        return self.root / path

    def load(self, path: str | Path) -> Optional[Any]:
        full_path = self.resolve(path)
        try:
            with full_path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as exc:
            logger.error("Error loading %s: %s", full_path, exc)
            return None

    def save(self, path: str | Path, document: Any) -> bool:
        full_path = self.resolve(path)
        temp_path = full_path.with_name(full_path.name + TEMP_SUFFIX)
        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            logger.error("Error serializing %s: %s", full_path, exc)
            return False

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(temp_path, full_path)
        except OSError as exc:
            logger.error("Error saving %s: %s", full_path, exc)
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove temporary file %s", temp_path)
            return False

        logger.info("Saved data to %s", full_path)
        return True
