"""JSON file persistence used when MongoDB is not configured."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import RLock
from typing import Any

LOGGER = logging.getLogger(__name__)


class JsonListFile:
    """List-of-documents JSON file guarded by a process-local lock."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.lock = RLock()

    def read(self) -> list[dict[str, Any]]:
        """Read list payload from JSON file with empty fallback."""
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            LOGGER.warning("Ignoring corrupted store file %s", self.path)
            return []
        if not isinstance(payload, list):
            return []
        return [row for row in payload if isinstance(row, dict)]

    def write(self, items: list[dict[str, Any]]) -> None:
        """Persist list payload to JSON file."""
        self.path.write_text(
            json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8"
        )
