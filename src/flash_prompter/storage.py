"""JSON-backed key-value store for persisted records."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional

from flash_prompter.config import get_storage_path

logger = logging.getLogger(__name__)


class LocalStore:
    """Small key-value store kept in a single JSON file.

    A missing, unreadable or non-object file reads as empty. Writes replace the
    file atomically.
    """

    def __init__(self, path_factory: Callable[[], Path] = get_storage_path) -> None:
        self._path_factory = path_factory

    @property
    def path(self) -> Path:
        return self._path_factory()

    def get_item(self, key: str) -> Optional[Any]:
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def _read(self) -> dict[str, Any]:
        path = self.path
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to read store %s", path)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring non-object store %s", path)
            return {}
        return raw

    def _write(self, data: dict[str, Any]) -> None:
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(".tmp")
        temp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(temp_path, path)
