"""Persistence services the settings store writes through.

The store treats these as opaque key-value durability: it hands over a plain
mapping and gets one back. Either method may be sync or async.
"""

from __future__ import annotations

import copy
import json
import os
from collections.abc import Awaitable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from copilot_settings.config import default_data_path
from copilot_settings.errors import PersistenceError


@runtime_checkable
class PersistenceService(Protocol):
    """Host storage primitive (production file storage and test doubles)."""

    def load_data(self) -> Mapping[str, Any] | None | Awaitable[Mapping[str, Any] | None]: ...

    def save_data(self, data: Mapping[str, Any]) -> None | Awaitable[None]: ...


class JsonFileStorage:
    """Stores settings as a single UTF-8 JSON document."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else default_data_path()

    def load_data(self) -> Any:
        """Return the decoded document, or None when nothing was saved yet."""
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"cannot read settings from {self.path}: {exc}") from exc

    def save_data(self, data: Mapping[str, Any]) -> None:
        """Write atomically: a crash mid-write leaves the previous file intact."""
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(dict(data), indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"cannot write settings to {self.path}: {exc}") from exc


class MemoryStorage:
    """In-process storage; keeps a deep copy of whatever was last saved."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self.data = copy.deepcopy(dict(data)) if data is not None else None
        self.save_count = 0

    def load_data(self) -> dict[str, Any] | None:
        return copy.deepcopy(self.data)

    def save_data(self, data: Mapping[str, Any]) -> None:
        self.data = copy.deepcopy(dict(data))
        self.save_count += 1
