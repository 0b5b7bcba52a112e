"""Settings model, defaults, and the pure default-merge."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DEFAULT_BINARY_PATH = "default"
DEFAULT_BINARY_NAME = "node"
VERSION_FLAG = "--version"
REQUIRED_MAJOR_VERSION = 18
DEFAULT_CHECK_TIMEOUT = 10.0


def default_data_path() -> Path:
    return Path.home() / ".copilot_settings" / "data.json"


class Hotkeys(BaseModel):
    """Key identifiers for accepting and cancelling a suggestion."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    accept: str = Field("Tab", min_length=1)
    cancel: str = Field("Escape", min_length=1)


class Settings(BaseModel):
    """Persisted configuration for the completion assistant."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    binary_path: str = Field(
        DEFAULT_BINARY_PATH,
        serialization_alias="binaryPath",
        validation_alias=AliasChoices("binaryPath", "binary_path", "nodePath"),
    )
    enabled: bool = True
    hotkeys: Hotkeys = Field(default_factory=Hotkeys)

    def to_data(self) -> dict[str, Any]:
        """Dump to the plain mapping handed to the persistence service."""
        return self.model_dump(by_alias=True)


DEFAULT_SETTINGS = Settings()


def _as_mapping(value: Mapping[str, Any] | BaseModel | None) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    return dict(value)


def merge(defaults: Settings, partial: Mapping[str, Any] | Settings | None) -> Settings:
    """Overlay ``partial`` on ``defaults`` and return a new, fully populated Settings.

    Top-level keys present in ``partial`` replace the default. ``hotkeys`` is
    merged one level deeper so a partial hotkey mapping keeps the default for
    any key it omits. Unknown keys are dropped.

    Raises pydantic.ValidationError when a present field has the wrong type.
    """
    data = defaults.to_data()
    overlay = _as_mapping(partial)
    hotkeys = overlay.pop("hotkeys", None)
    # legacy and python-side names all land on the serialized key
    for key in ("nodePath", "binary_path"):
        if key in overlay:
            overlay.setdefault("binaryPath", overlay.pop(key))
    data.update(overlay)
    if isinstance(hotkeys, Mapping | BaseModel):
        data["hotkeys"] = {**data["hotkeys"], **_as_mapping(hotkeys)}
    elif hotkeys is not None:
        data["hotkeys"] = hotkeys
    return Settings.model_validate(data)
