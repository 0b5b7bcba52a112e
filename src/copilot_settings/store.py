"""Settings store: load with defaults, replace on update, save and publish."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from copilot_settings.config import DEFAULT_SETTINGS, Settings, merge
from copilot_settings.errors import PersistenceError
from copilot_settings.observers import ObserverRegistry
from copilot_settings.storage import PersistenceService

logger = logging.getLogger(__name__)


async def _maybe_await(result: Any) -> Any:
    """Await the result if it's awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(result):
        return await result
    return result


class SettingsStore:
    """Owns the current Settings snapshot for one plugin instance.

    Snapshots are immutable; ``update()`` swaps in a new one, so ``save()``
    always serializes a consistent value.
    """

    def __init__(
        self,
        storage: PersistenceService,
        observers: ObserverRegistry | None = None,
        defaults: Settings = DEFAULT_SETTINGS,
    ) -> None:
        self.storage = storage
        self.observers = observers if observers is not None else ObserverRegistry()
        self.defaults = defaults
        self._settings = defaults

    @property
    def settings(self) -> Settings:
        return self._settings

    async def load(self) -> Settings:
        """Merge persisted data over the defaults and make it the current snapshot."""
        try:
            raw = await _maybe_await(self.storage.load_data())
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"cannot load settings: {exc}") from exc

        if raw is not None and not isinstance(raw, Mapping):
            raise PersistenceError(f"stored settings must be an object, got {type(raw).__name__}")
        try:
            self._settings = merge(self.defaults, raw)
        except ValidationError as exc:
            raise PersistenceError(f"stored settings are malformed: {exc}") from exc
        logger.debug("loaded settings: %s", self._settings)
        return self._settings

    async def save(self, notify: bool = True) -> None:
        """Persist the current snapshot; publish to observers if ``notify``.

        A failed write raises PersistenceError and nobody is notified.
        """
        snapshot = self._settings
        try:
            await _maybe_await(self.storage.save_data(snapshot.to_data()))
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"cannot save settings: {exc}") from exc
        logger.debug("saved settings (notify=%s)", notify)
        if notify:
            self.observers.publish()

    def update(self, **changes: Any) -> Settings:
        """Replace the snapshot with a copy carrying ``changes``.

        ``hotkeys`` may be a partial mapping; missing keys keep their current value.
        Raises pydantic.ValidationError on bad values and leaves the snapshot alone.
        """
        self._settings = merge(self._settings, changes)
        return self._settings

    def is_enabled(self) -> bool:
        return self._settings.enabled
