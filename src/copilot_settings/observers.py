"""Publish/subscribe registry for settings changes.

Subscribers expose ``update_settings()`` and re-read whatever they need from
the store when called. ``publish()`` calls them in subscription order. A
subscriber that raises is logged and skipped; the rest are still notified.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class SettingsObserver(Protocol):
    """Anything that wants to hear about saved settings."""

    def update_settings(self) -> None: ...


class ObserverRegistry:
    """Ordered list of settings observers."""

    def __init__(self) -> None:
        self._observers: list[SettingsObserver] = []

    def subscribe(self, observer: SettingsObserver) -> None:
        """Append an observer. Subscribing twice means being notified twice."""
        self._observers.append(observer)

    register = subscribe

    def unsubscribe(self, observer: SettingsObserver) -> None:
        """Drop the first registration of ``observer``; unknown observers are ignored."""
        for i, existing in enumerate(self._observers):
            if existing is observer:
                del self._observers[i]
                return

    def publish(self) -> None:
        """Call ``update_settings()`` on every observer, in registration order."""
        for observer in list(self._observers):
            try:
                observer.update_settings()
            except Exception:
                logger.exception("settings observer %r failed", observer)

    notify_all = publish

    def __len__(self) -> int:
        return len(self._observers)

    def __iter__(self) -> Iterator[SettingsObserver]:
        return iter(list(self._observers))
