"""Chart surfaces that keep the latest chart config for the UI to fetch."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional


class SnapshotRenderer:
    def __init__(self, surface: "SnapshotSurface"):
        self._surface = surface
        self.destroyed = False

    def update(self, config: Dict[str, Any]) -> None:
        if self.destroyed:
            raise RuntimeError("renderer has been destroyed")
        self._surface._publish(config)

    def destroy(self) -> None:
        self.destroyed = True
        self._surface._publish(None)


class SnapshotSurface:
    """
    Holds the config last drawn on it plus a revision counter.

    ``created`` counts renderer creations, so callers can tell a fresh chart
    from an in-place update.
    """

    def __init__(self, surface_id: str):
        self.surface_id = surface_id
        self.revision = 0
        self.created = 0
        self._config: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    def create(self, config: Dict[str, Any]) -> SnapshotRenderer:
        with self._lock:
            self.created += 1
        self._publish(config)
        return SnapshotRenderer(self)

    def current(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            if self._config is None:
                return None
            return {"surface": self.surface_id, "revision": self.revision, "config": self._config}

    def _publish(self, config: Optional[Dict[str, Any]]) -> None:
        with self._lock:
            self._config = config
            self.revision += 1
