"""Per-surface record of what has been rendered, so redraws update instead of recreate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def update(self, config: Dict[str, Any]) -> None: ...

    def destroy(self) -> None: ...


class ChartSurface(Protocol):
    """Opaque drawing target handed to the presenter by its owner."""

    def create(self, config: Dict[str, Any]) -> Renderer: ...


@dataclass(frozen=True)
class Uninitialized:
    pass


@dataclass(frozen=True)
class Rendered:
    renderer: Renderer
    dataset_key: str


SurfaceSlot = Union[Uninitialized, Rendered]

_UNINITIALIZED = Uninitialized()


class SeriesAlignmentCache:
    def __init__(self) -> None:
        self._slots: Dict[str, SurfaceSlot] = {}

    def slot(self, surface_id: str) -> SurfaceSlot:
        return self._slots.get(surface_id, _UNINITIALIZED)

    def should_create(self, surface_id: str) -> bool:
        return isinstance(self.slot(surface_id), Uninitialized)

    def should_update(self, surface_id: str) -> bool:
        return not self.should_create(surface_id)

    def remember(self, surface_id: str, renderer: Renderer, dataset_key: str) -> None:
        if self.should_update(surface_id):
            raise RuntimeError(f"surface {surface_id!r} already has a renderer; release it first")
        self._slots[surface_id] = Rendered(renderer=renderer, dataset_key=dataset_key)

    def release(self, surface_id: str) -> Optional[Renderer]:
        """Destroy the surface's renderer, if any, and mark the surface uninitialized."""
        slot = self._slots.pop(surface_id, _UNINITIALIZED)
        if isinstance(slot, Uninitialized):
            return None
        logger.debug(f"Releasing renderer on surface {surface_id}")
        slot.renderer.destroy()
        return slot.renderer

    def release_all(self) -> None:
        for surface_id in list(self._slots):
            self.release(surface_id)
