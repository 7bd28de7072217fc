"""
CameraIntentController: turns camera intents into map view targets.

This is a pure asyncio primitive with no HA or network dependencies. The map
view surface is any object with an ``async_animate_camera(target)`` coroutine.

Requests made while no surface is attached are held in a single pending slot
(later requests replace earlier ones) and flushed when the surface attaches.
Animations against an attached surface are serialised.
"""
from __future__ import annotations

import asyncio
import logging

from .const import DEFAULT_LATITUDE, DEFAULT_LONGITUDE, DEVICE_ZOOM, PREVIEW_ZOOM
from .models import CameraIntent, CameraTarget, Position

_LOGGER = logging.getLogger(__name__)

DEFAULT_TARGET = CameraTarget(Position(DEFAULT_LATITUDE, DEFAULT_LONGITUDE), PREVIEW_ZOOM)


def device_target(position: Position) -> CameraTarget:
    """Return the close-up target used when following the device."""
    return CameraTarget(position, DEVICE_ZOOM)


class CameraIntentController:
    """Resolves camera intents and delivers the targets to the map view surface."""

    def __init__(self) -> None:
        self._surface = None
        self._pending: CameraTarget | None = None
        self._lock = asyncio.Lock()
        # Last target actually delivered to a surface
        self.last_target: CameraTarget | None = None

    @property
    def surface_ready(self) -> bool:
        return self._surface is not None

    @property
    def pending(self) -> CameraTarget | None:
        return self._pending

    @staticmethod
    def resolve(intent: CameraIntent | None, position: Position | None) -> CameraTarget | None:
        """Return the target for a reconciliation intent, or None when the camera stays put."""
        if intent is CameraIntent.FOLLOW and position is not None:
            return device_target(position)
        return None

    async def request(self, target: CameraTarget) -> None:
        """Animate to target now, or keep it until the surface is ready."""
        async with self._lock:
            if self._surface is None:
                if self._pending is not None:
                    _LOGGER.debug("Replacing pending camera target %s with %s", self._pending, target)
                self._pending = target
                return
            await self._animate(target)

    async def follow(self, position: Position) -> None:
        await self.request(device_target(position))

    async def recenter_default(self) -> None:
        await self.request(DEFAULT_TARGET)

    async def attach_surface(self, surface) -> None:
        """Register the map view surface and flush any pending request to it."""
        async with self._lock:
            self._surface = surface
            pending, self._pending = self._pending, None
            if pending is not None:
                _LOGGER.debug("Surface ready, flushing pending camera target %s", pending)
                await self._animate(pending)

    def detach_surface(self) -> None:
        self._surface = None

    async def _animate(self, target: CameraTarget) -> None:
        """Call into the surface; caller must hold the lock."""
        try:
            await self._surface.async_animate_camera(target)
        except Exception as exc:
            _LOGGER.warning("Failed to move camera to %s: %s", target, exc)
            return
        self.last_target = target
