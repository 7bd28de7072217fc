"""
Domain models for the Smartbag integration.

This module contains pure data classes representing device readings and camera
requests. These classes have no dependencies on HTTP or Home Assistant internals.
"""
from __future__ import annotations

import dataclasses
import enum


@dataclasses.dataclass(frozen=True)
class Position:
    """A single latitude/longitude fix in decimal degrees."""

    latitude: float
    longitude: float


@dataclasses.dataclass(frozen=True)
class TelemetryReading:
    """
    Outcome of a single poll of the device.

    At most one of position / error_message is populated. failure carries a
    transport, protocol or payload diagnostic and is never shown to the user.
    """

    position: Position | None = None
    satellites: int | None = None
    hdop: float | None = None
    error_message: str | None = None
    failure: str | None = None

    @property
    def is_error(self) -> bool:
        """Return True when the device itself reported an error."""
        return self.error_message is not None


class CameraIntent(enum.Enum):
    """What the map should do after a reading has been reconciled."""

    FOLLOW = "follow"
    MARKER_UPDATE = "marker_update"


@dataclasses.dataclass(frozen=True)
class CameraTarget:
    """Position and zoom level the map view should animate to."""

    position: Position
    zoom: float
