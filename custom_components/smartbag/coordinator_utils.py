"""
Presentation helpers for the Smartbag coordinator and its entities.

Responsibilities:
- Derive the status line shown to the user from a TrackerState.
- Derive the marker position and title (device fix, or default preview).

No HA imports, these functions are pure data primitives.
"""
from __future__ import annotations

from .const import (
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    MARKER_TITLE_FIX,
    MARKER_TITLE_PREVIEW,
    STATUS_FIX,
    STATUS_PREVIEW,
)
from .coordinator_data import TrackerState
from .models import Position


def describe_status(state: TrackerState) -> str:
    """Return the one-line status text for state."""
    position = state.last_good_position
    if position is None:
        return STATUS_PREVIEW
    return STATUS_FIX.format(lat=position.latitude, lon=position.longitude)


def marker_position(state: TrackerState) -> Position:
    """Return where the marker sits: the last good fix, or the default location."""
    if state.last_good_position is not None:
        return state.last_good_position
    return Position(DEFAULT_LATITUDE, DEFAULT_LONGITUDE)


def marker_title(state: TrackerState) -> str:
    if state.last_good_position is None:
        return MARKER_TITLE_PREVIEW
    return MARKER_TITLE_FIX
