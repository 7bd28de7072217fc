"""
TrackerState: immutable snapshot of everything known about the device.

This is a pure data module with no HA or network dependencies.
"""
from __future__ import annotations

import dataclasses

from .models import Position


@dataclasses.dataclass(frozen=True)
class TrackerState:
    """
    Typed, copy-on-write snapshot of the tracked device.

    Always replace via dataclasses.replace(), never mutate in place.
    """

    # Last fix that passed the jitter threshold; None until the first fix
    last_good_position: Position | None = None

    satellites: int | None = None
    hdop: float | None = None

    # Last error reported by the device itself; cleared by the next accepted fix
    last_error: str | None = None

    # True once the map has been sent to the device after a fresh fix
    has_followed_device: bool = False

    # Last buzzer state confirmed by the device
    buzzer_on: bool = False
