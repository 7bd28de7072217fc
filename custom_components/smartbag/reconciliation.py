"""
Reconciliation of telemetry readings into TrackerState.

Pure functions with no HA or network dependencies. Readings carry no sequence
number, so whichever reading is applied last wins.

Transition rules, in priority order:
  1. Device-reported error  → record last_error (and satellites when known);
                              position and follow flag untouched, no intent.
  2. Meaningfully new fix   → replace position, satellites, hdop; clear
                              last_error; FOLLOW on the first fix since the last
                              recenter, MARKER_UPDATE afterwards.
  3. Anything else          → unchanged state, no intent.
"""
from __future__ import annotations

import dataclasses
import logging

from .const import POSITION_THRESHOLD
from .coordinator_data import TrackerState
from .models import CameraIntent, Position, TelemetryReading

_LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ReconcileResult:
    """New state plus what changed, for the camera controller to react to."""

    state: TrackerState
    changed: bool = False
    intent: CameraIntent | None = None


def is_meaningfully_different(old: Position | None, new: Position) -> bool:
    """Return True when new moved past the jitter threshold on either axis, or old is missing."""
    if old is None:
        return True
    return (
        abs(new.latitude - old.latitude) > POSITION_THRESHOLD
        or abs(new.longitude - old.longitude) > POSITION_THRESHOLD
    )


def reconcile(state: TrackerState, reading: TelemetryReading) -> ReconcileResult:
    """Apply one reading to state and return the resulting snapshot."""
    if reading.is_error:
        satellites = reading.satellites if reading.satellites is not None else state.satellites
        new_state = dataclasses.replace(
            state, last_error=reading.error_message, satellites=satellites
        )
        return ReconcileResult(new_state, changed=new_state != state)

    if reading.position is None:
        if reading.failure is None:
            _LOGGER.debug("Ignoring reading without position or error: %s", reading)
        return ReconcileResult(state)

    if not is_meaningfully_different(state.last_good_position, reading.position):
        return ReconcileResult(state)

    if state.has_followed_device:
        intent = CameraIntent.MARKER_UPDATE
    else:
        intent = CameraIntent.FOLLOW

    new_state = dataclasses.replace(
        state,
        last_good_position=reading.position,
        satellites=reading.satellites,
        hdop=reading.hdop,
        last_error=None,
        has_followed_device=True,
    )
    _LOGGER.debug(
        "Position changed to (%.5f, %.5f), intent %s",
        reading.position.latitude, reading.position.longitude, intent.value,
    )
    return ReconcileResult(new_state, changed=True, intent=intent)


def reset_follow(state: TrackerState) -> TrackerState:
    """Return state with the follow flag cleared so the next new fix re-centres the map."""
    return dataclasses.replace(state, has_followed_device=False)
