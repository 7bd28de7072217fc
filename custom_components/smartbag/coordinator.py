"""
DataUpdateCoordinator for the Smartbag integration.

Responsibilities:
- Own the single SmartbagApi instance for the lifetime of a config entry.
- Poll the device location every POLL_INTERVAL seconds and on demand.
- Reconcile each reading into an immutable TrackerState and push it to entities.
- Forward camera intents to the CameraIntentController.
- Send buzzer commands, updating state only after the device acknowledges.
"""
from __future__ import annotations

import dataclasses
import logging
from datetime import timedelta

from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .api import SmartbagApi
from .camera import CameraIntentController, DEFAULT_TARGET, device_target
from .const import DOMAIN, VERSION, POLL_INTERVAL
from .coordinator_data import TrackerState
from .reconciliation import ReconcileResult, reconcile, reset_follow

_LOGGER = logging.getLogger(__name__)


class SmartbagCoordinator(DataUpdateCoordinator[TrackerState]):
    """
    Coordinator for the Smartbag integration.

    Every operation runs on the HA event loop; the only suspension points are
    the HTTP calls and the camera animation.
    """

    def __init__(self, hass: HomeAssistant, entry_data: dict) -> None:
        """Initialize the coordinator from config-entry data."""
        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            update_interval=timedelta(seconds=POLL_INTERVAL),
            # Unchanged snapshots are not pushed to entities
            always_update=False,
        )

        self.api = SmartbagApi(entry_data["host"])
        self.camera = CameraIntentController()
        self._entry_data = entry_data

        self.data = TrackerState()

    # ------------------------------------------------------------------
    # HA entry point
    # ------------------------------------------------------------------

    async def _async_update_data(self) -> TrackerState:
        """
        Called by HA on every update_interval tick.

        Never raises: failed polls leave the snapshot as it was so HA keeps
        scheduling the next one.
        """
        result = await self.async_poll()
        if not result.changed:
            return result.state

        # Commit before the camera animation so a buzzer acknowledgment or a
        # recenter landing while it runs is not overwritten
        self.async_set_updated_data(result.state)
        await self._dispatch_intent(result)
        return self.data

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def async_poll(self) -> ReconcileResult:
        """Fetch one reading and reconcile it against the current snapshot."""
        reading = await self.api.fetch_reading()
        # Reconcile against the snapshot current at arrival, not at request time
        return reconcile(self.data, reading)

    async def _dispatch_intent(self, result: ReconcileResult) -> None:
        target = self.camera.resolve(result.intent, result.state.last_good_position)
        if target is not None:
            await self.camera.request(target)

    async def async_manual_refresh(self) -> None:
        """
        Poll immediately, outside the regular cadence, then centre the map on
        the device if a fix is known or on the default view otherwise.
        """
        result = await self.async_poll()
        if result.changed:
            self.async_set_updated_data(result.state)

        position = result.state.last_good_position
        if position is not None:
            await self.camera.request(device_target(position))
        else:
            await self.camera.request(DEFAULT_TARGET)

    async def async_recenter_default(self) -> None:
        """Show the default view and re-arm following for the next new fix."""
        if self.data.has_followed_device:
            self.async_set_updated_data(reset_follow(self.data))
        await self.camera.recenter_default()

    # ------------------------------------------------------------------
    # Write path: buzzer (called directly from switch.py)
    # ------------------------------------------------------------------

    async def async_set_buzzer(self, on: bool) -> bool:
        """
        Send the buzzer command and, only if the device acknowledged it,
        record the new state in the snapshot.

        Does NOT trigger a refresh; the location endpoint does not report the
        buzzer state.
        """
        if not await self.api.set_buzzer(on):
            return False

        if self.data.buzzer_on != on:
            self.async_set_updated_data(dataclasses.replace(self.data, buzzer_on=on))
        return True

    async def async_toggle_buzzer(self) -> bool:
        """Flip the buzzer relative to the last state the device confirmed."""
        return await self.async_set_buzzer(not self.data.buzzer_on)

    # ------------------------------------------------------------------
    # Entity helper: device info dict
    # ------------------------------------------------------------------

    def get_device_info(self) -> dict:
        """Return the HA DeviceInfo dict for the tracked device."""
        return {
            "identifiers": {(DOMAIN, self._entry_data["guid"])},
            "name": self._entry_data.get("entry_name") or "Smartbag",
            "manufacturer": "Smartbag",
            "model": "GPS Tracker",
            "sw_version": VERSION,
            "configuration_url": f"http://{self._entry_data['host']}",
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def async_shutdown(self) -> None:
        """Stop polling and release the map view surface."""
        await super().async_shutdown()
        self.camera.detach_surface()

    @property
    def entry_data(self):
        return self._entry_data
