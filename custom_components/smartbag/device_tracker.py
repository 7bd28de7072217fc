"""
Platform for GPS tracker integration.
This module is responsible for setting up the device location marker and the
map view entity, which acts as the camera surface for CameraIntentController.
"""
from __future__ import annotations

from homeassistant.components.device_tracker.config_entry import TrackerEntity
from homeassistant.core import HomeAssistant
from homeassistant import config_entries
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from custom_components.smartbag.camera import DEFAULT_TARGET
from custom_components.smartbag.coordinator import SmartbagCoordinator
from custom_components.smartbag.coordinator_utils import marker_position, marker_title
from custom_components.smartbag.models import CameraTarget
import logging

_LOGGER = logging.getLogger(__name__)


class SmartbagLocationTracker(CoordinatorEntity[SmartbagCoordinator], TrackerEntity):
    """
    Representation of the Smartbag position marker.
    Sits on the last good fix, or on the default location until the first fix.
    """

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        """Initialize the tracker."""
        super().__init__(coordinator)
        guid = coordinator.entry_data["guid"]
        self._device_name = coordinator.entry_data.get("entry_name", "Smartbag")
        self._attr_unique_id = f"smartbag_{guid}_location"
        self._attr_name = f"{self._device_name} Location"

    @property
    def device_info(self) -> DeviceInfo | None:
        """Return the device info."""
        return self.coordinator.get_device_info()

    @property
    def latitude(self) -> float | None:
        """Return latitude value of the marker."""
        return marker_position(self.coordinator.data).latitude

    @property
    def longitude(self) -> float | None:
        """Return longitude value of the marker."""
        return marker_position(self.coordinator.data).longitude

    @property
    def source_type(self) -> str:
        """Return the source type, eg gps or router, of the device."""
        return "gps"

    @property
    def icon(self) -> str | None:
        if self.coordinator.data.last_good_position is None:
            return "mdi:map"
        return "mdi:crosshairs-gps"

    @property
    def extra_state_attributes(self) -> dict:
        state = self.coordinator.data
        return {
            "marker_title": marker_title(state),
            "satellites": state.satellites,
            "hdop": state.hdop,
        }


class SmartbagMapView(TrackerEntity):
    """
    Map view the dashboard centres on.

    Its coordinates and zoom are the last camera target delivered by the
    coordinator's CameraIntentController. Being added to HA is the "surface
    ready" signal; until then camera requests wait in the controller.
    """

    _attr_should_poll = False

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        self.coordinator = coordinator
        guid = coordinator.entry_data["guid"]
        device_name = coordinator.entry_data.get("entry_name", "Smartbag")
        self._attr_unique_id = f"smartbag_{guid}_map_view"
        self._attr_name = f"{device_name} Map View"
        self._attr_icon = "mdi:map-search"
        self._target: CameraTarget = DEFAULT_TARGET

    @property
    def device_info(self) -> DeviceInfo | None:
        return self.coordinator.get_device_info()

    @property
    def latitude(self) -> float | None:
        return self._target.position.latitude

    @property
    def longitude(self) -> float | None:
        return self._target.position.longitude

    @property
    def source_type(self) -> str:
        return "gps"

    @property
    def extra_state_attributes(self) -> dict:
        return {"zoom": self._target.zoom}

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        await self.coordinator.camera.attach_surface(self)

    async def async_will_remove_from_hass(self) -> None:
        self.coordinator.camera.detach_surface()
        await super().async_will_remove_from_hass()

    async def async_animate_camera(self, target: CameraTarget) -> None:
        """Move the view to target."""
        _LOGGER.debug("Map view moving to %s", target)
        self._target = target
        self.async_write_ha_state()


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add trackers for passed config_entry in HA."""
    _LOGGER.debug("Starting device_tracker setup for Smartbag integration")
    coordinator: SmartbagCoordinator = config_entry.runtime_data
    async_add_entities([
        SmartbagLocationTracker(coordinator),
        SmartbagMapView(coordinator),
    ])
