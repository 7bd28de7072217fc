"""
Platform for binary sensor integration.
This module is responsible for setting up the device problem and GPS fix
binary sensors from the coordinator's TrackerState.
"""
from __future__ import annotations

from homeassistant.components.binary_sensor import BinarySensorEntity, BinarySensorDeviceClass
from homeassistant.core import HomeAssistant
from homeassistant import config_entries
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from custom_components.smartbag.coordinator import SmartbagCoordinator
import logging

_LOGGER = logging.getLogger(__name__)


class SmartbagProblemSensor(CoordinatorEntity[SmartbagCoordinator], BinarySensorEntity):
    """
    On while the device reports an error (e.g. no GPS fix).
    The error text itself is exposed by the Last Error sensor.
    """

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        guid = coordinator.entry_data["guid"]
        device_name = coordinator.entry_data.get("entry_name", "Smartbag")
        self._attr_unique_id = f"smartbag_{guid}_problem"
        self._attr_name = f"{device_name} Device Problem"

    @property
    def icon(self) -> str | None:
        """Return the icon of the sensor."""
        if self.is_on:
            return "mdi:bell-alert"
        return "mdi:bell"

    @property
    def device_info(self) -> DeviceInfo | None:
        """Return the device info."""
        return self.coordinator.get_device_info()

    @property
    def device_class(self) -> BinarySensorDeviceClass | str | None:
        return BinarySensorDeviceClass.PROBLEM

    @property
    def is_on(self) -> bool | None:
        """Return if the binary sensor is on."""
        return self.coordinator.data.last_error is not None


class SmartbagFixSensor(CoordinatorEntity[SmartbagCoordinator], BinarySensorEntity):
    """On once a good position has been received."""

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        super().__init__(coordinator)
        guid = coordinator.entry_data["guid"]
        device_name = coordinator.entry_data.get("entry_name", "Smartbag")
        self._attr_unique_id = f"smartbag_{guid}_gps_fix"
        self._attr_name = f"{device_name} GPS Fix"

    @property
    def icon(self) -> str | None:
        if self.is_on:
            return "mdi:crosshairs-gps"
        return "mdi:crosshairs-off"

    @property
    def device_info(self) -> DeviceInfo | None:
        return self.coordinator.get_device_info()

    @property
    def is_on(self) -> bool | None:
        return self.coordinator.data.last_good_position is not None


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add binary sensors for passed config_entry in HA."""
    _LOGGER.debug("Starting binary_sensor setup for Smartbag integration")
    coordinator: SmartbagCoordinator = config_entry.runtime_data
    async_add_entities([
        SmartbagProblemSensor(coordinator),
        SmartbagFixSensor(coordinator),
    ])
