"""
Platform for GPS sensor integration.
This module is responsible for setting up the satellite count, HDOP, last
error and status sensors from the coordinator's TrackerState.
"""
from __future__ import annotations

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.core import HomeAssistant
from homeassistant import config_entries
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from custom_components.smartbag.coordinator import SmartbagCoordinator
from custom_components.smartbag.coordinator_utils import describe_status
import logging

_LOGGER = logging.getLogger(__name__)


class SmartbagSensor(CoordinatorEntity[SmartbagCoordinator], SensorEntity):
    """Common base: naming, unique id and device info for Smartbag sensors."""

    def __init__(self, coordinator: SmartbagCoordinator, key: str, label: str, icon: str) -> None:
        super().__init__(coordinator)
        guid = coordinator.entry_data["guid"]
        device_name = coordinator.entry_data.get("entry_name", "Smartbag")
        self._attr_unique_id = f"smartbag_{guid}_{key}"
        self._attr_name = f"{device_name} {label}"
        self._attr_icon = icon

    @property
    def device_info(self) -> DeviceInfo | None:
        """Return the device info."""
        return self.coordinator.get_device_info()


class SmartbagSatellitesSensor(SmartbagSensor):
    """Number of satellites the device last reported."""

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        super().__init__(coordinator, "satellites", "Satellites", "mdi:satellite-variant")

    @property
    def state_class(self) -> SensorStateClass | str | None:
        return SensorStateClass.MEASUREMENT

    @property
    def native_value(self) -> int | None:
        return self.coordinator.data.satellites


class SmartbagHdopSensor(SmartbagSensor):
    """Horizontal dilution of precision of the last accepted fix; lower is better."""

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        super().__init__(coordinator, "hdop", "HDOP", "mdi:crosshairs-question")

    @property
    def state_class(self) -> SensorStateClass | str | None:
        return SensorStateClass.MEASUREMENT

    @property
    def native_value(self) -> float | None:
        hdop = self.coordinator.data.hdop
        if hdop is None:
            return None
        return round(hdop, 2)


class SmartbagLastErrorSensor(SmartbagSensor):
    """Message from the most recent device-reported error, cleared by the next good fix."""

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        super().__init__(coordinator, "last_error", "Last Error", "mdi:alert-circle-outline")

    @property
    def native_value(self) -> str | None:
        return self.coordinator.data.last_error


class SmartbagStatusSensor(SmartbagSensor):
    """Human-readable status line: waiting for GPS or the current fix."""

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        super().__init__(coordinator, "status", "Status", "mdi:information-outline")

    @property
    def native_value(self) -> str:
        return describe_status(self.coordinator.data)

    @property
    def icon(self) -> str | None:
        if self.coordinator.data.last_good_position is None:
            return "mdi:map"
        return "mdi:crosshairs-gps"


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add sensors for passed config_entry in HA."""
    _LOGGER.debug("Starting sensor setup for Smartbag integration")
    coordinator: SmartbagCoordinator = config_entry.runtime_data
    async_add_entities([
        SmartbagSatellitesSensor(coordinator),
        SmartbagHdopSensor(coordinator),
        SmartbagLastErrorSensor(coordinator),
        SmartbagStatusSensor(coordinator),
    ])
