"""
Platform for button integration.
This module is responsible for the user-triggered map actions: recentring on
the default view and refreshing the device location on demand.
"""
from __future__ import annotations

from homeassistant.components.button import ButtonEntity
from homeassistant.core import HomeAssistant
from homeassistant import config_entries
from homeassistant.helpers.entity import DeviceInfo

from custom_components.smartbag.coordinator import SmartbagCoordinator
import logging

_LOGGER = logging.getLogger(__name__)


class SmartbagButton(ButtonEntity):
    """Common base: naming, unique id and device info for Smartbag buttons."""

    def __init__(self, coordinator: SmartbagCoordinator, key: str, label: str, icon: str) -> None:
        self.coordinator = coordinator
        guid = coordinator.entry_data["guid"]
        device_name = coordinator.entry_data.get("entry_name", "Smartbag")
        self._attr_unique_id = f"smartbag_{guid}_{key}"
        self._attr_name = f"{device_name} {label}"
        self._attr_icon = icon

    @property
    def device_info(self) -> DeviceInfo | None:
        """Return the device info."""
        return self.coordinator.get_device_info()


class SmartbagRecenterButton(SmartbagButton):
    """Show the default view; the next new fix re-centres on the device."""

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        super().__init__(coordinator, "recenter_default", "Recenter to Default", "mdi:city")

    async def async_press(self) -> None:
        await self.coordinator.async_recenter_default()


class SmartbagRefreshButton(SmartbagButton):
    """Poll the device now and centre on it."""

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        super().__init__(coordinator, "refresh_location", "Refresh Location", "mdi:refresh")

    async def async_press(self) -> None:
        await self.coordinator.async_manual_refresh()


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add buttons for passed config_entry in HA."""
    _LOGGER.debug("Starting button setup for Smartbag integration")
    coordinator: SmartbagCoordinator = config_entry.runtime_data
    async_add_entities([
        SmartbagRecenterButton(coordinator),
        SmartbagRefreshButton(coordinator),
    ])
