"""
Platform for switch integration.
This module is responsible for setting up the buzzer switch, which reflects
the last buzzer state the device acknowledged.
"""
from __future__ import annotations

from homeassistant.components.switch import SwitchEntity, SwitchDeviceClass
from homeassistant.core import HomeAssistant
from homeassistant import config_entries
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from custom_components.smartbag.coordinator import SmartbagCoordinator
import logging

_LOGGER = logging.getLogger(__name__)


class SmartbagBuzzerSwitch(CoordinatorEntity[SmartbagCoordinator], SwitchEntity):
    """
    Representation of the Smartbag buzzer.
    The state only changes after the device has answered the command with 200.
    """

    def __init__(self, coordinator: SmartbagCoordinator) -> None:
        """Initialize the switch."""
        super().__init__(coordinator)
        guid = coordinator.entry_data["guid"]
        device_name = coordinator.entry_data.get("entry_name", "Smartbag")
        self._attr_unique_id = f"smartbag_{guid}_buzzer"
        self._attr_name = f"{device_name} Buzzer"

    @property
    def device_info(self) -> DeviceInfo | None:
        """Return the device info."""
        return self.coordinator.get_device_info()

    @property
    def device_class(self) -> SwitchDeviceClass | str | None:
        return SwitchDeviceClass.SWITCH

    @property
    def icon(self) -> str | None:
        if self.is_on:
            return "mdi:bell-ring"
        return "mdi:bell-off"

    @property
    def is_on(self) -> bool:
        """Return true if the device confirmed the buzzer is on."""
        return self.coordinator.data.buzzer_on

    async def async_turn_on(self, **kwargs) -> None:
        """Turn the buzzer on."""
        if not await self.coordinator.async_set_buzzer(True):
            _LOGGER.warning("Buzzer stays off, device did not confirm the command")

    async def async_turn_off(self, **kwargs) -> None:
        """Turn the buzzer off."""
        if not await self.coordinator.async_set_buzzer(False):
            _LOGGER.warning("Buzzer stays on, device did not confirm the command")

    async def async_toggle(self, **kwargs) -> None:
        """Toggle from the last confirmed state."""
        await self.coordinator.async_toggle_buzzer()


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: config_entries.ConfigEntry,
    async_add_entities,
):
    """Add the buzzer switch for passed config_entry in HA."""
    _LOGGER.debug("Starting switch setup for Smartbag integration")
    coordinator: SmartbagCoordinator = config_entry.runtime_data
    async_add_entities([SmartbagBuzzerSwitch(coordinator)])
