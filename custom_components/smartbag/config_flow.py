"""Config flow for Smartbag Tracker integration."""
from __future__ import annotations
import logging
import uuid
from typing import Any, Dict, Optional
import homeassistant.helpers.config_validation as cv
import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import callback

from .const import DOMAIN, DEFAULT_HOST, DEFAULT_ENTRY_NAME

_LOGGER = logging.getLogger(__name__)
CONFIG_SCHEMA = vol.Schema(
            {
                vol.Required('entry_name', default=DEFAULT_ENTRY_NAME): cv.string,
                vol.Required('host', default=DEFAULT_HOST): cv.string,
            }
        )


def _validate_input(user_input: Dict[str, Any]) -> Dict[str, str]:
    """Return form errors for user_input; strips whitespace from the host in place."""
    errors: Dict[str, str] = {}
    user_input['host'] = (user_input.get('host') or '').strip()
    if not user_input.get('entry_name'):
        errors['base'] = 'entry_name_required'
    elif not user_input['host']:
        errors['base'] = 'host_required'
    # Bare host or host:port only, the scheme and paths are fixed
    elif '://' in user_input['host'] or '/' in user_input['host'] or ' ' in user_input['host']:
        errors['base'] = 'invalid_host'
    return errors


class CustomFlow(config_entries.ConfigFlow, domain=DOMAIN):
    data: Optional[Dict[str, Any]]

    async def async_step_user(self, user_input: Optional[Dict[str, Any]] = None):
        errors: Dict[str, str] = {}
        if user_input is not None:
            self.data = dict(user_input)
            errors = _validate_input(self.data)
            if not errors:
                # Create new guid for the entry
                self.data['guid'] = str(uuid.uuid4())
                return self.async_create_entry(title=f"{self.data['entry_name']}", data=self.data)

        return self.async_show_form(step_id="user", data_schema=CONFIG_SCHEMA, errors=errors)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Get the options flow for this handler."""
        return OptionsFlowHandler(config_entry)

class OptionsFlowHandler(config_entries.OptionsFlow):
    """Handles options flow for the component."""

    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        self._entry = config_entry

    async def async_step_init(
        self, user_input: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        errors: Dict[str, str] = {}

        default_entry_name = self._entry.options.get(
            'entry_name', self._entry.data.get('entry_name', DEFAULT_ENTRY_NAME)
        )
        default_host = self._entry.options.get(
            'host', self._entry.data.get('host', DEFAULT_HOST)
        )

        if user_input is not None:
            user_input = dict(user_input)
            errors = _validate_input(user_input)
            if not errors:
                new_data = {
                    'guid': self._entry.data['guid'],
                    'entry_name': user_input['entry_name'],
                    'host': user_input['host'],
                }
                # Rename the entry in the UI; the update listener reloads it
                self.hass.config_entries.async_update_entry(
                    self._entry,
                    data=new_data,
                    title=new_data['entry_name'],
                )
                return self.async_create_entry(title=f"{new_data['entry_name']}", data=new_data)

        OPTIONS_SCHEMA = vol.Schema(
            {
                vol.Required('entry_name', default=default_entry_name): cv.string,
                vol.Required('host', default=default_host): cv.string,
            }
        )
        return self.async_show_form(step_id="init", data_schema=OPTIONS_SCHEMA, errors=errors)
