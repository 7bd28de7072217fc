"""
Buzzer command for the Smartbag device.

Corresponding CURL command:
curl -X 'POST' 'http://<host>/buzzer?state=on'
"""
import logging

from custom_components.smartbag.const import BUZZER_PATH
from custom_components.smartbag.requests import DeviceRequestError, build_url, make_request

_LOGGER = logging.getLogger(__name__)


async def send_buzzer_command(host: str, on: bool) -> bool:
    """
    Ask the device to switch its buzzer on or off.

    Returns True only when the device answered 200. Failures are logged and
    reported through the return value.
    """
    url = build_url(host, BUZZER_PATH)
    state = "on" if on else "off"
    try:
        await make_request("POST", url, params={"state": state}, expect_json=False)
    except DeviceRequestError as e:
        _LOGGER.error("Failed to set buzzer %s on %s: %s", state, host, e)
        return False
    return True
