"""
Location polling for the Smartbag device.

Responsible for:
- Fetching the current GPS reading from the device
- Tolerant coercion of numeric fields (JSON numbers or numeric strings)
- Mapping every failure onto a TelemetryReading so callers never see an exception

Corresponding CURL command:
curl 'http://<host>/location'
"""
import logging
import math

from custom_components.smartbag.const import LOCATION_PATH
from custom_components.smartbag.models import Position, TelemetryReading
from custom_components.smartbag.requests import (
    DeviceReportedError,
    DeviceRequestError,
    PayloadError,
    build_url,
    make_request,
)

_LOGGER = logging.getLogger(__name__)


def coerce_float(value) -> float | None:
    """
    Return value as a finite float, or None.

    Accepts JSON numbers and numeric strings. Booleans, NaN and infinities are
    rejected.
    """
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        result = float(value)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def coerce_int(value) -> int | None:
    """Return value as an int when it is a whole number, or None."""
    number = coerce_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_reading(payload) -> TelemetryReading:
    """
    Turn a decoded /location body into a TelemetryReading.

    Raises:
        PayloadError: If the body is not a JSON object
        DeviceReportedError: If the body carries a non-null 'error' field
    """
    if not isinstance(payload, dict):
        raise PayloadError(f"Expected a JSON object, got {type(payload).__name__}")

    if payload.get("error") is not None:
        raise DeviceReportedError(str(payload["error"]), coerce_int(payload.get("satellites")))

    lat = coerce_float(payload.get("lat"))
    lon = coerce_float(payload.get("lon"))
    satellites = coerce_int(payload.get("satellites"))
    hdop = coerce_float(payload.get("hdop"))

    if lat is None or lon is None:
        _LOGGER.debug("Invalid GPS response, no usable lat/lon: %s", payload)
        return TelemetryReading(satellites=satellites, hdop=hdop)

    return TelemetryReading(
        position=Position(lat, lon),
        satellites=satellites,
        hdop=hdop,
    )


async def fetch_reading(host: str) -> TelemetryReading:
    """
    Poll the device once and return what it reported.

    Never raises. Device-reported errors come back in error_message; every
    other failure comes back in failure and is logged here.
    """
    url = build_url(host, LOCATION_PATH)
    try:
        payload = await make_request("GET", url)
        return parse_reading(payload)
    except DeviceReportedError as e:
        _LOGGER.debug("Device at %s reported an error: %s", host, e.message)
        return TelemetryReading(satellites=e.satellites, error_message=e.message)
    except DeviceRequestError as e:
        _LOGGER.warning("Failed to get location from %s: %s", host, e)
        return TelemetryReading(failure=str(e))
