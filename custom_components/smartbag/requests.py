"""
Low-level HTTP request library for Smartbag device communication.
This module performs single bounded-timeout requests and maps every failure
onto the device error taxonomy below.
"""
import asyncio
import logging
import aiohttp

from .const import REQUEST_TIMEOUT

_LOGGER = logging.getLogger(__name__)


class DeviceRequestError(Exception):
    """Base class for every failure talking to the device."""


class TransportError(DeviceRequestError):
    """Timeout, refused connection, DNS failure or any other network problem."""


class ProtocolError(DeviceRequestError):
    """Device answered with a status other than 200."""
    def __init__(self, status: int, url: str):
        self.status = status
        self.url = url
        super().__init__(f"HTTP {status} from {url}")


class PayloadError(DeviceRequestError):
    """Device answered 200 but the body could not be used."""


class DeviceReportedError(DeviceRequestError):
    """Device answered with an explicit 'error' field in its payload."""
    def __init__(self, message: str, satellites: int | None = None):
        self.message = message
        self.satellites = satellites
        super().__init__(f"Device error: {message}")


def build_url(host: str, path: str) -> str:
    """Return the plain-HTTP URL for path on the device at host."""
    return f"http://{host}{path}"


async def make_request(
    method: str,
    url: str,
    params: dict = None,
    timeout: float = REQUEST_TIMEOUT,
    expect_json: bool = True,
):
    """
    Make a single HTTP request to the device.

    There is no retry: the poll cadence is the retry mechanism.

    Args:
        method: HTTP method (GET or POST)
        url: Target URL for the request
        params: URL query parameters (optional)
        timeout: Total timeout in seconds
        expect_json: Parse the body as JSON when True, otherwise discard it

    Returns:
        Parsed JSON response, or None when expect_json is False

    Raises:
        TransportError: On timeout or any connection-level failure
        ProtocolError: On any status other than 200
        PayloadError: If a JSON body was expected but could not be decoded
        ValueError: For an unsupported HTTP method
    """
    method = method.upper()
    if method not in ("GET", "POST"):
        raise ValueError(f"Unsupported HTTP method: {method}")

    timeout_config = aiohttp.ClientTimeout(total=timeout)
    try:
        async with aiohttp.ClientSession(timeout=timeout_config) as session:
            async with session.request(method, url, params=params) as response:
                return await _process_response(response, url, expect_json)
    except (asyncio.TimeoutError, TimeoutError) as e:
        raise TransportError(f"Timeout after {timeout}s on {method} {url}") from e
    except aiohttp.ClientError as e:
        raise TransportError(f"{type(e).__name__} on {method} {url}: {e}") from e


async def _process_response(response, url: str, expect_json: bool):
    """
    Check the status and extract the JSON body.

    The device does not always send an application/json content type, so the
    body is decoded regardless of the header.
    """
    if response.status != 200:
        text = await response.text(errors="replace")
        _LOGGER.debug(
            "Non-200 response from %s: status %s, body preview: %s",
            url, response.status, text[:200]
        )
        raise ProtocolError(response.status, url)

    if not expect_json:
        return None

    try:
        return await response.json(content_type=None)
    except ValueError as e:
        raise PayloadError(f"Invalid JSON from {url}: {e}") from e
