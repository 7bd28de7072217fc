"""
SmartbagApi: thin facade over the per-endpoint functions in this package.

The coordinator owns one instance for the lifetime of a config entry.
"""
from __future__ import annotations

from ..models import TelemetryReading
from .buzzer import send_buzzer_command
from .location import fetch_reading

__all__ = ["SmartbagApi", "fetch_reading", "send_buzzer_command"]


class SmartbagApi:
    """Talks to a single Smartbag device over plain HTTP."""

    def __init__(self, host: str) -> None:
        self.host = host

    async def fetch_reading(self) -> TelemetryReading:
        return await fetch_reading(self.host)

    async def set_buzzer(self, on: bool) -> bool:
        return await send_buzzer_command(self.host, on)
