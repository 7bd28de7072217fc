"""
Unit tests for SmartbagCoordinator.

Tests are grouped by the concept they exercise:
  - Initialisation
  - Scheduled polls (_async_update_data) and camera dispatch
  - Manual refresh
  - Recenter to default
  - Buzzer write path (async_set_buzzer / async_toggle_buzzer)
  - get_device_info helper and shutdown
"""

from __future__ import annotations

import asyncio
import unittest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from custom_components.smartbag.camera import DEFAULT_TARGET, device_target
from custom_components.smartbag.const import POLL_INTERVAL
from custom_components.smartbag.coordinator_data import TrackerState
from custom_components.smartbag.models import Position, TelemetryReading

from .test_common import (
    FakeSurface,
    GatedSurface,
    make_coordinator,
    make_error_reading,
    make_reading,
    make_state,
)


class TestCoordinatorInit(unittest.TestCase):

    def test_initial_state(self):
        coord = make_coordinator()
        self.assertEqual(coord.data, TrackerState())
        self.assertIsNone(coord.data.last_good_position)
        self.assertFalse(coord.data.has_followed_device)
        self.assertFalse(coord.data.buzzer_on)

    def test_poll_interval(self):
        coord = make_coordinator()
        self.assertEqual(coord.update_interval, timedelta(seconds=POLL_INTERVAL))

    def test_api_uses_configured_host(self):
        coord = make_coordinator(host="10.1.2.3")
        self.assertEqual(coord.api.host, "10.1.2.3")


class TestScheduledPoll(unittest.IsolatedAsyncioTestCase):

    async def test_first_fix_returned_and_camera_follows(self):
        coord = make_coordinator()
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.05, -98.26))
        coord.camera.request = AsyncMock()

        state = await coord._async_update_data()

        self.assertEqual(state.last_good_position, Position(26.05, -98.26))
        self.assertTrue(state.has_followed_device)
        coord.camera.request.assert_awaited_once_with(device_target(Position(26.05, -98.26)))

    async def test_marker_update_does_not_move_camera(self):
        coord = make_coordinator()
        coord.data = make_state(26.05, -98.26, has_followed_device=True)
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.10, -98.30))
        coord.camera.request = AsyncMock()

        state = await coord._async_update_data()

        self.assertEqual(state.last_good_position, Position(26.10, -98.30))
        coord.camera.request.assert_not_awaited()

    async def test_error_reading_keeps_position(self):
        coord = make_coordinator()
        coord.data = make_state(26.05, -98.26, has_followed_device=True)
        coord.api.fetch_reading = AsyncMock(return_value=make_error_reading("no fix"))
        coord.camera.request = AsyncMock()

        state = await coord._async_update_data()

        self.assertEqual(state.last_good_position, Position(26.05, -98.26))
        self.assertEqual(state.last_error, "no fix")
        coord.camera.request.assert_not_awaited()

    async def test_transport_failure_returns_current_snapshot(self):
        coord = make_coordinator()
        coord.data = make_state(26.05, -98.26)
        coord.api.fetch_reading = AsyncMock(return_value=TelemetryReading(failure="Timeout after 3s"))

        state = await coord._async_update_data()

        self.assertIs(state, coord.data)

    async def test_consecutive_failures_never_raise(self):
        coord = make_coordinator()
        coord.api.fetch_reading = AsyncMock(return_value=TelemetryReading(failure="refused"))

        for _ in range(5):
            state = await coord._async_update_data()

        self.assertEqual(state, TrackerState())
        self.assertEqual(coord.api.fetch_reading.await_count, 5)

    async def test_first_fix_before_surface_ready_is_deferred(self):
        coord = make_coordinator()
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.05, -98.26))

        await coord._async_update_data()
        surface = FakeSurface()
        await coord.camera.attach_surface(surface)

        self.assertEqual(surface.targets, [device_target(Position(26.05, -98.26))])

    async def test_buzzer_confirmed_during_animation_survives_poll(self):
        coord = make_coordinator()
        coord.async_set_updated_data = lambda d: setattr(coord, "data", d)
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.05, -98.26))
        surface = GatedSurface()
        await coord.camera.attach_surface(surface)

        poll = asyncio.ensure_future(coord._async_update_data())
        await surface.started.wait()
        self.assertTrue(await coord.async_set_buzzer(True))
        surface.release.set()
        state = await poll

        self.assertTrue(state.buzzer_on)
        self.assertTrue(state.has_followed_device)
        self.assertEqual(state.last_good_position, Position(26.05, -98.26))

    async def test_recenter_during_animation_survives_poll(self):
        coord = make_coordinator()
        coord.data = make_state(buzzer_on=True)
        coord.async_set_updated_data = lambda d: setattr(coord, "data", d)
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.05, -98.26))
        surface = GatedSurface()
        await coord.camera.attach_surface(surface)

        poll = asyncio.ensure_future(coord._async_update_data())
        await surface.started.wait()
        recenter = asyncio.ensure_future(coord.async_recenter_default())
        await asyncio.sleep(0)
        surface.release.set()
        state = await poll
        await recenter

        self.assertFalse(state.has_followed_device)
        self.assertTrue(state.buzzer_on)
        self.assertEqual(surface.targets[-1], DEFAULT_TARGET)


class TestManualRefresh(unittest.IsolatedAsyncioTestCase):

    async def test_refresh_with_new_fix_pushes_state_and_centres_on_device(self):
        coord = make_coordinator()
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.05, -98.26))
        coord.camera.request = AsyncMock()
        received = []
        coord.async_set_updated_data = lambda d: received.append(d)

        await coord.async_manual_refresh()

        self.assertEqual(len(received), 1)
        self.assertTrue(received[0].has_followed_device)
        coord.camera.request.assert_awaited_once_with(device_target(Position(26.05, -98.26)))

    async def test_refresh_without_fix_centres_on_default(self):
        coord = make_coordinator()
        coord.api.fetch_reading = AsyncMock(return_value=make_error_reading("no fix"))
        coord.camera.request = AsyncMock()
        coord.async_set_updated_data = MagicMock()

        await coord.async_manual_refresh()

        coord.camera.request.assert_awaited_once_with(DEFAULT_TARGET)

    async def test_refresh_failure_with_known_fix_centres_on_it(self):
        coord = make_coordinator()
        coord.data = make_state(26.05, -98.26, has_followed_device=False)
        coord.api.fetch_reading = AsyncMock(return_value=TelemetryReading(failure="timeout"))
        coord.camera.request = AsyncMock()
        coord.async_set_updated_data = MagicMock()

        await coord.async_manual_refresh()

        coord.async_set_updated_data.assert_not_called()
        coord.camera.request.assert_awaited_once_with(device_target(Position(26.05, -98.26)))

    async def test_refresh_does_not_touch_follow_flag_itself(self):
        coord = make_coordinator()
        coord.data = make_state(26.05, -98.26, has_followed_device=False)
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.05, -98.26))
        coord.camera.request = AsyncMock()
        coord.async_set_updated_data = MagicMock()

        await coord.async_manual_refresh()

        coord.async_set_updated_data.assert_not_called()
        self.assertFalse(coord.data.has_followed_device)


class TestRecenterDefault(unittest.IsolatedAsyncioTestCase):

    async def test_resets_follow_flag_and_moves_to_default(self):
        coord = make_coordinator()
        coord.data = make_state(26.05, -98.26, has_followed_device=True)
        coord.camera.request = AsyncMock()
        received = []
        coord.async_set_updated_data = lambda d: received.append(d)

        await coord.async_recenter_default()

        self.assertEqual(len(received), 1)
        self.assertFalse(received[0].has_followed_device)
        self.assertEqual(received[0].last_good_position, Position(26.05, -98.26))
        coord.camera.request.assert_awaited_once_with(DEFAULT_TARGET)

    async def test_next_new_fix_follows_again(self):
        coord = make_coordinator()
        coord.data = make_state(26.05, -98.26, has_followed_device=True)
        coord.camera.request = AsyncMock()

        def _set(d):
            coord.data = d
        coord.async_set_updated_data = _set

        await coord.async_recenter_default()
        coord.api.fetch_reading = AsyncMock(return_value=make_reading(26.10, -98.30))
        coord.data = await coord._async_update_data()

        self.assertEqual(
            coord.camera.request.await_args_list[-1].args[0],
            device_target(Position(26.10, -98.30)),
        )
        self.assertTrue(coord.data.has_followed_device)


class TestBuzzer(unittest.IsolatedAsyncioTestCase):

    async def test_on_confirmed_updates_state(self):
        coord = make_coordinator()
        coord.api.set_buzzer = AsyncMock(return_value=True)
        received = []
        coord.async_set_updated_data = lambda d: received.append(d)

        ok = await coord.async_set_buzzer(True)

        self.assertTrue(ok)
        coord.api.set_buzzer.assert_awaited_once_with(True)
        self.assertEqual(len(received), 1)
        self.assertTrue(received[0].buzzer_on)

    async def test_failure_leaves_state_unchanged(self):
        coord = make_coordinator()
        coord.api.set_buzzer = AsyncMock(return_value=False)
        received = []
        coord.async_set_updated_data = lambda d: received.append(d)

        ok = await coord.async_set_buzzer(True)

        self.assertFalse(ok)
        self.assertEqual(received, [])
        self.assertFalse(coord.data.buzzer_on)

    async def test_redundant_command_still_sent(self):
        coord = make_coordinator()
        coord.data = TrackerState(buzzer_on=True)
        coord.api.set_buzzer = AsyncMock(return_value=True)
        coord.async_set_updated_data = MagicMock()

        ok = await coord.async_set_buzzer(True)

        self.assertTrue(ok)
        coord.api.set_buzzer.assert_awaited_once_with(True)
        coord.async_set_updated_data.assert_not_called()

    async def test_toggle_uses_last_confirmed_state(self):
        coord = make_coordinator()
        coord.api.set_buzzer = AsyncMock(return_value=False)
        coord.async_set_updated_data = MagicMock()

        # Two lost commands in a row must both ask for "on"
        await coord.async_toggle_buzzer()
        await coord.async_toggle_buzzer()

        self.assertEqual([c.args[0] for c in coord.api.set_buzzer.await_args_list], [True, True])

    async def test_toggle_off_when_confirmed_on(self):
        coord = make_coordinator()
        coord.data = TrackerState(buzzer_on=True)
        coord.api.set_buzzer = AsyncMock(return_value=True)
        received = []
        coord.async_set_updated_data = lambda d: received.append(d)

        await coord.async_toggle_buzzer()

        coord.api.set_buzzer.assert_awaited_once_with(False)
        self.assertFalse(received[0].buzzer_on)

    async def test_no_refresh_triggered_after_command(self):
        coord = make_coordinator()
        coord.async_request_refresh = AsyncMock()
        coord.async_set_updated_data = MagicMock()

        await coord.async_set_buzzer(True)

        coord.async_request_refresh.assert_not_awaited()
        coord.api.fetch_reading.assert_not_awaited()


class TestDeviceInfoAndShutdown(unittest.IsolatedAsyncioTestCase):

    async def test_device_info(self):
        coord = make_coordinator(guid="my-guid", entry_name="Backpack")

        info = coord.get_device_info()

        self.assertIn(("smartbag", "my-guid"), info["identifiers"])
        self.assertEqual(info["name"], "Backpack")
        self.assertEqual(info["manufacturer"], "Smartbag")
        self.assertIn("sw_version", info)

    async def test_shutdown_detaches_surface(self):
        coord = make_coordinator()
        await coord.camera.attach_surface(FakeSurface())

        with patch.object(DataUpdateCoordinator, "async_shutdown", new=AsyncMock()):
            await coord.async_shutdown()

        self.assertFalse(coord.camera.surface_ready)
