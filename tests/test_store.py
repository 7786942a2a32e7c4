"""Tests for the thermostatd DeviceStateStore."""

import dataclasses
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from homeassistant.components.climate import HVACMode

from custom_components.thermostatd.api import (
    ThermostatdApiAuthError,
    ThermostatdApiClientError,
)
from custom_components.thermostatd.models import DaemonMode, DeviceState, FanSpeed
from custom_components.thermostatd.store import DeviceStateStore

PATCH_STATE = "custom_components.thermostatd.store.api.async_patch_state"
TEST_HOST = "192.168.1.50:8080"
TEST_TOKEN = "secret_token"


def echo_state() -> AsyncMock:
    """Return a patch_state mock that answers with a copy of what it was sent."""
    return AsyncMock(
        side_effect=lambda _session, _host, _token, state: dataclasses.replace(state)
    )


class TestDeviceStateStoreInit:
    """Tests for DeviceStateStore initialization."""

    def test_init_uses_default_state(self, mock_session: Mock) -> None:
        """Test that the default state is used when none is supplied."""
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN)
        assert store.state == DeviceState(
            powered_on=False,
            current_mode=DaemonMode.COOL,
            fan_speed=FanSpeed.AUTO,
            target_temperature=72,
            current_temperature=0,
        )
        assert store.host == TEST_HOST

    def test_init_uses_supplied_state(
        self, mock_session: Mock, heat_state: DeviceState
    ) -> None:
        """Test that an explicit initial state is kept."""
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN, heat_state)
        assert store.state is heat_state

    @pytest.mark.asyncio
    async def test_push_initial_state_sends_default_state(
        self, mock_session: Mock
    ) -> None:
        """Test that the default state is pushed to the daemon."""
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN)
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_push_initial_state()
        patch_state.assert_awaited_once_with(
            mock_session, TEST_HOST, TEST_TOKEN, DeviceState.default()
        )


class TestDeviceStateStoreReconcile:
    """Tests for async_reconcile."""

    @pytest.mark.asyncio
    async def test_reconcile_replaces_state_with_daemon_answer(
        self, store: DeviceStateStore, heat_state: DeviceState
    ) -> None:
        """Test that the daemon's answer replaces the local state wholesale."""
        with patch(PATCH_STATE, AsyncMock(return_value=heat_state)):
            result = await store.async_reconcile()
        assert result is heat_state
        assert store.state is heat_state

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ThermostatdApiClientError("Request failed: 500"),
            ThermostatdApiAuthError("Authentication error"),
            httpx.ConnectError("Connection refused"),
            httpx.ReadTimeout("Timed out"),
            RuntimeError("boom"),
        ],
    )
    async def test_reconcile_keeps_state_on_failure(
        self, store: DeviceStateStore, error: Exception
    ) -> None:
        """Test that failures are swallowed and the local state is kept."""
        before = store.state
        with patch(PATCH_STATE, AsyncMock(side_effect=error)):
            result = await store.async_reconcile()
        assert result is before
        assert store.state is before

    @pytest.mark.asyncio
    async def test_reconcile_notifies_listeners(
        self, store: DeviceStateStore, heat_state: DeviceState
    ) -> None:
        """Test that listeners run after success and failure alike."""
        listener = Mock()
        store.async_add_listener(listener)
        with patch(PATCH_STATE, AsyncMock(return_value=heat_state)):
            await store.async_reconcile()
        with patch(PATCH_STATE, AsyncMock(side_effect=ThermostatdApiClientError)):
            await store.async_reconcile()
        assert listener.call_count == 2

    @pytest.mark.asyncio
    async def test_removed_listener_is_not_called(
        self, store: DeviceStateStore, heat_state: DeviceState
    ) -> None:
        """Test that the returned function unsubscribes the listener."""
        listener = Mock()
        remove = store.async_add_listener(listener)
        remove()
        remove()
        with patch(PATCH_STATE, AsyncMock(return_value=heat_state)):
            await store.async_reconcile()
        listener.assert_not_called()


class TestDeviceStateStoreHvacMode:
    """Tests for HVAC mode get/set."""

    def test_get_hvac_mode_reports_off_when_powered_off(
        self, mock_session: Mock
    ) -> None:
        """Test that a powered-off device reads as OFF."""
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN)
        assert store.get_hvac_mode() == HVACMode.OFF
        assert store.get_powered_on() is False

    def test_get_hvac_mode_reports_dry_as_auto(
        self, mock_session: Mock, cool_state: DeviceState
    ) -> None:
        """Test that DRY surfaces as AUTO."""
        cool_state.current_mode = DaemonMode.DRY
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN, cool_state)
        assert store.get_hvac_mode() == HVACMode.AUTO

    @pytest.mark.asyncio
    async def test_set_hvac_mode_patches_changed_mode(
        self, store: DeviceStateStore
    ) -> None:
        """Test that a new mode is sent to the daemon."""
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_hvac_mode(HVACMode.HEAT)
        patch_state.assert_awaited_once()
        assert store.state.current_mode == DaemonMode.HEAT
        assert store.state.powered_on is True

    @pytest.mark.asyncio
    async def test_set_hvac_mode_skips_unchanged_mode(
        self, store: DeviceStateStore
    ) -> None:
        """Test that re-selecting the active mode does not contact the daemon."""
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_hvac_mode(HVACMode.COOL)
        patch_state.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_hvac_mode_off_keeps_mode(self, store: DeviceStateStore) -> None:
        """Test that OFF clears power but leaves the mode alone."""
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_hvac_mode(HVACMode.OFF)
        patch_state.assert_awaited_once()
        assert store.state.powered_on is False
        assert store.state.current_mode == DaemonMode.COOL
        assert store.get_hvac_mode() == HVACMode.OFF

    @pytest.mark.asyncio
    async def test_set_hvac_mode_auto_writes_fan(
        self, mock_session: Mock, cool_state: DeviceState
    ) -> None:
        """Test that AUTO turns a DRY device into FAN."""
        cool_state.current_mode = DaemonMode.DRY
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN, cool_state)
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_hvac_mode(HVACMode.AUTO)
        patch_state.assert_awaited_once()
        assert store.state.current_mode == DaemonMode.FAN
        assert store.get_hvac_mode() == HVACMode.AUTO

    @pytest.mark.asyncio
    async def test_set_hvac_mode_auto_on_fan_is_noop(
        self, mock_session: Mock, cool_state: DeviceState
    ) -> None:
        """Test that AUTO on a device already in FAN does not patch."""
        cool_state.current_mode = DaemonMode.FAN
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN, cool_state)
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_hvac_mode(HVACMode.AUTO)
        patch_state.assert_not_awaited()


class TestDeviceStateStoreTargetTemperature:
    """Tests for target temperature get/set."""

    def test_get_target_temperature_returns_celsius(
        self, store: DeviceStateStore
    ) -> None:
        """Test that 72°F reads as 22.2°C."""
        assert store.get_target_temperature() == pytest.approx(22.222, abs=1e-3)

    def test_get_current_temperature_mirrors_target(
        self, store: DeviceStateStore
    ) -> None:
        """Test that the current temperature is the target temperature."""
        store.state.current_temperature = 0
        assert store.get_current_temperature() == store.get_target_temperature()

    @pytest.mark.asyncio
    async def test_set_target_temperature_skips_unchanged_value_in_heat(
        self, mock_session: Mock, heat_state: DeviceState
    ) -> None:
        """Test that a request quantizing to the stored value is a no-op."""
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN, heat_state)
        with patch(PATCH_STATE, echo_state()) as patch_state:
            result = await store.async_set_target_temperature(20.0)  # 68°F
        assert patch_state.await_count == 0
        assert store.state.target_temperature == 68
        assert result == pytest.approx(20.0)

    @pytest.mark.asyncio
    async def test_set_target_temperature_clamps_in_cool(
        self, store: DeviceStateStore
    ) -> None:
        """Test that 35°C (95°F) in COOL is stored as 88°F with one patch."""
        with patch(PATCH_STATE, echo_state()) as patch_state:
            result = await store.async_set_target_temperature(35.0)
        assert patch_state.await_count == 1
        assert store.state.target_temperature == 88
        assert result == pytest.approx(31.111, abs=1e-3)

    @pytest.mark.asyncio
    async def test_set_target_temperature_uses_heat_range(
        self, mock_session: Mock, heat_state: DeviceState
    ) -> None:
        """Test that HEAT caps the target at 76°F."""
        store = DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN, heat_state)
        with patch(PATCH_STATE, echo_state()):
            await store.async_set_target_temperature(30.0)
        assert store.state.target_temperature == 76

    @pytest.mark.asyncio
    async def test_set_target_temperature_sends_optimistic_state(
        self, store: DeviceStateStore
    ) -> None:
        """Test that the daemon receives the already-mutated state."""
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_target_temperature(24.0)  # 75.2°F -> 76°F
        sent_state = patch_state.await_args[0][3]
        assert sent_state.target_temperature == 76

    @pytest.mark.asyncio
    async def test_set_target_temperature_adopts_daemon_answer(
        self, store: DeviceStateStore, cool_state: DeviceState
    ) -> None:
        """Test that the daemon's answer wins over the local value."""
        answer = dataclasses.replace(cool_state, target_temperature=80)
        with patch(PATCH_STATE, AsyncMock(return_value=answer)):
            await store.async_set_target_temperature(24.0)
        assert store.state.target_temperature == 80

    @pytest.mark.asyncio
    async def test_set_target_temperature_keeps_optimistic_value_on_failure(
        self, store: DeviceStateStore
    ) -> None:
        """Test that a failed patch leaves the new value, not the old one."""
        with patch(
            PATCH_STATE,
            AsyncMock(side_effect=httpx.ConnectError("Connection refused")),
        ):
            result = await store.async_set_target_temperature(24.0)
        assert store.state.target_temperature == 76
        assert result == pytest.approx(24.444, abs=1e-3)


class TestDeviceStateStoreFan:
    """Tests for fan get/set."""

    def test_get_fan_on_is_always_true(self, store: DeviceStateStore) -> None:
        """Test that the fan is modelled as always on."""
        assert store.get_fan_on() is True

    def test_get_fan_percentage(self, store: DeviceStateStore) -> None:
        """Test that the stored speed reads as a percentage."""
        store.state.fan_speed = FanSpeed.MEDIUM
        assert store.get_fan_percentage() == 75

    @pytest.mark.asyncio
    async def test_set_fan_on_false_forces_auto(self, store: DeviceStateStore) -> None:
        """Test that switching the fan off resets the speed to AUTO."""
        store.state.fan_speed = FanSpeed.HIGH
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_fan_on(False)
        patch_state.assert_awaited_once()
        assert store.state.fan_speed == FanSpeed.AUTO

    @pytest.mark.asyncio
    async def test_set_fan_on_true_is_noop(self, store: DeviceStateStore) -> None:
        """Test that switching the fan on does nothing."""
        store.state.fan_speed = FanSpeed.HIGH
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_fan_on(True)
        patch_state.assert_not_awaited()
        assert store.state.fan_speed == FanSpeed.HIGH

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("percentage", "expected"),
        [
            (0, FanSpeed.AUTO),
            (25, FanSpeed.QUIET),
            (26, FanSpeed.LOW),
            (100, FanSpeed.HIGH),
        ],
    )
    async def test_set_fan_percentage(
        self, store: DeviceStateStore, percentage: int, expected: FanSpeed
    ) -> None:
        """Test that percentages map onto fan speeds and are patched."""
        with patch(PATCH_STATE, echo_state()) as patch_state:
            await store.async_set_fan_percentage(percentage)
        patch_state.assert_awaited_once()
        assert store.state.fan_speed == expected

    @pytest.mark.asyncio
    async def test_set_fan_percentage_does_not_raise_on_failure(
        self, store: DeviceStateStore
    ) -> None:
        """Test that a failed patch keeps the optimistic speed."""
        with patch(PATCH_STATE, AsyncMock(side_effect=ThermostatdApiClientError)):
            state = await store.async_set_fan_percentage(60)
        assert state.fan_speed == FanSpeed.MEDIUM
