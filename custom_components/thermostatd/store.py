"""Device state store for the thermostatd integration.

The store owns the single DeviceState of a config entry. Setters mutate
it optimistically, then reconcile with the daemon, which answers with
its authoritative state. Remote failures are logged and swallowed; the
optimistic value stays in place until the next successful patch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import httpx
from homeassistant.core import CALLBACK_TYPE, callback

from . import api
from .conversion import (
    daemon_to_hvac_mode,
    fahrenheit_to_celsius,
    fan_speed_to_percentage,
    hvac_to_daemon_mode,
    percentage_to_fan_speed,
    quantize_target_temperature,
)
from .models import DeviceState, FanSpeed

if TYPE_CHECKING:
    from homeassistant.components.climate import HVACMode

_LOGGER = logging.getLogger(__name__)


class DeviceStateStore:
    """Holds the last-known device state and syncs it with the daemon."""

    def __init__(
        self,
        session: httpx.AsyncClient,
        host: str,
        token: str,
        initial_state: DeviceState | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            session: HTTP client session for API calls.
            host: Daemon address.
            token: Auth token for the daemon.
            initial_state: State to start from; defaults to DeviceState.default().

        """
        self._session = session
        self._host = host
        self._token = token
        self._state = (
            initial_state if initial_state is not None else DeviceState.default()
        )
        self._listeners: list[Callable[[], None]] = []

    @property
    def host(self) -> str:
        """Return the daemon address."""
        return self._host

    @property
    def state(self) -> DeviceState:
        """Return the current in-memory state."""
        return self._state

    @callback
    def async_add_listener(self, update_callback: Callable[[], None]) -> CALLBACK_TYPE:
        """Register a callback run after every reconciliation.

        Returns:
            Function that removes the listener.

        """
        self._listeners.append(update_callback)

        @callback
        def remove_listener() -> None:
            if update_callback in self._listeners:
                self._listeners.remove(update_callback)

        return remove_listener

    @callback
    def _async_notify_listeners(self) -> None:
        for update_callback in list(self._listeners):
            update_callback()

    async def async_reconcile(self) -> DeviceState:
        """Send the current state to the daemon and adopt its answer.

        Never raises. On failure the optimistic state is kept.

        Returns:
            The best-known state after the attempt.

        """
        try:
            new_state = await api.async_patch_state(
                self._session,
                self._host,
                self._token,
                self._state,
            )
        except api.ThermostatdApiAuthError:
            _LOGGER.exception(
                "Authentication error while updating %s. Check the configured token.",
                self._host,
            )
        except api.ThermostatdApiClientError:
            _LOGGER.exception("API error while updating %s", self._host)
        except httpx.HTTPError:
            _LOGGER.exception("Connection error while updating %s", self._host)
        except Exception:
            _LOGGER.exception("Unexpected error while updating %s", self._host)
        else:
            self._state = new_state

        self._async_notify_listeners()
        return self._state

    async def async_push_initial_state(self) -> DeviceState:
        """Push the starting state to the daemon."""
        _LOGGER.debug("Pushing initial state to %s: %s", self._host, self._state)
        return await self.async_reconcile()

    def get_powered_on(self) -> bool:
        """Return whether the thermostat is powered on."""
        return self._state.powered_on

    def get_hvac_mode(self) -> HVACMode:
        """Return the HVAC mode shown to Home Assistant."""
        return daemon_to_hvac_mode(self._state.powered_on, self._state.current_mode)

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> DeviceState:
        """Set power and mode from an HVAC mode.

        The daemon is only contacted when power or mode actually change.
        """
        powered_on, mode = hvac_to_daemon_mode(hvac_mode, self._state.current_mode)
        if (powered_on, mode) == (self._state.powered_on, self._state.current_mode):
            _LOGGER.debug("HVAC mode %s already active on %s", hvac_mode, self._host)
            return self._state

        self._state.powered_on = powered_on
        self._state.current_mode = mode
        return await self.async_reconcile()

    def get_target_temperature(self) -> float:
        """Return the target temperature in Celsius."""
        return fahrenheit_to_celsius(self._state.target_temperature)

    def get_current_temperature(self) -> float:
        """Return the current temperature in Celsius.

        Mirrors the target temperature.
        """
        return fahrenheit_to_celsius(self._state.target_temperature)

    async def async_set_target_temperature(self, celsius: float) -> float:
        """Set the target temperature from a Celsius value.

        Args:
            celsius: Requested temperature in Celsius.

        Returns:
            The resulting target temperature in Celsius.

        """
        target = quantize_target_temperature(celsius, self._state.current_mode)
        if target == self._state.target_temperature:
            _LOGGER.debug(
                "Target %d°F unchanged on %s, skipping update", target, self._host
            )
            return self.get_target_temperature()

        self._state.target_temperature = target
        await self.async_reconcile()
        return self.get_target_temperature()

    def get_fan_on(self) -> bool:
        """Return whether the fan is on; it always is."""
        return True

    async def async_set_fan_on(self, value: bool) -> DeviceState:
        """Handle a fan on/off request.

        Turning the fan off resets its speed to AUTO. Turning it on is a no-op.
        """
        if value:
            return self._state

        self._state.fan_speed = FanSpeed.AUTO
        return await self.async_reconcile()

    def get_fan_percentage(self) -> int:
        """Return the fan speed as a percentage."""
        return fan_speed_to_percentage(self._state.fan_speed)

    async def async_set_fan_percentage(self, percentage: float) -> DeviceState:
        """Set the fan speed from a percentage."""
        self._state.fan_speed = percentage_to_fan_speed(percentage)
        return await self.async_reconcile()
