"""Climate entity for the thermostatd integration.

This module exposes the thermostat half of the device: power, mode and
target temperature. Values come from and go to the DeviceStateStore.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.climate import (
    ATTR_HVAC_MODE,
    ClimateEntity,
    ClimateEntityFeature,
    HVACMode,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature

from .const import DOMAIN
from .entity import ThermostatdEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .models import ThermostatdDevice
    from .store import DeviceStateStore

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the climate entity for a thermostatd daemon."""
    entry_data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [ThermostatdClimateEntity(entry_data["store"], entry_data["device"])]
    )


class ThermostatdClimateEntity(ThermostatdEntity, ClimateEntity):
    """Climate entity driving the thermostat through the store."""

    _attr_name = "Temperature Control"
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.5
    _attr_hvac_modes = [HVACMode.OFF, HVACMode.HEAT, HVACMode.COOL, HVACMode.AUTO]
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.TURN_OFF
        | ClimateEntityFeature.TURN_ON
    )

    def __init__(self, store: DeviceStateStore, device: ThermostatdDevice) -> None:
        """Initialize the climate entity."""
        super().__init__(store, device, "thermostat")

    @property
    def hvac_mode(self) -> HVACMode:
        """Return the current HVAC mode."""
        return self._store.get_hvac_mode()

    @property
    def target_temperature(self) -> float:
        """Return the target temperature in Celsius."""
        return self._store.get_target_temperature()

    @property
    def current_temperature(self) -> float:
        """Return the current temperature in Celsius."""
        return self._store.get_current_temperature()

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose daemon-side values that have no climate equivalent."""
        state = self._store.state
        return {
            "powered_on": state.powered_on,
            "daemon_mode": str(state.current_mode),
            "target_temperature_f": state.target_temperature,
        }

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the HVAC mode.

        Args:
            hvac_mode: The HVAC mode to set.

        """
        _LOGGER.debug("%s: setting HVAC mode to %s", self.entity_id, hvac_mode)
        await self._store.async_set_hvac_mode(hvac_mode)

    async def async_set_temperature(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Set the target temperature.

        Args:
            **kwargs: Keyword arguments containing temperature data.

        """
        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return

        if (hvac_mode := kwargs.get(ATTR_HVAC_MODE)) is not None:
            await self._store.async_set_hvac_mode(hvac_mode)

        await self._store.async_set_target_temperature(temperature)

    async def async_turn_on(self) -> None:
        """Turn the thermostat on in cooling mode."""
        await self.async_set_hvac_mode(HVACMode.COOL)

    async def async_turn_off(self) -> None:
        """Turn the thermostat off."""
        await self.async_set_hvac_mode(HVACMode.OFF)

