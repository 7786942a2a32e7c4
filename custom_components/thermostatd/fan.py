"""Fan entity for the thermostatd integration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from homeassistant.components.fan import FanEntity, FanEntityFeature

from .const import DOMAIN, FAN_SPEED_BANDS
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
    """Set up the fan entity for a thermostatd daemon."""
    entry_data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [ThermostatdFanEntity(entry_data["store"], entry_data["device"])]
    )


class ThermostatdFanEntity(ThermostatdEntity, FanEntity):
    """Fan entity for the thermostat's blower.

    The fan is always on; zero percent means AUTO speed.
    """

    _attr_name = "Fan"
    _attr_speed_count = len(FAN_SPEED_BANDS)
    _attr_supported_features = (
        FanEntityFeature.SET_SPEED
        | FanEntityFeature.TURN_OFF
        | FanEntityFeature.TURN_ON
    )

    def __init__(self, store: DeviceStateStore, device: ThermostatdDevice) -> None:
        """Initialize the fan entity."""
        super().__init__(store, device, "fan")

    @property
    def is_on(self) -> bool:
        """Return true; the fan cannot be switched off."""
        return self._store.get_fan_on()

    @property
    def percentage(self) -> int:
        """Return the current speed as a percentage."""
        return self._store.get_fan_percentage()

    async def async_set_percentage(self, percentage: int) -> None:
        """Set the speed of the fan, as a percentage."""
        _LOGGER.debug("%s: setting fan percentage to %s", self.entity_id, percentage)
        await self._store.async_set_fan_percentage(percentage)

    async def async_turn_on(
        self,
        percentage: int | None = None,
        preset_mode: str | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """Turn on the fan, applying a speed when one is given."""
        if percentage is not None:
            await self.async_set_percentage(percentage)
            return
        await self._store.async_set_fan_on(True)

    async def async_turn_off(self, **kwargs: Any) -> None:  # noqa: ANN401
        """Reset the fan to AUTO speed."""
        await self._store.async_set_fan_on(False)
