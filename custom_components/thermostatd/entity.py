"""Base entity for the thermostatd integration."""

from __future__ import annotations

from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity

from .const import DOMAIN, MANUFACTURER, MODEL
from .models import ThermostatdDevice
from .store import DeviceStateStore


class ThermostatdEntity(Entity):
    """Common wiring for entities backed by a DeviceStateStore."""

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self,
        store: DeviceStateStore,
        device: ThermostatdDevice,
        key: str,
    ) -> None:
        """Initialize the entity.

        Args:
            store: Store holding the device state.
            device: Daemon the entity belongs to.
            key: Suffix making the unique id distinct per entity.

        """
        self._store = store
        self._device = device
        self._attr_unique_id = f"{device.host}_{key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, device.host)},
            manufacturer=MANUFACTURER,
            model=MODEL,
            name=device.name,
            serial_number=device.host,
        )

    async def async_added_to_hass(self) -> None:
        """Subscribe to store updates."""
        await super().async_added_to_hass()
        self.async_on_remove(
            self._store.async_add_listener(self._handle_store_update)
        )

    @callback
    def _handle_store_update(self) -> None:
        """Write the new state after a reconciliation."""
        self.async_write_ha_state()
