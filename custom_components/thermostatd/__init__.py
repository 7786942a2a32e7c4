from __future__ import annotations

import logging

import homeassistant.helpers.config_validation as cv
import voluptuous as vol
from homeassistant.config_entries import SOURCE_IMPORT, ConfigEntry
from homeassistant.const import CONF_HOST, CONF_NAME, CONF_TOKEN, Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers.typing import ConfigType

from . import api
from .api import create_session_client
from .const import CONF_DEFAULT_STATE, DEFAULT_NAME, DOMAIN
from .models import DaemonMode, FanSpeed, ThermostatdDevice
from .store import DeviceStateStore

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.CLIMATE, Platform.FAN]

DEFAULT_STATE_SCHEMA = vol.Schema(
    {
        vol.Required("powered_on"): cv.boolean,
        vol.Required("current_mode"): vol.In([str(mode) for mode in DaemonMode]),
        vol.Required("fan_speed"): vol.In([str(speed) for speed in FanSpeed]),
        vol.Required("target_temperature"): vol.Coerce(int),
        vol.Optional("current_temperature", default=0): vol.Coerce(int),
    }
)

ENTRY_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): cv.string,
        vol.Required(CONF_TOKEN): cv.string,
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): cv.string,
        vol.Optional(CONF_DEFAULT_STATE): DEFAULT_STATE_SCHEMA,
    }
)

CONFIG_SCHEMA = vol.Schema(
    {DOMAIN: vol.All(cv.ensure_list, [ENTRY_SCHEMA])},
    extra=vol.ALLOW_EXTRA,
)


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    for entry_config in config.get(DOMAIN, []):
        _LOGGER.debug("Importing YAML configuration for %s", entry_config[CONF_HOST])
        hass.async_create_task(
            hass.config_entries.flow.async_init(
                DOMAIN,
                context={"source": SOURCE_IMPORT},
                data=entry_config,
            )
        )
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Setting up thermostatd integration for entry %s", entry.entry_id)

    if CONF_HOST not in entry.data or CONF_TOKEN not in entry.data:
        _LOGGER.error("Missing host or token for entry %s", entry.entry_id)
        return False

    initial_state = None
    if (default_state := entry.data.get(CONF_DEFAULT_STATE)) is not None:
        try:
            initial_state = api.extract_state(default_state)
        except api.ThermostatdApiClientError as err:
            _LOGGER.error(
                "Invalid default state for entry %s: %s", entry.entry_id, err
            )
            return False

    device = ThermostatdDevice(
        host=entry.data[CONF_HOST],
        name=entry.data.get(CONF_NAME, DEFAULT_NAME),
    )
    session = create_session_client(hass)
    store = DeviceStateStore(
        session,
        device.host,
        entry.data[CONF_TOKEN],
        initial_state,
    )

    state = await store.async_push_initial_state()
    _LOGGER.debug("Initial state for %s: %s", device.host, state)

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "session": session,
        "store": store,
        "device": device,
    }

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
        _LOGGER.info(
            "Successfully setup thermostatd integration for entry %s", entry.entry_id
        )
        return True
    except Exception as err:
        _LOGGER.error("Failed to setup platforms for entry %s: %s", entry.entry_id, err)
        return False


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    _LOGGER.info("Unloading thermostatd integration for entry %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if not unload_ok:
        _LOGGER.warning("Failed to unload some platforms for entry %s", entry.entry_id)
        return False

    entry_data = hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    if entry_data is not None:
        await entry_data["session"].aclose()
        _LOGGER.debug("Cleaned up data for entry %s", entry.entry_id)

    _LOGGER.info(
        "Successfully unloaded thermostatd integration for entry %s", entry.entry_id
    )
    return True

