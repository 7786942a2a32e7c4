"""
Configuration flow for the thermostatd integration.

This module handles the setup and configuration of the thermostatd
integration through Home Assistant's config flow system.
"""

import logging
from typing import Any

import httpx
import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_HOST, CONF_NAME, CONF_TOKEN
from homeassistant.helpers.httpx_client import get_async_client

from . import api
from .const import (
    DEFAULT_NAME,
    DOMAIN,
    ERROR_API_ERROR,
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_AUTH,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)

_LOGGER = logging.getLogger(__name__)

USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): str,
        vol.Required(CONF_TOKEN): str,
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
    }
)


class ThermostatdConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle configuration flow for the thermostatd integration."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """
        Handle the initial step of the config flow.

        Args:
            user_input: User input data containing host, token and name.

        Returns:
            ConfigFlowResult indicating the next step or errors.

        """
        errors: dict[str, str] = {}

        if user_input is not None:
            host = user_input[CONF_HOST].strip()
            token = user_input[CONF_TOKEN]

            try:
                session = get_async_client(self.hass)
                state = await api.async_get_state(session, host, token)
                _LOGGER.info("Successfully connected to thermostatd at %s", host)
                _LOGGER.debug("Daemon at %s reports %s", host, state)

            except api.ThermostatdApiAuthError as err:
                _LOGGER.warning(
                    "Authentication failed (%s): %s", ERROR_INVALID_AUTH, err
                )
                errors["base"] = ERROR_INVALID_AUTH
            except httpx.ConnectError:
                _LOGGER.exception("Connection error (%s)", ERROR_CANNOT_CONNECT)
                errors["base"] = ERROR_CANNOT_CONNECT
            except httpx.TimeoutException:
                _LOGGER.exception("Timeout error (%s)", ERROR_TIMEOUT)
                errors["base"] = ERROR_TIMEOUT
            except api.ThermostatdApiClientError:
                _LOGGER.exception("API client error (%s)", ERROR_API_ERROR)
                errors["base"] = ERROR_API_ERROR
            except Exception:
                _LOGGER.exception(
                    "Unexpected error while connecting (%s)",
                    ERROR_UNKNOWN,
                )
                errors["base"] = ERROR_UNKNOWN

            else:
                await self.async_set_unique_id(host.lower())
                self._abort_if_unique_id_configured()

                name = user_input.get(CONF_NAME, DEFAULT_NAME)
                return self.async_create_entry(
                    title=name,
                    data={
                        CONF_HOST: host,
                        CONF_TOKEN: token,
                        CONF_NAME: name,
                    },
                )

        return self.async_show_form(
            step_id="user",
            data_schema=USER_SCHEMA,
            errors=errors,
        )

    async def async_step_import(self, import_data: dict[str, Any]) -> ConfigFlowResult:
        """
        Create an entry from YAML configuration.

        YAML is the only place a default state can be supplied, so the
        entry is created without contacting the daemon. An existing entry
        for the same host takes the YAML values on every start.
        """
        host = import_data[CONF_HOST].strip()
        name = import_data.get(CONF_NAME, DEFAULT_NAME)
        data = {**import_data, CONF_HOST: host, CONF_NAME: name}

        await self.async_set_unique_id(host.lower())
        self._abort_if_unique_id_configured(updates=data)

        return self.async_create_entry(title=name, data=data)
