"""API client for the thermostatd daemon.

This module provides functions to interact with the daemon's state
endpoint: reading the current state and patching it.
"""

import logging
from typing import Any

import httpx
from homeassistant.core import HomeAssistant
from homeassistant.helpers.httpx_client import create_async_httpx_client
from httpx_retries import Retry, RetryTransport

from .const import REQUEST_TIMEOUT, STATE_PATH
from .models import DeviceState

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403


class ThermostatdApiClientError(Exception):
    """Base exception for thermostatd API client errors."""


class ThermostatdApiAuthError(ThermostatdApiClientError):
    """Exception raised for authentication errors."""


def build_base_url(host: str) -> str:
    """Build the daemon base URL from a configured host.

    Args:
        host: Daemon address, with or without scheme.

    Returns:
        Base URL without trailing slash.

    """
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return host


def create_headers(token: str | None = None) -> dict[str, str]:
    """Create HTTP headers for daemon requests.

    Args:
        token: Optional auth token to send as bearer credential.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {
        "content-type": "application/json",
        "accept": "application/json",
    }
    if token:
        headers["authorization"] = f"Bearer {token}"
    return headers


def is_http_error(status: int) -> bool:
    """Check if HTTP status code indicates an error."""
    return status >= HTTP_BAD_REQUEST


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates an authentication error."""
    return status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN)


def validate_response(response: httpx.Response) -> dict[str, Any]:
    """Validate HTTP response and return parsed JSON data.

    Args:
        response: HTTP response object to validate.

    Returns:
        Parsed JSON data from response.

    Raises:
        ThermostatdApiAuthError: If authentication error is detected.
        ThermostatdApiClientError: If the request failed or the body is not JSON.

    """
    _validate_http_status(response)
    try:
        data = response.json()
    except ValueError as err:
        error_msg = f"Invalid JSON in response: {err}"
        raise ThermostatdApiClientError(error_msg) from err

    if not isinstance(data, dict):
        error_msg = "Unexpected response payload"
        raise ThermostatdApiClientError(error_msg)
    return data


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    if is_auth_error(response.status_code):
        auth_error = "Authentication error"
        raise ThermostatdApiAuthError(auth_error)

    client_error = f"Request failed: {response.status_code}"
    raise ThermostatdApiClientError(client_error)


def extract_state(data: dict[str, Any]) -> DeviceState:
    """Extract the device state from a daemon response.

    Args:
        data: API response data dictionary.

    Returns:
        DeviceState built from the response.

    Raises:
        ThermostatdApiClientError: If the state is missing fields or holds
            unknown values.

    """
    try:
        return DeviceState.from_dict(data)
    except (KeyError, ValueError, TypeError) as err:
        error_msg = f"Malformed thermostat state: {err}"
        raise ThermostatdApiClientError(error_msg) from err


def create_session_client(hass: HomeAssistant) -> httpx.AsyncClient:
    """Create HTTP client with retry logic for the daemon.

    Args:
        hass: Home Assistant instance.

    Returns:
        Configured httpx AsyncClient with retry transport.

    """
    base_client = create_async_httpx_client(hass, timeout=REQUEST_TIMEOUT)
    retry = Retry(total=3, backoff_factor=0.5)
    base_client._transport = RetryTransport(  # noqa: SLF001
        transport=base_client._transport,  # noqa: SLF001
        retry=retry,
    )
    return base_client


async def async_get_state(
    session: httpx.AsyncClient,
    host: str,
    token: str,
) -> DeviceState:
    """Fetch the current state from the daemon.

    Args:
        session: HTTP client session.
        host: Daemon address.
        token: Auth token.

    Returns:
        The daemon's current state.

    Raises:
        ThermostatdApiAuthError: If authentication fails.
        ThermostatdApiClientError: If API request fails.

    """
    url = f"{build_base_url(host)}{STATE_PATH}"

    _LOGGER.debug("Fetching state from %s", url)
    response = await session.get(url, headers=create_headers(token))
    state = extract_state(validate_response(response))
    _LOGGER.debug("Received state from %s: %s", url, state)
    return state


async def async_patch_state(
    session: httpx.AsyncClient,
    host: str,
    token: str,
    state: DeviceState,
) -> DeviceState:
    """Patch the daemon state and return the daemon's merged result.

    Args:
        session: HTTP client session.
        host: Daemon address.
        token: Auth token.
        state: State to send; the full state is sent every time.

    Returns:
        The authoritative state returned by the daemon.

    Raises:
        ThermostatdApiAuthError: If authentication fails.
        ThermostatdApiClientError: If API request fails.

    """
    url = f"{build_base_url(host)}{STATE_PATH}"
    payload = state.as_dict()

    _LOGGER.debug("Patching state at %s: %s", url, payload)
    response = await session.patch(url, headers=create_headers(token), json=payload)
    new_state = extract_state(validate_response(response))
    _LOGGER.debug("Daemon at %s returned state: %s", url, new_state)
    return new_state
