"""Pytest configuration and fixtures for thermostatd tests."""

from typing import Any
from unittest.mock import Mock

import httpx
import pytest

from custom_components.thermostatd.models import (
    DaemonMode,
    DeviceState,
    FanSpeed,
    ThermostatdDevice,
)
from custom_components.thermostatd.store import DeviceStateStore

TEST_HOST = "192.168.1.50:8080"
TEST_TOKEN = "secret_token"
TEST_NAME = "Living Room"


@pytest.fixture
def sample_state_response() -> dict[str, Any]:
    """Fixture providing a sample daemon state response.

    Returns:
        A dictionary representing the daemon's JSON state.

    """
    return {
        "powered_on": True,
        "current_mode": "COOL",
        "fan_speed": "LOW",
        "target_temperature": 70,
        "current_temperature": 70,
    }


@pytest.fixture
def cool_state() -> DeviceState:
    """Fixture providing a powered-on cooling state."""
    return DeviceState(
        powered_on=True,
        current_mode=DaemonMode.COOL,
        fan_speed=FanSpeed.AUTO,
        target_temperature=72,
        current_temperature=72,
    )


@pytest.fixture
def heat_state() -> DeviceState:
    """Fixture providing a powered-on heating state."""
    return DeviceState(
        powered_on=True,
        current_mode=DaemonMode.HEAT,
        fan_speed=FanSpeed.AUTO,
        target_temperature=68,
        current_temperature=68,
    )


@pytest.fixture
def mock_session() -> Mock:
    """Create a mock HTTP session."""
    return Mock(spec=httpx.AsyncClient)


@pytest.fixture
def device() -> ThermostatdDevice:
    """Create the daemon description used by entities."""
    return ThermostatdDevice(host=TEST_HOST, name=TEST_NAME)


@pytest.fixture
def store(mock_session: Mock, cool_state: DeviceState) -> DeviceStateStore:
    """Create a store starting from the cooling state."""
    return DeviceStateStore(mock_session, TEST_HOST, TEST_TOKEN, cool_state)
