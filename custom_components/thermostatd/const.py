"""Constants for the thermostatd integration.

This module contains the constants used throughout the integration,
including configuration keys, error codes, temperature ranges and the
tables that translate between Home Assistant and daemon representations.
"""

from homeassistant.components.climate import HVACMode

from .models import DaemonMode, FanSpeed

DOMAIN = "thermostatd"

MANUFACTURER = "thermostatd"
MODEL = "thermostatd"
DEFAULT_NAME = "Thermostat"

STATE_PATH = "/state"
REQUEST_TIMEOUT = 5.0

CONF_DEFAULT_STATE = "default_state"

ERROR_INVALID_AUTH = "invalid_auth"
ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_TIMEOUT = "timeout_error"
ERROR_API_ERROR = "api_error"
ERROR_UNKNOWN = "unknown_error"

# Fahrenheit (floor, ceil) of the target temperature, per daemon mode
HEAT_TEMPERATURE_RANGE = (60, 76)
DEFAULT_TEMPERATURE_RANGE = (64, 88)

FAN_SPEED_PERCENTAGE_MAP = {
    FanSpeed.AUTO: 0,
    FanSpeed.QUIET: 25,
    FanSpeed.LOW: 50,
    FanSpeed.MEDIUM: 75,
    FanSpeed.HIGH: 100,
}
# Upper edge (inclusive) of each percentage band, ascending
FAN_SPEED_BANDS = (
    (25, FanSpeed.QUIET),
    (50, FanSpeed.LOW),
    (75, FanSpeed.MEDIUM),
    (100, FanSpeed.HIGH),
)

DAEMON_MODE_TO_HVAC_MODE_MAP = {
    DaemonMode.HEAT: HVACMode.HEAT,
    DaemonMode.COOL: HVACMode.COOL,
    DaemonMode.DRY: HVACMode.AUTO,
    DaemonMode.FAN: HVACMode.AUTO,
}
# DRY has no host-facing write path; AUTO always resolves to FAN.
HVAC_MODE_TO_DAEMON_MODE_MAP = {
    HVACMode.HEAT: DaemonMode.HEAT,
    HVACMode.COOL: DaemonMode.COOL,
    HVACMode.AUTO: DaemonMode.FAN,
}
