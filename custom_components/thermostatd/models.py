"""Data models for the thermostatd integration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DaemonMode(StrEnum):
    """Operating mode as understood by the daemon."""

    HEAT = "HEAT"
    COOL = "COOL"
    DRY = "DRY"
    FAN = "FAN"


class FanSpeed(StrEnum):
    """Fan speed as understood by the daemon."""

    AUTO = "AUTO"
    QUIET = "QUIET"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class ThermostatdDevice:
    """Represents the daemon a config entry talks to.

    Attributes:
        host: Daemon address, also used as serial number.
        name: Human-readable device name.

    """

    host: str
    name: str


@dataclass(slots=True)
class DeviceState:
    """Represents the thermostat state held by the daemon.

    Temperatures are whole degrees Fahrenheit.
    """

    powered_on: bool
    current_mode: DaemonMode
    fan_speed: FanSpeed
    target_temperature: int
    current_temperature: int

    @classmethod
    def default(cls) -> DeviceState:
        """Return the state used when no initial state is configured."""
        return cls(
            powered_on=False,
            current_mode=DaemonMode.COOL,
            fan_speed=FanSpeed.AUTO,
            target_temperature=72,
            current_temperature=0,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceState:
        """Build a state from the daemon JSON representation.

        Raises:
            KeyError: If a field is missing.
            ValueError: If a field holds an unknown value.

        """
        powered_on = data["powered_on"]
        if not isinstance(powered_on, bool):
            msg = f"powered_on must be a boolean, got {powered_on!r}"
            raise ValueError(msg)

        return cls(
            powered_on=powered_on,
            current_mode=DaemonMode(data["current_mode"]),
            fan_speed=FanSpeed(data["fan_speed"]),
            target_temperature=int(data["target_temperature"]),
            current_temperature=int(data["current_temperature"]),
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the daemon JSON representation."""
        return {
            "powered_on": self.powered_on,
            "current_mode": str(self.current_mode),
            "fan_speed": str(self.fan_speed),
            "target_temperature": self.target_temperature,
            "current_temperature": self.current_temperature,
        }
