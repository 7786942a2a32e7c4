"""Unit conversion, quantization and mapping helpers.

The daemon works in whole, even degrees Fahrenheit and a five-step fan
speed, while Home Assistant entities use Celsius and fan percentages.
Every function here is pure; out-of-range input is coerced, never
rejected.
"""

from __future__ import annotations

import math

from homeassistant.components.climate import HVACMode

from .const import (
    DAEMON_MODE_TO_HVAC_MODE_MAP,
    DEFAULT_TEMPERATURE_RANGE,
    FAN_SPEED_BANDS,
    FAN_SPEED_PERCENTAGE_MAP,
    HEAT_TEMPERATURE_RANGE,
    HVAC_MODE_TO_DAEMON_MODE_MAP,
)
from .models import DaemonMode, FanSpeed


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    """Convert degrees Fahrenheit to degrees Celsius."""
    return (fahrenheit - 32) / 1.8


def celsius_to_fahrenheit(celsius: float) -> float:
    """Convert degrees Celsius to degrees Fahrenheit."""
    return celsius * 1.8 + 32


def round_to_even(value: float) -> int:
    """Round to the nearest integer, bumping odd results up by one.

    Halves round up (``75.5 -> 76``), unlike the builtin ``round``.

    Args:
        value: Value to quantize.

    Returns:
        An even integer, never below the plain rounded value.

    """
    rounded = math.floor(value + 0.5)
    return rounded + 1 if rounded % 2 else rounded


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Limit value to the closed range [minimum, maximum]."""
    return min(max(value, minimum), maximum)


def temperature_range(mode: DaemonMode) -> tuple[int, int]:
    """Return the (floor, ceil) target range in Fahrenheit for a mode."""
    if mode == DaemonMode.HEAT:
        return HEAT_TEMPERATURE_RANGE
    return DEFAULT_TEMPERATURE_RANGE


def quantize_target_temperature(celsius: float, mode: DaemonMode) -> int:
    """Turn a Celsius request into the even Fahrenheit value the daemon expects.

    Args:
        celsius: Requested target temperature in Celsius.
        mode: Current daemon mode, which selects the allowed range.

    Returns:
        Even target temperature in Fahrenheit.

    """
    floor, ceil = temperature_range(mode)
    return round_to_even(clamp(celsius_to_fahrenheit(celsius), floor, ceil))


def fan_speed_to_percentage(fan_speed: FanSpeed) -> int:
    """Return the fan percentage shown for a daemon fan speed."""
    return FAN_SPEED_PERCENTAGE_MAP[fan_speed]


def percentage_to_fan_speed(percentage: float) -> FanSpeed:
    """Map a fan percentage onto a daemon fan speed.

    Zero selects AUTO. Otherwise the first band whose inclusive upper edge
    is not below the percentage wins.
    """
    percentage = clamp(percentage, 0, 100)
    if percentage == 0:
        return FanSpeed.AUTO

    for upper, fan_speed in FAN_SPEED_BANDS:
        if percentage <= upper:
            return fan_speed

    return FanSpeed.HIGH


def daemon_to_hvac_mode(powered_on: bool, mode: DaemonMode) -> HVACMode:
    """Return the HVAC mode reported to Home Assistant.

    DRY and FAN both surface as AUTO.
    """
    if not powered_on:
        return HVACMode.OFF
    return DAEMON_MODE_TO_HVAC_MODE_MAP[mode]


def hvac_to_daemon_mode(
    hvac_mode: HVACMode, current_mode: DaemonMode
) -> tuple[bool, DaemonMode]:
    """Translate a requested HVAC mode into daemon power and mode.

    Args:
        hvac_mode: Mode requested by Home Assistant.
        current_mode: Mode currently stored, kept when turning off.

    Returns:
        Tuple of (powered_on, mode).

    """
    if hvac_mode == HVACMode.OFF:
        return False, current_mode
    return True, HVAC_MODE_TO_DAEMON_MODE_MAP.get(hvac_mode, current_mode)
