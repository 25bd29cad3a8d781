"""Temperature unit conversions.

Kelvin is the canonical unit every provider normalizes into, Fahrenheit is the
unit reported to API clients.
"""
from __future__ import annotations

from enum import Enum

KELVIN_OFFSET = 273.15


class TemperatureUnit(str, Enum):
    KELVIN = "kelvin"
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


def celsius_to_kelvin(value: float) -> float:
    return value + KELVIN_OFFSET


def kelvin_to_celsius(value: float) -> float:
    return value - KELVIN_OFFSET


def celsius_to_fahrenheit(value: float) -> float:
    return value * 1.8 + 32


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) / 1.8


def kelvin_to_fahrenheit(value: float) -> float:
    return celsius_to_fahrenheit(kelvin_to_celsius(value))


def to_kelvin(value: float, unit: TemperatureUnit) -> float:
    if unit is TemperatureUnit.KELVIN:
        return value
    if unit is TemperatureUnit.CELSIUS:
        return celsius_to_kelvin(value)
    return celsius_to_kelvin(fahrenheit_to_celsius(value))


def from_kelvin(value: float, unit: TemperatureUnit) -> float:
    if unit is TemperatureUnit.KELVIN:
        return value
    if unit is TemperatureUnit.CELSIUS:
        return kelvin_to_celsius(value)
    return kelvin_to_fahrenheit(value)


__all__ = [
    "KELVIN_OFFSET",
    "TemperatureUnit",
    "celsius_to_fahrenheit",
    "celsius_to_kelvin",
    "fahrenheit_to_celsius",
    "from_kelvin",
    "kelvin_to_celsius",
    "kelvin_to_fahrenheit",
    "to_kelvin",
]
