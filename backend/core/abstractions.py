"""Core abstractions for the temperature domain."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from backend.core.units import TemperatureUnit, from_kelvin, to_kelvin


@dataclass(frozen=True, slots=True)
class Temperature:
    """A temperature value tagged with its unit."""

    value: float
    unit: TemperatureUnit = TemperatureUnit.KELVIN

    @classmethod
    def kelvin(cls, value: float) -> "Temperature":
        return cls(value=float(value), unit=TemperatureUnit.KELVIN)

    def to(self, unit: TemperatureUnit) -> "Temperature":
        """Return the same temperature expressed in ``unit``."""
        if unit is self.unit:
            return self
        return Temperature(value=from_kelvin(to_kelvin(self.value, self.unit), unit), unit=unit)


class TemperatureProvider(Protocol):
    """An upstream able to report the current temperature of a city."""

    name: str

    def temperature(self, city: str) -> Temperature:
        """Return the current temperature for ``city`` normalized to Kelvin."""
        ...


class TemperatureService(Protocol):
    """High level service that exposes a combined temperature to the API layer."""

    def temperature(self, city: str) -> Temperature:
        """Return the combined temperature in the reported unit."""
        ...
