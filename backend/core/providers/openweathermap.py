"""OpenWeatherMap current weather provider."""
from __future__ import annotations

from typing import Optional

from backend.core.abstractions import Temperature
from backend.core.providers.base import HTTPTemperatureProvider


class OpenWeatherMapProvider(HTTPTemperatureProvider):
    """Integration with the OpenWeatherMap "current weather by city" endpoint.

    The endpoint reports ``main.temp`` in Kelvin when no ``units`` parameter is
    sent, so the value is passed through unchanged.
    """

    name = "openweathermap"
    base_url = "http://api.openweathermap.org/data/2.5/weather"

    def __init__(self, *, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def temperature(self, city: str) -> Temperature:
        response = self._get(self.base_url, params={"APPID": self.api_key, "q": city})
        data = self._json(response)
        return self._report(city, Temperature.kelvin(self._number(data, "main", "temp")))


__all__ = ["OpenWeatherMapProvider"]
