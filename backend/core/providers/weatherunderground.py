"""Weather Underground conditions provider."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from backend.core.abstractions import Temperature
from backend.core.providers.base import HTTPTemperatureProvider
from backend.core.units import celsius_to_kelvin


class WeatherUndergroundProvider(HTTPTemperatureProvider):
    name = "weatherunderground"
    base_url = "http://api.wunderground.com/api"

    def __init__(self, *, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")

    def temperature(self, city: str) -> Temperature:
        url = f"{self.base_url}/{quote(self.api_key, safe='')}/conditions/q/{quote(city, safe='')}.json"
        data = self._json(self._get(url))
        celsius = self._number(data, "current_observation", "temp_c")
        return self._report(city, Temperature.kelvin(celsius_to_kelvin(celsius)))


__all__ = ["WeatherUndergroundProvider"]
