"""Dark Sky provider with Google geocoding for coordinate resolution."""
from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import quote

from backend.core.abstractions import Temperature
from backend.core.providers.base import DecodeError, HTTPTemperatureProvider
from backend.core.units import celsius_to_kelvin


class DarkSkyProvider(HTTPTemperatureProvider):
    """Resolve the city to coordinates, then read the current forecast for them.

    Both calls share the provider session. A failed geocoding step raises
    before the forecast endpoint is contacted.
    """

    name = "darksky"
    base_url = "https://api.darksky.net/forecast"
    geocode_url = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(
        self,
        *,
        api_key: str,
        google_key: str,
        base_url: Optional[str] = None,
        geocode_url: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.google_key = google_key
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.geocode_url = geocode_url or self.geocode_url

    def temperature(self, city: str) -> Temperature:
        latitude, longitude = self.coordinates(city)
        url = f"{self.base_url}/{quote(self.api_key, safe='')}/{latitude!r},{longitude!r}"
        params = {"exclude": "minutely,hourly,daily,alerts,flags", "units": "si"}
        data = self._json(self._get(url, params=params))
        celsius = self._number(data, "currently", "temperature")
        return self._report(city, Temperature.kelvin(celsius_to_kelvin(celsius)))

    def coordinates(self, city: str) -> Tuple[float, float]:
        """Geocode ``city`` and return the first match as ``(lat, lng)``."""
        response = self._get(self.geocode_url, params={"address": city, "key": self.google_key})
        data = self._json(response)
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            self._log.warning("No geocoding results for %s", city)
            raise DecodeError(f"{self.name}: no geocoding results for {city!r}", provider=self.name)
        latitude = self._number(results, 0, "geometry", "location", "lat")
        longitude = self._number(results, 0, "geometry", "location", "lng")
        return latitude, longitude


__all__ = ["DarkSkyProvider"]
