"""REST API views for temperature information."""
from __future__ import annotations

import logging
import math
import time
from functools import lru_cache
from typing import Any, Callable, Dict, List

from django.conf import settings
from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api.formatting import format_duration
from backend.core.abstractions import TemperatureProvider
from backend.core.providers.base import ProviderError, RequestConfig
from backend.core.providers.darksky import DarkSkyProvider
from backend.core.providers.openweathermap import OpenWeatherMapProvider
from backend.core.providers.weatherunderground import WeatherUndergroundProvider
from backend.core.services.temperature_service import ConfigurationError, MultiProviderTemperatureService


logger = logging.getLogger(__name__)


def _request_config() -> RequestConfig:
    return RequestConfig(timeout=settings.TEMPERATURE_PROVIDER_TIMEOUT)


PROVIDER_FACTORIES: Dict[str, Callable[[], TemperatureProvider]] = {
    "openweathermap": lambda: OpenWeatherMapProvider(
        api_key=settings.OPEN_WEATHER_MAP_KEY,
        request_config=_request_config(),
    ),
    "weatherunderground": lambda: WeatherUndergroundProvider(
        api_key=settings.WEATHER_UNDERGROUND_KEY,
        request_config=_request_config(),
    ),
    "darksky": lambda: DarkSkyProvider(
        api_key=settings.DARK_SKY_KEY,
        google_key=settings.GOOGLE_GEOCODE_KEY,
        request_config=_request_config(),
    ),
}


def build_providers(names: List[str]) -> List[TemperatureProvider]:
    """Instantiate the named providers in the given order."""
    providers = []
    for name in names:
        factory = PROVIDER_FACTORIES.get(name)
        if factory is None:
            known = ", ".join(sorted(PROVIDER_FACTORIES))
            raise ConfigurationError(f"unknown temperature provider {name!r} (known: {known})")
        providers.append(factory())
    return providers


@lru_cache(maxsize=1)
def get_temperature_service() -> MultiProviderTemperatureService:
    providers = build_providers(settings.TEMPERATURE_PROVIDERS)
    logger.info("Temperature providers: %s", ", ".join(provider.name for provider in providers) or "none")
    return MultiProviderTemperatureService(
        providers=providers,
        timeout=settings.TEMPERATURE_AGGREGATE_TIMEOUT,
    )


def serialize_temperature(city: str, value: float, elapsed: float) -> Dict[str, Any]:
    return {
        "city": city,
        "temp": math.trunc(value),
        "took": format_duration(elapsed),
    }


def _error_response(exc: Exception) -> HttpResponse:
    return HttpResponse(
        f"{exc}\n",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content_type="text/plain; charset=utf-8",
    )


class HelloView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return HttpResponse("hello!", content_type="text/plain; charset=utf-8")


class TemperatureView(APIView):
    """Return the combined temperature of a city across every provider."""

    permission_classes = [AllowAny]

    def get(self, request, city: str, *args, **kwargs):  # noqa: D401
        """Return the combined temperature for ``city``."""
        begin = time.perf_counter()
        try:
            temperature = get_temperature_service().temperature(city)
        except (ProviderError, ConfigurationError) as exc:
            logger.error("Temperature lookup for %s failed: %s", city, exc)
            return _error_response(exc)

        payload = serialize_temperature(city, temperature.value, time.perf_counter() - begin)
        return Response(payload, status=status.HTTP_200_OK)
