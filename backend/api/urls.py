"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import HelloView, TemperatureView

urlpatterns = [
    path("hello", HelloView.as_view(), name="hello"),
    path("weather/", TemperatureView.as_view(), {"city": ""}, name="weather-empty"),
    path("weather/<path:city>", TemperatureView.as_view(), name="weather"),
]
