from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")
os.environ.setdefault("OPEN_WEATHER_MAP_KEY", "owm-key")
os.environ.setdefault("WEATHER_UNDERGROUND_KEY", "wu-key")
os.environ.setdefault("DARK_SKY_KEY", "ds-key")
os.environ.setdefault("GOOGLE_GEOCODE_KEY", "google-key")

django.setup()


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker
