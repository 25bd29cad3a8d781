from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from backend.api.management.commands import temperature_fetch
from backend.core.providers.base import DecodeError
from backend.core.services.temperature_service import MultiProviderTemperatureService
from tests.stubs import StubProvider


@pytest.fixture
def use_service(monkeypatch):
    def _install(*providers):
        service = MultiProviderTemperatureService(providers)
        monkeypatch.setattr(temperature_fetch, "get_temperature_service", lambda: service)
        return service

    return _install


def test_command_prints_combined_temperature(use_service) -> None:
    use_service(StubProvider("a", 300.0), StubProvider("b", 310.0), StubProvider("c", 290.0))
    out = StringIO()

    call_command("temperature_fetch", city="Denver", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["city"] == "Denver"
    assert payload["temp"] == 80
    assert "took" in payload


def test_command_sequential_mode_prints_kelvin(use_service) -> None:
    use_service(StubProvider("a", 300.0), StubProvider("b", 310.0))
    out = StringIO()

    call_command("temperature_fetch", city="Denver", sequential=True, stdout=out)

    assert json.loads(out.getvalue()) == {"city": "Denver", "kelvin": 305.0}


def test_command_surfaces_provider_error(use_service) -> None:
    use_service(StubProvider("ok", 290.0), StubProvider("bad", error=DecodeError("darksky: invalid json", provider="darksky")))

    with pytest.raises(CommandError, match="darksky: invalid json"):
        call_command("temperature_fetch", city="Denver", stdout=StringIO())
