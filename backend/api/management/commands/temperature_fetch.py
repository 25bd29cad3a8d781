"""Management command to fetch a temperature using the same stack as the API."""
from __future__ import annotations

import json
import time
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_temperature_service, serialize_temperature
from backend.core.providers.base import ProviderError
from backend.core.services.temperature_service import ConfigurationError, sequential_mean


class Command(BaseCommand):
    help = "Fetch the combined current temperature of a city from every configured provider"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, required=True, help="City name")
        parser.add_argument(
            "--sequential",
            action="store_true",
            help="Query providers one at a time and print the mean in Kelvin",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        city = options["city"]
        begin = time.perf_counter()
        try:
            service = get_temperature_service()
            if options.get("sequential"):
                temperature = sequential_mean(city, service.providers)
                payload = {"city": city, "kelvin": round(temperature.value, 2)}
            else:
                temperature = service.temperature(city)
                payload = serialize_temperature(city, temperature.value, time.perf_counter() - begin)
        except (ProviderError, ConfigurationError) as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(json.dumps(payload, ensure_ascii=False))
