"""Temperature service that fans a query out to every configured provider."""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import logging

from backend.core.abstractions import Temperature, TemperatureProvider, TemperatureService
from backend.core.providers.base import UpstreamError
from backend.core.units import TemperatureUnit


logger = logging.getLogger(__name__)

REPORTED_UNIT = TemperatureUnit.FAHRENHEIT

Reading = Tuple[TemperatureProvider, Temperature]


class ConfigurationError(ValueError):
    """Raised when the provider set cannot produce a temperature at all."""


def _mean_kelvin(readings: Sequence[Reading]) -> float:
    for provider, reading in readings:
        if reading.unit is not TemperatureUnit.KELVIN:
            raise ConfigurationError(
                f"provider {provider.name} returned {reading.unit.value}; providers must report kelvin"
            )
    return sum(reading.value for _, reading in readings) / len(readings)


class MultiProviderTemperatureService(TemperatureService):
    """Query every provider concurrently and average their answers.

    The first provider to fail decides the outcome: its exception is raised to
    the caller as-is while the remaining requests finish in the background and
    are ignored. Only when every provider answers is the Kelvin mean converted
    to the reported unit.

    ``timeout`` bounds the wait for the whole fan-out. ``None`` waits for as
    long as the providers take.
    """

    def __init__(
        self,
        providers: Iterable[TemperatureProvider],
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self._providers: Tuple[TemperatureProvider, ...] = tuple(providers)
        if not self._providers:
            raise ConfigurationError("at least one temperature provider must be configured")
        self._timeout = timeout

    @property
    def providers(self) -> Tuple[TemperatureProvider, ...]:
        return self._providers

    def temperature(self, city: str) -> Temperature:
        pool = ThreadPoolExecutor(
            max_workers=len(self._providers),
            thread_name_prefix="temperature",
        )
        try:
            futures = {pool.submit(provider.temperature, city): provider for provider in self._providers}
            readings = self._collect(city, futures)
        finally:
            # Stragglers keep running; their outcomes stay in their futures.
            pool.shutdown(wait=False)
        return Temperature.kelvin(_mean_kelvin(readings)).to(REPORTED_UNIT)

    def _collect(self, city: str, futures: Dict[Future, TemperatureProvider]) -> List[Reading]:
        readings: List[Reading] = []
        completed = as_completed(futures, timeout=self._timeout)
        while len(readings) < len(futures):
            try:
                future = next(completed)
            except FuturesTimeout as exc:
                pending = len(futures) - len(readings)
                logger.warning("Timed out after %ss waiting for %d provider(s) for %s", self._timeout, pending, city)
                self._discard_late(city, futures)
                raise UpstreamError(
                    f"timed out after {self._timeout}s waiting for {pending} provider(s)",
                    provider="aggregate",
                ) from exc
            provider = futures[future]
            error = future.exception()
            if error is not None:
                logger.warning("Provider %s failed for %s: %s", provider.name, city, error)
                self._discard_late(city, futures)
                raise error
            readings.append((provider, future.result()))
        return readings

    @staticmethod
    def _discard_late(city: str, futures: Dict[Future, TemperatureProvider]) -> None:
        for future, provider in futures.items():
            if future.done():
                continue
            future.add_done_callback(
                lambda _future, name=provider.name: logger.debug("Discarded late %s outcome for %s", name, city)
            )


def sequential_mean(city: str, providers: Sequence[TemperatureProvider]) -> Temperature:
    """Query providers one after another and return their mean in Kelvin.

    Stops at the first failing provider and re-raises its error.
    """
    if not providers:
        raise ConfigurationError("at least one temperature provider must be configured")
    readings = [(provider, provider.temperature(city)) for provider in providers]
    return Temperature.kelvin(_mean_kelvin(readings))


__all__ = [
    "ConfigurationError",
    "MultiProviderTemperatureService",
    "REPORTED_UNIT",
    "sequential_mean",
]
