from __future__ import annotations

import logging
import math
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response

from backend.core.abstractions import Temperature


class ProviderError(RuntimeError):
    """Base provider error."""

    def __init__(self, message: str, provider: str = "unknown") -> None:
        super().__init__(message)
        self.provider = provider


class UpstreamError(ProviderError):
    """Raised when the upstream cannot be reached or answers with an error status."""


class DecodeError(ProviderError):
    """Raised when the upstream body does not have the expected shape."""


@dataclass
class RequestConfig:
    timeout: Optional[float] = 10.0


class HTTPTemperatureProvider(ABC):
    """Base class that wraps requests sessions and maps failures to provider errors.

    Unless a session is injected, every worker thread gets its own
    ``requests.Session`` so concurrent queries never share one.
    """

    name = "http"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self._session = session
        self._local = threading.local()
        self._log = logging.getLogger(self.__class__.__name__)

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    @abstractmethod
    def temperature(self, city: str) -> Temperature:
        """Return the current temperature for ``city`` in Kelvin."""

    # helpers ------------------------------------------------------------
    def _get(self, url: str, **kwargs: Any) -> Response:
        try:
            response = self.session.get(url, timeout=self.request_config.timeout, **kwargs)
        except requests.Timeout as exc:
            self._log.error("Request to %s timed out", self.name, exc_info=exc)
            raise UpstreamError(f"{self.name}: request timed out", provider=self.name) from exc
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", self.name, exc_info=exc)
            raise UpstreamError(f"{self.name}: request failed: {exc}", provider=self.name) from exc
        return self._handle_response(response)

    def _handle_response(self, response: Response) -> Response:
        if not 200 <= response.status_code < 300:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:500])
            raise UpstreamError(f"{self.name}: HTTP {response.status_code}", provider=self.name)
        if not response.content:
            self._log.error("Provider returned %s with an empty body", response.status_code)
            raise UpstreamError(f"{self.name}: HTTP {response.status_code} with empty body", provider=self.name)
        return response

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise DecodeError(f"{self.name}: invalid json", provider=self.name) from exc

    def _number(self, payload: Any, *path: Any) -> float:
        """Walk ``path`` through nested JSON and return the number found there."""
        dotted = ".".join(str(part) for part in path)
        value = payload
        for key in path:
            try:
                value = value[key]
            except (KeyError, IndexError, TypeError) as exc:
                raise DecodeError(f"{self.name}: missing {dotted} in response", provider=self.name) from exc
        # JSON NaN/Infinity parse to floats; big integers overflow float().
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodeError(f"{self.name}: {dotted} is not a number", provider=self.name)
        try:
            number = float(value)
        except OverflowError as exc:
            raise DecodeError(f"{self.name}: {dotted} is not a number", provider=self.name) from exc
        if not math.isfinite(number):
            raise DecodeError(f"{self.name}: {dotted} is not a number", provider=self.name)
        return number

    def _report(self, city: str, temperature: Temperature) -> Temperature:
        self._log.info("%s: %s: %.2f", self.name, city, temperature.value)
        return temperature


__all__ = [
    "DecodeError",
    "HTTPTemperatureProvider",
    "ProviderError",
    "RequestConfig",
    "UpstreamError",
]
