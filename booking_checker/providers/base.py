"""Common contract and helpers shared by carrier providers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests

from ..models import BookingLookupRequest, CarrierCredential, ProviderOutcome


class ProviderError(RuntimeError):
    """Raised when a single booking lookup fails."""


class UnsupportedCarrierError(RuntimeError):
    """Raised for bookings whose carrier cannot be checked."""


class CarrierProvider(Protocol):
    """Interface every carrier provider implements."""

    name: str
    requires_credential: bool

    def check(
        self, request: BookingLookupRequest, credential: Optional[CarrierCredential]
    ) -> ProviderOutcome:  # pragma: no cover - runtime protocol
        """Report whether the booking's flight was altered."""


@dataclass
class BrowserProviderConfig:
    """Runtime configuration shared by browser based providers."""

    headless: bool = True
    navigation_timeout: float = 60.0
    wait_timeout: float = 10.0


class HttpProvider:
    """Base class for providers talking to a JSON API through :mod:`requests`."""

    name = "http"
    requires_credential = True

    def __init__(self, *, session: Optional[requests.Session] = None, timeout: float = 30.0) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def _require_credential(self, credential: Optional[CarrierCredential]) -> CarrierCredential:
        if credential is None:
            raise ProviderError(f"{self.name} lookup requires a credential")
        return credential

    def _request_json(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        kwargs.setdefault("timeout", self._timeout)
        try:
            response = self._session.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ProviderError(f"{self.name} request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ProviderError(f"{self.name} returned a non-JSON body") from exc
        if not isinstance(body, dict):
            raise ProviderError(f"{self.name} returned an unexpected payload type: {type(body).__name__}")
        return body


def as_list(value: Any, what: str) -> list:
    """Return ``value`` as a list, treating ``None`` as empty."""

    if value is None:
        return []
    if not isinstance(value, list):
        raise ProviderError(f"Expected a list for {what}, got {type(value).__name__}")
    return value


def as_dict(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProviderError(f"Expected an object for {what}, got {type(value).__name__}")
    return value
