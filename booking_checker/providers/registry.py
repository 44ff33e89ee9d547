"""Lookup from carrier to the provider that checks its bookings."""
from __future__ import annotations

from typing import Mapping, Optional, Tuple

from ..models import BookingLookupRequest, Carrier, CarrierCredential, ProviderOutcome
from .base import CarrierProvider, ProviderError, UnsupportedCarrierError


class UnsupportedHandler:
    """Stand-in provider for bookings that cannot be checked.

    With ``missing_credential`` set the carrier is known but its token could
    not be obtained, which is reported as an error rather than as unsupported.
    """

    requires_credential = False

    def __init__(self, carrier: Carrier = Carrier.UNSUPPORTED, *, missing_credential: bool = False) -> None:
        self.carrier = carrier
        self.missing_credential = missing_credential
        self.name = f"unavailable-{carrier.value.lower()}" if missing_credential else "unsupported"

    def check(self, request: BookingLookupRequest, credential: Optional[CarrierCredential] = None) -> ProviderOutcome:
        if self.missing_credential:
            raise ProviderError(f"No {self.carrier.display_name} credential available for this batch")
        raise UnsupportedCarrierError(f"Carrier '{request.raw_carrier_label}' is not supported")


class ProviderRegistry:
    """Resolves a carrier to a provider bound to the batch credentials."""

    def __init__(
        self,
        providers: Mapping[Carrier, CarrierProvider],
        credentials: Optional[Mapping[Carrier, Optional[CarrierCredential]]] = None,
    ) -> None:
        self._providers = dict(providers)
        self._credentials = dict(credentials or {})
        self._unsupported = UnsupportedHandler()

    def with_credentials(self, credentials: Mapping[Carrier, Optional[CarrierCredential]]) -> "ProviderRegistry":
        return ProviderRegistry(self._providers, credentials)

    def resolve(self, carrier: Carrier) -> Tuple[CarrierProvider, Optional[CarrierCredential]]:
        if carrier is Carrier.UNSUPPORTED:
            return self._unsupported, None

        provider = self._providers.get(carrier)
        if provider is None:
            return self._unsupported, None

        credential = self._credentials.get(carrier)
        if getattr(provider, "requires_credential", True) and credential is None:
            return UnsupportedHandler(carrier, missing_credential=True), None
        return provider, credential
