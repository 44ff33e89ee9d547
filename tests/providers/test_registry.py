"""Unit tests for :mod:`booking_checker.providers.registry`."""
from __future__ import annotations

import pytest

from booking_checker.models import BookingLookupRequest, Carrier, CarrierCredential
from booking_checker.providers.base import ProviderError, UnsupportedCarrierError
from booking_checker.providers.registry import ProviderRegistry, UnsupportedHandler


class StubProvider:
    def __init__(self, name: str, requires_credential: bool = True) -> None:
        self.name = name
        self.requires_credential = requires_credential


GOL = StubProvider("gol")
AZUL = StubProvider("azul")
LATAM = StubProvider("latam", requires_credential=False)
GOL_CREDENTIAL = CarrierCredential(carrier=Carrier.GOL, token="gol")


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry(
        {Carrier.GOL: GOL, Carrier.AZUL: AZUL, Carrier.LATAM: LATAM},
        {Carrier.GOL: GOL_CREDENTIAL, Carrier.AZUL: None},
    )


def test_resolves_provider_with_its_credential(registry: ProviderRegistry) -> None:
    assert registry.resolve(Carrier.GOL) == (GOL, GOL_CREDENTIAL)


def test_provider_without_credential_needs_none(registry: ProviderRegistry) -> None:
    assert registry.resolve(Carrier.LATAM) == (LATAM, None)


def test_missing_credential_resolves_to_error_handler(registry: ProviderRegistry) -> None:
    handler, credential = registry.resolve(Carrier.AZUL)

    assert isinstance(handler, UnsupportedHandler)
    assert credential is None
    with pytest.raises(ProviderError, match="Azul"):
        handler.check(BookingLookupRequest(carrier=Carrier.AZUL), None)


def test_unsupported_carrier_resolves_to_unsupported_handler(registry: ProviderRegistry) -> None:
    handler, _ = registry.resolve(Carrier.UNSUPPORTED)

    with pytest.raises(UnsupportedCarrierError, match="TAP"):
        handler.check(BookingLookupRequest(carrier=Carrier.UNSUPPORTED, raw_carrier_label="TAP"), None)


def test_with_credentials_returns_a_new_binding(registry: ProviderRegistry) -> None:
    azul_credential = CarrierCredential(carrier=Carrier.AZUL, token="azul")

    rebound = registry.with_credentials({Carrier.AZUL: azul_credential})

    assert rebound.resolve(Carrier.AZUL) == (AZUL, azul_credential)
    assert isinstance(rebound.resolve(Carrier.GOL)[0], UnsupportedHandler)
    assert registry.resolve(Carrier.GOL) == (GOL, GOL_CREDENTIAL)
