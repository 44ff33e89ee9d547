"""AZUL booking provider backed by the canonical booking API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from ..models import BookingLookupRequest, CarrierCredential, ProviderOutcome, date_portion
from .base import HttpProvider, ProviderError, as_dict, as_list

LOGGER = logging.getLogger(__name__)

AZUL_BOOKING_URL = "https://b2c-api.voeazul.com.br/canonical/api/booking/v5/bookings/{locator}"


class AzulProvider(HttpProvider):
    """Look up an AZUL booking and report whether it was reaccommodated."""

    name = "azul"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        url_template: str = AZUL_BOOKING_URL,
    ) -> None:
        super().__init__(session=session, timeout=timeout)
        self._url_template = url_template

    def check(self, request: BookingLookupRequest, credential: Optional[CarrierCredential]) -> ProviderOutcome:
        credential = self._require_credential(credential)
        if not request.locator:
            raise ProviderError("AZUL booking is missing a locator")

        url = self._url_template.format(locator=quote(request.locator, safe=""))
        LOGGER.debug("Querying AZUL booking %s", request.locator)
        body = self._request_json(
            "POST",
            url,
            json={"departureStation": request.origin_code},
            headers=credential.authorization_headers(),
        )

        journeys = as_list(as_dict(body.get("data"), "data").get("journeys"), "journeys")
        if not journeys:
            return ProviderOutcome(altered=False)

        journey = as_dict(journeys[0], "journey")
        reaccommodation = as_dict(journey.get("reaccommodation"), "reaccommodation")
        return ProviderOutcome(
            altered=bool(reaccommodation.get("reaccommodate")),
            flight_date=_first_flight_date(journey),
        )


def _first_flight_date(journey: Dict[str, Any]) -> Optional[str]:
    flights = as_list(journey.get("flights"), "flights")
    if not flights or not isinstance(flights[0], dict):
        return None
    flight = flights[0]
    return date_portion(flight.get("departureDate") or flight.get("std"))
