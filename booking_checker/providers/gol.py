"""GOL booking provider backed by the PNR validation API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

import requests

from ..models import BookingLookupRequest, CarrierCredential, ProviderOutcome, date_portion
from .base import HttpProvider, ProviderError, as_dict, as_list

LOGGER = logging.getLogger(__name__)

GOL_BOOKING_URL = "https://booking-api.voegol.com.br/api/pnrBnpl/pnr-bnpl-validation"

ALTERED_SEGMENT_STATUSES = frozenset({"CANCELLED", "SCHEDULE_CHANGE"})
CANCELLED_STATUS = "CANCELLED"


class GolProvider(HttpProvider):
    """Look up a GOL booking by locator, origin and passenger last name."""

    name = "gol"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        url: str = GOL_BOOKING_URL,
    ) -> None:
        super().__init__(session=session, timeout=timeout)
        self._url = url

    def check(self, request: BookingLookupRequest, credential: Optional[CarrierCredential]) -> ProviderOutcome:
        credential = self._require_credential(credential)
        params = {
            "context": "b2c",
            "flow": "consult",
            "pnr": request.locator,
            "origin": request.origin_code,
            "lastName": request.last_name,
        }
        LOGGER.debug("Querying GOL booking %s", request.locator)
        body = self._request_json("GET", self._url, params=params, headers=credential.authorization_headers())

        pnr = self._extract_pnr(body)
        parts = as_list(as_dict(pnr.get("itinerary"), "itinerary").get("itineraryParts"), "itineraryParts")
        return ProviderOutcome(
            altered=is_altered(parts, request.origin_code),
            flight_date=first_departure_date(parts),
        )

    @staticmethod
    def _extract_pnr(body: Dict[str, Any]) -> Dict[str, Any]:
        response = body.get("response")
        if isinstance(response, dict):
            pnr = as_dict(response.get("pnrRetrieveResponse"), "pnrRetrieveResponse").get("pnr")
            if pnr:
                return as_dict(pnr, "pnr")
        return body


def _segment_status(segment: Dict[str, Any]) -> Optional[str]:
    status_code = segment.get("segmentStatusCode")
    if not isinstance(status_code, dict):
        return None
    return status_code.get("segmentStatus")


def _segments(part: Dict[str, Any], key: str) -> Iterable[Dict[str, Any]]:
    for segment in as_list(part.get(key), key):
        if isinstance(segment, dict):
            yield segment


def is_altered(parts: Iterable[Any], origin_code: str) -> bool:
    """Scan itinerary parts for a cancelled or rescheduled segment leaving ``origin_code``."""

    for part in parts:
        if not isinstance(part, dict):
            raise ProviderError("Itinerary part is not an object")
        for segment in _segments(part, "segments"):
            if segment.get("origin") == origin_code and _segment_status(segment) in ALTERED_SEGMENT_STATUSES:
                return True
        for segment in _segments(part, "cancelledSegments"):
            if segment.get("origin") == origin_code and _segment_status(segment) == CANCELLED_STATUS:
                return True
    return False


def first_departure_date(parts: list) -> Optional[str]:
    if not parts or not isinstance(parts[0], dict):
        return None
    segments = as_list(parts[0].get("segments"), "segments")
    if not segments or not isinstance(segments[0], dict):
        return None
    return date_portion(segments[0].get("departure"))
