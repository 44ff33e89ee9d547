"""Data models shared by the normalizer, providers, and batch orchestrator."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

_ISO_DATE_PREFIX = re.compile(r"(\d{4}-\d{2}-\d{2})(?:[T ]|$)")


# --- Classification ---

class Carrier(str, Enum):
    """Closed set of carriers the checker knows how to query."""

    GOL = "GOL"
    AZUL = "AZUL"
    LATAM = "LATAM"
    UNSUPPORTED = "UNSUPPORTED"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class LookupStatus(str, Enum):
    """Terminal outcome recorded for every booking in a batch."""

    OK = "OK"
    ALTERED = "ALTERED"
    UNSUPPORTED = "UNSUPPORTED"
    ERROR = "ERROR"


# --- Input Models ---

@dataclass(frozen=True)
class BookingLookupRequest:
    """Canonical lookup request built from one spreadsheet row."""

    carrier: Carrier
    passenger_name: str = ""
    last_name: str = ""
    origin_code: str = ""
    locator: str = ""
    scheduled_date: str = ""
    raw_carrier_label: str = ""
    purchase_number: str = ""

    @property
    def effective_locator(self) -> str:
        """LATAM bookings are identified by their purchase number."""

        if self.carrier is Carrier.LATAM:
            return self.purchase_number
        return self.locator

    @property
    def carrier_display_name(self) -> str:
        if self.carrier is Carrier.UNSUPPORTED:
            return self.raw_carrier_label
        return self.carrier.display_name


@dataclass(frozen=True)
class CarrierCredential:
    """Bearer token obtained once per batch for a single carrier."""

    carrier: Carrier
    token: str
    extra_headers: Dict[str, str] = field(default_factory=dict)

    def authorization_headers(self) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.token}"}
        headers.update(self.extra_headers)
        return headers

    def __repr__(self) -> str:
        return f"CarrierCredential(carrier={self.carrier.value!r}, token=<redacted>)"


# --- Provider & Batch Results ---

@dataclass(frozen=True)
class ProviderOutcome:
    """What a provider reports for a single successful check."""

    altered: bool
    flight_date: Optional[str] = None

    @property
    def status(self) -> LookupStatus:
        return LookupStatus.ALTERED if self.altered else LookupStatus.OK


@dataclass
class BookingLookupResult:
    """Output row for a booking, in the same position as its request."""

    passenger_name: str
    locator: str
    origin_code: str
    last_name: str
    carrier: str
    status: LookupStatus
    flight_date: str = ""
    details: str = ""

    @classmethod
    def from_request(
        cls,
        request: BookingLookupRequest,
        status: LookupStatus,
        *,
        flight_date: Optional[str] = None,
        details: str = "",
    ) -> "BookingLookupResult":
        return cls(
            passenger_name=request.passenger_name,
            locator=request.effective_locator or request.locator,
            origin_code=request.origin_code,
            last_name=request.last_name,
            carrier=request.carrier_display_name,
            status=status,
            flight_date=flight_date or request.scheduled_date,
            details=details,
        )

    def as_row(self) -> Dict[str, str]:
        """Return a serialisable representation of the result."""

        return {
            "passenger_name": self.passenger_name,
            "last_name": self.last_name,
            "locator": self.locator,
            "origin": self.origin_code,
            "carrier": self.carrier,
            "status": self.status.value,
            "flight_date": self.flight_date,
            "details": self.details,
        }


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time view of the batch progress counters."""

    current: int
    total: int

    @property
    def percentage(self) -> int:
        if self.total <= 0:
            return 0
        return round(self.current / self.total * 100)

    def as_dict(self) -> Dict[str, int]:
        return {"current": self.current, "total": self.total, "percentage": self.percentage}


def date_portion(value: Optional[str]) -> Optional[str]:
    """Strip the time part from an ISO-like timestamp (``2024-05-20T10:00`` -> ``2024-05-20``)."""

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    match = _ISO_DATE_PREFIX.match(text)
    if match:
        return match.group(1)
    return text
