"""Conversion of raw spreadsheet rows into :class:`BookingLookupRequest` objects."""
from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional

from .config import BookingColumns
from .models import BookingLookupRequest, Carrier

_ORIGIN_PATTERN = re.compile(r"\(([A-Za-z]{3})\)")

# Order matters: a label matching several keywords takes the first one.
_CARRIER_KEYWORDS = (
    ("gol", Carrier.GOL),
    ("azul", Carrier.AZUL),
    ("latam", Carrier.LATAM),
)


def _clean_value(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def classify_carrier(label: str) -> Carrier:
    lowered = (label or "").lower()
    for keyword, carrier in _CARRIER_KEYWORDS:
        if keyword in lowered:
            return carrier
    return Carrier.UNSUPPORTED


def extract_origin_code(value: str) -> str:
    match = _ORIGIN_PATTERN.search(value or "")
    return match.group(1).upper() if match else ""


def extract_last_name(name: str) -> str:
    parts = (name or "").split()
    return parts[-1].upper() if parts else ""


def normalise_booking_row(
    row: Mapping[str, Any],
    columns: Optional[BookingColumns] = None,
) -> BookingLookupRequest:
    """Build a lookup request from a raw row; missing fields become empty strings."""

    columns = columns or BookingColumns()
    raw_carrier = row.get(columns.carrier)
    carrier_label = "" if raw_carrier is None else str(raw_carrier)
    name = _clean_value(row.get(columns.name))

    return BookingLookupRequest(
        carrier=classify_carrier(carrier_label),
        passenger_name=name,
        last_name=extract_last_name(name),
        origin_code=extract_origin_code(_clean_value(row.get(columns.origin))),
        locator=_clean_value(row.get(columns.locator)),
        scheduled_date=_clean_value(row.get(columns.scheduled_date)),
        raw_carrier_label=carrier_label,
        purchase_number=_clean_value(row.get(columns.purchase_number)),
    )


def normalise_booking_rows(
    rows: Iterable[Mapping[str, Any]],
    columns: Optional[BookingColumns] = None,
) -> List[BookingLookupRequest]:
    return [normalise_booking_row(row, columns) for row in rows]
