"""Top-level package for the airline booking change checker."""

from . import models  # noqa: F401
from .models import (
    BookingLookupRequest,
    BookingLookupResult,
    Carrier,
    CarrierCredential,
    LookupStatus,
    ProgressSnapshot,
)
from .orchestrator import BatchOrchestrator, BoundedDispatcher  # noqa: F401
from .progress import ProgressTracker  # noqa: F401

__all__ = [
    "BatchOrchestrator",
    "BookingLookupRequest",
    "BookingLookupResult",
    "BoundedDispatcher",
    "Carrier",
    "CarrierCredential",
    "LookupStatus",
    "ProgressSnapshot",
    "ProgressTracker",
    "ingestion",
    "orchestrator",
    "providers",
]
