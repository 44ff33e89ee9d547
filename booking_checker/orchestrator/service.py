"""Batch orchestration: credentials, bounded dispatch and progress tracking."""
from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..config import BookingColumns, CheckerSettings
from ..credentials import AzulCredentialProvider, CredentialAcquirer, GolCredentialProvider, acquire_credentials
from ..models import BookingLookupRequest, BookingLookupResult, Carrier, LookupStatus
from ..normalize import normalise_booking_rows
from ..progress import ProgressTracker
from ..providers import (
    AzulProvider,
    GolProvider,
    LatamConfig,
    LatamProvider,
    ProviderRegistry,
    UnsupportedCarrierError,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 5


class BoundedDispatcher:
    """Runs one lookup per request with at most ``max_workers`` in flight."""

    def __init__(self, progress: ProgressTracker, *, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._progress = progress
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def dispatch(
        self, requests: Sequence[BookingLookupRequest], registry: ProviderRegistry
    ) -> List[BookingLookupResult]:
        """Return one result per request, ordered like ``requests``."""

        results: List[Optional[BookingLookupResult]] = [None] * len(requests)
        if not requests:
            return []

        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="booking-check") as executor:
            futures = {
                executor.submit(self._execute_lookup, index, request, registry): index
                for index, request in enumerate(requests)
            }
            for future in as_completed(futures):
                index = futures[future]
                results[index] = future.result()

        return results  # type: ignore[return-value]

    def _execute_lookup(
        self, index: int, request: BookingLookupRequest, registry: ProviderRegistry
    ) -> BookingLookupResult:
        try:
            provider, credential = registry.resolve(request.carrier)
            LOGGER.debug("Running provider %s for booking #%s (%s)", provider.name, index, request.effective_locator)
            outcome = provider.check(request, credential)
            return BookingLookupResult.from_request(request, outcome.status, flight_date=outcome.flight_date)
        except UnsupportedCarrierError as exc:
            return BookingLookupResult.from_request(request, LookupStatus.UNSUPPORTED, details=str(exc))
        except Exception as exc:
            LOGGER.warning("Lookup for booking #%s (%s) failed: %s", index, request.carrier_display_name, exc)
            return BookingLookupResult.from_request(request, LookupStatus.ERROR, details=str(exc))
        finally:
            self._progress.increment_completed()


class BatchOrchestrator:
    """Top-level entry point: one call to :meth:`run_batch` per uploaded sheet."""

    def __init__(
        self,
        registry: ProviderRegistry,
        credential_acquirers: Mapping[Carrier, CredentialAcquirer],
        *,
        progress: Optional[ProgressTracker] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        columns: Optional[BookingColumns] = None,
    ) -> None:
        self._registry = registry
        self._credential_acquirers = dict(credential_acquirers)
        self._progress = progress or ProgressTracker()
        self._dispatcher = BoundedDispatcher(self._progress, max_workers=max_workers)
        self._columns = columns or BookingColumns()

    @classmethod
    def from_settings(cls, settings: CheckerSettings, *, progress: Optional[ProgressTracker] = None) -> "BatchOrchestrator":
        """Wire the real carrier providers from runtime settings."""

        timeout = settings.request_timeout
        providers = {
            Carrier.GOL: GolProvider(timeout=timeout),
            Carrier.AZUL: AzulProvider(timeout=timeout),
            Carrier.LATAM: LatamProvider(
                LatamConfig(
                    headless=settings.latam_headless,
                    navigation_timeout=settings.latam_navigation_timeout,
                    wait_timeout=settings.latam_wait_timeout,
                )
            ),
        }
        acquirers: Dict[Carrier, CredentialAcquirer] = {
            Carrier.GOL: GolCredentialProvider(settings.gol_aat_header, timeout=timeout),
            Carrier.AZUL: AzulCredentialProvider(settings.azul_subscription_key, timeout=timeout),
        }
        return cls(
            ProviderRegistry(providers),
            acquirers,
            progress=progress,
            max_workers=settings.max_workers,
            columns=settings.columns,
        )

    @property
    def progress(self) -> ProgressTracker:
        return self._progress

    def run_batch(self, raw_rows: Iterable[Mapping[str, Any]]) -> List[BookingLookupResult]:
        """Normalise ``raw_rows`` and check every booking."""

        return self.run_requests(normalise_booking_rows(raw_rows, self._columns))

    def run_requests(self, requests: Sequence[BookingLookupRequest]) -> List[BookingLookupResult]:
        requests = list(requests)
        LOGGER.info("Starting batch of %s bookings", len(requests))
        credentials = acquire_credentials(self._credential_acquirers)
        self._progress.reset(len(requests))

        results = self._dispatcher.dispatch(requests, self._registry.with_credentials(credentials))
        LOGGER.info("Finished batch: %s", ", ".join(f"{k}={v}" for k, v in summarize(results).items()))
        return results

    def get_progress(self) -> Dict[str, int]:
        return self._progress.snapshot().as_dict()


def summarize(results: Iterable[BookingLookupResult]) -> Dict[str, int]:
    """Count results per status, listing every status even when zero."""

    counts = Counter(result.status for result in results)
    return {status.value: counts.get(status, 0) for status in LookupStatus}
