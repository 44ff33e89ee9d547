"""Export utilities for booking check results."""
from __future__ import annotations

from pathlib import Path
from typing import MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import BookingLookupResult

PathLike = Union[str, Path]

RESULT_COLUMNS = [
    "passenger_name",
    "last_name",
    "locator",
    "origin",
    "carrier",
    "status",
    "flight_date",
    "details",
]

EXPORT_SUFFIXES = frozenset({".csv", ".tsv", ".xlsx", ".xlsm"})


def check_export_path(path: PathLike) -> Path:
    """Reject output paths whose format cannot be written."""

    output_path = Path(path)
    if output_path.suffix.lower() not in EXPORT_SUFFIXES:
        raise ValueError(f"Unsupported export file extension: {output_path.suffix}")
    return output_path


def export_results(
    results: Sequence[BookingLookupResult],
    path: PathLike,
    *,
    sheet_name: str = "Results",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write booking results to a CSV or Excel file, keeping their order."""

    output_path = check_export_path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(results_to_dataframe(results), output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def results_to_dataframe(results: Sequence[BookingLookupResult]) -> pd.DataFrame:
    """Convert booking results into a :class:`pandas.DataFrame`."""

    return pd.DataFrame([result.as_row() for result in results], columns=RESULT_COLUMNS)


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xlsx", ".xlsm"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


__all__ = ["EXPORT_SUFFIXES", "RESULT_COLUMNS", "check_export_path", "export_results", "results_to_dataframe"]
