"""Utilities for reading booking rows from uploaded spreadsheets."""
from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Union

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

PathLike = Union[str, Path]

RawRow = Dict[str, str]

_CSV_SUFFIXES = {".csv", ".tsv"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
SUPPORTED_SUFFIXES = _CSV_SUFFIXES | _EXCEL_SUFFIXES


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


def parse_rows(
    path: PathLike,
    *,
    sheet_name: Union[str, int] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> List[RawRow]:
    """Load every non-empty row of a spreadsheet as a column-title to text mapping.

    Parameters
    ----------
    path:
        Path to the CSV/TSV/Excel file to be loaded.
    sheet_name:
        Sheet selector passed to :func:`pandas.read_excel` when loading an Excel
        file. Ignored for CSV files.
    loader_kwargs:
        Extra keyword arguments forwarded to :func:`pandas.read_csv` or
        :func:`pandas.read_excel`. CSV files default to ``;`` as separator.
    """

    dataframe = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    rows: List[RawRow] = []
    for record in dataframe.to_dict(orient="records"):
        row = {str(column).strip(): _clean_text(value) for column, value in record.items()}
        if any(row.values()):
            rows.append(row)
    return rows


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    loader_kwargs.setdefault("dtype", str)
    loader_kwargs.setdefault("keep_default_na", False)
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")

    try:
        if suffix in _CSV_SUFFIXES:
            loader_kwargs.setdefault("sep", "\t" if suffix == ".tsv" else ";")
            return pd.read_csv(path_obj, **loader_kwargs)
        engine = loader_kwargs.pop("engine", None) or "openpyxl"
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=engine, **loader_kwargs)
    except (ValueError, zipfile.BadZipFile, InvalidFileException) as exc:
        raise UnsupportedFileTypeError(f"Could not read '{path_obj.name}' as a spreadsheet: {exc}") from exc


def _clean_text(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


__all__ = ["RawRow", "SUPPORTED_SUFFIXES", "UnsupportedFileTypeError", "parse_rows"]
