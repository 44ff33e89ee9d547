"""Spreadsheet import and result export helpers."""

from .exporters import check_export_path, export_results, results_to_dataframe
from .loaders import UnsupportedFileTypeError, parse_rows

__all__ = ["UnsupportedFileTypeError", "check_export_path", "export_results", "parse_rows", "results_to_dataframe"]
