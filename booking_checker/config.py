"""Configuration helpers for the booking checker."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

LOGGER = logging.getLogger(__name__)

GOL_AAT_ENV = "AAT_HEADER_GOL"
AZUL_KEY_ENV = "AZUL_KEY"


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


@dataclass(frozen=True)
class BookingColumns:
    """Spreadsheet column titles for each booking field."""

    carrier: str = "Companhia"
    name: str = "Nome"
    origin: str = "Origem"
    locator: str = "Localizador"
    scheduled_date: str = "Data"
    purchase_number: str = "Numero da Compra"


@dataclass
class CheckerSettings:
    """Runtime settings for a batch run."""

    gol_aat_header: Optional[str] = None
    azul_subscription_key: Optional[str] = None
    max_workers: int = 5
    request_timeout: float = 30.0
    latam_headless: bool = True
    latam_navigation_timeout: float = 60.0
    latam_wait_timeout: float = 10.0
    columns: BookingColumns = field(default_factory=BookingColumns)


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' is malformed: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping")
    return data


def load_settings(
    path: str | Path | None = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CheckerSettings:
    """Build settings from defaults, an optional config file, and the environment."""

    environ = os.environ if environ is None else environ
    config = load_configuration(path) if path else {}

    known = {item.name for item in fields(CheckerSettings)} - {"columns"}
    unknown = sorted(set(config) - known - {"columns"})
    if unknown:
        LOGGER.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

    options = {key: value for key, value in config.items() if key in known}
    columns_cfg = config.get("columns") or {}
    if not isinstance(columns_cfg, dict):
        raise ConfigurationError("'columns' must be a mapping of field name to column title")
    try:
        columns = BookingColumns(**columns_cfg)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid column mapping: {exc}") from exc

    settings = CheckerSettings(columns=columns, **options)

    if environ.get(GOL_AAT_ENV):
        settings.gol_aat_header = environ[GOL_AAT_ENV]
    if environ.get(AZUL_KEY_ENV):
        settings.azul_subscription_key = environ[AZUL_KEY_ENV]

    if settings.max_workers < 1:
        raise ConfigurationError("max_workers must be at least 1")
    return settings
