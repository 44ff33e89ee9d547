"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import pytest

from booking_checker import __main__
from booking_checker.cli import main
from booking_checker.orchestrator import BatchOrchestrator

INPUT = (
    "Companhia;Nome;Origem;Localizador;Data\n"
    "GOL;Maria Silva;Sao Paulo (GRU);ABC123;20/05/2025\n"
    "TAP;Carla Dias;Lisboa (LIS);TAP001;03/06/2025\n"
)


@pytest.fixture(autouse=True)
def _no_carrier_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AAT_HEADER_GOL", raising=False)
    monkeypatch.delenv("AZUL_KEY", raising=False)


def test_cli_smoke_runs_without_credentials(tmp_path) -> None:
    input_path = tmp_path / "bookings.csv"
    input_path.write_text(INPUT, encoding="utf-8")
    output_path = tmp_path / "results.csv"

    exit_code = main([str(input_path), str(output_path), "--progress-interval", "0"])

    assert exit_code == 0
    lines = output_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("passenger_name,last_name,locator")
    assert "ABC123" in lines[1] and "ERROR" in lines[1]
    assert "TAP001" in lines[2] and "UNSUPPORTED" in lines[2]


def test_cli_rejects_unsupported_input(tmp_path) -> None:
    input_path = tmp_path / "bookings.pdf"
    input_path.write_text("not a spreadsheet", encoding="utf-8")

    assert main([str(input_path), str(tmp_path / "results.csv")]) == 1


def test_module_entry_point_delegates_to_cli(tmp_path) -> None:
    input_path = tmp_path / "bookings.csv"
    input_path.write_text(INPUT, encoding="utf-8")
    output_path = tmp_path / "results.csv"

    exit_code = __main__.main([str(input_path), str(output_path), "--progress-interval", "0.01"])

    assert exit_code == 0
    assert output_path.exists()


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert "python -m booking_checker" in captured.out
    assert exit_code == 2


def test_cli_rejects_unsupported_output_before_running_batch(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    input_path = tmp_path / "bookings.csv"
    input_path.write_text(INPUT, encoding="utf-8")

    def fail_run_batch(self, rows):  # pragma: no cover - must not be reached
        raise AssertionError("batch should not run for an unwritable output format")

    monkeypatch.setattr(BatchOrchestrator, "run_batch", fail_run_batch)

    exit_code = main([str(input_path), str(tmp_path / "results.json"), "--progress-interval", "0"])

    assert exit_code == 1
    assert not (tmp_path / "results.json").exists()


def test_cli_reports_empty_spreadsheet(tmp_path) -> None:
    input_path = tmp_path / "bookings.csv"
    input_path.write_text("", encoding="utf-8")

    assert main([str(input_path), str(tmp_path / "results.csv"), "--progress-interval", "0"]) == 1


@pytest.mark.parametrize("workers", ["0", "-2"])
def test_cli_rejects_non_positive_worker_count(tmp_path, workers: str) -> None:
    input_path = tmp_path / "bookings.csv"
    input_path.write_text(INPUT, encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(input_path), str(tmp_path / "results.csv"), "--max-workers", workers])

    assert excinfo.value.code == 2
