"""Pruebas del contador de ventas públicas."""

from __future__ import annotations

from pathlib import Path

import pytest

import load_public_sales
from oakmont.services.public_sales import count_rows


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "sales.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_prints_row_count_excluding_header(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    csv_file = _write(
        tmp_path,
        "address,suburb,price\n"
        "25 Moonstone Pl,Oakmont,950000\n"
        '"3/14 Harbour St, Unit B",Oakmont,610000\n'
        "7 Ridge Rd,Hillcrest,1200000\n",
    )

    assert load_public_sales.main([str(csv_file), "NSW"]) == 0
    assert capsys.readouterr().out.strip() == "Imported 3 rows for NSW"


def test_header_only_file_counts_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    csv_file = _write(tmp_path, "address,suburb,price\n")

    assert load_public_sales.main([str(csv_file), "VIC"]) == 0
    assert capsys.readouterr().out.strip() == "Imported 0 rows for VIC"


def test_blank_lines_are_skipped(tmp_path: Path) -> None:
    csv_file = _write(tmp_path, "address,price\n\n1 A St,1\n\n2 B St,2\n")
    assert count_rows(csv_file) == 2


@pytest.mark.parametrize("argv", [[], ["sales.csv"]])
def test_missing_arguments_exit_1(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert load_public_sales.main(argv) == 1
    assert "Usage:" in capsys.readouterr().err


def test_missing_file_exit_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert load_public_sales.main([str(tmp_path / "nope.csv"), "QLD"]) == 1
    assert "Error processing CSV" in capsys.readouterr().err


def test_extra_arguments_are_ignored(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    csv_file = _write(tmp_path, "address,price\n1 A St,1\n")

    assert load_public_sales.main([str(csv_file), "NSW", "extra"]) == 0
    assert capsys.readouterr().out.strip() == "Imported 1 rows for NSW"


def test_leading_blank_lines_before_header(tmp_path: Path) -> None:
    csv_file = _write(tmp_path, "\n\naddress,price\n1 A St,1\n")
    assert count_rows(csv_file) == 1


@pytest.mark.parametrize("bad_row", ["1 A St", "1 A St,1,extra"])
def test_record_length_mismatch_exit_1(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], bad_row: str
) -> None:
    csv_file = _write(tmp_path, f"address,price\n2 B St,2\n{bad_row}\n")

    assert load_public_sales.main([str(csv_file), "NSW"]) == 1
    captured = capsys.readouterr()
    assert "Error processing CSV" in captured.err
    assert "Invalid record length" in captured.err
    assert captured.out == ""
