"""Conteo de registros públicos de ventas desde CSV."""

from __future__ import annotations

import csv
from pathlib import Path


def count_rows(csv_path: str | Path) -> int:
    """Recorre el CSV en orden y cuenta filas de datos.

    La primera fila se toma como encabezado y las líneas vacías se omiten.
    Una fila con distinto número de columnas que el encabezado lanza
    `csv.Error`. Las filas se descartan después de contarse.
    """
    count = 0
    with Path(csv_path).open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.reader(handle)
        header: list[str] | None = None
        for row in reader:
            if not row:
                continue
            if header is None:
                header = row
                continue
            if len(row) != len(header):
                raise csv.Error(
                    f"Invalid record length on line {reader.line_num}: "
                    f"expected {len(header)} columns, got {len(row)}"
                )
            count += 1
    return count


def summary_line(count: int, state: str) -> str:
    return f"Imported {count} rows for {state}"
