#!/usr/bin/env python3
"""Cuenta los registros de ventas públicas de un CSV por estado.

Uso: load_public_sales.py <csvFile> <STATE_CODE>
"""

from __future__ import annotations

import argparse
import csv
import sys
from typing import Sequence

from oakmont.services.public_sales import count_rows, summary_line

USAGE = "Usage: load_public_sales.py <csvFile> <STATE_CODE>"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lee un CSV de ventas públicas y reporta cuántas filas contiene.",
        usage=USAGE,
    )
    parser.add_argument("csv_file", nargs="?", help="Ruta al archivo CSV (con encabezado).")
    parser.add_argument("state", nargs="?", help="Código de estado, ej. NSW.")
    # Argumentos extra se ignoran.
    args, _extra = parser.parse_known_args(argv)
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.csv_file or not args.state:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        count = count_rows(args.csv_file)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        print(f"Error processing CSV: {exc}", file=sys.stderr)
        return 1

    print(summary_line(count, args.state))
    return 0


if __name__ == "__main__":  # pragma: no cover - script manual
    sys.exit(main())
