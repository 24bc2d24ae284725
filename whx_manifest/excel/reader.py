from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import pandas as pd

from whx_manifest.services.errors import WorkbookReadError

"""Workbook reader.

Only the first sheet of a workbook is read, without a header (row 0 stays the
header row for column resolution). Every cell comes back as text:
- empty cells -> ""
- integral numbers -> "3" (not "3.0")
- no NA-string conversion: "NA", "N/A", "null" stay as written

Workbooks are read with openpyxl (.xlsx/.xlsm); legacy .xls is rejected up
front. CSV files are accepted as well, mainly for the mapping table.
"""

__all__ = [
    "read_sheet_rows",
    "read_reference_rows",
    "cell_to_text",
]

CSV_SUFFIXES = {".csv"}
WORKBOOK_SUFFIXES = {".xlsx", ".xlsm"}


def cell_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if value is pd.NaT:
        return ""
    return str(value)


def _frame_to_rows(df: pd.DataFrame) -> list[list[str]]:
    return [[cell_to_text(v) for v in raw] for raw in df.itertuples(index=False, name=None)]


def _read_csv_rows(path: Path) -> list[list[str]]:
    try:
        df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except pd.errors.EmptyDataError:
        return []
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise WorkbookReadError(f"cannot read {path.name}: {e}") from e
    return _frame_to_rows(df)


def read_sheet_rows(path: Path) -> list[list[str]]:
    """Read the first sheet of ``path`` as rows of text cells.

    A workbook without any sheet reads as no rows at all.

    Raises:
        WorkbookReadError: file missing, unsupported format, or not a readable workbook
    """
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        return _read_csv_rows(path)
    if suffix not in WORKBOOK_SUFFIXES:
        raise WorkbookReadError(f"unsupported file type {path.name}: expected .xlsx or .csv")

    try:
        with pd.ExcelFile(path, engine="openpyxl") as xls:
            if not xls.sheet_names:
                return []
            # dtype=object keeps long numeric ids (tracking numbers) exact
            df = xls.parse(
                xls.sheet_names[0],
                header=None,
                dtype=object,
                keep_default_na=False,
            )
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook {path.name}: {e}") from e
    return _frame_to_rows(df)


def read_reference_rows(path: Path | None) -> list[list[str]]:
    """Read the SKU mapping reference table (xlsx/csv)."""
    if path is None:
        raise WorkbookReadError("sku mapping table path is not configured")
    return read_sheet_rows(path)
