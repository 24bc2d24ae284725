from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from whx_manifest.services.errors import WorkbookReadError

from .reader import read_sheet_rows

"""Manifest workbook writer and preview reader."""

__all__ = [
    "SHEET_NAME",
    "write_manifest",
    "read_preview",
]

SHEET_NAME = "Sheet1"


def write_manifest(rows: list[list[Any]], path: Path) -> Path:
    """Write ``rows`` (header first) to a new workbook at ``path``."""
    if not rows:
        raise ValueError("manifest rows must include the header row")
    header, data = rows[0], rows[1:]
    df = pd.DataFrame(data, columns=header)
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
    return path


def read_preview(path: Path) -> tuple[list[str], list[list[str]]]:
    """Read a written manifest back as (headers, rows), rows padded to header width."""
    rows = read_sheet_rows(path)
    if not rows:
        raise WorkbookReadError("output empty")
    headers = rows[0]
    data: list[list[str]] = []
    for raw in rows[1:]:
        data.append([raw[j] if j < len(raw) else "" for j in range(len(headers))])
    return headers, data
