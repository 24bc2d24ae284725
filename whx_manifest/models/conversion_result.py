from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

"""Result model for a single workbook conversion."""

__all__ = [
    "ConversionResult",
]


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of generate_workbook(), used for the CLI output and SUMMARY line."""
    input_path: Path
    output_path: Path  # absolute path of the written manifest
    row_count: int  # manifest data rows written (header excluded)
    skipped_rows: int = 0  # data rows excluded for an empty SKU or quantity
    elapsed_seconds: float = 0.0
