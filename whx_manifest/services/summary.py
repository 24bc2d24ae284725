from __future__ import annotations

from whx_manifest.models.conversion_result import ConversionResult

"""SUMMARY line rendering for the CLI."""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(value: float) -> str:
    """Render elapsed seconds without scientific notation or trailing zeros."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".") or "0"


def render_summary_line(result: ConversionResult) -> str:
    """Render a SUMMARY line from a ConversionResult.

    Format:
    SUMMARY file={name} rows={rows} skipped={skipped} elapsed_sec={elapsed} output={path}

    Examples:
        >>> from pathlib import Path
        >>> r = ConversionResult(Path("orders.xlsx"), Path("/tmp/Warehouse_orders.xlsx"), 12, 1, 0.25)
        >>> render_summary_line(r)
        'SUMMARY file=orders.xlsx rows=12 skipped=1 elapsed_sec=0.25 output=/tmp/Warehouse_orders.xlsx'
    """
    return (
        f"SUMMARY file={result.input_path.name} "
        f"rows={result.row_count} "
        f"skipped={result.skipped_rows} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)} "
        f"output={result.output_path}"
    )
