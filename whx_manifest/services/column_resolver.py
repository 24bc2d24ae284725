from __future__ import annotations

from collections.abc import Sequence

from whx_manifest.models.config_models import ColumnNames
from whx_manifest.models.records import ColumnIndexes

from .errors import MissingRequiredColumnError

"""Header-based column resolution.

Order exports from different shops put the columns in different orders, so
every column is located by its header text instead of a fixed position.
"""

__all__ = [
    "find_column",
    "resolve_columns",
]


def find_column(header: Sequence[str], name: str) -> int | None:
    """Index of the first header cell whose trimmed text equals ``name``."""
    for i, cell in enumerate(header):
        if str(cell).strip() == name:
            return i
    return None


def resolve_columns(rows: Sequence[Sequence[str]], names: ColumnNames | None = None) -> ColumnIndexes:
    """Resolve column offsets from the header row (``rows[0]``).

    Raises:
        MissingRequiredColumnError: ``rows`` is empty, or the order / SKU /
            quantity column is not in the header
    """
    if not rows:
        raise MissingRequiredColumnError("input workbook has no rows")
    names = names or ColumnNames()
    header = rows[0]

    required = {
        "order": find_column(header, names.order),
        "sku": find_column(header, names.sku),
        "qty": find_column(header, names.qty),
    }
    missing = [getattr(names, key) for key, idx in required.items() if idx is None]
    if missing:
        raise MissingRequiredColumnError(
            f"input workbook header missing required columns: {missing}", missing=missing
        )

    return ColumnIndexes(
        order=required["order"],  # type: ignore[arg-type]
        sku=required["sku"],  # type: ignore[arg-type]
        qty=required["qty"],  # type: ignore[arg-type]
        method=find_column(header, names.method),
        tracking=find_column(header, names.tracking),
        country=find_column(header, names.country),
    )
