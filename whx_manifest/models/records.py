from __future__ import annotations

from dataclasses import dataclass

"""Row-level domain models shared by the conversion services.

A conversion reads the order-export header into ColumnIndexes, turns every
usable data row into an IntermediateRecord, and hands those to the output
builder. MappingEntry is one (sku, code) pair of the reference table.
"""

__all__ = [
    "MappingEntry",
    "ColumnIndexes",
    "IntermediateRecord",
]


@dataclass(frozen=True)
class MappingEntry:
    sku: str   # merchant SKU (trimmed, non-empty)
    code: str  # carrier SKU code (trimmed, non-empty)


@dataclass(frozen=True)
class ColumnIndexes:
    """Positional offsets of the named columns within a row.

    ``None`` means the column was not found in the header; only the optional
    columns (method, tracking, country) may be ``None``.
    """
    order: int
    sku: int
    qty: int
    method: int | None = None
    tracking: int | None = None
    country: int | None = None


@dataclass(frozen=True)
class IntermediateRecord:
    """One validated order line, ready for the manifest layout."""
    tracking: str
    logistics_channel: str
    sku_code: str  # always resolved through the mapping table
    quantity: int
    customer_ref: str  # order id
    country: str  # original or carried forward from an earlier line
    has_tracking: bool
