from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from whx_manifest.models.records import ColumnIndexes, IntermediateRecord

from .errors import InvalidQuantityError
from .mapping_table import MappingTable

"""Row transformation: order-export data rows -> IntermediateRecord.

Rows are processed strictly in workbook order. The first unknown SKU or bad
quantity aborts the whole conversion; rows with an empty SKU or quantity
cell are blank trailing lines and are left out (their row numbers are
reported back so the caller can surface the count).
"""

__all__ = [
    "CountryCarryState",
    "RowProgress",
    "TransformResult",
    "extract_channel",
    "parse_quantity",
    "transform_rows",
]

logger = logging.getLogger(__name__)

_QUANTITY_RE = re.compile(r"\+?[0-9]+")


class RowProgress(Protocol):
    def advance(self, n: int = 1) -> None: ...


@dataclass
class CountryCarryState:
    """Last non-empty country seen per order id, for one conversion only."""
    _countries: dict[str, str] = field(default_factory=dict)

    def recall(self, order_id: str) -> str:
        return self._countries.get(order_id, "")

    def remember(self, order_id: str, country: str) -> None:
        self._countries[order_id] = country


@dataclass(frozen=True)
class TransformResult:
    records: list[IntermediateRecord]
    skipped_rows: list[int]  # 1-based row numbers excluded for empty SKU / quantity


def extract_channel(method: str) -> str:
    """Derive the logistics channel from a shipping-method string.

    "Air-Express" -> "Express"; text without a hyphen is returned trimmed.
    Only the first hyphen splits, so "A-B-C" -> "B-C".
    """
    method = method.strip()
    if not method:
        return ""
    parts = method.split("-", 1)
    if len(parts) == 2:
        return parts[1].strip()
    return method


def parse_quantity(text: str, row: int) -> int:
    # base-10 digits only; no underscores, decimals or negative counts
    if not _QUANTITY_RE.fullmatch(text):
        raise InvalidQuantityError(text, row)
    return int(text)


def _cell(row: Sequence[str], idx: int | None) -> str:
    if idx is None or idx < 0 or idx >= len(row):
        return ""
    return str(row[idx]).strip()


def transform_rows(
    rows: Sequence[Sequence[str]],
    columns: ColumnIndexes,
    mapping: MappingTable,
    progress: RowProgress | None = None,
) -> TransformResult:
    """Turn data rows (``rows[1:]``) into IntermediateRecords.

    Raises:
        UnknownSKUError: SKU not in ``mapping`` (row number and SKU in message)
        InvalidQuantityError: quantity is not a base-10 integer
    """
    records: list[IntermediateRecord] = []
    skipped: list[int] = []
    carry = CountryCarryState()

    for i, row in enumerate(rows):
        if i == 0:
            continue  # header
        row_number = i + 1
        if progress is not None:
            progress.advance()

        order_id = _cell(row, columns.order)
        sku = _cell(row, columns.sku)
        qty_text = _cell(row, columns.qty)
        method = _cell(row, columns.method)
        tracking = _cell(row, columns.tracking)
        country = _cell(row, columns.country)
        if not country and order_id:
            country = carry.recall(order_id)

        if not sku or not qty_text:
            skipped.append(row_number)
            continue

        code = mapping.lookup(sku, row=row_number)
        quantity = parse_quantity(qty_text, row_number)
        if country and order_id:
            carry.remember(order_id, country)

        records.append(
            IntermediateRecord(
                tracking=tracking,
                logistics_channel=extract_channel(method),
                sku_code=code,
                quantity=quantity,
                customer_ref=order_id,
                country=country,
                has_tracking=tracking != "",
            )
        )

    if skipped:
        logger.debug("skipped rows without sku/quantity: %s", skipped)
    return TransformResult(records=records, skipped_rows=skipped)
