from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

from whx_manifest.models.records import MappingEntry

from .errors import EmptyMappingError, UnknownSKUError

"""SKU mapping table.

Built once per conversion from the reference table (first sheet of the
mapping workbook): row 0 is a header, every later row contributes
``row[0] -> row[1]`` when both cells are non-empty after trimming. A SKU that
appears more than once keeps its last code.
"""

__all__ = [
    "MappingTable",
    "parse_mapping_entries",
]

logger = logging.getLogger(__name__)


def parse_mapping_entries(reference_rows: Sequence[Sequence[str]]) -> Iterator[MappingEntry]:
    """Yield the usable (sku, code) pairs of a reference table in row order."""
    for i, row in enumerate(reference_rows):
        if i == 0 or len(row) < 2:
            continue
        sku = str(row[0]).strip()
        code = str(row[1]).strip()
        if not sku or not code:
            continue
        yield MappingEntry(sku=sku, code=code)


class MappingTable:
    """Read-only SKU -> carrier code lookup."""

    def __init__(self, codes: Mapping[str, str]) -> None:
        self._codes: Mapping[str, str] = MappingProxyType(dict(codes))

    @classmethod
    def build(cls, reference_rows: Sequence[Sequence[str]] | None) -> MappingTable:
        """Build the table from reference rows.

        Raises:
            EmptyMappingError: no rows at all, or no valid pair after the header
        """
        if not reference_rows:
            raise EmptyMappingError("mapping workbook has no rows")
        codes: dict[str, str] = {}
        for entry in parse_mapping_entries(reference_rows):
            if entry.sku in codes and codes[entry.sku] != entry.code:
                logger.debug("mapping sku=%s redefined %s -> %s", entry.sku, codes[entry.sku], entry.code)
            codes[entry.sku] = entry.code
        if not codes:
            raise EmptyMappingError("mapping workbook is empty")
        logger.debug("loaded %d sku mappings", len(codes))
        return cls(codes)

    def lookup(self, sku: str, row: int = -1) -> str:
        """Return the carrier code for ``sku``.

        ``row`` is only used to make the error message point at the input row.
        """
        try:
            return self._codes[sku]
        except KeyError:
            raise UnknownSKUError(sku, row=row) from None

    def __contains__(self, sku: object) -> bool:
        return sku in self._codes

    def __len__(self) -> int:
        return len(self._codes)
