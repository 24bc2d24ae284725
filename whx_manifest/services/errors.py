from __future__ import annotations

"""Error taxonomy for the conversion pipeline.

Every failure is fatal for the run: nothing is written once one of these is
raised. ``error_type`` is the UPPER_SNAKE classification used in ErrorRecord.
"""

__all__ = [
    "ManifestError",
    "EmptyMappingError",
    "MissingRequiredColumnError",
    "UnknownSKUError",
    "InvalidQuantityError",
    "WorkbookReadError",
    "ConversionError",
]


class ManifestError(Exception):
    """Base exception for conversion failures."""
    error_type = "MANIFEST_ERROR"
    row: int = -1


class EmptyMappingError(ManifestError):
    """Reference table yields no usable (sku, code) pairs."""
    error_type = "EMPTY_MAPPING"


class MissingRequiredColumnError(ManifestError):
    """Input has no rows, or its header lacks a required column."""
    error_type = "MISSING_REQUIRED_COLUMN"

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class UnknownSKUError(ManifestError):
    """SKU has no entry in the mapping table."""
    error_type = "UNKNOWN_SKU"

    def __init__(self, sku: str, row: int = -1) -> None:
        if row > 0:
            message = f"row {row}: sku {sku!r} not found in mapping"
        else:
            message = f"sku {sku!r} not found in mapping"
        super().__init__(message)
        self.sku = sku
        self.row = row


class InvalidQuantityError(ManifestError):
    """Quantity cell is not a non-negative base-10 integer."""
    error_type = "INVALID_QUANTITY"

    def __init__(self, text: str, row: int) -> None:
        super().__init__(f"row {row}: invalid quantity {text!r}")
        self.text = text
        self.row = row


class WorkbookReadError(ManifestError):
    """Workbook (input or reference) could not be opened or has no sheets."""
    error_type = "WORKBOOK_READ_ERROR"


class ConversionError(ManifestError):
    """Stage wrapper: ``"<stage>: <cause>"`` with the original as __cause__."""

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause
        self.error_type = getattr(cause, "error_type", "UNEXPECTED_ERROR")
        self.row = getattr(cause, "row", -1)
