"""Conversion services: mapping table, column resolution, row transformation,
manifest layout. The pipeline module ties them to the workbook collaborators
and is imported directly (whx_manifest.services.pipeline)."""

from .column_resolver import resolve_columns
from .errors import (
    ConversionError,
    EmptyMappingError,
    InvalidQuantityError,
    ManifestError,
    MissingRequiredColumnError,
    UnknownSKUError,
    WorkbookReadError,
)
from .mapping_table import MappingTable
from .output_builder import MANIFEST_HEADERS, build_output_row, build_output_rows
from .row_transformer import extract_channel, transform_rows

__all__ = [
    "ConversionError",
    "EmptyMappingError",
    "InvalidQuantityError",
    "ManifestError",
    "MissingRequiredColumnError",
    "UnknownSKUError",
    "WorkbookReadError",
    "MappingTable",
    "MANIFEST_HEADERS",
    "build_output_row",
    "build_output_rows",
    "extract_channel",
    "resolve_columns",
    "transform_rows",
]
