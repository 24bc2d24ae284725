from .reader import read_reference_rows, read_sheet_rows
from .writer import read_preview, write_manifest

__all__ = ["read_reference_rows", "read_sheet_rows", "read_preview", "write_manifest"]
