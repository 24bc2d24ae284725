"""Domain models for the WHX manifest generator."""

from .config_models import ColumnNames, ConverterConfig, ManifestConstants, ServerConfig
from .conversion_result import ConversionResult
from .error_record import ErrorRecord
from .records import ColumnIndexes, IntermediateRecord, MappingEntry

__all__ = [
    # Configuration models
    "ColumnNames",
    "ConverterConfig",
    "ManifestConstants",
    "ServerConfig",
    # Processing models
    "ColumnIndexes",
    "IntermediateRecord",
    "MappingEntry",
    "ConversionResult",
    "ErrorRecord",
]
