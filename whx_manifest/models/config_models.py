from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the manifest generator.

These are the typed forms of config/manifest.yml. The loader in
whx_manifest.config.loader fills them in, falling back to the defaults below
for every key the YAML file leaves out.
"""

__all__ = [
    "ColumnNames",
    "ManifestConstants",
    "ServerConfig",
    "ConverterConfig",
]


@dataclass(frozen=True)
class ColumnNames:
    """Header text of the order-export columns (exact, case-sensitive match).

    order / sku / qty are required in every input workbook; the other three
    may be missing, in which case their cells read as empty strings.
    """
    order: str = "平台单号"
    sku: str = "SKU"
    qty: str = "数量"
    method: str = "物流方式"
    tracking: str = "运单号"
    country: str = "国家/地区"


@dataclass(frozen=True)
class ManifestConstants:
    """Fixed values written to dispatch fields of tracked lines."""
    outbound_type: str = "销售出库"
    logistics_brand: str = "First Logistics"
    order_platform: str = "SHOPIFY"


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8001
    max_upload_mb: int = 25  # upload guardrail

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb << 20


@dataclass(frozen=True)
class ConverterConfig:
    """Root configuration object for one conversion (CLI run or web request)."""
    mapping_path: str | None = None  # SKU -> carrier code reference table
    output_prefix: str = "Warehouse_"
    columns: ColumnNames = field(default_factory=ColumnNames)
    constants: ManifestConstants = field(default_factory=ManifestConstants)
    server: ServerConfig = field(default_factory=ServerConfig)
