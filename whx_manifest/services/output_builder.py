from __future__ import annotations

from typing import Any

from whx_manifest.models.config_models import ManifestConstants
from whx_manifest.models.records import IntermediateRecord

"""Manifest row layout.

Untracked lines still carry SKU code, quantity and country for stock
accounting, but the dispatch fields (outbound type, logistics company,
channel, platform, customer reference) stay blank until a tracking number
exists.
"""

__all__ = [
    "MANIFEST_HEADERS",
    "build_output_row",
    "build_output_rows",
]

MANIFEST_HEADERS: list[str] = [
    "出库类型",  # outbound type
    "运单号",  # tracking number
    "物流公司",  # logistics company
    "物流渠道",  # logistics channel
    "SKU编码",
    "数量",
    "订单平台",  # order platform
    "客户参考单号",  # customer reference
    "其他参考单号",
    "出库优先级",
    "备注",
    "面单URL",
    "渠道国家",  # country
]

_OUTBOUND_TYPE = 0
_LOGISTICS_COMPANY = 2
_LOGISTICS_CHANNEL = 3
_ORDER_PLATFORM = 6
_CUSTOMER_REF = 7


def build_output_row(record: IntermediateRecord, constants: ManifestConstants | None = None) -> list[Any]:
    constants = constants or ManifestConstants()
    values: list[Any] = [
        "",
        record.tracking,
        "",
        "",
        record.sku_code,
        record.quantity,
        "",
        "",
        "",
        "",
        "",
        "",
        record.country,
    ]
    if record.has_tracking:
        values[_OUTBOUND_TYPE] = constants.outbound_type
        values[_LOGISTICS_COMPANY] = constants.logistics_brand
        values[_LOGISTICS_CHANNEL] = record.logistics_channel
        values[_ORDER_PLATFORM] = constants.order_platform
        values[_CUSTOMER_REF] = record.customer_ref
    return values


def build_output_rows(
    records: list[IntermediateRecord], constants: ManifestConstants | None = None
) -> list[list[Any]]:
    """Header row followed by one manifest row per record, in record order."""
    return [list(MANIFEST_HEADERS)] + [build_output_row(r, constants) for r in records]
