from __future__ import annotations

from pathlib import Path

import pytest

from whx_manifest.models.config_models import ConverterConfig
from whx_manifest.services.errors import (
    ConversionError,
    EmptyMappingError,
    InvalidQuantityError,
    MissingRequiredColumnError,
    UnknownSKUError,
)
from whx_manifest.services.output_builder import MANIFEST_HEADERS
from whx_manifest.services.pipeline import (
    STAGE_LOAD_MAPPING,
    STAGE_PREPARE_ROWS,
    generate,
    output_path_for,
    prepare_manifest,
)


def test_generate_round_trip(order_rows, english_config):
    rows, count = generate(order_rows, [["SKU", "Code"], ["X1", "C100"]], english_config)
    assert count == 2
    assert rows[0] == MANIFEST_HEADERS
    assert rows[1] == [
        "销售出库", "TRK1", "First Logistics", "Express", "C100", 3, "SHOPIFY", "O1", "", "", "", "", "US",
    ]
    # no tracking: dispatch fields blank, country carried from the first O1 line
    assert rows[2] == ["", "", "", "", "C100", 2, "", "", "", "", "", "", "US"]


def test_generate_unknown_sku(order_rows, english_config, reference_rows):
    order_rows.append(["O2", "X9", "1", "Ground", "TRK2", "DE"])
    with pytest.raises(ConversionError) as e:
        generate(order_rows, reference_rows, english_config)
    assert e.value.stage == STAGE_PREPARE_ROWS
    assert isinstance(e.value.__cause__, UnknownSKUError)
    assert e.value.row == 4
    assert e.value.error_type == "UNKNOWN_SKU"
    assert str(e.value) == "prepare rows: row 4: sku 'X9' not found in mapping"


def test_generate_invalid_quantity(english_config, reference_rows):
    rows = [
        ["Order", "SKU", "Qty", "Method", "Tracking", "Country"],
        ["O1", "X1", "abc", "", "", ""],
    ]
    with pytest.raises(ConversionError) as e:
        generate(rows, reference_rows, english_config)
    assert isinstance(e.value.__cause__, InvalidQuantityError)
    assert "row 2" in str(e.value) and "'abc'" in str(e.value)


def test_generate_empty_mapping_is_load_mapping_stage(order_rows, english_config):
    with pytest.raises(ConversionError) as e:
        generate(order_rows, [["SKU", "Code"]], english_config)
    assert e.value.stage == STAGE_LOAD_MAPPING
    assert isinstance(e.value.__cause__, EmptyMappingError)
    assert e.value.row == -1


def test_generate_missing_required_column(reference_rows):
    # default (Chinese) column names do not match the English header
    rows = [["Order", "SKU", "Qty"], ["O1", "X1", "1"]]
    with pytest.raises(ConversionError) as e:
        generate(rows, reference_rows)
    assert e.value.stage == STAGE_PREPARE_ROWS
    assert isinstance(e.value.__cause__, MissingRequiredColumnError)


def test_generate_mapping_checked_before_columns():
    with pytest.raises(ConversionError) as e:
        generate([], [])
    assert e.value.stage == STAGE_LOAD_MAPPING


def test_prepare_manifest_reports_skipped_rows(order_rows, english_config, reference_rows):
    order_rows.append(["O3", "", "", "", "", ""])
    manifest = prepare_manifest(order_rows, reference_rows, english_config)
    assert manifest.count == 2
    assert manifest.skipped_rows == [4]
    assert len(manifest.rows) == 3


def test_generate_header_only_input(english_config, reference_rows):
    rows, count = generate([["Order", "SKU", "Qty"]], reference_rows, english_config)
    assert count == 0
    assert rows == [MANIFEST_HEADERS]


def test_each_run_has_its_own_country_state(english_config, reference_rows):
    first = [["Order", "SKU", "Qty", "Country"], ["O1", "X1", "1", "US"]]
    second = [["Order", "SKU", "Qty", "Country"], ["O1", "X1", "1", ""]]
    generate(first, reference_rows, english_config)
    rows, _ = generate(second, reference_rows, english_config)
    assert rows[1][-1] == ""


def test_output_path_for():
    cfg = ConverterConfig()
    assert output_path_for(Path("/in/orders.xlsx"), cfg) == Path("/in/Warehouse_orders.xlsx")
    assert output_path_for(Path("/in/orders.xls"), cfg, Path("/out")) == Path("/out/Warehouse_orders.xlsx")
    cfg = ConverterConfig(output_prefix="OUT-")
    assert output_path_for(Path("a.xlsx"), cfg).name == "OUT-a.xlsx"
