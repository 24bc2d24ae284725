from __future__ import annotations

import itertools

import pytest

from whx_manifest.models.config_models import ColumnNames
from whx_manifest.models.records import ColumnIndexes
from whx_manifest.services.column_resolver import find_column, resolve_columns
from whx_manifest.services.errors import MissingRequiredColumnError


def test_resolve_default_chinese_header():
    header = ["平台单号", "SKU", "数量", "物流方式", "运单号", "国家/地区"]
    cols = resolve_columns([header])
    assert cols == ColumnIndexes(order=0, sku=1, qty=2, method=3, tracking=4, country=5)


def test_resolve_is_independent_of_order():
    header = ["国家/地区", " 数量 ", "备注", "SKU", "平台单号"]
    cols = resolve_columns([header, ["US", "1", "", "X1", "O1"]])
    assert (cols.order, cols.sku, cols.qty) == (4, 3, 1)
    assert cols.country == 0
    assert cols.method is None
    assert cols.tracking is None


@pytest.mark.parametrize("perm", list(itertools.permutations(["Order", "SKU", "Qty"])))
def test_required_columns_any_position(perm):
    names = ColumnNames(order="Order", sku="SKU", qty="Qty")
    header = ["x", *perm]
    cols = resolve_columns([header], names)
    assert header[cols.order] == "Order"
    assert header[cols.sku] == "SKU"
    assert header[cols.qty] == "Qty"


@pytest.mark.parametrize("missing", ["平台单号", "SKU", "数量"])
def test_missing_required_column(missing):
    header = [c for c in ["平台单号", "SKU", "数量", "运单号"] if c != missing]
    with pytest.raises(MissingRequiredColumnError) as e:
        resolve_columns([header])
    assert e.value.missing == [missing]


def test_no_rows():
    with pytest.raises(MissingRequiredColumnError, match="no rows"):
        resolve_columns([])


def test_match_is_exact_and_case_sensitive():
    assert find_column(["sku", "SKU "], "SKU") == 1
    assert find_column(["sku", "Sku"], "SKU") is None
    assert find_column(["SKU编码"], "SKU") is None


def test_first_matching_column_wins():
    assert find_column(["SKU", "x", "SKU"], "SKU") == 0
