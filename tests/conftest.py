# Shared pytest fixtures
from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from whx_manifest.logging.init import reset_logging
from whx_manifest.models.config_models import ColumnNames, ConverterConfig

ENGLISH_COLUMNS = ColumnNames(
    order="Order",
    sku="SKU",
    qty="Qty",
    method="Method",
    tracking="Tracking",
    country="Country",
)

ENGLISH_CONFIG_YAML = """columns:
  order: Order
  sku: SKU
  qty: Qty
  method: Method
  tracking: Tracking
  country: Country
"""


def make_excel(path: Path, rows: list[list[object]], sheet: str = "Sheet1") -> Path:
    """Write ``rows`` as-is (no header handling) to the first sheet of ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("WHX_SKU_MAP", raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def reference_rows() -> list[list[str]]:
    return [["SKU", "Code"], ["X1", "C100"], ["X2", "C200"]]


@pytest.fixture()
def order_rows() -> list[list[str]]:
    return [
        ["Order", "SKU", "Qty", "Method", "Tracking", "Country"],
        ["O1", "X1", "3", "Air-Express", "TRK1", "US"],
        ["O1", "X1", "2", "Air-Express", "", ""],
    ]


@pytest.fixture()
def english_config() -> ConverterConfig:
    return ConverterConfig(columns=ENGLISH_COLUMNS)


@pytest.fixture()
def mapping_workbook(temp_workdir: Path, reference_rows) -> Path:
    return make_excel(temp_workdir / "data" / "map.xlsx", reference_rows)


@pytest.fixture()
def order_workbook(temp_workdir: Path, order_rows) -> Path:
    return make_excel(temp_workdir / "data" / "orders.xlsx", order_rows)


@pytest.fixture()
def write_config(temp_workdir: Path) -> Path:
    cfg = temp_workdir / "config" / "manifest.yml"
    cfg.write_text(ENGLISH_CONFIG_YAML, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_workbook():
    return make_excel
