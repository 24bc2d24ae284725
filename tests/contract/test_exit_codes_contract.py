from __future__ import annotations

from pathlib import Path

import pytest

from whx_manifest.cli import main as cli_main
from whx_manifest.cli.__main__ import EXIT_FAILURE, EXIT_SUCCESS

"""Exit code contract: 0 on success, 1 on any failure."""


def test_codes():
    assert (EXIT_SUCCESS, EXIT_FAILURE) == (0, 1)


def test_success(write_config, order_workbook: Path, mapping_workbook: Path):
    assert cli_main([str(order_workbook), "--mapping", str(mapping_workbook)]) == 0


@pytest.mark.parametrize(
    "rows",
    [
        [["Order", "SKU", "Qty"], ["O1", "UNKNOWN", 1]],
        [["Order", "SKU", "Qty"], ["O1", "X1", "-1"]],
        [["Order", "SKU", "Qty"], ["O1", "X1", "1.5"]],
        [["Order", "SKU"], ["O1", "X1"]],
    ],
)
def test_conversion_failures(write_config, temp_workdir: Path, mapping_workbook: Path, make_workbook, rows):
    path = make_workbook(temp_workdir / "data" / "in.xlsx", rows)
    assert cli_main([str(path), "--mapping", str(mapping_workbook)]) == 1
    assert not (temp_workdir / "data" / "Warehouse_in.xlsx").exists()


def test_missing_input_file(write_config, temp_workdir: Path, mapping_workbook: Path):
    assert cli_main([str(temp_workdir / "missing.xlsx"), "--mapping", str(mapping_workbook)]) == 1


def test_invalid_config(temp_workdir: Path):
    (temp_workdir / "config" / "manifest.yml").write_text("server:\n  port: 0\n", encoding="utf-8")
    assert cli_main(["orders.xlsx"]) == 1
