from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from whx_manifest.excel.reader import read_reference_rows, read_sheet_rows
from whx_manifest.excel.writer import write_manifest
from whx_manifest.models.config_models import ConverterConfig
from whx_manifest.models.conversion_result import ConversionResult

from .column_resolver import resolve_columns
from .errors import ConversionError
from .mapping_table import MappingTable
from .output_builder import build_output_rows
from .progress import RowProgressTracker
from .row_transformer import RowProgress, transform_rows

"""Conversion pipeline.

Strictly sequential: load mapping -> resolve columns -> transform rows ->
build manifest rows -> write workbook. The writer only runs after every data
row has validated, so a failed conversion never leaves a manifest behind.
Any failure is re-raised as ConversionError labelled with its stage; the
original exception stays available as ``__cause__``.
"""

__all__ = [
    "STAGE_LOAD_MAPPING",
    "STAGE_PREPARE_ROWS",
    "STAGE_WRITE_WORKBOOK",
    "ManifestRows",
    "generate",
    "generate_workbook",
    "output_path_for",
    "prepare_manifest",
]

logger = logging.getLogger(__name__)

STAGE_LOAD_MAPPING = "load mapping"
STAGE_PREPARE_ROWS = "prepare rows"
STAGE_WRITE_WORKBOOK = "write workbook"

T = TypeVar("T")


@dataclass(frozen=True)
class ManifestRows:
    rows: list[list[Any]]  # header row first
    count: int  # data rows (header excluded)
    skipped_rows: list[int]


def _run_stage(stage: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    try:
        return fn(*args, **kwargs)
    except ConversionError:
        raise
    except Exception as e:
        raise ConversionError(stage, e) from e


def _prepare_rows(
    input_rows: Sequence[Sequence[str]],
    mapping: MappingTable,
    config: ConverterConfig,
    progress: RowProgress | None,
) -> ManifestRows:
    columns = resolve_columns(input_rows, config.columns)
    logger.debug("resolved columns: %s", columns)
    result = transform_rows(input_rows, columns, mapping, progress=progress)
    rows = build_output_rows(result.records, config.constants)
    return ManifestRows(rows=rows, count=len(result.records), skipped_rows=result.skipped_rows)


def prepare_manifest(
    input_rows: Sequence[Sequence[str]],
    reference_rows: Sequence[Sequence[str]],
    config: ConverterConfig | None = None,
    progress: RowProgress | None = None,
) -> ManifestRows:
    """Run the in-memory part of the pipeline (no file access)."""
    config = config or ConverterConfig()
    mapping = _run_stage(STAGE_LOAD_MAPPING, MappingTable.build, reference_rows)
    return _run_stage(STAGE_PREPARE_ROWS, _prepare_rows, input_rows, mapping, config, progress)


def generate(
    input_rows: Sequence[Sequence[str]],
    reference_rows: Sequence[Sequence[str]],
    config: ConverterConfig | None = None,
) -> tuple[list[list[Any]], int]:
    """Convert order-export rows into manifest rows.

    Returns:
        (output rows with the header first, number of data rows)

    Raises:
        ConversionError: stage-labelled wrapper of the first failure
    """
    manifest = prepare_manifest(input_rows, reference_rows, config)
    return manifest.rows, manifest.count


def output_path_for(input_path: Path, config: ConverterConfig, output_dir: Path | None = None) -> Path:
    """``<output_prefix><input stem>.xlsx`` next to the input (or in output_dir)."""
    directory = output_dir if output_dir is not None else input_path.parent
    return directory / f"{config.output_prefix}{input_path.stem}.xlsx"


def generate_workbook(
    input_path: Path | str,
    config: ConverterConfig | None = None,
    *,
    mapping_path: Path | str | None = None,
    output_dir: Path | None = None,
    show_progress: bool = False,
) -> ConversionResult:
    """Convert the workbook at ``input_path`` and write the manifest workbook.

    The mapping table is read fresh for every call; nothing is shared between
    conversions.

    Raises:
        ValueError: empty input path
        ConversionError: any stage failure (nothing has been written)
    """
    if not str(input_path):
        raise ValueError("input path is required")
    config = config or ConverterConfig()
    input_path = Path(input_path)
    start = time.perf_counter()

    ref = mapping_path or config.mapping_path
    reference_rows = _run_stage(STAGE_LOAD_MAPPING, read_reference_rows, Path(ref) if ref else None)
    mapping = _run_stage(STAGE_LOAD_MAPPING, MappingTable.build, reference_rows)
    logger.debug("mapping loaded from %s entries=%d", ref, len(mapping))

    input_rows = _run_stage(STAGE_PREPARE_ROWS, read_sheet_rows, input_path)
    with RowProgressTracker(max(len(input_rows) - 1, 0), enabled=None if show_progress else False) as progress:
        manifest = _run_stage(STAGE_PREPARE_ROWS, _prepare_rows, input_rows, mapping, config, progress)

    if manifest.skipped_rows:
        logger.warning(
            "%s: %d row(s) without SKU or quantity were left out",
            input_path.name,
            len(manifest.skipped_rows),
        )

    out_path = output_path_for(input_path, config, output_dir)
    _run_stage(STAGE_WRITE_WORKBOOK, write_manifest, manifest.rows, out_path)

    return ConversionResult(
        input_path=input_path,
        output_path=out_path.resolve(),
        row_count=manifest.count,
        skipped_rows=len(manifest.skipped_rows),
        elapsed_seconds=time.perf_counter() - start,
    )
