from __future__ import annotations

import base64
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.background import BackgroundTask
from starlette.concurrency import run_in_threadpool

from whx_manifest import __version__
from whx_manifest.excel.writer import read_preview
from whx_manifest.models.config_models import ConverterConfig
from whx_manifest.models.conversion_result import ConversionResult
from whx_manifest.services.errors import ManifestError
from whx_manifest.services.pipeline import generate_workbook

from .changelog import CHANGELOG

"""Web upload service.

Same conversion as the CLI, one upload at a time per request:
- POST /api/convert  -> converted workbook as a download
- POST /api/preview  -> JSON with the manifest rows and the workbook (base64)

Every request converts inside its own temporary directory, which is removed
once the response has been sent. The mapping table is read per request.
"""

__all__ = [
    "XLSX_MEDIA_TYPE",
    "create_app",
]

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).with_name("templates")
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _cleanup(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)


async def _convert_upload(file: UploadFile | None, config: ConverterConfig) -> tuple[Path, ConversionResult]:
    """Store the upload in a fresh temp dir and convert it.

    Returns (temp dir, result); the caller owns the temp dir afterwards.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="请选择要转换的文件")

    limit = config.server.max_upload_bytes
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(status_code=400, detail="无法读取上传文件，请重试")

    temp_dir = Path(tempfile.mkdtemp(prefix="whx-upload-"))
    input_path = temp_dir / Path(file.filename).name
    try:
        input_path.write_bytes(content)
        result = await run_in_threadpool(generate_workbook, input_path, config)
    except (ManifestError, ValueError) as e:
        _cleanup(temp_dir)
        logger.info("upload %s rejected: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=f"转换失败: {e}") from e
    except OSError as e:
        _cleanup(temp_dir)
        raise HTTPException(status_code=500, detail="无法保存上传文件") from e

    logger.info("upload %s converted rows=%d", file.filename, result.row_count)
    return temp_dir, result


def create_app(config: ConverterConfig | None = None) -> FastAPI:
    config = config or ConverterConfig()
    app = FastAPI(title="WHX manifest generator", version=__version__)
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"version": __version__, "changelog": CHANGELOG},
        )

    @app.post("/api/convert")
    async def convert(file: UploadFile | None = File(None)) -> FileResponse:
        temp_dir, result = await _convert_upload(file, config)
        return FileResponse(
            result.output_path,
            media_type=XLSX_MEDIA_TYPE,
            filename=result.output_path.name,
            background=BackgroundTask(_cleanup, temp_dir),
        )

    @app.post("/api/preview")
    async def preview(file: UploadFile | None = File(None)) -> dict[str, Any]:
        temp_dir, result = await _convert_upload(file, config)
        try:
            headers, rows = read_preview(result.output_path)
            file_bytes = result.output_path.read_bytes()
        except (ManifestError, OSError) as e:
            raise HTTPException(status_code=500, detail=f"无法生成预览: {e}") from e
        finally:
            _cleanup(temp_dir)
        return {
            "filename": result.output_path.name,
            "file": base64.b64encode(file_bytes).decode("ascii"),
            "preview": {"headers": headers, "rows": rows},
        }

    return app
