from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from whx_manifest import __version__
from whx_manifest.config.loader import ConfigError, load_config
from whx_manifest.logging.error_log import ErrorLogBuffer
from whx_manifest.logging.init import log_summary, setup_logging
from whx_manifest.models.config_models import ConverterConfig
from whx_manifest.models.error_record import ErrorRecord
from whx_manifest.services.errors import ConversionError
from whx_manifest.services.summary import render_summary_line

"""CLI entrypoint.

    whx-manifest [--config PATH] [--mapping PATH] [--debug] INPUT.xlsx
    whx-manifest --serve [--host H] [--port P]
    whx-manifest --version

Flow for a conversion:
- Load .env (python-dotenv, overrides the environment) then the YAML config
- Convert INPUT into <output_prefix><name>.xlsx next to it
- Print "Created <path> with <n> rows" and a SUMMARY line
- On failure: ERROR line, JSON Lines error record under logs/, exit 1
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

USAGE = "whx-manifest [--version] [--serve] [--host HOST] [--port PORT] [--config PATH] [--mapping PATH] <path/to/input.xlsx>"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so that WHX_SKU_MAP and friends take precedence."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="whx-manifest",
        usage=USAGE,
        description="Convert an order export workbook into a warehouse outbound manifest",
    )
    p.add_argument("input", nargs="?", help="order export workbook (.xlsx)")
    p.add_argument("--version", action="store_true", help="print version and exit")
    p.add_argument("--serve", action="store_true", help="start web server for uploads")
    p.add_argument("--host", default=None, help="listen host in serve mode")
    p.add_argument("--port", type=int, default=None, help="listen port in serve mode")
    p.add_argument("--config", default=None, help="YAML config file (default: config/manifest.yml if present)")
    p.add_argument("--mapping", default=None, help="SKU mapping workbook (overrides config and WHX_SKU_MAP)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _usage_error() -> int:
    print(f"usage: {USAGE}", file=sys.stderr)
    return EXIT_FAILURE


def _serve(cfg: ConverterConfig, host: str | None, port: int | None) -> int:  # pragma: no cover (blocking)
    import uvicorn

    from whx_manifest.server import create_app

    logger = setup_logging()
    host = host or cfg.server.host
    port = port or cfg.server.port
    logger.info(f"Serving WHX {__version__} on {host}:{port}")
    uvicorn.run(create_app(cfg), host=host, port=port)
    return EXIT_SUCCESS


def _record_failure(input_path: Path, error: ConversionError) -> Path | None:
    buffer = ErrorLogBuffer()
    buffer.append(
        ErrorRecord.create(
            file=input_path.name,
            stage=error.stage,
            row=error.row,
            error_type=error.error_type,
            message=str(error.cause),
        )
    )
    return buffer.flush()


def main(argv: list[str] | None = None) -> int:
    # sys.argv only when argv is None; tests pass [] explicitly
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.version:
        print(__version__)
        return EXIT_SUCCESS

    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FAILURE

    if args.serve:
        if args.input:
            return _usage_error()
        return _serve(cfg, args.host, args.port)

    if not args.input:
        return _usage_error()

    # pandas import deferred until a conversion actually runs
    from whx_manifest.services.pipeline import generate_workbook

    input_path = Path(args.input)
    logger.info(f"Converting {input_path}")
    try:
        result = generate_workbook(input_path, cfg, mapping_path=args.mapping, show_progress=True)
    except ConversionError as e:
        logger.error(str(e))
        log_path = _record_failure(input_path, e)
        if log_path is not None:
            logger.info(f"error log: {log_path}")
        return EXIT_FAILURE

    print(f"Created {result.output_path} with {result.row_count} rows")
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
