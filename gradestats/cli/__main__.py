from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config
from ..errors import GradeFileError
from ..logging.init import log_summary, setup_logging
from ..models.config_models import ParseConfig
from ..services.orchestrator import ProcessingError, process_all, scan_export_files
from ..services.pipeline import decode_bytes, load_table
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (GRADESTATS_CONFIG may point at the config file)
- Load and validate the YAML config
- Parse every export in source_directory, writing JSON when configured
- Print one SUMMARY line and exit with the batch exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

DEFAULT_CONFIG_PATH = Path("config/gradestats.yml")
CONFIG_ENV_VAR = "GRADESTATS_CONFIG"
INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="gradestats", description="Grade statistics export parser")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected delimiter, headers & first rows then exit")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def _inspect_data(cfg: ParseConfig) -> int:
    directory = Path(cfg.source_directory)
    try:
        files = scan_export_files(directory, cfg.file_pattern)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print(f"inspect: no files matching {cfg.file_pattern}")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            table = load_table(decode_bytes(f.read_bytes(), cfg.encoding))
        except (OSError, GradeFileError) as e:
            print(f"  error={e}")
            continue
        print(f"  delimiter={table.delimiter!r} cols={[str(c) for c in table.columns]}")
        if table.quoting_disabled:
            print("  quoting=off (unbalanced quotes)")
        if table.unrecognized_columns:
            print(f"  unrecognized={table.unrecognized_columns}")
        print("  sample_rows=", table.rows[:INSPECT_SAMPLE_ROWS])
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only fall back to sys.argv when argv is None (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " prefix back
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
