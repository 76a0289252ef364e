from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import read_first_sheet_rows
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.errors import InvalidModeError, ReadError
from ..models.processing_result import FileReport, FileStatus
from ..services.batch import BatchError, collect_files, process_all
from ..services.classifier import classify
from ..services.progress import ProgressTracker
from ..services.session import MODE_MENU, SessionModeStore
from ..services.summary import render_summary_line

"""CLI entrypoint.

Plays the role of the chat transport: takes workbooks (files or
directories), applies an optional operator mode for the conversation, and
prints each report split into transport-sized chunks.

Flow:
- Load .env, then config/report.yml
- Store --mode for the conversation in a SessionModeStore
- Collect .xlsx/.xls inputs
- Build, chunk and print reports; log a SUMMARY line
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CHUNK_SEPARATOR = "-" * 40


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Summary reports for educational spreadsheet exports")
    p.add_argument("paths", nargs="*", type=Path, help="Workbooks or directories (default: source_directory)")
    p.add_argument("--mode", help="Force a report mode instead of detecting it from headers")
    p.add_argument("--conversation", default="cli", help="Conversation id the mode is stored under")
    p.add_argument("--max-length", type=int, help="Maximum characters per output chunk")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected shape & first rows then exit")
    p.add_argument("--list-modes", action="store_true", help="Print the mode-selection menu then exit")
    return p.parse_args(argv)


def _print_modes() -> int:
    print("Выберите режим обработки:")
    for row in MODE_MENU:
        print("  " + "   ".join(f"[{label}] {data}" for label, data in row))
    return EXIT_SUCCESS_ALL


def _inspect_data(files: list[Path]) -> int:
    if not files:
        print("inspect: no workbooks")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            rows = read_first_sheet_rows(f)
        except ReadError as e:
            print(f"  read_error: {e}")
            continue
        shape = classify(rows[0]) if rows else None
        print(f"  shape={shape.value if shape else 'unknown'} rows={len(rows)}")
        for r in rows[:3]:
            print(f"    {r}")
    return EXIT_SUCCESS_ALL


def _print_report(file_report: FileReport, progress: ProgressTracker) -> None:
    progress.write(f"=== {file_report.file_name} ===")
    for i, part in enumerate(file_report.chunks or []):
        if i:
            progress.write(CHUNK_SEPARATOR)
        progress.write(part)
    progress.write("")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only None reads sys.argv; [] is an explicit empty argument list
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.list_modes:
        return _print_modes()

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.max_length is not None and args.max_length < 1:
        logger.error(f"--max-length must be >= 1, got {args.max_length}")
        return EXIT_FATAL

    store = SessionModeStore()
    if args.mode:
        try:
            shape = store.set(args.conversation, args.mode)
        except InvalidModeError as e:
            logger.error(e.user_message)
            return EXIT_FATAL
        logger.info(f"Режим выбран: {shape.menu_label}")

    inputs = list(args.paths)
    if not inputs and cfg.source_directory:
        inputs = [Path(cfg.source_directory)]
    if not inputs:
        logger.error("no input: pass workbook paths or set source_directory")
        return EXIT_FATAL

    try:
        files, rejected = collect_files(inputs, cfg.allowed_extensions)
    except BatchError as e:
        logger.error(str(e))
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(files)

    logger.info(f"Processing {len(files)} workbook(s)")
    error_log = ErrorLogBuffer(Path(cfg.error_log_directory))
    result = process_all(
        files,
        cfg,
        store=store,
        conversation_id=args.conversation,
        rejected=rejected,
        max_length=args.max_length,
        error_log=error_log,
        emit=_print_report,
    )

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")

    if any(r.status is FileStatus.FAILED for r in result.file_reports or []):
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
