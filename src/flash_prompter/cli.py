"""Command-line interface for Flash Prompter."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
import threading
from types import TracebackType
from typing import Iterable, Optional, Tuple

from flash_prompter.logging_setup import init_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="flash-prompter", description="Flash Prompter teleprompter"
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="",
        help="Text file to load as the script",
    )
    parser.add_argument(
        "--wpm",
        type=int,
        default=None,
        help="Scroll speed in words per minute (20-240)",
    )
    return parser


def read_script(path: str) -> Optional[str]:
    """Return the script text, or None when no path was given."""
    if not path:
        return None
    return Path(path).read_text(encoding="utf-8")


def _run_tui(content: Optional[str], wpm: Optional[int]) -> int:
    try:
        from flash_prompter.tui import run_tui
    except (ImportError, RuntimeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return run_tui(content, wpm=wpm)


def _install_exception_hooks() -> None:
    def excepthook(exc_type, exc, tb) -> None:
        logger.exception("Uncaught exception", exc_info=(exc_type, exc, tb))

    sys.excepthook = excepthook

    def thread_hook(args: threading.ExceptHookArgs) -> None:
        exc_value = args.exc_value or RuntimeError("unknown")
        exc_info: Tuple[type[BaseException], BaseException, Optional[TracebackType]] = (
            args.exc_type,
            exc_value,
            args.exc_traceback,
        )
        thread_name = args.thread.name if args.thread else "thread"
        logger.exception("Thread exception in %s", thread_name, exc_info=exc_info)

    threading.excepthook = thread_hook


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the CLI."""
    init_logging()
    logger.info("App start")
    _install_exception_hooks()

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        content = read_script(args.path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read script %s: %s", args.path, exc)
        print(f"Cannot read {args.path}: {exc}", file=sys.stderr)
        return 1

    exit_code = _run_tui(content, args.wpm)
    logger.info("App exit code=%s", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
