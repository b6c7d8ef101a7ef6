"""Command-line front door for thunars.

Parses CLI options, sets up logging, loads and validates settings, then
hands the starting directory to the interactive runtime. Startup errors
exit non-zero with a one-line diagnostic.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .config import load_settings, resolve_config_path
from .errors import AccessError, ConfigError
from .logging_config import VALID_LEVELS, setup_logging
from .runtime import run_browser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thunars",
        description="Browse directories in the terminal with search, jump, and hint modes.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Starting directory. Defaults to current directory.")
    parser.add_argument("--config", metavar="PATH", default=None, help="Config file (default: per-user config dir).")
    parser.add_argument("-a", "--all", action="store_true", help="Show hidden entries.")
    parser.add_argument("--no-preview", action="store_true", help="Disable the preview pane.")
    parser.add_argument("--style", default=None, help="Pygments style name for previews.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write log records to PATH.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=VALID_LEVELS,
        help="Log level for --log-file (default: WARNING).",
    )
    return parser


def _require_tty() -> None:
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise SystemExit("thunars: stdin and stdout must be a terminal.")


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run the browser.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, Path(args.log_file).expanduser() if args.log_file else None)

    config_path = resolve_config_path(args.config)
    try:
        settings = load_settings(config_path)
    except ConfigError as exc:
        raise SystemExit(f"thunars: {exc}") from exc

    overrides: dict[str, object] = {}
    if args.all:
        overrides["show_hidden"] = True
    if args.no_preview:
        overrides["preview"] = False
    if args.style:
        overrides["style"] = args.style
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    if not path.exists():
        raise SystemExit(f"thunars: path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"thunars: not a directory: {path}")

    _require_tty()
    try:
        run_browser(path, settings, config_path)
    except AccessError as exc:
        logger.error("cannot start in %s: %s", path, exc)
        raise SystemExit(f"thunars: {exc}") from exc


if __name__ == "__main__":
    main()
