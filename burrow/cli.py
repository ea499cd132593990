from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from platformdirs import user_log_path

from burrow import __version__
from burrow.core.config import get_runtime_config
from burrow.core.logging import configure_logging

APP_NAME = "burrow"
APP_AUTHOR = "burrow"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burrow",
        description="Burrow: a keyboard-driven file browser for the terminal.",
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Directory to open. Defaults to the home directory.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Print version and exit.",
    )

    parser.add_argument(
        "--log",
        action="store_true",
        help="Write logs to the user log directory.",
    )

    parser.add_argument(
        "--log-level",
        help="Override the log level (debug, info, warning, error).",
    )

    parser.add_argument(
        "--log-format",
        choices=("json", "text"),
        help="Override the log line format.",
    )

    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Print the resolved configuration as JSON without launching the UI.",
    )

    return parser


def resolve_log_dir(args: argparse.Namespace) -> Path | None:
    config = get_runtime_config()
    if config.log_dir is not None:
        return config.log_dir
    if args.log:
        return Path(user_log_path(APP_NAME, APP_AUTHOR))
    return None


def handle_print_config(args: argparse.Namespace) -> None:
    log_dir = resolve_log_dir(args)
    payload = {
        "version": __version__,
        "runtime": get_runtime_config().model_dump(mode="json"),
        "log_dir": str(log_dir) if log_dir else None,
        "start_path": args.path,
    }
    print(json.dumps(payload, indent=2))


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_ui:
        handle_print_config(args)
        return 0

    config = get_runtime_config()
    configure_logging(
        level=args.log_level or config.log_level,
        format_name=args.log_format or config.log_format,
        log_dir=resolve_log_dir(args),
    )

    from burrow.core.app import Burrow

    start_path = Path(args.path) if args.path else None
    Burrow(start_path).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
