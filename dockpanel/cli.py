"""Command-line front door for dockpanel.

Parses CLI options, merges them with the persisted config and logging
settings, then dispatches into the interactive dashboard.
"""

from __future__ import annotations

import argparse
import logging

from . import config, logging_setup
from .app import run_dashboard
from .ui_theme import available_theme_names, normalize_theme_name

logger = logging.getLogger(__name__)


def _positive_float(value: str) -> float:
    """argparse type for positive number values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _nonnegative_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dockpanel",
        description="Browse and manage docker images, containers and volumes in the terminal.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); saved for next time.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--docker", metavar="PATH", default=None, help="docker binary to run.")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for the log file (DEBUG, INFO, WARNING, ...).",
    )
    parser.add_argument("--log-file", default=None, help="Write the log here instead of the user log dir.")
    parser.add_argument(
        "--status-timeout",
        type=_positive_float,
        default=None,
        help="Seconds before a running docker command is reported as timed out.",
    )
    parser.add_argument(
        "--refresh-interval",
        type=_nonnegative_float,
        default=None,
        help="Seconds between automatic list refreshes (0 disables).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the dashboard."""
    args = build_parser().parse_args(argv)
    logging_setup.configure(args.log_level, args.log_file)

    if args.theme is not None:
        theme_name = normalize_theme_name(args.theme)
        config.save_theme_name(theme_name)
    else:
        theme_name = config.load_theme_name()

    try:
        run_dashboard(
            theme_name=theme_name,
            no_color=args.no_color,
            docker_binary=args.docker or config.load_docker_binary(),
            status_timeout=args.status_timeout or config.load_status_timeout(),
            refresh_interval=(
                args.refresh_interval if args.refresh_interval is not None else config.load_refresh_interval()
            ),
        )
    except KeyboardInterrupt:
        logger.info("interrupted")


if __name__ == "__main__":
    main()
