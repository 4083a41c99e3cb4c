"""Command line entry point: arguments, version text and error reporting."""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from types import TracebackType

from confdeck.app import App
from confdeck.config import get_config_dir, get_data_dir
from confdeck.logsetup import init_logging

logger = logging.getLogger(__name__)

_DISTRIBUTION = "confdeck"


def _package_version() -> str:
    try:
        return distribution_version(_DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0+unknown"


def version() -> str:
    """The version text, with the configuration and data directories."""
    return (
        f"{_package_version()}\n"
        "\n"
        f"Config directory: {get_config_dir()}\n"
        f"Data directory: {get_data_dir()}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="confdeck",
        description="A terminal schedule of recurring online conferences.",
    )
    parser.add_argument(
        "-t",
        "--tick-rate",
        type=float,
        default=4.0,
        metavar="FLOAT",
        help="Tick rate, i.e. number of ticks per second",
    )
    parser.add_argument(
        "-f",
        "--frame-rate",
        type=float,
        default=60.0,
        metavar="FLOAT",
        help="Frame rate, i.e. number of frames per second",
    )
    parser.add_argument("-V", "--version", action="version", version=version())
    return parser


def install_error_hooks() -> None:
    """Report uncaught exceptions to the log and to standard error."""
    previous = sys.excepthook

    def hook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            previous(exc_type, exc, tb)
            return
        report = "".join(traceback.format_exception(exc_type, exc, tb))
        logger.error("Error: %s", report)
        sys.stderr.write(f"{report}\nThis is a bug. Consider reporting it.\n")

    sys.excepthook = hook


def main(argv: list[str] | None = None) -> int:
    install_error_hooks()
    init_logging()
    args = build_parser().parse_args(argv)
    App(args.tick_rate, args.frame_rate).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())