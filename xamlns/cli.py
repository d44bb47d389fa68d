import argparse
import logging
from pathlib import Path
from typing import List, Optional

from xamlns.config import ScanConfig
from xamlns.eventlog import EventLog
from xamlns.scanner import NamespaceScanner

logger = logging.getLogger(__name__)


def wait_for_enter() -> None:
    try:
        input()
    except EOFError:
        pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xamlns",
        description="Report XAML namespace prefixes that are used but never declared."
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Directory to scan recursively for .xaml files (default: ./Reference).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ScanConfig(root_directory=Path(args.root)) if args.root else ScanConfig()

    event_log = EventLog(config)
    event_log.start()
    try:
        NamespaceScanner(config).scan()
        logger.info("Completed")
    finally:
        event_log.stop()

    if config.pause_on_exit:
        wait_for_enter()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
