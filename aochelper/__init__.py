import argparse
import logging
import sys
from typing import Optional, Sequence

from . import fetch, session
from .config import ConfigStore, NotConfigured
from .lib import AocHelperError, today, valid_day, valid_year

logger = logging.getLogger(__name__)


def day_arg(value: str) -> int:
    try:
        day = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid day: {value!r}")
    if not valid_day(day):
        raise argparse.ArgumentTypeError("day not within valid range (1..=25)")
    return day


def year_arg(value: str) -> int:
    try:
        year = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid year: {value!r}")
    if not valid_year(year):
        raise argparse.ArgumentTypeError("year must be 2015 or later")
    return year


def set_year_cmd(store: ConfigStore, args: argparse.Namespace) -> None:
    store.write_year(args.value)
    logger.info("Year set to %s", args.value)


def set_session_key_cmd(store: ConfigStore, args: argparse.Namespace) -> None:
    store.write_session_key(args.value)
    logger.info("Session key saved to %s", store.path)


def get_cmd(store: ConfigStore, args: argparse.Namespace) -> None:
    config = store.read()
    if config.year is None:
        raise NotConfigured()

    credential = session.resolve(config)
    body = fetch.fetch_input(config.year, args.day, credential)
    fetch.write_input(config.year, args.day, body)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "aochelper", description="download Advent of Code puzzle inputs"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    set_parser = commands.add_parser("set", help="store workspace configuration")
    settings = set_parser.add_subparsers(dest="setting", required=True)

    year_parser = settings.add_parser("year", help="puzzle year for this workspace")
    year_parser.add_argument("value", type=year_arg, metavar="YEAR")
    year_parser.set_defaults(handler=set_year_cmd)

    key_parser = settings.add_parser(
        "session_key", help="session cookie to use instead of the browser's"
    )
    key_parser.add_argument("value", metavar="KEY")
    key_parser.set_defaults(handler=set_session_key_cmd)

    get_parser = commands.add_parser("get", help="download the input for a day")
    get_parser.add_argument(
        "day",
        type=day_arg,
        nargs="?",
        default=None,
        metavar="DAY",
        help="puzzle day (1-25), defaults to the current day",
    )
    get_parser.set_defaults(handler=get_cmd)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        encoding="utf-8",
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.command == "get" and args.day is None:
        args.day = today()

    try:
        args.handler(ConfigStore(), args)
    except AocHelperError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    return 0
