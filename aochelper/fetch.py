import logging
import os
from typing import Final

import requests

from .lib import AocHelperError
from .session import AuthError

base_input_dir: Final = "inputs"

logger = logging.getLogger(__name__)


class FetchError(AocHelperError):
    __slots__ = ()


class Unauthorized(FetchError, AuthError):
    __slots__ = ()


class NotFound(FetchError):
    __slots__ = ()


class NetworkError(FetchError):
    __slots__ = ()


class OutputError(AocHelperError):
    __slots__ = ()


def input_url(year: int, day: int) -> str:
    return f"https://adventofcode.com/{year}/day/{day}/input"


def get_year_input_dir(year: int, root: str = base_input_dir) -> str:
    return f"{root}/{year}"


def get_input_path(year: int, day: int, root: str = base_input_dir) -> str:
    return f"{get_year_input_dir(year, root)}/{day}"


def fetch_input(year: int, day: int, session: str) -> bytes:
    logger.info("Fetching input for %s:%s", year, day)

    try:
        r = requests.get(input_url(year, day), cookies=dict(session=session))
    except requests.RequestException as err:
        raise NetworkError(f"request for {year}:{day} failed: {err}") from err

    # the site answers a missing or expired session with 400 rather than 401
    if r.status_code in (400, 401, 403):
        raise Unauthorized(
            f"session rejected (HTTP {r.status_code}), "
            "run `aochelper set session_key <KEY>` with a fresh cookie"
        )
    if r.status_code == 404:
        raise NotFound(f"no input published for {year} day {day} yet")
    if not r.ok:
        raise FetchError(f"unexpected response for {year}:{day} (HTTP {r.status_code})")

    return r.content


def write_input(year: int, day: int, body: bytes, root: str = base_input_dir) -> str:
    path = get_input_path(year, day, root)
    try:
        os.makedirs(get_year_input_dir(year, root), exist_ok=True)
        with open(path, "wb+") as f:
            f.write(body)
    except OSError as err:
        raise OutputError(f"failed to write {path}: {err}") from err

    logger.info("Wrote %s (%s bytes)", path, len(body))
    return path
