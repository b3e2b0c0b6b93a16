import logging
import os
import sqlite3
from glob import glob
from pathlib import Path
from typing import Final, Optional, Protocol, Self

logger = logging.getLogger(__name__)

SNAP_FIREFOX_GLOB: Final = (
    "/home/*/snap/firefox/common/.mozilla/firefox/*.default/cookies.sqlite"
)
FIREFOX_GLOB: Final = "~/.mozilla/firefox/*.default*/cookies.sqlite"


class CredentialSource(Protocol):
    def lookup(self, domain: str, name: str) -> Optional[str]: ...


def find_firefox_cookies(pattern: str) -> list[str]:
    return sorted(glob(os.path.expanduser(pattern)))


class CookieDatabase:
    """Read-only view of a Firefox ``cookies.sqlite`` file."""

    __slots__ = ("_db",)

    def __init__(self, file: str) -> None:
        # immutable: Firefox holds a lock on the file while it is running
        uri = f"{Path(file).resolve().as_uri()}?mode=ro&immutable=1"
        self._db = sqlite3.connect(uri, uri=True)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_) -> None:
        self._db.close()

    def get_cookie(self, domain: str, name: str) -> Optional[str]:
        row = self._db.execute(
            """SELECT value FROM moz_cookies
            WHERE host IN (?, ?) AND name = ?
            ORDER BY lastAccessed DESC
            LIMIT 1""",
            (domain, f".{domain}", name),
        ).fetchone()

        if row:
            return str(row[0])
        else:
            return None


class FirefoxCookieSource:
    """Looks up a cookie in the Firefox profiles matching a glob pattern.

    With ``first_only`` set, only the first matching profile is read;
    otherwise each profile is tried in name order until one has the cookie.
    """

    __slots__ = "pattern", "first_only"

    def __init__(
        self, pattern: str = SNAP_FIREFOX_GLOB, first_only: bool = False
    ) -> None:
        self.pattern = pattern
        self.first_only = first_only

    def __repr__(self) -> str:
        return f"FirefoxCookieSource({self.pattern!r})"

    def lookup(self, domain: str, name: str) -> Optional[str]:
        paths = find_firefox_cookies(self.pattern)
        if not paths:
            logger.debug("No firefox cookie database matches %s", self.pattern)
            return None
        if self.first_only:
            paths = paths[:1]

        for path in paths:
            value = self._read(path, domain, name)
            if value:
                return value

        return None

    def _read(self, path: str, domain: str, name: str) -> Optional[str]:
        logger.debug("Reading cookies from %s", path)
        try:
            with CookieDatabase(path) as db:
                return db.get_cookie(domain, name)
        except sqlite3.Error as err:
            logger.warning("Failed to read firefox cookies from %s: %s", path, err)
            return None


def default_sources() -> list[CredentialSource]:
    return [
        FirefoxCookieSource(SNAP_FIREFOX_GLOB, first_only=True),
        FirefoxCookieSource(FIREFOX_GLOB),
    ]
