import logging
from typing import Final, Iterable, Optional

from .config import Config
from .cookies import CredentialSource, default_sources
from .lib import AocHelperError

AOC_DOMAIN: Final = "adventofcode.com"
SESSION_COOKIE: Final = "session"

logger = logging.getLogger(__name__)


class AuthError(AocHelperError):
    __slots__ = ()


class NoSessionAvailable(AuthError):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(
            "no session cookie found, run `aochelper set session_key <KEY>`"
        )


def resolve(
    config: Config, sources: Optional[Iterable[CredentialSource]] = None
) -> str:
    """Return the session credential for the puzzle site.

    An explicitly stored key always wins; the browser cookie stores are only
    consulted when none is configured.
    """
    if config.session_key:
        logger.debug("Using session key from config")
        return config.session_key

    if sources is None:
        sources = default_sources()

    for source in sources:
        value = source.lookup(AOC_DOMAIN, SESSION_COOKIE)
        if value:
            logger.debug("Using session cookie from %r", source)
            return value

    raise NoSessionAvailable()
