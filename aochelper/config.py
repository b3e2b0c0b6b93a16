"""Workspace-local configuration, stored as JSON in the current directory."""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Final, Optional

from .lib import AocHelperError, valid_year

CONFIG_FILE: Final = ".aochelper.json"

logger = logging.getLogger(__name__)


class NotConfigured(AocHelperError):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("no year configured, run `aochelper set year <YEAR>` first")


class ConfigError(AocHelperError):
    __slots__ = ()


@dataclass
class Config:
    year: Optional[int] = None
    session_key: Optional[str] = None


class ConfigStore:
    __slots__ = ("path",)

    def __init__(self, path: str = CONFIG_FILE) -> None:
        self.path = path

    def load(self) -> Config:
        """Return the stored config, which may not have a year yet."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            return Config()
        except (OSError, json.JSONDecodeError) as err:
            raise ConfigError(f"failed to read {self.path}: {err}") from err

        if not isinstance(raw, dict):
            raise ConfigError(f"failed to read {self.path}: expected a JSON object")

        year = raw.get("year")
        session_key = raw.get("session_key")
        if year is not None and (
            isinstance(year, bool) or not isinstance(year, int) or not valid_year(year)
        ):
            raise ConfigError(
                f"failed to read {self.path}: year must be an integer from 2015 on"
            )
        if session_key is not None and not isinstance(session_key, str):
            raise ConfigError(f"failed to read {self.path}: session_key must be a string")

        return Config(year=year, session_key=session_key or None)

    def read(self) -> Config:
        config = self.load()
        if config.year is None:
            raise NotConfigured()
        return config

    def write_year(self, year: int) -> Config:
        config = self.load()
        config.year = year
        self._save(config)
        return config

    def write_session_key(self, key: str) -> Config:
        config = self.load()
        config.session_key = key
        self._save(config)
        return config

    def _save(self, config: Config) -> None:
        logger.debug("Saving config to %s", self.path)
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(asdict(config), f, indent=2)
                f.write("\n")
        except OSError as err:
            raise ConfigError(f"failed to write {self.path}: {err}") from err
