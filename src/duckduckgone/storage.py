#!/usr/bin/env python
import os
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple

from .base import Configuration, DuckError, ErrorKind
from .logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = ".ddg.conf"
FILE_MODE = 0o600

API_KEY = "api"
CLIPBOARD = "clipboard"
DDG_GEN = "ddggen"
SETUP_COMPLETE = "setupcomplete"

TRUE_WORDS = ("yes", "true")
FALSE_WORDS = ("no", "false")


def _parse_bool(value: str) -> Optional[bool]:
    value = value.lower()
    if value in TRUE_WORDS:
        return True
    if value in FALSE_WORDS:
        return False
    return None


def _yes_no(value: Optional[bool]) -> str:
    if value is None:
        return ""
    return "yes" if value else "no"


def _trim_quotes(value: str) -> str:
    return value.strip().strip("\"'")


def check_storable(name: str, value: str) -> None:
    """Refuse values the file format would hand back altered"""
    if any(ch in value for ch in "#=\r\n"):
        problem = "must not contain '#', '=' or line breaks"
    elif value != _trim_quotes(value):
        problem = "must not start or end with spaces or quotes"
    else:
        return
    raise DuckError(ErrorKind.CONFIG_WRITE_FAILED, f"{name} {problem}")


def default_config_path() -> Path:
    """Config path, honouring DDG_CONFIG_FILE"""
    override = os.getenv("DDG_CONFIG_FILE")
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILE_NAME


class ConfigStore:
    """Reads and writes the flat ``key = value`` config file"""

    def __init__(self, config_file: Optional[Path] = None):
        self._config_file = config_file

    @property
    def config_file(self) -> Path:
        """Resolved lazily so a missing home directory only fails on use"""
        if self._config_file is None:
            self._config_file = default_config_path()
        return self._config_file

    @staticmethod
    def parse(text: str) -> Configuration:
        """
        Parse config file contents.

        Never raises: lines that are blank, lack exactly one ``=``, or carry
        an unknown key are skipped. Keys are case-insensitive, values keep
        their case.
        """
        config = Configuration()
        for line in text.splitlines():
            line = line.split("#", 1)[0].strip()
            if not line or line.count("=") != 1:
                continue

            key, value = line.split("=")
            key = key.strip().lower()
            value = _trim_quotes(value)

            if key == API_KEY:
                config.api_key = value
            elif key == CLIPBOARD:
                config.clipboard_enabled = _parse_bool(value)
            elif key == DDG_GEN:
                config.auto_generate_on_launch = _parse_bool(value)
            elif key == SETUP_COMPLETE:
                config.setup_complete = _parse_bool(value) is True
            else:
                logger.debug(f"Ignoring unknown config key: {key}")

        return config

    @staticmethod
    def serialize(config: Configuration) -> str:
        """Render all four fields in fixed order"""
        return (
            f"{API_KEY} = {config.api_key}\n"
            f"{CLIPBOARD} = {_yes_no(config.clipboard_enabled)}\n"
            f"{DDG_GEN} = {_yes_no(config.auto_generate_on_launch)}\n"
            f"{SETUP_COMPLETE} = {'true' if config.setup_complete else 'false'}\n"
        )

    def load(self) -> Tuple[Configuration, bool]:
        """
        Load the configuration from disk.

        Returns the parsed configuration and True, or an all-default
        configuration and False when the file is absent or unreadable.
        """
        try:
            text = self.config_file.read_text(encoding="utf-8")
        except (OSError, RuntimeError, UnicodeDecodeError) as e:
            # RuntimeError: Path.home() could not resolve a home directory
            logger.debug(f"{ErrorKind.CONFIG_UNREADABLE.value}: {e}")
            return Configuration(), False

        logger.debug(f"Loaded config from {self.config_file}")
        return self.parse(text), True

    def save(self, config: Configuration) -> None:
        """Write the whole configuration, replacing the file in one step"""
        check_storable("API key", config.api_key)

        try:
            path = self.config_file
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f"{path.name}.", suffix=".tmp"
            )
        except (OSError, RuntimeError) as e:
            logger.error(f"Cannot create config file: {e}")
            raise DuckError(
                ErrorKind.CONFIG_WRITE_FAILED, f"cannot write config file: {e}"
            ) from e

        try:
            # mkstemp already creates the file 0600
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(self.serialize(config))
            os.replace(tmp_name, path)
            os.chmod(path, FILE_MODE)
        except OSError as e:
            logger.error(f"Failed to write config file {path}: {e}")
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise DuckError(
                ErrorKind.CONFIG_WRITE_FAILED, f"cannot write {path}: {e}"
            ) from e

        logger.info(f"Config saved to {path}")

    def update(self, **fields) -> Configuration:
        """
        Read-modify-write merge.

        Only keyword arguments with a non-None value are applied; everything
        else is preserved from the on-disk copy.
        """
        current, _ = self.load()
        changes = {name: value for name, value in fields.items() if value is not None}
        logger.debug(f"Updating config fields: {sorted(changes)}")

        merged = replace(current, **changes)
        self.save(merged)
        return merged
