#!/usr/bin/env python
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

DEFAULT_CLIPBOARD = True
DEFAULT_AUTO_GENERATE = True


@dataclass
class Configuration:
    """Persisted user configuration"""

    api_key: str = ""
    clipboard_enabled: Optional[bool] = None  # None means unset
    auto_generate_on_launch: Optional[bool] = None
    setup_complete: bool = False

    @property
    def is_ready(self) -> bool:
        """True when an email request may be issued"""
        return bool(self.api_key) and self.setup_complete

    def with_defaults(self) -> "Configuration":
        """Return a copy with unset preferences filled in"""
        return replace(
            self,
            clipboard_enabled=(
                DEFAULT_CLIPBOARD
                if self.clipboard_enabled is None
                else self.clipboard_enabled
            ),
            auto_generate_on_launch=(
                DEFAULT_AUTO_GENERATE
                if self.auto_generate_on_launch is None
                else self.auto_generate_on_launch
            ),
        )


@dataclass
class GeneratedEmail:
    """A freshly generated address, never persisted"""

    address: str
    raw_body: bytes = b""


class ErrorKind(Enum):
    CONFIG_UNREADABLE = "config_unreadable"
    CONFIG_WRITE_FAILED = "config_write_failed"
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    REMOTE_ERROR = "remote_error"
    MALFORMED_RESPONSE = "malformed_response"
    CLIPBOARD_UNSUPPORTED = "clipboard_unsupported"


class DuckError(Exception):
    """
    Single error type for every failure the tool reports.

    Callers inspect ``kind`` rather than the exception class. ``status`` is
    only set for errors that came back from the remote API.
    """

    def __init__(
        self, kind: ErrorKind, message: str = "", status: Optional[int] = None
    ):
        super().__init__(message or kind.value.replace("_", " "))
        self.kind = kind
        self.status = status
