# SPDX-FileCopyrightText: 2025-present DuckDuckGone contributors
#
# SPDX-License-Identifier: MIT
#!/usr/bin/env python
"""
DuckDuckGone - Duck email address generator

Generates private @duck.com addresses through DuckDuckGo's email
protection API and optionally copies them to the clipboard.

Usage:
    ddg                       # First-run setup, then generate
    ddg gen                   # Generate a new address
    ddg settings              # View or change settings
    ddg reset                 # Wipe the saved configuration
"""

__version__ = "1.0.0"

from .base import Configuration, DuckError, ErrorKind, GeneratedEmail
from .storage import ConfigStore
from .services.duck_service import DuckEmailService
from .clipboard import ClipboardResult, copy_to_clipboard
from .logging_config import setup_logging, get_logger
from .cli import main

__all__ = [
    "main",
    "Configuration",
    "DuckError",
    "ErrorKind",
    "GeneratedEmail",
    "ConfigStore",
    "DuckEmailService",
    "ClipboardResult",
    "copy_to_clipboard",
    "setup_logging",
    "get_logger",
]
