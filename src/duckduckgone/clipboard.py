#!/usr/bin/env python
from enum import Enum

import pyperclip

from .base import ErrorKind
from .logging_config import get_logger

logger = get_logger(__name__)


class ClipboardResult(Enum):
    COPIED = "copied"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"


def copy_to_clipboard(text: str) -> ClipboardResult:
    """
    Copy text to the system clipboard.

    pyperclip picks the platform mechanism (pbcopy, wl-copy, xclip, xsel,
    the Windows API) at runtime. Never raises; callers only check for
    ``ClipboardResult.COPIED``.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.info(f"{ErrorKind.CLIPBOARD_UNSUPPORTED.value}: {e}")
        return ClipboardResult.UNSUPPORTED
    except OSError as e:
        logger.warning(f"Clipboard copy failed: {e}")
        return ClipboardResult.FAILED

    logger.debug("Address copied to clipboard")
    return ClipboardResult.COPIED
