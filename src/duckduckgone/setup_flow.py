#!/usr/bin/env python
"""
First-run wizard, settings editing and reset.

Every function takes the ConfigStore and returns the resulting
Configuration; nothing here keeps state between calls.
"""

from typing import Callable, Optional

from .base import Configuration, DuckError, ErrorKind
from .storage import ConfigStore
from .logging_config import get_logger

logger = get_logger(__name__)

Prompt = Callable[[str], str]

RESET_PHRASE = "Reset"


def _ask(prompt: Prompt, text: str) -> Optional[str]:
    """Read one stripped answer, None on end of input"""
    try:
        return prompt(text).strip()
    except EOFError:
        return None


def _parse_flag(value: Optional[str]) -> Optional[bool]:
    """Settings flags accept only yes/no, anything else keeps the old value"""
    if value is None:
        return None
    value = value.strip().lower()
    if value == "yes":
        return True
    if value == "no":
        return False
    logger.warning(f"Ignoring invalid yes/no value: {value!r}")
    return None


def ensure_config(
    store: ConfigStore, allow_setup: bool, prompt: Prompt = input
) -> Configuration:
    """
    Return a ready configuration.

    A ready config gets its unset preferences filled in and written back
    (best effort). Otherwise the wizard runs when allowed, or
    MISSING_CREDENTIAL is raised.
    """
    config, found = store.load()
    if found and config.is_ready:
        filled = config.with_defaults()
        if filled != config:
            try:
                store.save(filled)
            except DuckError as e:
                logger.warning(f"Could not store default settings: {e}")
        return filled

    if not allow_setup:
        logger.info("Setup incomplete, refusing to continue")
        raise DuckError(ErrorKind.MISSING_CREDENTIAL, "setup is not complete")

    return run_setup_wizard(store, prompt)


def run_setup_wizard(store: ConfigStore, prompt: Prompt = input) -> Configuration:
    """Interactive first-run setup"""
    print("Hi! Looks like you haven't used DuckDuckGone before!")

    api_key = _ask(prompt, "Enter your API key: ")
    if not api_key:
        raise DuckError(ErrorKind.MISSING_CREDENTIAL, "no API key provided")

    clipboard = _ask(prompt, "Copy emails to clipboard automatically? (yes/no) [yes]: ")
    auto_generate = _ask(
        prompt, "Run 'ddg' to generate an email automatically? (yes/no) [yes]: "
    )

    config = Configuration(
        api_key=api_key,
        clipboard_enabled=(clipboard or "yes").lower() in ("yes", "y"),
        auto_generate_on_launch=(auto_generate or "yes").lower() in ("yes", "y"),
        setup_complete=True,
    )
    store.save(config)
    logger.info("Setup wizard completed")
    return config


def apply_settings(
    store: ConfigStore,
    apikey: Optional[str] = None,
    clipboard: Optional[str] = None,
    ddggen: Optional[str] = None,
) -> Configuration:
    """Merge the supplied settings into the stored configuration"""
    ensure_config(store, allow_setup=False)

    return store.update(
        api_key=apikey,
        clipboard_enabled=_parse_flag(clipboard),
        auto_generate_on_launch=_parse_flag(ddggen),
    )


def format_settings(config: Configuration) -> str:
    config = config.with_defaults()
    return (
        "Current settings:\n"
        f"- API key: {config.api_key or '-'}\n"
        f"- Clipboard copy: {'yes' if config.clipboard_enabled else 'no'}\n"
        f"- Run ddg auto-generate: {'yes' if config.auto_generate_on_launch else 'no'}\n"
        "\n"
        "Use 'ddg help' to learn how to change these."
    )


def reset_config(store: ConfigStore, prompt: Prompt = input) -> bool:
    """
    Clear the configuration after two confirmations.

    Returns False, leaving the file untouched, when either answer does not
    match.
    """
    answer = _ask(
        prompt,
        "⚠️ Are you sure you want to completely reset this application? (yes/no): ",
    )
    if answer is None or answer.lower() != "yes":
        logger.info("Reset cancelled at first prompt")
        return False

    confirm = _ask(
        prompt,
        f"Type '{RESET_PHRASE}' to reset the application. "
        "This is your final chance to go back: ",
    )
    if confirm != RESET_PHRASE:
        logger.info("Reset cancelled at confirmation phrase")
        return False

    store.save(Configuration())
    logger.info("Configuration reset")
    return True
