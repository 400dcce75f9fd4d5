"""
Editor modeline support.

A file may carry a vim style modeline such as ``# vim: noet ts=8`` that tells
us how wide its tabs are and whether tabs should be expanded. The settings only
feed the advisory diagnostics; they never change how a file is rewritten.
"""

# Standard library imports
import re
from typing import NamedTuple, Optional

# Local imports
from .logger import logger

MODELINE_RE = re.compile(rb" (?:vim|vi|ex): (.+)")


class ModelineSettings(NamedTuple):
    tab_size: int
    expand_tabs: bool


def find_modeline(data: bytes) -> Optional[str]:
    """Return the settings part of the last modeline in the file, if any."""
    modeline = None
    for line in data.splitlines():
        match = MODELINE_RE.search(line)
        if match:
            modeline = match.group(1).decode("ascii", errors="replace").strip()
    return modeline


def apply_modeline(tab_size: int, modeline: Optional[str]) -> ModelineSettings:
    """
    Resolve tab settings from a modeline on top of the configured tab size.

    Args:
        tab_size: Tab size configured for the run
        modeline: Settings string returned by find_modeline, or None

    Returns:
        The effective tab size and expandtab flag for the file
    """
    expand_tabs = False
    if not modeline:
        return ModelineSettings(tab_size, expand_tabs)

    # "set ts=4 et:" style modelines end with a colon
    for part in re.split(r"[\s:]+", modeline):
        if part in ("et", "expandtab"):
            expand_tabs = True
        elif part in ("noet", "noexpandtab"):
            expand_tabs = False
        elif "=" in part:
            key, _, value = part.partition("=")
            if key not in ("ts", "tabstop"):
                continue
            try:
                size = int(value)
            except ValueError:
                logger.debug("Ignoring invalid modeline tab size: %s", value)
                continue
            if size > 0:
                tab_size = size

    return ModelineSettings(tab_size, expand_tabs)
