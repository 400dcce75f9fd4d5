"""
Configuration loading.

Options are resolved once, from environment variables (optionally read from a
.env file) with explicit overrides from the command line taking precedence.
"""

# Standard library imports
import os
from typing import Any, Dict, Mapping, Optional

# Third-party imports
from dotenv import load_dotenv
from pydantic import ValidationError

# Local imports
from .exceptions import ConfigError
from .logger import logger
from .models import LineEnding, Options

ENV_PREFIX = "WSFIX_"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _parse_int(name: str, value: str) -> Optional[int]:
    if not value.strip():
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _parse_line_ending(name: str, value: str) -> LineEnding:
    try:
        return LineEnding(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(e.value for e in LineEnding)
        raise ConfigError(f"{name} must be one of {choices}, got {value!r}") from exc


# option name -> parser for the matching WSFIX_* variable
_ENV_FIELDS = {
    "line_ending": _parse_line_ending,
    "check_only": _parse_bool,
    "line_length": _parse_int,
    "tab_size": _parse_int,
    "check_tabs": _parse_bool,
    "use_modeline": _parse_bool,
    "max_workers": _parse_int,
    "show_progress": _parse_bool,
}


def options_from_env(env: Mapping[str, str]) -> Dict[str, Any]:
    """Collect option values present in the given environment mapping."""
    values = {}
    for field, parse in _ENV_FIELDS.items():
        name = ENV_PREFIX + field.upper()
        raw = env.get(name)
        if raw is None:
            continue
        value = parse(name, raw)
        if value is not None:
            values[field] = value
    return values


def load_options(env: Optional[Mapping[str, str]] = None, dotenv: bool = True, **overrides) -> Options:
    """
    Resolve the options for a run.

    Args:
        env: Environment mapping to read (defaults to os.environ)
        dotenv: Load a .env file into os.environ first
        **overrides: Explicit values; None means "not given" and is skipped

    Returns:
        Frozen Options

    Raises:
        ConfigError: If a value is malformed or out of range
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    values = options_from_env(env)
    values.update({key: value for key, value in overrides.items() if value is not None})
    logger.debug("Resolved option values: %s", values)

    try:
        return Options(**values)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
