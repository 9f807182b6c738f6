"""Runtime settings, read from RILL_* environment variables.

    RILL_PROMPT            prompt for a new unit (default "user> ")
    RILL_LOG_LEVEL         level for the "rill" logger (default WARNING)
    RILL_DEBUG             print each parsed tree before its value
    RILL_COLOR             colour values and errors on a terminal (default on)
    RILL_RECURSION_LIMIT   host recursion limit to apply at startup

Command-line flags override these.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PROMPT = "user> "
CONTINUATION_PROMPT = "  ... "

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass
class Settings:
    prompt: str = DEFAULT_PROMPT
    continuation_prompt: str = CONTINUATION_PROMPT
    log_level: str = "WARNING"
    debug: bool = False
    color: bool = True
    recursion_limit: Optional[int] = None


def flag_from_env(var: str, default: bool, environ: Mapping[str, str]) -> bool:
    raw = environ.get(var)
    if raw is None or not raw.strip():
        return default
    raw = raw.strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"{var} must be one of {sorted(_TRUTHY | _FALSY)}, got {raw!r}")


def log_level_from_env(var: str, default: str, environ: Mapping[str, str]) -> str:
    raw = environ.get(var, "").strip().upper()
    if not raw:
        return default
    if not isinstance(logging.getLevelName(raw), int):
        raise ValueError(f"{var} is not a logging level: {raw!r}")
    return raw


def int_from_env(var: str, environ: Mapping[str, str]) -> Optional[int]:
    raw = environ.get(var, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    return Settings(
        prompt=environ.get("RILL_PROMPT", DEFAULT_PROMPT),
        log_level=log_level_from_env("RILL_LOG_LEVEL", "WARNING", environ),
        debug=flag_from_env("RILL_DEBUG", False, environ),
        color=flag_from_env("RILL_COLOR", True, environ),
        recursion_limit=int_from_env("RILL_RECURSION_LIMIT", environ),
    )
