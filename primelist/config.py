"""
Run settings.

Order of precedence (last wins):
  1) built-in defaults
  2) INI file, section [primelist] (--config PATH, else ~/.primelist.cnf if present)
  3) command-line flags

Example ~/.primelist.cnf:

    [primelist]
    output = prime_list.txt
    threads = 8
    chunk = 1
    merge = local
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from primelist.context import MERGE_LOCAL, MERGE_POLICIES
from primelist.errors import ConfigError

logger = logging.getLogger(__name__)

SECTION = "primelist"
DEFAULT_CONFIG_PATH = os.path.expanduser("~/.primelist.cnf")
DEFAULT_OUTPUT = "prime_list.txt"
DEFAULT_THREADS = 4


@dataclass(frozen=True)
class Settings:
    output: str = DEFAULT_OUTPUT
    threads: int = DEFAULT_THREADS
    chunk: int = 1
    merge: str = MERGE_LOCAL


def _positive_int(cfg: configparser.ConfigParser, key: str, fallback: int) -> int:
    try:
        value = cfg.getint(SECTION, key, fallback=fallback)
    except ValueError as exc:
        raise ConfigError(f"[{SECTION}] {key} must be an integer") from exc
    if value <= 0:
        raise ConfigError(f"[{SECTION}] {key} must be positive, got {value}")
    return value


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Read settings from an INI file.

    An explicit `path` must exist; the default path is optional.
    """
    settings = Settings()
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return settings
        path = DEFAULT_CONFIG_PATH
    elif not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    cfg = configparser.ConfigParser()
    try:
        cfg.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc
    if not cfg.has_section(SECTION):
        logger.debug("no [%s] section in %s, using defaults", SECTION, path)
        return settings

    merge = cfg.get(SECTION, "merge", fallback=settings.merge)
    if merge not in MERGE_POLICIES:
        raise ConfigError(f"[{SECTION}] merge must be one of {', '.join(MERGE_POLICIES)}, got {merge!r}")

    logger.debug("settings read from %s", path)
    return Settings(
        output=cfg.get(SECTION, "output", fallback=settings.output),
        threads=_positive_int(cfg, "threads", settings.threads),
        chunk=_positive_int(cfg, "chunk", settings.chunk),
        merge=merge,
    )


def apply_overrides(settings: Settings, **overrides) -> Settings:
    """Return a copy with every non-None override applied."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **changes)
