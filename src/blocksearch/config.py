"""
Configuration for blocksearch.

All tunable defaults in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/blocksearch/config.toml) if exists
3. Environment variables (BLOCKSEARCH_<SETTING>) override file
4. Call arguments and CLI flags override everything
"""

from __future__ import annotations

import functools
import logging
import os
import tomllib  # stdlib in 3.11+
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ENV_PREFIX = "BLOCKSEARCH_"


@dataclass
class SearchConfig:
    """Search defaults."""
    case_sensitive: bool = False  # ORed with the per-call flag
    literal: bool = False  # escape regex metacharacters in the search text
    show_matches: bool = False  # initial visibility of the match list


@dataclass
class BlocksConfig:
    """Which registered block types are searchable."""
    text_category: str = "text"


@dataclass
class Config:
    """Root config with all settings."""
    search: SearchConfig = field(default_factory=SearchConfig)
    blocks: BlocksConfig = field(default_factory=BlocksConfig)


def _as_bool(value: Any) -> bool:
    # env vars arrive as text: "true", "1", "yes" -> True
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    return value


# (section, setting) -> converter. The env var is ENV_PREFIX + SETTING.
SETTINGS: dict[tuple[str, str], Callable[[Any], Any]] = {
    ("search", "case_sensitive"): _as_bool,
    ("search", "literal"): _as_bool,
    ("search", "show_matches"): _as_bool,
    ("blocks", "text_category"): _as_str,
}


def env_key(setting: str) -> str:
    return ENV_PREFIX + setting.upper()


def get_config_path() -> Path:
    """Config file location under $XDG_CONFIG_HOME, else ~/.config."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "blocksearch" / "config.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}


def _set(config: Config, section: str, setting: str, raw: Any, origin: str) -> None:
    try:
        value = SETTINGS[(section, setting)](raw)
    except (TypeError, ValueError) as e:
        logger.warning("Ignoring %s.%s from %s: %s", section, setting, origin, e)
        return
    setattr(getattr(config, section), setting, value)


def load_config() -> Config:
    """Defaults, then the config file, then environment overrides, per setting."""
    config = Config()
    path = get_config_path()
    data = _read_toml(path)

    for section, setting in SETTINGS:
        table = data.get(section)
        if isinstance(table, dict) and setting in table:
            _set(config, section, setting, table[setting], str(path))

        key = env_key(setting)
        if key in os.environ:
            _set(config, section, setting, os.environ[key], key)

    return config


@functools.cache
def get_config() -> Config:
    """Get the process-wide config, loading it on first use."""
    return load_config()


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    get_config.cache_clear()
