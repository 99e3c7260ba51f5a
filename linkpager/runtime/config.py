"""Persistent JSON config plus environment overrides.

Stores the opener program and startup flags. All access is defensive:
malformed or missing config falls back to defaults. The result is one
explicit ``PagerConfig`` value; the controller never reads the environment.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

from platformdirs import user_config_dir

from ..controller import PagerConfig

logger = logging.getLogger(__name__)

APP_NAME = "linkpager"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

OPENER_ENV = "LINKPAGER_OPENER"
OPEN_FIRST_ENV = "LINKPAGER_OPEN_FIRST"
GOTO_LAST_ENV = "LINKPAGER_GOTO_LAST"

_FLAG_KEYS: tuple[str, ...] = ("open_first", "goto_last", "ignore_case")


def load_config() -> dict[str, object]:
    """Read ``config.json`` as a dict.

    Anything other than a readable JSON object yields ``{}``.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` back to ``config.json``; a failed write is only logged."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("could not save config to %s: %s", CONFIG_PATH, exc)


def _coerce_opener(value: object) -> str | None:
    """Accept only non-blank strings as opener program paths."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_pager_config() -> PagerConfig:
    """Build a ``PagerConfig`` from the config file alone.

    Only explicit booleans are accepted for flags; other types fall back to
    ``False``.
    """
    data = load_config()
    flags = {key: data.get(key) is True for key in _FLAG_KEYS}
    return PagerConfig(opener=_coerce_opener(data.get("opener")), **flags)


def apply_environment(config: PagerConfig, environ: Mapping[str, str]) -> PagerConfig:
    """Overlay environment variables on ``config``.

    Flag variables count as set whenever they are present, whatever their
    value.
    """
    opener = _coerce_opener(environ.get(OPENER_ENV))
    if opener is not None:
        config = replace(config, opener=opener)
    if OPEN_FIRST_ENV in environ:
        config = replace(config, open_first=True)
    if GOTO_LAST_ENV in environ:
        config = replace(config, goto_last=True)
    return config


def save_opener(opener: str) -> None:
    """Persist the default opener program path."""
    stripped = _coerce_opener(opener)
    if stripped is None:
        return
    config = load_config()
    config["opener"] = stripped
    save_config(config)
