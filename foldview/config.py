"""Persistent JSON config helpers.

Stores the diagnostic consistency-check preference.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "foldview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CHECK_CORRECTNESS_ENV = "FOLDVIEW_CHECK_CORRECTNESS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so a read-only config
    directory never breaks callers.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _env_flag(name: str) -> bool | None:
    """Parse a boolean environment flag; unknown spellings count as unset."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def load_check_correctness() -> bool:
    """Return whether contraction states verify themselves after each mutation.

    ``FOLDVIEW_CHECK_CORRECTNESS`` wins over the config file. Only explicit
    boolean config values are accepted; anything else falls back to ``False``.
    """
    env_value = _env_flag(CHECK_CORRECTNESS_ENV)
    if env_value is not None:
        return env_value
    value = load_config().get("check_correctness")
    return value if isinstance(value, bool) else False


def save_check_correctness(enabled: bool) -> None:
    """Persist the consistency-check preference as a boolean."""
    config = load_config()
    config["check_correctness"] = bool(enabled)
    save_config(config)
