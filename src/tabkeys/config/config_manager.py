"""Config manager — read tabkeys_config.json, layer TABKEYS_* env vars on top, validate.

Precedence, lowest first: built-in model defaults, the JSON file, the
environment.  The file is looked up as ``--config`` argument, then
``$TABKEYS_CONFIG_FILE``, then the copy shipped inside the package.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from tabkeys.core.models.config import TabkeysConfig

_log = logging.getLogger(__name__)

CONFIG_FILE_ENV = "TABKEYS_CONFIG_FILE"
_SHIPPED_CONFIG = Path(__file__).resolve().parent / "tabkeys_config.json"

# env var -> (section, field, type)
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "TABKEYS_PROFILES_DIR": ("profiles", "profiles_dir", str),
    "TABKEYS_HARDWARE_BACKEND": ("hardware", "backend", str),
    "TABKEYS_LOG_LEVEL": ("system", "log_level", str),
    "TABKEYS_LOG_DIR": ("system", "log_dir", str),
    "TABKEYS_DEBUG": ("system", "debug", bool),
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def load_config(config_path: Path | str | None = None) -> TabkeysConfig:
    """Return the validated configuration for this invocation.

    Raises:
        FileNotFoundError: No config file at the resolved location.
        ValueError: The file is not a valid JSON object, or a value (from
            the file or the environment) fails validation.
    """
    path = config_file_path(config_path)
    _log.debug("Loading config from %s", path)
    try:
        raw: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(raw).__name__}")

    apply_env_overrides(raw, os.environ)
    return TabkeysConfig(**raw)


def config_file_path(config_path: Path | str | None = None) -> Path:
    """Resolve which config file to read; it must exist."""
    if config_path is not None:
        path = Path(config_path)
    else:
        env = os.environ.get(CONFIG_FILE_ENV)
        path = Path(env) if env else _SHIPPED_CONFIG
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            f"Pass --config or set {CONFIG_FILE_ENV} to an existing tabkeys_config.json."
        )
    return path


def apply_env_overrides(raw: dict[str, Any], environ: Any) -> None:
    """Copy every non-empty ``TABKEYS_*`` override from *environ* into *raw*."""
    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        value = environ.get(env_key)
        if not value:
            continue
        raw.setdefault(section, {})[field] = (
            value.strip().lower() in _TRUTHY if typ is bool else typ(value)
        )
        _log.debug("%s overrides %s.%s", env_key, section, field)
