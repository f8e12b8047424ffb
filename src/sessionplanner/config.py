"""Configuration loading and defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .store import _DEFAULT_STORE_PATH
from .workflow import ONLINE_LOCATION, PartialFailurePolicy

_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "sessionplanner"
_DEFAULT_CONFIG_PATH = _DEFAULT_CONFIG_DIR / "config.yaml"


@dataclass
class Config:
    store_path: Path = field(default_factory=lambda: _DEFAULT_STORE_PATH)
    save_failure_policy: PartialFailurePolicy = PartialFailurePolicy.CONTINUE
    invite_failure_policy: PartialFailurePolicy = PartialFailurePolicy.ABORT
    # None means external calls may take as long as they need
    webhook_timeout: float | None = None
    online_location: str = ONLINE_LOCATION


def _parse_policy(raw: dict, key: str) -> PartialFailurePolicy:
    value = str(raw[key]).lower()
    try:
        return PartialFailurePolicy(value)
    except ValueError:
        choices = ", ".join(p.value for p in PartialFailurePolicy)
        raise ValueError(f"'{key}' must be one of: {choices}") from None


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML, using defaults when no default config file exists.

    An explicitly given path must exist.
    """
    if config_path is None:
        path = _DEFAULT_CONFIG_PATH
        if not path.exists():
            return Config()
    else:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config file: {path}")

    kwargs: dict = {}
    if "store_path" in raw:
        kwargs["store_path"] = Path(raw["store_path"]).expanduser()
    for key in ("save_failure_policy", "invite_failure_policy"):
        if key in raw:
            kwargs[key] = _parse_policy(raw, key)
    if "webhook_timeout" in raw:
        timeout = raw["webhook_timeout"]
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
            raise ValueError("'webhook_timeout' must be a number of seconds or null")
        kwargs["webhook_timeout"] = timeout
    if "online_location" in raw:
        kwargs["online_location"] = str(raw["online_location"])

    return Config(**kwargs)
