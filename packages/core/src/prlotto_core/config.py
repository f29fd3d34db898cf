import math
import os
from pathlib import Path
from typing import Optional

import yaml

from prlotto_core.errors import ConfigurationInvalid, ConfigurationMissing

DEFAULT_CONFIG: dict = {
    "github_org": None,
    "default_team": None,  # team slug or numeric id; None = every repo needs a `set team` override
    "with_avatar": False,
    "message": "Please review this.",
    "polite_message": "Would you mind reviewing this when you have a moment?",
    "debug": False,
    "review_label": "awaiting review",
    "stale_after_hours": 24,
    "reminder_interval_minutes": 60,
    "store": "memory",  # memory | sqlite | gist
}

REQUIRED_KEYS = ("github_token", "github_org")

# config key → environment variable
_ENV_VARS = {
    "github_org": "PRLOTTO_GITHUB_ORG",
    "default_team": "PRLOTTO_DEFAULT_TEAM",
    "with_avatar": "PRLOTTO_WITH_AVATAR",
    "message": "PRLOTTO_MESSAGE",
    "polite_message": "PRLOTTO_POLITE_MESSAGE",
    "debug": "PRLOTTO_DEBUG",
    "review_label": "PRLOTTO_REVIEW_LABEL",
    "stale_after_hours": "PRLOTTO_STALE_AFTER_HOURS",
    "reminder_interval_minutes": "PRLOTTO_REMINDER_INTERVAL_MINUTES",
}

_BOOL_KEYS = {"with_avatar", "debug"}
_NUMBER_KEYS = {"stale_after_hours", "reminder_interval_minutes"}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _parse_number(key: str, value) -> float:
    if isinstance(value, bool):
        raise ConfigurationInvalid(key, value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationInvalid(key, value) from None
    if not math.isfinite(number) or number < 0:
        raise ConfigurationInvalid(key, value, "must be a finite number, zero or more")
    return number


def load_config(config_path: str = ".prlotto.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prlotto.yml in the current directory
      3. PRLOTTO_* environment variables
      4. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    for key, env_var in _ENV_VARS.items():
        value = os.environ.get(env_var)
        if value:
            config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    for key in _BOOL_KEYS:
        config[key] = _parse_bool(config.get(key, False))
    for key in _NUMBER_KEYS:
        config[key] = _parse_number(key, config.get(key))
    if config["reminder_interval_minutes"] <= 0:
        raise ConfigurationInvalid("reminder_interval_minutes", config["reminder_interval_minutes"], "must be positive")
    if config.get("default_team") is not None:
        config["default_team"] = str(config["default_team"])

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("PRLOTTO_GITHUB_TOKEN") or os.environ.get("GITHUB_TOKEN")

    return config


def validate_config(config: dict) -> None:
    """Raise ConfigurationMissing listing every required key that is unset."""
    missing = [key for key in REQUIRED_KEYS if not config.get(key)]
    if missing:
        raise ConfigurationMissing(missing)
