# Area: Shared
"""
trivia_duel.config - Configuration loading
==========================================

Configuration is a plain dict assembled from, in increasing priority:
    1. Built-in defaults
    2. A JSON config file (optional)
    3. A .env file (loaded into the environment)
    4. Environment variables
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError
from .question_source import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS

DEFAULTS: Dict[str, Any] = {
    "cache_path": "trivia_duel.db",
    "api_url": DEFAULT_API_URL,
    "request_timeout": DEFAULT_TIMEOUT_SECONDS,
    "nudge_delay_seconds": 600,
    "log_file": "trivia_duel.log",
}

REQUIRED_KEYS = ["participant_id"]

ENV_MAPPINGS = {
    "TRIVIA_PARTICIPANT_ID": "participant_id",
    "TRIVIA_CACHE_PATH": "cache_path",
    "TRIVIA_API_URL": "api_url",
    "TRIVIA_REQUEST_TIMEOUT": "request_timeout",
    "TRIVIA_NUDGE_DELAY": "nudge_delay_seconds",
    "TRIVIA_LOG_FILE": "log_file",
}

_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "request_timeout": float,
    "nudge_delay_seconds": int,
}


def load_config(config_path: Optional[str] = None, use_dotenv: bool = True) -> Dict[str, Any]:
    """
    Load configuration from defaults, file and environment.

    Args:
        config_path: Path to a JSON config file; a missing file is skipped
        use_dotenv: Load a .env file into the environment first

    Raises:
        ConfigError: If the file is not valid JSON or a value has the wrong type
    """
    config: Dict[str, Any] = dict(DEFAULTS)

    if config_path:
        path = Path(config_path)
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(message=f"Invalid JSON in {path}: {e}")
            if not isinstance(data, dict):
                raise ConfigError(message=f"Config file {path} must contain an object")
            config.update(data)

    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            value: Any = os.environ[env_key]
            convert = _CONVERTERS.get(config_key)
            if convert is not None:
                try:
                    value = convert(value)
                except ValueError:
                    raise ConfigError(message=f"Invalid value for {env_key}: {value!r}")
            config[config_key] = value

    return config


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check that required keys are present and non-empty.

    Returns:
        The same config, for chaining

    Raises:
        ConfigError: Listing every missing key
    """
    missing = [k for k in REQUIRED_KEYS if not config.get(k)]
    if missing:
        raise ConfigError(missing)
    return config
