"""Loads the notifier configuration from JSON and the environment."""

import json
import os

from dotenv import load_dotenv
from pydantic import ValidationError

from models.config import NotifyConfig
from shared.errors import ConfigurationError

DEFAULT_CONFIG_PATH = "notify.json"


def load_config(path: str | None = None) -> NotifyConfig:
    """
    Load and validate the notifier configuration.

    Args:
        path: JSON config path. Defaults to $NOTIFY_CONFIG, then notify.json.

    Raises:
        ConfigurationError: if the file is missing, not JSON, or has the wrong shape
    """
    load_dotenv()

    config_path = path or os.getenv("NOTIFY_CONFIG", DEFAULT_CONFIG_PATH)
    if not os.path.exists(config_path):
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {config_path} is not valid JSON: {e}") from e

    try:
        return NotifyConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}:\n{e}") from e
