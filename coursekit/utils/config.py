"""
Configuration loader for CourseKit.

Settings come from three layers, later ones winning:
1. Built-in defaults (Settings model)
2. A YAML file (explicit path, or COURSEKIT_CONFIG)
3. Environment variables, with a .env file loaded first

Environment variables:
- COURSEKIT_CONFIG: path to the YAML settings file
- COURSEKIT_DB: path to the SQLite progress store
- COURSEKIT_KEY_PREFIX: namespace for persisted keys
- COURSEKIT_LOG_LEVEL: logging level name (INFO, DEBUG, ...)
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from coursekit.schemas import RewardPolicy
from coursekit.storage import DEFAULT_KEY_PREFIX


DEFAULT_DATA_DIR = Path.home() / ".coursekit"
DEFAULT_DB_PATH = DEFAULT_DATA_DIR / "progress.db"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

ENV_OVERRIDES = {
    "COURSEKIT_DB": "db_path",
    "COURSEKIT_KEY_PREFIX": "key_prefix",
    "COURSEKIT_LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    db_path: Path = DEFAULT_DB_PATH
    key_prefix: str = DEFAULT_KEY_PREFIX
    watch_threshold: float = Field(default=0.9, gt=0.0, le=1.0)  # fraction watched that completes a lesson
    log_level: str = "INFO"
    rewards: RewardPolicy = Field(default_factory=RewardPolicy)


def load_yaml_settings(path: Path) -> dict[str, Any]:
    """
    Read a YAML settings file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed mapping (empty for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the document is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")
    return data


def load_settings(
    path: Optional[Path] = None,
    env_file: Optional[Path] = None,
) -> Settings:
    """
    Build Settings from defaults, YAML and environment.

    Args:
        path: Optional YAML settings file (falls back to COURSEKIT_CONFIG)
        env_file: Optional .env file (python-dotenv searches upward by default)

    Returns:
        Validated Settings
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    data: dict[str, Any] = {}
    config_path = path or (Path(os.environ["COURSEKIT_CONFIG"]) if os.environ.get("COURSEKIT_CONFIG") else None)
    if config_path is not None:
        data.update(load_yaml_settings(Path(config_path)))

    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value

    return Settings.model_validate(data)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging the same way for the app and scripts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
