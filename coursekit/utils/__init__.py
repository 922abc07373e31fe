"""CourseKit utilities."""

from .config import Settings, load_settings, load_yaml_settings, setup_logging
from .ids import new_id
from .media import format_duration, parse_duration, to_data_uri

__all__ = [
    "Settings",
    "load_settings",
    "load_yaml_settings",
    "setup_logging",
    "new_id",
    "format_duration",
    "parse_duration",
    "to_data_uri",
]
