"""
Configuration management module.

This module provides utilities for loading, saving, and managing the map
configuration stored in config.json, plus the process settings read from
the environment (.env is honoured through python-dotenv).

Author: Venue Map team
Date: 2026-10-16
"""

import json
import os
from typing import Any, Dict

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(BASE_DIR, "config.json")

DEFAULT_DATABASE_URL = "sqlite:///./venue_map.db"


def get_settings() -> Dict[str, Any]:
    """Read process settings from the environment.

    Returns:
        Dictionary with database_url, log_level and log_file.
    """
    load_dotenv()
    return {
        "database_url": os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_file": os.getenv("LOG_FILE") or None,
    }


def load_config() -> Dict[str, Any]:
    """Load configuration from config.json.

    Returns:
        Configuration dictionary with all required fields ensured.
    """
    try:
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        config = get_default_config()

    return ensure_config_fields(config)


def save_config(config: Dict[str, Any]):
    """Save configuration to config.json.

    Args:
        config: Configuration dictionary to save.
    """
    with open(CONFIG_PATH, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2, ensure_ascii=False)


def read_config_text() -> str:
    """Read the raw config.json content.

    Raises:
        FileNotFoundError: If config.json does not exist yet.
    """
    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        return f.read()


def get_default_config() -> Dict[str, Any]:
    """Get default configuration structure.

    Returns:
        Default configuration dictionary.
    """
    return {
        "map": {
            "min_zoom": 3,
            "max_zoom": 18,
            "default_zoom": 10,
            "default_center": {"lat": 41.0082, "lng": 28.9784},
        },
        "venues": {
            "limit": 500,
            "include_empty": False,
        },
        "preview": {
            "width": 800,
            "height": 600,
        },
    }


def ensure_config_fields(config: Dict[str, Any]) -> Dict[str, Any]:
    """Ensure all required fields are present in the configuration.

    Args:
        config: Configuration dictionary to update.

    Returns:
        Updated configuration dictionary.
    """
    defaults = get_default_config()

    for section, values in defaults.items():
        current = config.setdefault(section, {})
        for key, default in values.items():
            current.setdefault(key, default)

    return config


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def validate_config(config: Dict[str, Any]):
    """Check that the settings can be served without further coercion.

    Zoom values must be JSON numbers, the venue limit and preview size
    positive integers and include_empty a real boolean.

    Args:
        config: Configuration dictionary with fields ensured.

    Raises:
        ValueError: If a setting has the wrong type or is inconsistent.
    """
    map_config = config["map"]
    min_zoom = map_config["min_zoom"]
    max_zoom = map_config["max_zoom"]
    default_zoom = map_config["default_zoom"]

    if not all(_is_number(value) for value in (min_zoom, max_zoom, default_zoom)):
        raise ValueError("Zoom settings must be numeric")
    if min_zoom > max_zoom:
        raise ValueError("min_zoom must not exceed max_zoom")
    if not min_zoom <= default_zoom <= max_zoom:
        raise ValueError("default_zoom must be within the zoom range")

    center = map_config["default_center"]
    if not isinstance(center, dict) or not all(
        _is_number(center.get(key)) for key in ("lat", "lng")
    ):
        raise ValueError("default_center must have numeric lat and lng")

    venues_config = config["venues"]
    if not _is_positive_int(venues_config["limit"]):
        raise ValueError("venues.limit must be a positive integer")
    if not isinstance(venues_config["include_empty"], bool):
        raise ValueError("venues.include_empty must be true or false")

    preview = config["preview"]
    if not (_is_positive_int(preview["width"]) and _is_positive_int(preview["height"])):
        raise ValueError("preview width and height must be positive integers")
