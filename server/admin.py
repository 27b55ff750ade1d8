"""
Admin routes for configuration management.

This module provides administrative endpoints for directly editing the
config.json file.

Author: Venue Map team
Date: 2026-10-16
"""

import json
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from logic.config import ensure_config_fields, read_config_text, save_config, validate_config

logger = logging.getLogger(__name__)

router = APIRouter()


class ConfigUpdate(BaseModel):
    """Request model for updating configuration."""

    content: str


@router.get("/api/admin/config")
def get_config():
    """Get the raw config.json content.

    Returns:
        Dictionary containing the raw JSON content as a string.

    Raises:
        HTTPException: If config file cannot be read.
    """
    try:
        return {"content": read_config_text()}
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Config file not found")
    except OSError as e:
        raise HTTPException(
            status_code=500, detail=f"Error reading config file: {str(e)}"
        )


@router.post("/api/admin/config")
def update_config(data: ConfigUpdate):
    """Update the config.json file with new content.

    Validates the content as JSON and checks the map settings before saving.
    Missing settings are filled with defaults.

    Args:
        data: ConfigUpdate object containing the new JSON content.

    Returns:
        Success message.

    Raises:
        HTTPException: If JSON or settings are invalid or the file cannot be saved.
    """
    try:
        parsed_config = json.loads(data.content)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Invalid JSON: {str(e)}")

    if not isinstance(parsed_config, dict):
        raise HTTPException(status_code=400, detail="Config must be a JSON object")

    try:
        parsed_config = ensure_config_fields(parsed_config)
        validate_config(parsed_config)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid settings: {str(e)}")

    try:
        save_config(parsed_config)
    except OSError as e:
        raise HTTPException(
            status_code=500, detail=f"Error saving config file: {str(e)}"
        )

    logger.info("Configuration updated")
    return {"success": True, "message": "Configuration updated successfully"}
