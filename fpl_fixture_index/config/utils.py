"""
Configuration Utilities

Helper functions for managing engine configuration including validation,
export, and comparison.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from loguru import logger
from pydantic import ValidationError

from .settings import FPLIndexConfig


def export_config_to_json(config: FPLIndexConfig, output_path: Path) -> None:
    """
    Export configuration to JSON file

    Args:
        config: FPLIndexConfig instance to export
        output_path: Path where to save the JSON file
    """
    with open(output_path, "w") as f:
        json.dump(config.model_dump(), f, indent=2, default=str)

    logger.info(f"Configuration exported to {output_path}")


def validate_config_file(config_path: Path) -> List[str]:
    """
    Validate a configuration file and return any issues

    Unlike load_config, this does not fall back to defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        List of validation messages (empty if valid)
    """
    try:
        with open(config_path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        return [f"Could not read configuration file: {e}"]

    try:
        FPLIndexConfig(**data)
    except ValidationError as e:
        return [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
    return []


def compare_configs(
    base: FPLIndexConfig, other: FPLIndexConfig
) -> Dict[str, Tuple[Any, Any]]:
    """
    List the settings that differ between two configurations

    Both configurations share one schema, so every section and field is
    present on each side.

    Args:
        base: Reference configuration (usually the defaults)
        other: Configuration to compare against it

    Returns:
        Mapping of "section.field" to (base value, other value), in sorted order
    """
    base_data = base.model_dump()
    other_data = other.model_dump()

    return {
        f"{section}.{field}": (value, other_data[section][field])
        for section in sorted(base_data)
        for field, value in sorted(base_data[section].items())
        if value != other_data[section][field]
    }
