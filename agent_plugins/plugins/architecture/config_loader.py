"""Configuration loading and validation for the architecture plugin.

Storage location is resolved in this order:
1. ``storage_path`` in the plugin config dict
2. ARCHITECTURE_PATH environment variable
3. data/architecture.json

Relative paths are resolved against base_path (default: cwd).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .renderers import DEFAULT_FORMAT

DEFAULT_STORAGE_PATH = os.path.join("data", "architecture.json")
STORAGE_PATH_ENV_VAR = "ARCHITECTURE_PATH"
DIAGRAM_FORMAT_ENV_VAR = "ARCHITECTURE_DIAGRAM_FORMAT"


@dataclass
class ArchitectureConfig:
    """Resolved plugin configuration."""

    storage_path: str = DEFAULT_STORAGE_PATH
    default_format: str = DEFAULT_FORMAT.value


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Validate an architecture plugin configuration dict.

    Args:
        config: Raw configuration dict passed to initialize()

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors: List[str] = []

    if not isinstance(config, dict):
        return False, ["Configuration must be an object"]

    storage_path = config.get("storage_path")
    if storage_path is not None and (not isinstance(storage_path, str) or not storage_path):
        errors.append("'storage_path' must be a non-empty string")

    default_format = config.get("default_format")
    if default_format is not None and not isinstance(default_format, str):
        errors.append("'default_format' must be a string")

    return len(errors) == 0, errors


def load_config(
    config: Optional[Dict[str, Any]] = None,
    base_path: Optional[str] = None
) -> ArchitectureConfig:
    """Resolve the plugin configuration.

    Args:
        config: Optional plugin config dict (storage_path, default_format).
        base_path: Base directory for relative paths (default: cwd).

    Returns:
        ArchitectureConfig with an absolute storage_path.

    Raises:
        ConfigValidationError: If the config dict is invalid.
    """
    config = config or {}
    is_valid, errors = validate_config(config)
    if not is_valid:
        raise ConfigValidationError(errors)

    base_path = base_path or os.getcwd()

    storage_path = (
        config.get("storage_path")
        or os.environ.get(STORAGE_PATH_ENV_VAR)
        or DEFAULT_STORAGE_PATH
    )
    file_path = Path(storage_path).expanduser()
    if not file_path.is_absolute():
        file_path = Path(base_path) / file_path

    default_format = (
        config.get("default_format")
        or os.environ.get(DIAGRAM_FORMAT_ENV_VAR)
        or DEFAULT_FORMAT.value
    )

    return ArchitectureConfig(
        storage_path=str(file_path),
        default_format=default_format,
    )
