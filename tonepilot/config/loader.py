"""Load and save settings files written by the host UI (camelCase JSON)."""

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from tonepilot.config.schema import Config

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def convert_keys(data: Any) -> Any:
    """Recursively convert camelCase dict keys to snake_case."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Recursively convert snake_case dict keys to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def load_config(path: Path | None = None) -> Config:
    """
    Load configuration from a JSON file, falling back to defaults.

    Environment variables (TONEPILOT_*) still apply on top of defaults when the
    file is missing or unreadable.

    Args:
        path: Settings file. None means defaults only.

    Returns:
        The loaded Config.
    """
    if path is None or not Path(path).exists():
        return Config()

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return Config(**convert_keys(data))
    except (OSError, TypeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Failed to load config from {path}: {e}, using defaults")
        return Config()


def save_config(config: Config, path: Path) -> None:
    """Write configuration as camelCase JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = convert_to_camel(config.model_dump())
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
