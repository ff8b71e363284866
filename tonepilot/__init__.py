"""
tonepilot - intent routing and conversational memory for a writing assistant
"""

from __future__ import annotations
from importlib import metadata
from pathlib import Path


def _get_version() -> str:
    """Read version from pyproject.toml, or from installed metadata."""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        import tomllib

        data = tomllib.loads(pyproject_path.read_text())
        return data["project"]["version"]
    try:
        return metadata.version("tonepilot")
    except metadata.PackageNotFoundError:
        return "0.0.0-unknown"


__version__ = _get_version()
