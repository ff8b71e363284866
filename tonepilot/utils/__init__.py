"""Utility functions for tonepilot."""

from tonepilot.utils.helpers import ensure_dir, safe_filename, with_timeout

__all__ = ["ensure_dir", "safe_filename", "with_timeout"]
