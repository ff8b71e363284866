"""Small helpers shared by the router, memory and storage layers."""

import asyncio
import re
from pathlib import Path
from typing import Awaitable, TypeVar

T = TypeVar("T")

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def ensure_dir(path: Path) -> Path:
    """Create a directory (and parents) if missing and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_filename(name: str) -> str:
    """Replace characters that are not allowed in file names."""
    return _UNSAFE_CHARS.sub("_", name).strip() or "_"


async def with_timeout(awaitable: Awaitable[T], timeout: float | None) -> T:
    """Await a collaborator call, raising TimeoutError after `timeout` seconds.

    A timeout of None or <= 0 waits indefinitely.
    """
    if timeout is None or timeout <= 0:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout=timeout)
