"""Tests for shared helpers."""

import asyncio

import pytest

from tonepilot.utils import ensure_dir, safe_filename, with_timeout


async def test_with_timeout_returns_value():
    async def quick():
        return 42

    assert await with_timeout(quick(), 1.0) == 42


async def test_with_timeout_raises():
    with pytest.raises(TimeoutError):
        await with_timeout(asyncio.sleep(1), 0.01)


@pytest.mark.parametrize("timeout", [None, 0])
async def test_with_timeout_disabled(timeout):
    assert await with_timeout(asyncio.sleep(0, result="done"), timeout) == "done"


def test_safe_filename():
    assert safe_filename('a<b>c:"d"/e') == "a_b_c__d__e"
    assert safe_filename("") == "_"


def test_ensure_dir(tmp_path):
    target = tmp_path / "a" / "b"
    assert ensure_dir(target) == target
    assert target.is_dir()


@pytest.mark.parametrize("level, env", [("debug", None), (None, "warning"), (None, None)])
def test_setup_logging(monkeypatch, level, env):
    from loguru import logger

    from tonepilot.logging_config import setup_logging

    if env is None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("LOG_LEVEL", env)

    handler_id = setup_logging(level)
    assert isinstance(handler_id, int)
    logger.warning("routing <fallback> engaged")
    logger.remove(handler_id)


def test_log_format_tags_balanced():
    from tonepilot.logging_config import LOG_FORMAT

    assert LOG_FORMAT.count("<level>") == LOG_FORMAT.count("</level>") == 1
