"""Pytest configuration and shared fixtures for all tests."""

import logging
import sys
from pathlib import Path

# Add src to Python path for all tests
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

import pytest


@pytest.fixture
def meeting_options():
    """A full set of URL-like options as an embedding page would pass them."""
    return {
        "domain": "meet.example.com/tenant",
        "roomName": "standup",
        "jwt": "abc.def.ghi",
        "configOverwrite": {"p2p": {"enabled": False}, "startWithAudioMuted": True},
        "interfaceConfigOverwrite": {"SHOW_BRAND_WATERMARK": False},
    }


@pytest.fixture
def reset_meeturi_logging():
    """Drop whatever setup_logging() installed on the meeturi logger."""
    logger = logging.getLogger("meeturi")
    level = logger.level
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove meeturi environment variables so tests see defaults only."""
    for name in ("MEETURI_CONFIG", "MEETURI_FALLBACK_SCHEME", "MEETURI_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
