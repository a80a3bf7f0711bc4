"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from configtree.config import ConfigContainer, RuntimeSettings


@pytest.fixture
def settings() -> RuntimeSettings:
    """Return an isolated runtime settings registry."""

    return RuntimeSettings()


@pytest.fixture
def container(settings: RuntimeSettings) -> ConfigContainer:
    """Return a container populated with keys of various depths."""

    config = ConfigContainer(settings=settings)
    config.set("simple_key", 123)
    config.set("testing.nested_key", "abc")
    config.set("testing.bool.true", True)
    config.set("testing.bool.false", False)
    config.set_from_dict(
        {
            "set_from_array": 321,
            "testing.nested_set_from_array": "xyz",
            "testing.bool.true_from_array": True,
        }
    )
    return config
