"""Shared test fixtures."""

from __future__ import annotations

import pytest

from seedcheck.config.defaults import quick_battery
from seedcheck.config.schema import BatteryConfig
from seedcheck.core.generator import Random
from seedcheck.validation.report import MemorySink


@pytest.fixture
def rng() -> Random:
    """Deterministic generator for tests."""
    return Random(42)


@pytest.fixture
def quick_config() -> BatteryConfig:
    """Reduced, seeded battery."""
    return quick_battery(seed=1234)


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()
