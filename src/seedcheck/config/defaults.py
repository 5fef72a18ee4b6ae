"""Default configuration values for seedcheck."""

from __future__ import annotations

from seedcheck.config.schema import BatteryConfig, LoggingConfig


def full_battery(seed: int | None = None) -> BatteryConfig:
    """The reference battery: tens of millions of draws per uniform check."""
    return BatteryConfig(preset="full", seed=seed)


def quick_battery(seed: int | None = None) -> BatteryConfig:
    """A reduced battery suitable for smoke runs; completes in seconds."""
    return BatteryConfig(preset="quick", seed=seed)


def default_logging_config() -> LoggingConfig:
    return LoggingConfig()
