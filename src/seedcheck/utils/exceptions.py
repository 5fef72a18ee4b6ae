"""Custom exceptions for seedcheck."""

from __future__ import annotations


class SeedcheckError(Exception):
    """Base exception for seedcheck."""


class ConfigError(SeedcheckError):
    """Invalid or unreadable battery configuration."""


class PreconditionViolation(SeedcheckError, ValueError):
    """Invalid arguments passed to a generator operation."""
