"""Seedable pseudo-random value generator."""

from __future__ import annotations

from typing import Any

import numpy as np

from seedcheck.core.rng import entropy_seed, make_rng
from seedcheck.utils.exceptions import PreconditionViolation

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise PreconditionViolation(f"{name} must be an integer, got {value!r}")
    return int(value)


def _require_long(name: str, value: Any) -> int:
    value = _require_int(name, value)
    if not LONG_MIN <= value <= LONG_MAX:
        raise PreconditionViolation(f"{name} must fit in a signed 64-bit integer, got {value}")
    return value


def _require_count(count: Any) -> int:
    count = _require_int("count", count)
    if count < 0:
        raise PreconditionViolation(f"count must be non-negative, got {count}")
    return count


class Random:
    """Pseudo-random generator over a single owned PCG64DXSM engine.

    Every query method advances the engine, so two calls are sequential steps
    over one evolving state rather than independent draws. Given the same seed,
    any fixed sequence of calls yields the same outputs on every instance.

    Query methods take an optional ``size``; when given, they return a numpy
    array of that many draws instead of a single Python scalar. Scalar and
    batch draws advance the same engine.
    """

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the engine.

        Args:
            seed: Integer seed. When omitted, a seed is drawn from system
                entropy; it is still available afterwards as :attr:`seed`.
        """
        self._seed = entropy_seed() if seed is None else _require_int("seed", seed)
        self._rng = make_rng(self._seed)

    @classmethod
    def from_entropy(cls) -> Random:
        """Create a generator seeded from system entropy."""
        return cls(entropy_seed())

    @property
    def seed(self) -> int:
        """The seed the engine was last reset with."""
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Reset the engine so later draws depend on ``seed`` alone."""
        self._seed = _require_int("seed", seed)
        self._rng = make_rng(self._seed)

    def reseed_from_entropy(self) -> int:
        """Reset the engine from system entropy and return the new seed."""
        self.set_seed(entropy_seed())
        return self._seed

    def next_boolean(self, size: int | None = None) -> Any:
        """Draw True or False with equal probability."""
        values = self._rng.integers(0, 2, size=size)
        if size is None:
            return bool(values)
        return values.astype(bool)

    def next_bytes(self, count: int) -> bytes:
        """Draw ``count`` bytes uniformly over 0..255 from the seeded engine."""
        return self._rng.bytes(_require_count(count))

    def fill_bytes(self, buffer: Any, count: int | None = None) -> int:
        """Fill the first ``count`` bytes of a writable buffer in place.

        Args:
            buffer: Any writable, contiguous buffer (``bytearray``,
                ``memoryview``, numpy ``uint8`` array, ...).
            count: Number of bytes to fill; defaults to the whole buffer.

        Returns:
            The number of bytes written.
        """
        view = memoryview(buffer).cast("B")
        if view.readonly:
            raise PreconditionViolation("buffer must be writable")
        count = len(view) if count is None else _require_count(count)
        if count > len(view):
            raise PreconditionViolation(
                f"count ({count}) exceeds buffer capacity ({len(view)})"
            )
        view[:count] = self._rng.bytes(count)
        return count

    def fresh_bytes(self, count: int) -> bytes:
        """Reseed from system entropy, then draw ``count`` bytes.

        Unlike :meth:`next_bytes`, the output does not continue any previously
        seeded sequence.
        """
        count = _require_count(count)
        self.reseed_from_entropy()
        return self._rng.bytes(count)

    def next_double(self, size: int | None = None) -> Any:
        """Draw a uniform double in [0.0, 1.0)."""
        values = self._rng.random(size)
        return float(values) if size is None else values

    def next_float(self, size: int | None = None) -> Any:
        """Draw a uniform single-precision value in [0.0, 1.0)."""
        values = self._rng.random(size, dtype=np.float32)
        return float(values) if size is None else values

    def next_gaussian(self, size: int | None = None) -> Any:
        """Draw from the standard normal distribution (mean 0, std-dev 1)."""
        values = self._rng.standard_normal(size)
        return float(values) if size is None else values

    def next_int(self, size: int | None = None) -> Any:
        """Draw a uniform signed 32-bit integer."""
        values = self._rng.integers(INT_MIN, INT_MAX, size=size, dtype=np.int32, endpoint=True)
        return int(values) if size is None else values

    def next_int_below(self, n: int, size: int | None = None) -> Any:
        """Draw a uniform integer in [0, n).

        Raises:
            PreconditionViolation: If ``n < 1``.
        """
        n = _require_long("n", n)
        if n < 1:
            raise PreconditionViolation(f"n must be at least 1, got {n}")
        values = self._rng.integers(0, n, size=size, dtype=np.int64)
        return int(values) if size is None else values

    def next_int_between(self, low: int, high: int, size: int | None = None) -> Any:
        """Draw a uniform integer in [low, high], both bounds inclusive.

        Raises:
            PreconditionViolation: If ``low > high``.
        """
        low = _require_long("low", low)
        high = _require_long("high", high)
        if low > high:
            raise PreconditionViolation(f"low ({low}) must not exceed high ({high})")
        values = self._rng.integers(low, high, size=size, dtype=np.int64, endpoint=True)
        return int(values) if size is None else values

    def next_long(self, size: int | None = None) -> Any:
        """Draw a uniform signed 64-bit integer."""
        values = self._rng.integers(LONG_MIN, LONG_MAX, size=size, dtype=np.int64, endpoint=True)
        return int(values) if size is None else values

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self._seed})"
