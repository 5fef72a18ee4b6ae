"""Deterministic RNG factory and seed helpers."""

from __future__ import annotations

import numpy as np
from numpy.random import PCG64DXSM, Generator, SeedSequence


def fold_seed(seed: int) -> int:
    """Map any integer onto a non-negative one, bijectively.

    ``SeedSequence`` only accepts non-negative entropy, so negative seeds are
    interleaved with positive ones (0, -1, 1, -2, 2, ... -> 0, 1, 2, 3, 4, ...).
    """
    seed = int(seed)
    return 2 * seed if seed >= 0 else -2 * seed - 1


def make_rng(seed: int) -> Generator:
    """Create a deterministic numpy Generator from a seed.

    Uses PCG64DXSM for high-quality, reproducible random number generation.
    """
    return Generator(PCG64DXSM(fold_seed(seed)))


def entropy_seed() -> int:
    """Draw a fresh 128-bit seed from the operating system's entropy pool."""
    return int(SeedSequence().entropy)  # type: ignore[arg-type]


def derive_seeds(seed: int, n: int) -> list[int]:
    """Derive ``n`` independent child seeds from a single parent seed."""
    state = SeedSequence(fold_seed(seed)).generate_state(n, dtype=np.uint64)
    return [int(s) for s in state]
