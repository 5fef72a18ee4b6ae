"""Bucket transforms and observed-versus-expected comparison."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class BucketComparison:
    """Observed bucket counts against their expectation and tolerance."""

    check: str
    labels: list[str]
    observed: np.ndarray
    expected: np.ndarray
    tolerance: np.ndarray = field(repr=False)

    @property
    def deviation(self) -> np.ndarray:
        return np.abs(self.observed - self.expected)

    @property
    def failing(self) -> np.ndarray:
        """Boolean mask of buckets outside ``|observed - expected| < tolerance``."""
        return ~(self.deviation < self.tolerance)

    @property
    def n_failing(self) -> int:
        return int(self.failing.sum())


def compare_buckets(
    check: str,
    observed: np.ndarray,
    expected: np.ndarray,
    margin: float,
    labels: list[str] | None = None,
) -> BucketComparison:
    """Build a comparison whose tolerance is ``margin * expected`` per bucket."""
    observed = np.asarray(observed, dtype=np.int64)
    expected = np.asarray(expected, dtype=np.float64)
    if observed.shape != expected.shape:
        raise ValueError(
            f"observed shape {observed.shape} does not match expected shape {expected.shape}"
        )
    if labels is None:
        labels = [str(i) for i in range(len(observed))]
    return BucketComparison(
        check=check,
        labels=labels,
        observed=observed,
        expected=expected,
        tolerance=margin * expected,
    )


def uniform_bucket_indices(values: np.ndarray, buckets: int) -> np.ndarray:
    """Map values in [0, 1) to ``floor(value * buckets)``.

    Values outside [0, 1) map outside [0, buckets) and are left for the caller
    to reject.
    """
    return np.floor(np.asarray(values, dtype=np.float64) * buckets).astype(np.int64)


def modulo_bucket_indices(values: np.ndarray, buckets: int) -> np.ndarray:
    """Map integers to ``value mod buckets`` (always non-negative)."""
    return np.mod(np.asarray(values, dtype=np.int64), buckets)


def gaussian_bucket_indices(values: np.ndarray, buckets: int) -> np.ndarray:
    """Map standard-normal draws to unit-width buckets centered on the mean.

    Bucket ``b`` covers ``[b - buckets/2, b + 1 - buckets/2)``. Draws beyond
    the outermost buckets are dropped.
    """
    shifted = np.asarray(values, dtype=np.float64) + buckets / 2
    kept = shifted[(shifted >= 0.0) & (shifted < buckets)]
    return np.floor(kept).astype(np.int64)


def count_buckets(indices: np.ndarray, buckets: int) -> np.ndarray:
    """Count occurrences of each bucket index in [0, buckets)."""
    indices = np.asarray(indices, dtype=np.int64)
    if indices.size and (indices.min() < 0 or indices.max() >= buckets):
        raise ValueError(f"bucket indices must lie in [0, {buckets})")
    return np.bincount(indices, minlength=buckets)


def count_repeat_runs(rows: np.ndarray, max_repeats: int) -> np.ndarray:
    """Count runs where a value repeats its predecessor ``max_repeats``+ times.

    Each qualifying run is counted once, however long it is.

    Args:
        rows: (n_rows, row_length) array; runs never span two rows.
        max_repeats: Number of successive repeats that makes a run suspicious.

    Returns:
        (n_rows,) number of flagged runs per row.
    """
    rows = np.atleast_2d(np.asarray(rows))
    repeats = rows[:, 1:] == rows[:, :-1]
    n_pairs = repeats.shape[1]
    width = n_pairs - max_repeats + 1
    if width <= 0:
        return np.zeros(rows.shape[0], dtype=np.int64)

    # window[:, i]: pairs i .. i+max_repeats-1 all repeat
    window = np.ones((rows.shape[0], width), dtype=bool)
    for offset in range(max_repeats):
        window &= repeats[:, offset : offset + width]

    # Only the first window of a run counts
    starts = window.copy()
    starts[:, 1:] &= ~repeats[:, : width - 1]
    return starts.sum(axis=1).astype(np.int64)
