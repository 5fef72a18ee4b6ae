"""Statistical self-test battery for :class:`~seedcheck.core.generator.Random`."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator

import numpy as np
import structlog

from seedcheck.config.defaults import full_battery
from seedcheck.config.schema import BatteryConfig, BucketCheckConfig
from seedcheck.core.generator import Random
from seedcheck.core.rng import derive_seeds
from seedcheck.validation.buckets import (
    BucketComparison,
    compare_buckets,
    count_buckets,
    count_repeat_runs,
    gaussian_bucket_indices,
    modulo_bucket_indices,
    uniform_bucket_indices,
)
from seedcheck.validation.report import CheckReport, FailureKind, ReportSink

# Routed through a stdlib logger so output follows the stdlib level and
# handlers; with logging unconfigured, info and debug events stay silent.
logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    wrapper_class=structlog.stdlib.BoundLogger,
)

CHECK_NAMES: tuple[str, ...] = (
    "next_boolean",
    "next_bytes",
    "next_double",
    "next_float",
    "next_gaussian",
    "next_int",
    "next_int_below",
    "next_int_between",
    "next_long",
    "set_seed",
)


class RandomTester(CheckReport):
    """Runs every generator operation at high sample counts and buckets the results.

    Each check builds its own :class:`Random`, so checks never share engine
    state. With ``config.seed`` set, the per-check seeds are derived from it and
    the whole battery is reproducible; otherwise every check seeds from system
    entropy.
    """

    def __init__(
        self,
        config: BatteryConfig | None = None,
        sink: ReportSink | None = None,
        name: str = "Random (class)",
    ) -> None:
        super().__init__(name, sink)
        self.config = config if config is not None else full_battery()
        self.comparisons: dict[str, BucketComparison] = {}
        self.seeds: dict[str, int] = {}
        if self.config.seed is not None:
            derived = derive_seeds(self.config.seed, len(CHECK_NAMES))
            self.seeds = dict(zip(CHECK_NAMES, derived))

    def run_all(self, only: Iterable[str] | None = None) -> dict[str, int]:
        """Run the battery (or the named subset) and return the error counts.

        Raises:
            ValueError: If ``only`` names an unknown check.
        """
        selected = list(CHECK_NAMES) if only is None else list(only)
        unknown = [name for name in selected if name not in CHECK_NAMES]
        if unknown:
            raise ValueError(f"Unknown checks: {', '.join(unknown)}")

        self.emit(f"{self.name}::Initiating Tests.")
        for check in CHECK_NAMES:
            if check not in selected:
                continue
            start = time.monotonic()
            checks_before = self.check_count
            errors = getattr(self, f"test_{check}")()
            self.record(check, errors)
            self.emit(f"  Test {check}()... done.")
            logger.info(
                "check_complete",
                check=check,
                errors=errors,
                assertions=self.check_count - checks_before,
                duration_ms=int((time.monotonic() - start) * 1000),
            )
        return dict(self.error_counts)

    # --- Helpers ---

    def _make_rng(self, check: str) -> Random:
        rng = Random(self.seeds.get(check))
        logger.debug("check_started", check=check, seed=rng.seed)
        return rng

    def _chunks(self, trials: int) -> Iterator[int]:
        chunk = self.config.chunk_size
        full, rest = divmod(trials, chunk)
        for _ in range(full):
            yield chunk
        if rest:
            yield rest

    def _verify(self, comparison: BucketComparison, problem: str) -> int:
        """Check every bucket of a comparison; one assertion per bucket."""
        self.comparisons[comparison.check] = comparison
        self.check(len(comparison.observed))
        for b in np.flatnonzero(comparison.failing):
            self.emit_error(
                comparison.check,
                FailureKind.STATISTICAL_DEVIATION,
                f"{problem} [{comparison.labels[b]}]",
                int(comparison.observed[b]),
                int(comparison.expected[b]),
            )
        return comparison.n_failing

    def _check_range(self, check: str, values: np.ndarray, low: float, high: float) -> int:
        """Flag every value outside the half-open interval [low, high)."""
        self.check(len(values))
        outside = values[(values < low) | (values >= high)]
        for value in outside:
            self.emit_error(
                check,
                FailureKind.RANGE_VIOLATION,
                f"{check}() value outside expected interval [{low}, {high})",
                value.item(),
            )
        return len(outside)

    def _uniform_counts(
        self,
        check: str,
        settings: BucketCheckConfig,
        draw: Callable[[int], np.ndarray],
        to_index: Callable[[np.ndarray], np.ndarray],
    ) -> tuple[np.ndarray, int]:
        counts = np.zeros(settings.buckets, dtype=np.int64)
        errors = 0
        for n in self._chunks(settings.trials):
            indices = to_index(draw(n))
            errors += self._check_range(check, indices, 0, settings.buckets)
            inside = indices[(indices >= 0) & (indices < settings.buckets)]
            counts += count_buckets(inside, settings.buckets)
        return counts, errors

    def _uniform_check(
        self,
        check: str,
        settings: BucketCheckConfig,
        draw: Callable[[int], np.ndarray],
        to_index: Callable[[np.ndarray], np.ndarray],
    ) -> int:
        counts, errors = self._uniform_counts(check, settings, draw, to_index)
        expected = np.full(settings.buckets, settings.trials / settings.buckets)
        comparison = compare_buckets(check, counts, expected, settings.margin)
        return errors + self._verify(comparison, f"{check}() percentage problem")

    # --- Checks ---

    def test_next_boolean(self) -> int:
        settings = self.config.next_boolean
        rng = self._make_rng("next_boolean")

        count_true = 0
        for n in self._chunks(settings.trials):
            count_true += int(np.count_nonzero(rng.next_boolean(size=n)))
        count_false = settings.trials - count_true
        self.emit(f"  next_boolean(): {count_true} + {count_false} = {settings.trials}")

        comparison = compare_buckets(
            "next_boolean",
            np.array([count_true, count_false]),
            np.full(2, settings.trials / 2),
            settings.margin,
            labels=["true", "false"],
        )
        return self._verify(comparison, "next_boolean() percentage problem")

    def test_next_bytes(self) -> int:
        """Flag improbable runs of identical bytes.

        A smoke test only: it says nothing about the byte distribution itself.
        """
        settings = self.config.next_bytes
        rng = self._make_rng("next_bytes")

        errors = 0
        rows_per_chunk = max(1, self.config.chunk_size // settings.buffer_size)
        done = 0
        while done < settings.buffers:
            n_rows = min(rows_per_chunk, settings.buffers - done)
            block = np.frombuffer(
                b"".join(rng.next_bytes(settings.buffer_size) for _ in range(n_rows)),
                dtype=np.uint8,
            ).reshape(n_rows, settings.buffer_size)
            runs = count_repeat_runs(block, settings.max_repeats)
            self.check(n_rows)
            for row in np.flatnonzero(runs):
                self.emit_error(
                    "next_bytes",
                    FailureKind.BYTE_RUN_ANOMALY,
                    f"next_bytes(): unlikely sequence of bytes in buffer {done + row}",
                    int(runs[row]),
                )
            errors += int(runs.sum())
            done += n_rows
        return errors

    def test_next_double(self) -> int:
        settings = self.config.next_double
        rng = self._make_rng("next_double")
        return self._uniform_check(
            "next_double",
            settings,
            lambda n: rng.next_double(size=n),
            lambda values: uniform_bucket_indices(values, settings.buckets),
        )

    def test_next_float(self) -> int:
        settings = self.config.next_float
        rng = self._make_rng("next_float")
        return self._uniform_check(
            "next_float",
            settings,
            lambda n: rng.next_float(size=n),
            lambda values: uniform_bucket_indices(values, settings.buckets),
        )

    def test_next_gaussian(self) -> int:
        settings = self.config.next_gaussian
        rng = self._make_rng("next_gaussian")
        buckets = len(settings.probabilities)

        counts = np.zeros(buckets, dtype=np.int64)
        for n in self._chunks(settings.trials):
            indices = gaussian_bucket_indices(rng.next_gaussian(size=n), buckets)
            counts += count_buckets(indices, buckets)

        half = buckets // 2
        labels = [f"{b - half}, {b - half + 1}" for b in range(buckets)]
        expected = settings.trials * np.asarray(settings.probabilities)
        comparison = compare_buckets("next_gaussian", counts, expected, settings.margin, labels)
        return self._verify(comparison, "next_gaussian() percentage problem")

    def test_next_int(self) -> int:
        settings = self.config.next_int
        rng = self._make_rng("next_int")
        return self._uniform_check(
            "next_int",
            settings,
            lambda n: rng.next_int(size=n),
            lambda values: modulo_bucket_indices(values, settings.buckets),
        )

    def test_next_int_below(self) -> int:
        settings = self.config.next_int_below
        rng = self._make_rng("next_int_below")
        # Values are their own bucket, so the range check on indices is the
        # [0, n) containment check.
        return self._uniform_check(
            "next_int_below",
            settings,
            lambda n: rng.next_int_below(settings.buckets, size=n),
            lambda values: values,
        )

    def test_next_int_between(self) -> int:
        settings = self.config.next_int_between
        rng = self._make_rng("next_int_between")
        errors = 0

        # (a) Every draw respects its inclusive bounds
        for low, high in settings.intervals:
            for n in self._chunks(settings.trials):
                values = rng.next_int_between(low, high, size=n)
                self.check(n)
                for value in values[(values < low) | (values > high)]:
                    self.emit_error(
                        "next_int_between",
                        FailureKind.RANGE_VIOLATION,
                        f"next_int_between() value outside expected interval [{low}, {high}]",
                        int(value),
                    )
                    errors += 1

        # (b) Spread over [low, high]
        buckets = settings.high - settings.low + 1
        spread = BucketCheckConfig(trials=settings.trials, buckets=buckets, margin=settings.margin)
        counts, range_errors = self._uniform_counts(
            "next_int_between",
            spread,
            lambda n: rng.next_int_between(settings.low, settings.high, size=n),
            lambda values: values - settings.low,
        )
        expected = np.full(buckets, settings.trials / buckets)
        labels = [str(v) for v in range(settings.low, settings.high + 1)]
        comparison = compare_buckets("next_int_between", counts, expected, settings.margin, labels)
        errors += range_errors
        return errors + self._verify(comparison, "next_int_between() percentage problem")

    def test_next_long(self) -> int:
        settings = self.config.next_long
        rng = self._make_rng("next_long")
        return self._uniform_check(
            "next_long",
            settings,
            lambda n: rng.next_long(size=n),
            lambda values: modulo_bucket_indices(values, settings.buckets),
        )

    def test_set_seed(self) -> int:
        """Perturb, reseed and compare against a recorded baseline.

        The perturbation length comes from the generator under test itself, so
        the engine is left in a different state before every reseed.
        """
        settings = self.config.set_seed
        rng = Random(settings.seed)
        errors = 0

        expected = [rng.next_int() for _ in range(settings.sequence_length)]

        for _ in range(settings.repetitions):
            for _ in range(rng.next_int() % settings.max_perturbation):
                rng.next_int()

            rng.set_seed(settings.seed)
            for i in range(settings.sequence_length):
                acquired = rng.next_int()
                self.check()
                if acquired != expected[i]:
                    self.emit_error(
                        "set_seed",
                        FailureKind.REPRODUCIBILITY_MISMATCH,
                        f"set_seed() element {i}",
                        acquired,
                        expected[i],
                    )
                    errors += 1

        # A fresh instance with the same seed replays the same sequence
        other = Random(settings.seed)
        for i in range(settings.sequence_length):
            acquired = other.next_int()
            self.check()
            if acquired != expected[i]:
                self.emit_error(
                    "set_seed",
                    FailureKind.REPRODUCIBILITY_MISMATCH,
                    f"set_seed() new instance element {i}",
                    acquired,
                    expected[i],
                )
                errors += 1
        return errors
