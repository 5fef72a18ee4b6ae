"""Pydantic v2 configuration models for seedcheck."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from seedcheck.core.generator import LONG_MAX, LONG_MIN

# Probability mass of the unit-width intervals [-4,-3), [-3,-2), ..., [3,4)
# of the standard normal distribution.
GAUSSIAN_BUCKET_PROBABILITIES: list[float] = [
    0.0013,
    0.0215,
    0.1359,
    0.3413,
    0.3413,
    0.1359,
    0.0215,
    0.0013,
]


class BalanceCheckConfig(BaseModel):
    """Two-outcome balance check (booleans)."""

    model_config = ConfigDict(extra="forbid")

    trials: int = Field(default=100_000, ge=2)
    margin: float = Field(default=0.01, gt=0, le=1, description="Relative margin of error")


class BucketCheckConfig(BaseModel):
    """Equal-width bucket histogram check for a uniform operation."""

    model_config = ConfigDict(extra="forbid")

    trials: int = Field(ge=1)
    buckets: int = Field(ge=1)
    margin: float = Field(gt=0, le=1, description="Relative margin of error")

    @model_validator(mode="after")
    def _validate_buckets(self) -> BucketCheckConfig:
        if self.buckets > self.trials:
            raise ValueError(
                f"buckets ({self.buckets}) must not exceed trials ({self.trials})"
            )
        return self


class GaussianCheckConfig(BaseModel):
    """Fixed-histogram check of the standard-normal operation."""

    model_config = ConfigDict(extra="forbid")

    trials: int = Field(default=20_000_000, ge=1)
    margin: float = Field(default=0.05, gt=0, le=1)
    probabilities: list[float] = Field(
        default_factory=lambda: list(GAUSSIAN_BUCKET_PROBABILITIES),
        min_length=2,
        description="Expected probability per unit-width bucket, centered on the mean",
    )

    @model_validator(mode="after")
    def _validate_probabilities(self) -> GaussianCheckConfig:
        if len(self.probabilities) % 2 != 0:
            raise ValueError("probabilities must cover an even number of buckets")
        if any(p <= 0 for p in self.probabilities):
            raise ValueError("probabilities must be positive")
        total = sum(self.probabilities)
        if total > 1.0 + 1e-6:
            raise ValueError(f"probabilities must not sum above 1.0, got {total}")
        return self


class RangeCheckConfig(BaseModel):
    """Inclusive-range check: containment intervals plus a bucket spread."""

    model_config = ConfigDict(extra="forbid")

    trials: int = Field(default=10_000_000, ge=1)
    low: int = Field(default=100)
    high: int = Field(default=400)
    margin: float = Field(default=0.03, gt=0, le=1)
    intervals: list[tuple[int, int]] = Field(
        default_factory=lambda: [(-20, -5), (-20, 15), (5, 10)],
        description="Intervals whose bounds every draw must respect",
    )

    @model_validator(mode="after")
    def _validate_bounds(self) -> RangeCheckConfig:
        bounds = [self.low, self.high, *(b for interval in self.intervals for b in interval)]
        for bound in bounds:
            if not LONG_MIN <= bound <= LONG_MAX:
                raise ValueError(f"bound {bound} is outside the signed 64-bit range")
        if self.low > self.high:
            raise ValueError(f"low ({self.low}) must not exceed high ({self.high})")
        spread = self.high - self.low + 1
        if spread > self.trials:
            raise ValueError(
                f"spread buckets ({spread}) over [{self.low}, {self.high}] "
                f"must not exceed trials ({self.trials})"
            )
        for low, high in self.intervals:
            if low > high:
                raise ValueError(f"interval ({low}, {high}) has low above high")
        return self


class ByteRunCheckConfig(BaseModel):
    """Byte-stream smoke test for runs of repeated byte values."""

    model_config = ConfigDict(extra="forbid")

    buffers: int = Field(default=10_000, ge=1)
    buffer_size: int = Field(default=1_000, ge=2)
    max_repeats: int = Field(
        default=3,
        ge=1,
        description=(
            "Runs where a byte repeats its predecessor this many times are flagged; "
            "the default 3 flags four identical bytes, 2 flags every run of three"
        ),
    )


class SeedCheckConfig(BaseModel):
    """Perturb / reseed / compare reproducibility check."""

    model_config = ConfigDict(extra="forbid")

    seed: int = 5
    sequence_length: int = Field(default=10, ge=1)
    repetitions: int = Field(default=100, ge=1)
    max_perturbation: int = Field(
        default=1000, ge=1, description="Upper bound (exclusive) on discarded draws"
    )


def _full_uniform(trials: int, buckets: int, margin: float) -> BucketCheckConfig:
    return BucketCheckConfig(trials=trials, buckets=buckets, margin=margin)


# Reduced sample sizes with every margin kept at six or more standard
# deviations of the bucket count.
QUICK_OVERRIDES: dict[str, BaseModel] = {
    "next_boolean": BalanceCheckConfig(trials=100_000, margin=0.02),
    "next_bytes": ByteRunCheckConfig(buffers=50),
    "next_double": BucketCheckConfig(trials=200_000, buckets=20, margin=0.06),
    "next_float": BucketCheckConfig(trials=200_000, buckets=20, margin=0.06),
    "next_gaussian": GaussianCheckConfig(trials=1_000_000, margin=0.2),
    "next_int": BucketCheckConfig(trials=200_000, buckets=20, margin=0.06),
    "next_int_below": BucketCheckConfig(trials=200_000, buckets=20, margin=0.06),
    "next_int_between": RangeCheckConfig(trials=200_000, low=100, high=119, margin=0.06),
    "next_long": BucketCheckConfig(trials=200_000, buckets=20, margin=0.06),
    "set_seed": SeedCheckConfig(repetitions=20),
}


class BatteryConfig(BaseModel):
    """Sample sizes, bucket counts and margins for the full check battery.

    Field names match the check names reported by the validator. Setting
    ``preset="quick"`` swaps in reduced sample sizes for every check that was
    not given explicitly.
    """

    model_config = ConfigDict(extra="forbid")

    preset: Literal["quick", "full"] | None = Field(
        default=None, description="Named sample-size preset"
    )
    seed: int | None = Field(
        default=None, description="Battery seed; drawn from system entropy when unset"
    )
    chunk_size: int = Field(
        default=1_000_000, ge=1, description="Maximum draws held in memory at once"
    )
    next_boolean: BalanceCheckConfig = Field(default_factory=BalanceCheckConfig)
    next_bytes: ByteRunCheckConfig = Field(default_factory=ByteRunCheckConfig)
    next_double: BucketCheckConfig = Field(
        default_factory=lambda: _full_uniform(20_000_000, 1000, 0.03)
    )
    next_float: BucketCheckConfig = Field(
        default_factory=lambda: _full_uniform(20_000_000, 500, 0.03)
    )
    next_gaussian: GaussianCheckConfig = Field(default_factory=GaussianCheckConfig)
    next_int: BucketCheckConfig = Field(
        default_factory=lambda: _full_uniform(10_000_000, 500, 0.04)
    )
    next_int_below: BucketCheckConfig = Field(
        default_factory=lambda: _full_uniform(10_000_000, 500, 0.04)
    )
    next_int_between: RangeCheckConfig = Field(default_factory=RangeCheckConfig)
    next_long: BucketCheckConfig = Field(
        default_factory=lambda: _full_uniform(10_000_000, 500, 0.04)
    )
    set_seed: SeedCheckConfig = Field(default_factory=SeedCheckConfig)

    @model_validator(mode="after")
    def _apply_preset(self) -> BatteryConfig:
        if self.preset == "quick":
            for name, override in QUICK_OVERRIDES.items():
                if name not in self.model_fields_set:
                    setattr(self, name, override.model_copy())
        return self


class LoggingConfig(BaseModel):
    """Structured logging settings."""

    model_config = ConfigDict(extra="forbid")

    level: str = "WARNING"
    format: Literal["console", "json"] = "console"
