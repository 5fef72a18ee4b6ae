"""Tests for the Random generator."""

from __future__ import annotations

import numpy as np
import pytest

from seedcheck.core.generator import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN, Random
from seedcheck.utils.exceptions import PreconditionViolation, SeedcheckError


def _draw_all(rng: Random) -> list[object]:
    """One call of every query operation, in a fixed order."""
    return [
        rng.next_boolean(),
        rng.next_bytes(8),
        rng.next_double(),
        rng.next_float(),
        rng.next_gaussian(),
        rng.next_int(),
        rng.next_int_below(1000),
        rng.next_int_between(-50, 50),
        rng.next_long(),
    ]


class TestReproducibility:
    def test_same_seed_same_sequence(self) -> None:
        a, b = Random(7), Random(7)
        assert [_draw_all(a) for _ in range(5)] == [_draw_all(b) for _ in range(5)]

    def test_different_seed_different_sequence(self) -> None:
        assert [Random(7).next_long() for _ in range(3)] != [
            Random(8).next_long() for _ in range(3)
        ]

    def test_set_seed_is_total_reset(self, rng: Random) -> None:
        rng.set_seed(5)
        baseline = [rng.next_int() for _ in range(10)]
        for perturbation in (0, 1, 17, 999):
            for _ in range(perturbation):
                rng.next_gaussian()
            rng.set_seed(5)
            assert [rng.next_int() for _ in range(10)] == baseline

    def test_set_seed_matches_new_instance(self, rng: Random) -> None:
        for _ in range(100):
            rng.next_double()
        rng.set_seed(5)
        assert _draw_all(rng) == _draw_all(Random(5))

    def test_seed_five_scenario(self) -> None:
        """Seed 5, record 10 ints, perturb 0-999 draws, reseed, compare; 100 times."""
        rng = Random(5)
        baseline = [rng.next_int() for _ in range(10)]
        mismatches = 0
        for _ in range(100):
            for _ in range(rng.next_int_below(1000)):
                rng.next_int()
            rng.set_seed(5)
            mismatches += sum(rng.next_int() != b for b in baseline)
        assert mismatches == 0

    def test_bytes_follow_seed(self) -> None:
        a = Random(9)
        b = Random(9)
        assert a.next_bytes(32) == b.next_bytes(32)
        a.set_seed(9)
        assert a.next_bytes(32) == Random(9).next_bytes(32)

    def test_negative_seed(self) -> None:
        assert Random(-3).next_long() == Random(-3).next_long()
        assert Random(-3).next_long() != Random(3).next_long()

    def test_scalar_and_batch_share_stream(self) -> None:
        batch = Random(3).next_double(size=5)
        rng = Random(3)
        np.testing.assert_array_equal(batch, [rng.next_double() for _ in range(5)])


class TestSeeding:
    def test_seed_property(self) -> None:
        assert Random(11).seed == 11

    def test_set_seed_updates_property(self, rng: Random) -> None:
        rng.set_seed(-12)
        assert rng.seed == -12

    def test_entropy_seed_recorded(self) -> None:
        rng = Random()
        replay = Random(rng.seed)
        assert rng.next_long() == replay.next_long()

    def test_from_entropy_instances_differ(self) -> None:
        assert Random.from_entropy().seed != Random.from_entropy().seed

    def test_reseed_from_entropy(self, rng: Random) -> None:
        new_seed = rng.reseed_from_entropy()
        assert rng.seed == new_seed
        assert new_seed != 42

    def test_non_integer_seed_rejected(self) -> None:
        with pytest.raises(PreconditionViolation):
            Random(1.5)  # type: ignore[arg-type]

    def test_repr(self) -> None:
        assert repr(Random(3)) == "Random(seed=3)"


class TestNextBoolean:
    def test_type(self, rng: Random) -> None:
        assert isinstance(rng.next_boolean(), bool)

    def test_balance(self, rng: Random) -> None:
        values = rng.next_boolean(size=100_000)
        assert values.dtype == bool
        assert abs(int(values.sum()) - 50_000) < 1_000


class TestBytes:
    def test_length_and_type(self, rng: Random) -> None:
        data = rng.next_bytes(100)
        assert isinstance(data, bytes)
        assert len(data) == 100

    def test_zero_count(self, rng: Random) -> None:
        assert rng.next_bytes(0) == b""

    def test_negative_count(self, rng: Random) -> None:
        with pytest.raises(PreconditionViolation):
            rng.next_bytes(-1)

    def test_covers_byte_range(self, rng: Random) -> None:
        assert len(set(rng.next_bytes(100_000))) == 256

    def test_fill_bytes_partial(self) -> None:
        buffer = bytearray(16)
        written = Random(4).fill_bytes(buffer, 8)
        assert written == 8
        assert bytes(buffer[:8]) == Random(4).next_bytes(8)
        assert bytes(buffer[8:]) == bytes(8)

    def test_fill_bytes_whole_buffer(self) -> None:
        buffer = np.zeros(32, dtype=np.uint8)
        assert Random(4).fill_bytes(buffer) == 32
        assert buffer.tobytes() == Random(4).next_bytes(32)

    def test_fill_bytes_over_capacity(self, rng: Random) -> None:
        with pytest.raises(PreconditionViolation):
            rng.fill_bytes(bytearray(4), 5)

    def test_fill_bytes_read_only(self, rng: Random) -> None:
        with pytest.raises(PreconditionViolation):
            rng.fill_bytes(b"\x00" * 4)

    def test_fresh_bytes_leaves_seeded_sequence(self) -> None:
        rng = Random(5)
        data = rng.fresh_bytes(16)
        assert len(data) == 16
        assert rng.seed != 5

    def test_fresh_bytes_negative_count(self, rng: Random) -> None:
        with pytest.raises(PreconditionViolation):
            rng.fresh_bytes(-1)
        assert rng.seed == 42


class TestUniformReals:
    def test_double_range(self, rng: Random) -> None:
        values = rng.next_double(size=100_000)
        assert values.min() >= 0.0
        assert values.max() < 1.0

    def test_double_scalar_type(self, rng: Random) -> None:
        assert isinstance(rng.next_double(), float)

    def test_float_range_and_precision(self, rng: Random) -> None:
        values = rng.next_float(size=100_000)
        assert values.dtype == np.float32
        assert values.min() >= 0.0
        assert values.max() < 1.0
        value = rng.next_float()
        assert isinstance(value, float)
        assert float(np.float32(value)) == value


class TestGaussian:
    def test_moments(self, rng: Random) -> None:
        values = rng.next_gaussian(size=200_000)
        assert abs(values.mean()) < 0.02
        assert abs(values.std() - 1.0) < 0.02

    def test_scalar_type(self, rng: Random) -> None:
        assert isinstance(rng.next_gaussian(), float)


class TestIntegers:
    def test_next_int_bounds(self, rng: Random) -> None:
        values = rng.next_int(size=100_000)
        assert values.dtype == np.int32
        assert values.min() >= INT_MIN
        assert values.max() <= INT_MAX
        assert values.min() < 0 < values.max()

    def test_next_int_scalar_type(self, rng: Random) -> None:
        assert isinstance(rng.next_int(), int)

    def test_next_long_spans_64_bits(self, rng: Random) -> None:
        values = [rng.next_long() for _ in range(1000)]
        assert all(LONG_MIN <= v <= LONG_MAX for v in values)
        assert any(abs(v) > 2**32 for v in values)

    def test_next_int_below_exclusive(self, rng: Random) -> None:
        values = rng.next_int_below(5, size=10_000)
        assert set(values.tolist()) == {0, 1, 2, 3, 4}

    def test_next_int_below_one(self, rng: Random) -> None:
        assert all(rng.next_int_below(1) == 0 for _ in range(100))

    def test_next_int_between_inclusive(self, rng: Random) -> None:
        values = rng.next_int_between(-3, 3, size=10_000)
        assert values.min() == -3
        assert values.max() == 3

    def test_next_int_between_single_value(self, rng: Random) -> None:
        assert rng.next_int_between(5, 5) == 5

    def test_next_int_between_full_long_range(self, rng: Random) -> None:
        value = rng.next_int_between(LONG_MIN, LONG_MAX)
        assert LONG_MIN <= value <= LONG_MAX


class TestPreconditions:
    @pytest.mark.parametrize("n", [0, -1, -(2**40)])
    def test_next_int_below_rejects_small_n(self, rng: Random, n: int) -> None:
        with pytest.raises(PreconditionViolation):
            rng.next_int_below(n)

    def test_next_int_below_rejects_huge_n(self, rng: Random) -> None:
        with pytest.raises(PreconditionViolation):
            rng.next_int_below(2**63)

    def test_next_int_below_rejects_float(self, rng: Random) -> None:
        with pytest.raises(PreconditionViolation):
            rng.next_int_below(2.5)  # type: ignore[arg-type]

    def test_next_int_between_rejects_inverted_bounds(self, rng: Random) -> None:
        with pytest.raises(PreconditionViolation):
            rng.next_int_between(10, 5)

    def test_is_value_error(self, rng: Random) -> None:
        with pytest.raises(ValueError):
            rng.next_int_between(1, 0)

    def test_distinct_from_base_error(self) -> None:
        assert issubclass(PreconditionViolation, SeedcheckError)

    def test_state_untouched_by_rejected_call(self) -> None:
        rng = Random(21)
        with pytest.raises(PreconditionViolation):
            rng.next_int_below(0)
        assert rng.next_long() == Random(21).next_long()
