import random

import pytest

from vision_batch.pacing import FixedPacing, PacingPolicy, UniformPacing


def test_policies_implement_abc():
    assert issubclass(UniformPacing, PacingPolicy)
    assert issubclass(FixedPacing, PacingPolicy)


def test_uniform_default_range_is_one_to_two_seconds():
    pacing = UniformPacing(rng=random.Random(7))

    delays = [pacing.delay() for _ in range(500)]

    assert all(1.0 <= d <= 2.0 for d in delays)


def test_uniform_range_is_inclusive():
    pacing = UniformPacing(10, 11, rng=random.Random(0))

    delays = {pacing.delay() for _ in range(200)}

    assert delays == {0.010, 0.011}


def test_uniform_degenerate_range():
    assert UniformPacing(250, 250).delay() == 0.25


@pytest.mark.parametrize("lo,hi", [(2000, 1000), (-1, 10)])
def test_uniform_rejects_invalid_range(lo, hi):
    with pytest.raises(ValueError):
        UniformPacing(lo, hi)


def test_fixed_pacing():
    assert FixedPacing(1500).delay() == 1.5
    assert FixedPacing().delay() == 0


def test_fixed_pacing_rejects_negative():
    with pytest.raises(ValueError):
        FixedPacing(-5)
