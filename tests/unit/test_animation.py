"""Unit tests for Animator, tweens and ResourcePool."""

import numpy as np
import pytest

from scisim.core.animation import Animator, Easing
from scisim.core.pool import ResourcePool


class TestEasing:
    """Tests for the easing curves."""

    @pytest.mark.parametrize("easing", list(Easing))
    def test_endpoints(self, easing):
        assert np.isclose(easing(0.0), 0.0)
        assert np.isclose(easing(1.0), 1.0)

    def test_power2_in_out_midpoint(self):
        assert np.isclose(Easing.POWER2_IN_OUT(0.5), 0.5)
        assert Easing.POWER2_IN_OUT(0.25) < 0.25

    def test_back_out_overshoots(self):
        assert max(Easing.BACK_OUT(p) for p in np.linspace(0, 1, 101)) > 1.0

    def test_progress_clamped(self):
        assert Easing.LINEAR(2.0) == 1.0
        assert Easing.LINEAR(-1.0) == 0.0


class TestAnimator:
    """Tests for Animator."""

    def test_tween_ends_exactly_at_end(self):
        animator = Animator()
        values = []
        animator.tween(0.0, 10.0, 0.1, values.append)
        for _ in range(20):
            animator.advance(0.016)
        assert values[0] == 0.0
        assert values[-1] == 10.0
        assert values == sorted(values)
        assert animator.pending == 0

    def test_tween_arrays(self):
        animator = Animator()
        values = []
        animator.tween(np.zeros(2), np.array([1.0, 2.0]), 0.05, values.append)
        for _ in range(10):
            animator.advance(0.016)
        assert np.allclose(values[-1], [1.0, 2.0])

    def test_on_complete(self):
        animator = Animator()
        done = []
        animator.tween(0.0, 1.0, 0.02, lambda v: None, on_complete=lambda: done.append(True))
        animator.advance(0.016)
        assert done == []
        animator.advance(0.016)
        assert done == [True]

    def test_zero_duration_jumps_to_end(self):
        animator = Animator()
        values = []
        animator.tween(0.0, 5.0, 0.0, values.append)
        assert values == [5.0]
        assert animator.pending == 0

    def test_delay(self):
        animator = Animator()
        values = []
        animator.tween(0.0, 1.0, 0.1, values.append, delay=0.05)
        animator.advance(0.016)
        animator.advance(0.016)
        assert values == []
        for _ in range(20):
            animator.advance(0.016)
        assert values[-1] == 1.0

    def test_call_later(self):
        animator = Animator()
        fired = []
        animator.call_later(0.1, lambda: fired.append(True))
        for _ in range(6):
            animator.advance(0.016)
        assert fired == []
        animator.advance(0.016)
        assert fired == [True]

    def test_cancel(self):
        animator = Animator()
        fired = []
        task = animator.call_later(0.01, lambda: fired.append(True))
        animator.cancel(task)
        animator.advance(0.1)
        assert fired == []
        assert animator.pending == 0

    def test_cancel_all(self):
        animator = Animator()
        values = []
        animator.tween(0.0, 1.0, 1.0, values.append)
        animator.call_later(0.5, lambda: values.append(-1))
        assert animator.pending == 2
        animator.cancel_all()
        animator.advance(2.0)
        assert animator.pending == 0
        assert values == [0.0]


class TestResourcePool:
    """Tests for ResourcePool."""

    def test_reuse_within_bucket(self):
        pool = ResourcePool(lambda size: {"size": size}, bucket_size=0.1)
        first = pool.acquire(0.60)
        pool.release(first)
        second = pool.acquire(0.62)
        assert second == first
        assert pool.created == 1
        assert pool.reused == 1

    def test_different_bucket_creates(self):
        pool = ResourcePool(lambda size: object(), bucket_size=0.1)
        handle = pool.acquire(0.4)
        pool.release(handle)
        other = pool.acquire(1.8)
        assert other != handle
        assert pool.created == 2
        assert pool.free_count == 1

    def test_double_release_rejected(self):
        pool = ResourcePool(lambda size: object())
        handle = pool.acquire(1.0)
        pool.release(handle)
        with pytest.raises(ValueError, match="not owned"):
            pool.release(handle)

    def test_get_released_handle_rejected(self):
        pool = ResourcePool(lambda size: object())
        handle = pool.acquire(1.0)
        pool.release(handle)
        with pytest.raises(ValueError):
            pool.get(handle)

    def test_ownership_counts(self):
        pool = ResourcePool(lambda size: object())
        handles = [pool.acquire(0.5) for _ in range(3)]
        pool.release(handles[1])
        assert pool.owned == 2
        assert pool.free_count == 1
        assert len(pool) == 3
        assert len(pool.free_items()) == 1

    def test_invalid_bucket_size(self):
        with pytest.raises(ValueError, match="bucket_size"):
            ResourcePool(lambda size: object(), bucket_size=0)
