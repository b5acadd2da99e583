"""Tests for the injectable clocks."""

from datetime import datetime, timedelta, timezone

import pytest

from billing_kernel.domain.clock import Clock, DeterministicClock, SystemClock


class TestDeterministicClock:
    def test_default_time(self):
        assert DeterministicClock().now() == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_now_is_stable(self, deterministic_clock):
        assert deterministic_clock.now() == deterministic_clock.now()

    def test_advance(self, deterministic_clock, now):
        result = deterministic_clock.advance(days=31, seconds=60)

        assert result == now + timedelta(days=31, seconds=60)
        assert deterministic_clock.now() == result

    def test_set_time_resets_offset(self, deterministic_clock):
        target = datetime(2025, 3, 1, tzinfo=timezone.utc)
        deterministic_clock.advance(days=5)

        deterministic_clock.set_time(target)

        assert deterministic_clock.now() == target


class TestSystemClock:
    def test_is_timezone_aware(self):
        assert SystemClock().now().tzinfo is not None

    def test_clock_is_abstract(self):
        with pytest.raises(TypeError):
            Clock()
