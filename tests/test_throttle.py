"""Tests for the fixed-delay throttle."""

from unittest.mock import MagicMock

from codenarrator.generators.throttle import FixedDelayThrottle


class TestFixedDelayThrottle:
    """Tests for FixedDelayThrottle."""

    def test_default_delay(self) -> None:
        assert FixedDelayThrottle().delay == 0.5

    def test_wait_sleeps_delay(self) -> None:
        sleep = MagicMock()
        FixedDelayThrottle(0.5, sleep=sleep).wait()
        sleep.assert_called_once_with(0.5)

    def test_zero_delay_does_not_sleep(self) -> None:
        sleep = MagicMock()
        FixedDelayThrottle(0, sleep=sleep).wait()
        sleep.assert_not_called()

    def test_negative_delay_clamped(self) -> None:
        assert FixedDelayThrottle(-1).delay == 0.0
