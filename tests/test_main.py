"""Tests for main module."""

import pytest

from main import should_log


class TestShouldLog:
    """Tests for the frame-loop log throttle."""

    def test_zero_throttle_disables_logging(self):
        """A throttle of 0 never logs and never divides by zero."""
        assert should_log(0, 0) is False
        assert should_log(600, 0) is False

    @pytest.mark.parametrize("frame, throttle", [(0, 600), (5, 5), (600, 600), (1200, 600)])
    def test_logs_on_throttle_multiples(self, frame, throttle):
        assert should_log(frame, throttle) is True

    @pytest.mark.parametrize("frame", [1, 7, 599, 601])
    def test_skips_other_frames(self, frame):
        assert should_log(frame, 600) is False
