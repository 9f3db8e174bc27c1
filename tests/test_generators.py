"""tests/test_generators.py — source signals and segmented_linear."""

from __future__ import annotations

import pytest

from CTSE.errors import InvalidSpec
from CTSE.SGM.generators import (
    constant, linear, null_sound, segmented_linear, silence, sinusoid, square_wave,
)
from CTSE.SGM.signal import channel_count, sample

# ---------------------------------------------------------------------------
# Silence / constants
# ---------------------------------------------------------------------------


class TestSilence:

    def test_stereo_silence_inside_and_outside(self) -> None:
        s = silence(2.0, 2)
        assert s.duration == 2.0
        assert sample(s, 1.0) == (0.0, 0.0)
        assert sample(s, 3.0) == (0.0, 0.0)

    def test_default_is_mono(self) -> None:
        assert channel_count(silence(1.0)) == 1

    def test_null_sound(self) -> None:
        s = null_sound()
        assert s.duration == 0.0
        assert channel_count(s) == 1
        assert sample(s, 0.0) == (0.0,)

    def test_constant(self) -> None:
        s = constant(1.0, 0.25, 3)
        assert sample(s, 0.5) == (0.25, 0.25, 0.25)


# ---------------------------------------------------------------------------
# linear
# ---------------------------------------------------------------------------


class TestLinear:

    def test_endpoints_and_midpoint(self) -> None:
        s = linear(2.0, 1.0, -1.0)
        assert sample(s, 0.0) == (1.0,)
        assert sample(s, 1.0) == pytest.approx((0.0,))
        assert sample(s, 2.0) == pytest.approx((-1.0,))

    def test_multichannel(self) -> None:
        s = linear(1.0, 0.0, 1.0, 2)
        assert sample(s, 0.5) == pytest.approx((0.5, 0.5))

    def test_zero_duration_holds_start(self) -> None:
        s = linear(0.0, 0.3, 0.9)
        assert s.duration == 0.0
        assert sample(s, 0.0) == (0.3,)


# ---------------------------------------------------------------------------
# Test tones
# ---------------------------------------------------------------------------


class TestTones:

    def test_sinusoid_peaks(self) -> None:
        s = sinusoid(1.0, 1.0)
        assert sample(s, 0.0) == pytest.approx((0.0,), abs=1e-12)
        assert sample(s, 0.25) == pytest.approx((1.0,))
        assert sample(s, 0.75) == pytest.approx((-1.0,))

    def test_square_wave_toggles(self) -> None:
        s = square_wave(1.0, 2.0)
        assert sample(s, 0.1) == (1.0,)
        assert sample(s, 0.3) == (-1.0,)
        assert sample(s, 0.6) == (1.0,)


# ---------------------------------------------------------------------------
# segmented_linear
# ---------------------------------------------------------------------------


class TestSegmentedLinear:

    def test_three_segment_envelope(self) -> None:
        s = segmented_linear(1.0, 30, 0.0, 10, 0.0, 0.5, 1.0)
        assert s.duration == pytest.approx(40.5)
        assert channel_count(s) == 1

    def test_envelope_values(self) -> None:
        s = segmented_linear(1.0, 30, 0.0, 10, 0.0, 0.5, 1.0)
        assert sample(s, 0.0) == (1.0,)
        assert sample(s, 15.0) == pytest.approx((0.5,))
        assert sample(s, 30.0) == pytest.approx((0.0,))
        assert sample(s, 35.0) == pytest.approx((0.0,))
        assert sample(s, 40.25) == pytest.approx((0.5,))
        assert sample(s, 40.5) == pytest.approx((1.0,))

    def test_two_segments(self) -> None:
        s = segmented_linear(0.0, 1, 1.0, 1, 0.0)
        assert s.duration == 2.0
        assert sample(s, 1.5) == pytest.approx((0.5,))

    @pytest.mark.parametrize("spec", [(), (1.0,), (1.0, 2, 0.0), (1.0, 2, 0.0, 3)])
    def test_malformed_spec_rejected(self, spec) -> None:
        with pytest.raises(InvalidSpec):
            segmented_linear(*spec)

    def test_invalid_spec_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            segmented_linear(1.0, 2.0, 3.0, 4.0)
