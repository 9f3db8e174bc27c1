"""tests/test_combinators.py — duration/channel laws and sample-level formulas."""

from __future__ import annotations

import pytest

from CTSE.errors import ChannelMismatch, InvalidSignal, UnsupportedChannelCount
from CTSE.SGM.combinators import (
    append, fade_in, fade_out, gain, mix, multiplex, multiply, pan,
    timeshift, to_stereo, trim,
)
from CTSE.SGM.generators import constant, linear, silence, sinusoid
from CTSE.SGM.signal import channel_count, make_signal, sample


def _stereo(left: float, right: float, d: float = 1.0):
    return make_signal(d, lambda t: (left, right))


# ---------------------------------------------------------------------------
# Channel layout
# ---------------------------------------------------------------------------


class TestMultiplex:

    def test_every_channel_equals_source(self) -> None:
        mono = sinusoid(1.0, 3.0)
        s = multiplex(mono, 2)
        assert channel_count(s) == 2
        assert s.duration == mono.duration
        for t in (0.0, 0.1, 0.37, 0.9, 1.0):
            (m,) = sample(mono, t)
            assert sample(s, t) == (m, m)

    def test_single_channel_is_identity(self) -> None:
        mono = silence(1.0)
        assert multiplex(mono, 1) is mono

    def test_requires_mono(self) -> None:
        with pytest.raises(ChannelMismatch):
            multiplex(silence(1.0, 2), 3)


class TestToStereo:

    def test_mono_is_duplicated(self) -> None:
        s = to_stereo(constant(1.0, 0.5))
        assert sample(s, 0.5) == (0.5, 0.5)

    def test_stereo_passes_through(self) -> None:
        st = _stereo(0.1, 0.2)
        assert to_stereo(st) is st

    def test_more_channels_rejected(self) -> None:
        with pytest.raises(UnsupportedChannelCount):
            to_stereo(silence(1.0, 3))


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


class TestMix:

    def test_duration_is_longest(self) -> None:
        s = mix(sinusoid(1.0, 1.0), sinusoid(2.0, 1.0))
        assert s.duration == 2.0

    def test_shorter_input_contributes_silence_past_its_end(self) -> None:
        second = sinusoid(2.0, 1.0)
        s = mix(sinusoid(1.0, 1.0), second)
        assert sample(s, 1.5) == sample(second, 1.5)

    def test_sum_inside_overlap(self) -> None:
        s = mix(constant(1.0, 0.25, 2), constant(1.0, 0.5, 2))
        assert sample(s, 0.5) == (0.75, 0.75)

    def test_channel_mismatch(self) -> None:
        with pytest.raises(ChannelMismatch):
            mix(silence(1.0, 1), silence(1.0, 2))


class TestMultiply:

    def test_duration_is_shortest(self) -> None:
        assert multiply(silence(1.0), silence(3.0)).duration == 1.0

    def test_product(self) -> None:
        s = multiply(constant(1.0, 0.5), linear(1.0, 0.0, 1.0))
        assert sample(s, 0.5) == pytest.approx((0.25,))

    def test_channel_mismatch(self) -> None:
        with pytest.raises(ChannelMismatch):
            multiply(silence(1.0, 2), silence(1.0, 1))


class TestGain:

    def test_scales_every_channel(self) -> None:
        s = gain(_stereo(0.5, -0.25), 2.0)
        assert sample(s, 0.5) == (1.0, -0.5)

    def test_amplitudes_not_clamped(self) -> None:
        assert sample(gain(constant(1.0, 0.9), 3.0), 0.0) == pytest.approx((2.7,))


class TestPan:

    @pytest.mark.parametrize("amount, expected", [
        (0.0, (0.2, 0.8)),
        (0.5, (0.5, 0.5)),
        (1.0, (0.8, 0.2)),
    ])
    def test_cross_fade(self, amount, expected) -> None:
        s = pan(_stereo(0.2, 0.8), amount)
        assert sample(s, 0.5) == pytest.approx(expected)

    def test_requires_stereo(self) -> None:
        with pytest.raises(ChannelMismatch):
            pan(silence(1.0), 0.5)

    def test_duration_preserved(self) -> None:
        assert pan(_stereo(0.0, 0.0, 2.5), 0.3).duration == 2.5


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


class TestTrim:

    def test_duration_and_offset(self) -> None:
        src = linear(10.0, 0.0, 10.0)
        s = trim(src, 2.0, 5.0)
        assert s.duration == 3.0
        for t in (0.0, 1.0, 3.0):
            assert sample(s, t) == pytest.approx(sample(src, t + 2.0))

    def test_past_end_of_source_is_silent(self) -> None:
        s = trim(constant(1.0, 1.0), 0.5, 2.0)
        assert sample(s, 1.0) == (0.0,)

    def test_reversed_range_rejected(self) -> None:
        with pytest.raises(InvalidSignal):
            trim(silence(5.0), 3.0, 1.0)


class TestAppend:

    def test_duration_is_sum(self) -> None:
        assert append(silence(1.5), silence(2.0)).duration == 3.5

    def test_boundary_belongs_to_first(self) -> None:
        s = append(constant(1.0, 0.25), constant(1.0, 0.75))
        assert sample(s, 0.5) == (0.25,)
        assert sample(s, 1.0) == (0.25,)
        assert sample(s, 1.5) == (0.75,)

    def test_channel_mismatch(self) -> None:
        with pytest.raises(ChannelMismatch):
            append(silence(1.0, 2), silence(1.0, 1))


class TestTimeshift:

    def test_prepends_silence(self) -> None:
        s = timeshift(constant(1.0, 0.5, 2), 2.0)
        assert s.duration == 3.0
        assert channel_count(s) == 2
        assert sample(s, 1.0) == (0.0, 0.0)
        assert sample(s, 2.5) == (0.5, 0.5)


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class TestFades:

    def test_fade_in_ramps_from_silence(self) -> None:
        s = fade_in(constant(4.0, 1.0, 2), 2.0)
        assert s.duration == 4.0
        assert sample(s, 0.0) == (0.0, 0.0)
        assert sample(s, 1.0) == pytest.approx((0.5, 0.5))
        assert sample(s, 3.0) == (1.0, 1.0)

    def test_fade_out_ramps_to_silence(self) -> None:
        s = fade_out(constant(4.0, 1.0), 2.0)
        assert sample(s, 1.0) == (1.0,)
        assert sample(s, 3.0) == pytest.approx((0.5,))
        assert sample(s, 4.0) == pytest.approx((0.0,))

    def test_fade_longer_than_signal_is_clamped(self) -> None:
        s = fade_in(constant(1.0, 1.0), 5.0)
        assert s.duration == 1.0
        assert sample(s, 0.5) == pytest.approx((0.5,))
