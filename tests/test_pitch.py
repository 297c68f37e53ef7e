# tests/test_pitch.py
"""Tests for hand position to pitch mapping."""

from datetime import datetime

import pytest

from pitch import (
    HandState,
    compute_hand_frequency,
    format_frequency,
    fraction_to_frequency,
    hand_angle,
    hand_fraction,
    note_frequency,
    note_label,
    note_octave,
    parse_octave,
    quantize_to_note_name,
)


class TestNoteFrequency:
    """Equal-tempered note frequencies."""

    def test_reference_pitch(self):
        assert note_frequency("A", 4) == pytest.approx(440.0)

    def test_middle_c(self):
        assert note_frequency("C", 4) == pytest.approx(261.6256, rel=1e-6)

    def test_octave_doubles(self):
        assert note_frequency("C", 4) == pytest.approx(2 * note_frequency("C", 3))


class TestHandFraction:
    """Continuous hand positions including carry from smaller units."""

    def test_hour_hand_wraps_every_twelve_hours(self):
        assert hand_fraction("hour", datetime(2024, 1, 1, 3, 0, 0)) == pytest.approx(0.25)
        assert hand_fraction("hour", datetime(2024, 1, 1, 15, 0, 0)) == pytest.approx(0.25)

    def test_hour_hand_includes_minutes(self):
        assert hand_fraction("hour", datetime(2024, 1, 1, 6, 30, 0)) == pytest.approx(6.5 / 12)

    def test_minute_hand_includes_seconds(self):
        assert hand_fraction("minute", datetime(2024, 1, 1, 12, 30, 30)) == pytest.approx(30.5 / 60)

    def test_second_hand_includes_milliseconds(self):
        instant = datetime(2024, 1, 1, 0, 0, 15, 500000)
        assert hand_fraction("second", instant) == pytest.approx(15.5 / 60)

    def test_unknown_hand(self):
        with pytest.raises(ValueError, match="Unknown hand"):
            hand_fraction("century", datetime(2024, 1, 1))

    def test_hand_angle(self):
        assert hand_angle("minute", datetime(2024, 1, 1, 12, 15, 0)) == pytest.approx(90.0)


class TestHandFrequency:
    """One octave per full turn, continuously."""

    def test_fraction_zero_is_base(self):
        assert fraction_to_frequency(0.0, 3) == pytest.approx(note_frequency("C", 3))

    def test_full_turn_is_one_octave_up(self):
        assert fraction_to_frequency(1.0, 3) == pytest.approx(2 * note_frequency("C", 3))

    def test_monotonic_within_cycle(self):
        freqs = [fraction_to_frequency(i / 1000, 4) for i in range(1000)]
        assert all(a < b for a, b in zip(freqs, freqs[1:]))

    def test_not_stepped(self):
        a = fraction_to_frequency(0.1000, 4)
        b = fraction_to_frequency(0.1001, 4)
        assert a != b

    def test_noon_hour_hand_is_c(self):
        freq = compute_hand_frequency("hour", datetime(2024, 1, 1, 12, 0, 0), 3)
        assert freq == pytest.approx(130.8128, rel=1e-6)

    def test_half_minute_is_tritone_above(self):
        freq = compute_hand_frequency("second", datetime(2024, 1, 1, 12, 0, 30), 4)
        assert freq == pytest.approx(note_frequency("F#", 4))


class TestQuantize:
    """Nearest note names."""

    def test_reference_note(self):
        assert quantize_to_note_name(440.0) == "A"
        assert note_octave(440.0) == 4

    def test_zero_is_no_note(self):
        assert quantize_to_note_name(0) is None
        assert note_octave(0) is None
        assert note_label(0) == "-"

    def test_rounds_to_nearest_semitone(self):
        assert quantize_to_note_name(445.0) == "A"
        assert quantize_to_note_name(note_frequency("A#", 4) * 0.99) == "A#"

    def test_half_semitone_rounds_up(self):
        half_past = datetime(2024, 1, 1, 0, 0, 2, 500000)
        assert quantize_to_note_name(compute_hand_frequency("second", half_past, 0)) == "C#"
        half_past = datetime(2024, 1, 1, 0, 0, 12, 500000)
        assert quantize_to_note_name(compute_hand_frequency("second", half_past, 0)) == "D#"
        half_past = datetime(2024, 1, 1, 0, 0, 22, 500000)
        assert quantize_to_note_name(compute_hand_frequency("second", half_past, 0)) == "F"

    def test_note_label(self):
        assert note_label(261.63) == "C4"
        assert note_label(note_frequency("G", 3)) == "G3"

    def test_format_frequency(self):
        assert format_frequency(261.6256) == " 261.63 Hz"


class TestParseOctave:
    """User octave input with fallback."""

    @pytest.mark.parametrize(
        "value, default, expected",
        [("5", 3, 5), (2, 3, 2), ("abc", 3, 3), (None, 4, 4), ("", 4, 4), ("12", 3, 8), ("-1", 3, 0), ("0", 3, 0)],
    )
    def test_parse_octave(self, value, default, expected):
        assert parse_octave(value, default) == expected

    def test_hand_state_defaults(self):
        hand = HandState.default("minute")
        assert hand.octave == 4
        assert hand.frequency == 0.0
