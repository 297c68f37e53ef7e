"""Maps clock hand positions to musical pitch."""

from dataclasses import dataclass
from datetime import datetime
from math import floor, log2
from typing import Optional

from config import (
    DEFAULT_GAINS,
    DEFAULT_OCTAVES,
    NOTES,
    OCTAVE_RANGE,
    REFERENCE_MIDI,
    REFERENCE_PITCH,
)


@dataclass
class HandState:
    """Pitch state of a single clock hand."""

    name: str  # hour/minute/second
    octave: int
    gain: float  # 0.0 - 1.0
    fraction: float = 0.0  # progress through one full turn, 0.0 - 1.0
    frequency: float = 0.0  # Hz, 0 until the first frame

    @classmethod
    def default(cls, name: str) -> "HandState":
        return cls(name=name, octave=DEFAULT_OCTAVES[name], gain=DEFAULT_GAINS[name])


def note_frequency(note: str, octave: int) -> float:
    """Equal-tempered frequency of a named note, A4 = 440 Hz."""
    note_idx = NOTES.index(note)
    half_steps = (note_idx - 9) + (octave - 4) * 12
    return REFERENCE_PITCH * (2 ** (half_steps / 12))


def hand_fraction(hand: str, instant: datetime) -> float:
    """Fractional progress of a hand through its cycle, including carry
    from the smaller units (12h for the hour hand, 60 min / 60 s otherwise).
    """
    h = instant.hour
    m = instant.minute
    s = instant.second
    ms = instant.microsecond / 1000

    if hand == "hour":
        return (h % 12 + m / 60 + s / 3600 + ms / 3600000) / 12
    elif hand == "minute":
        return (m + s / 60 + ms / 60000) / 60
    elif hand == "second":
        return (s + ms / 1000) / 60
    raise ValueError(f"Unknown hand: {hand}")


def hand_angle(hand: str, instant: datetime) -> float:
    """Angle of the hand in degrees, clockwise from 12."""
    return hand_fraction(hand, instant) * 360


def fraction_to_frequency(fraction: float, octave: int) -> float:
    """One full turn sweeps one octave up from C in the given octave."""
    semitones = fraction * 12
    return note_frequency("C", octave) * (2 ** (semitones / 12))


def compute_hand_frequency(hand: str, instant: datetime, octave: int) -> float:
    """Continuous frequency for a hand at the given instant."""
    return fraction_to_frequency(hand_fraction(hand, instant), octave)


def parse_octave(value, default: int) -> int:
    """Parse a user-supplied octave, falling back to default when the
    value is missing or not a number.
    """
    try:
        octave = int(value)
    except (TypeError, ValueError):
        return default
    low, high = OCTAVE_RANGE
    return max(low, min(high, octave))


def frequency_to_midi(freq: float) -> Optional[int]:
    """Nearest MIDI note number, or None for a silent/unset frequency."""
    if freq <= 0:
        return None
    # Ties between semitones round up
    return int(floor(REFERENCE_MIDI + 12 * log2(freq / REFERENCE_PITCH) + 0.5))


def quantize_to_note_name(freq: float) -> Optional[str]:
    """Nearest chromatic note name (pitch class), None for no note."""
    midi = frequency_to_midi(freq)
    if midi is None:
        return None
    return NOTES[midi % 12]


def note_octave(freq: float) -> Optional[int]:
    midi = frequency_to_midi(freq)
    if midi is None:
        return None
    return midi // 12 - 1


def note_label(freq: float) -> str:
    """Convert frequency to note name with octave, e.g. A4."""
    midi = frequency_to_midi(freq)
    if midi is None:
        return "-"
    return f"{NOTES[midi % 12]}{midi // 12 - 1}"


def format_frequency(freq: float) -> str:
    return f"{freq:7.2f} Hz"
