"""Triad recognition over the notes sounded by the clock hands."""

from typing import Iterable, Optional

from config import CHORD_MIN_NOTES, CHORD_PLACEHOLDER, NOTES, TRIAD_FORMULAS
from pitch import frequency_to_midi


def pitch_class_set(pitch_classes: Iterable[int]) -> int:
    """12-bit mask with one bit per pitch class (bit 0 = C)."""
    mask = 0
    for pc in pitch_classes:
        mask |= 1 << (pc % 12)
    return mask


def mask_to_notes(mask: int) -> list[str]:
    """Note names in a pitch-class mask, in C..B order."""
    return [NOTES[pc] for pc in range(12) if mask & (1 << pc)]


def build_chord_table() -> dict[int, str]:
    """Every major and minor triad, keyed by pitch-class mask."""
    table = {}
    for root, root_name in enumerate(NOTES):
        for quality, intervals in TRIAD_FORMULAS.items():
            mask = pitch_class_set(root + i for i in intervals)
            table[mask] = f"{root_name} {quality}"
    return table


CHORD_TABLE = build_chord_table()


def frequencies_to_mask(frequencies: Iterable[float]) -> int:
    """Quantize frequencies to pitch classes; silent entries are skipped."""
    pitch_classes = []
    for freq in frequencies:
        midi = frequency_to_midi(freq)
        if midi is not None:
            pitch_classes.append(midi % 12)
    return pitch_class_set(pitch_classes)


def lookup_chord(mask: int, min_notes: int = CHORD_MIN_NOTES) -> Optional[str]:
    if bin(mask).count("1") < min_notes:
        return None
    return CHORD_TABLE.get(mask)


def detect_chord(frequencies: Iterable[float], min_notes: int = CHORD_MIN_NOTES) -> str:
    """Name the chord formed by the given frequencies.

    Unisons across hands count once. Returns the placeholder when there are
    fewer than min_notes distinct notes or no triad matches.
    """
    chord = lookup_chord(frequencies_to_mask(frequencies), min_notes)
    return chord if chord is not None else CHORD_PLACEHOLDER
