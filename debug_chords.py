#!/usr/bin/env python3
"""Debug script to see which tones and chord a given time of day produces."""

import argparse
from datetime import datetime

from chords import CHORD_TABLE, detect_chord, mask_to_notes
from pitch import compute_hand_frequency, hand_angle, note_label, parse_octave
from config import HANDS, DEFAULT_OCTAVES


def main():
    parser = argparse.ArgumentParser(description="Show the hand → note mapping for a time")
    parser.add_argument("time", nargs="?", help="HH:MM:SS (default: now)")
    parser.add_argument("--octaves", nargs=3, metavar=("H", "M", "S"), help="Base octave per hand")
    parser.add_argument("--table", action="store_true", help="Also print the chord table")
    args = parser.parse_args()

    instant = datetime.now()
    if args.time:
        parsed = datetime.strptime(args.time, "%H:%M:%S")
        instant = instant.replace(hour=parsed.hour, minute=parsed.minute, second=parsed.second, microsecond=0)

    octaves = args.octaves or [DEFAULT_OCTAVES[h] for h in HANDS]

    print("=" * 60)
    print(f"CLOCK -> MUSIC MAPPING at {instant:%H:%M:%S}")
    print("=" * 60)

    print(f"\n{'Hand':<10} {'Angle':<9} {'Octave':<8} {'Freq Hz':<10} {'Note'}")
    print("-" * 60)

    frequencies = []
    for hand, raw_octave in zip(HANDS, octaves):
        octave = parse_octave(raw_octave, DEFAULT_OCTAVES[hand])
        freq = compute_hand_frequency(hand, instant, octave)
        frequencies.append(freq)
        print(f"{hand:<10} {hand_angle(hand, instant):<9.1f} {octave:<8} {freq:<10.2f} {note_label(freq)}")

    print(f"\nChord: {detect_chord(frequencies)}")

    if args.table:
        print(f"\n{'Notes':<14} Chord")
        print("-" * 30)
        for mask, name in sorted(CHORD_TABLE.items(), key=lambda item: item[1]):
            print(f"{','.join(mask_to_notes(mask)):<14} {name}")


if __name__ == "__main__":
    main()
