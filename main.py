#!/usr/bin/env python3
"""Harmonic Clock - an analog clock whose hands play three continuous tones."""

import time
import argparse
import logging
import select
import sys

from controls import apply_command, CommandError, QuitRequested, HELP
from oscilloscope import render_trace
from pitch import note_label, format_frequency
from session import Session
from config import FRAME_RATE, HANDS, WAVEFORMS, DEFAULT_OCTAVES, DEFAULT_GAINS, SCOPE_WIDTH

logger = logging.getLogger(__name__)

# Display width (inner content width, total box width = WIDTH + 2 for borders)
WIDTH = SCOPE_WIDTH + 2


def box_line(content: str) -> str:
    """Format a line inside a box with proper padding. Total width = WIDTH + 2."""
    return f"│ {content:<{WIDTH-1}}│"


def box_top(title: str) -> str:
    """Format top border with title. Total width = WIDTH + 2."""
    padding = WIDTH - len(title) - 1
    return f"┌─{title}{'─' * padding}┐"


def box_bottom() -> str:
    return "└" + "─" * WIDTH + "┘"


def box_separator() -> str:
    return "│" + "-" * WIDTH + "│"


def print_status(session: Session, message: str = ""):
    """Print clock, pitches, chord and oscilloscope to the terminal."""
    print("\033[H\033[J", end="")  # Clear screen

    clock = session.clock
    total_width = WIDTH + 2
    print("=" * total_width)
    title = "HARMONIC CLOCK"
    padding = (total_width - len(title)) // 2
    print(" " * padding + title)
    print("=" * total_width)

    # === CLOCK ===
    print("\n" + box_top("CLOCK "))
    print(box_line(f"Time: {clock.readout()}     Speed: {clock.rate_label():<8} Control: {clock.control_value:g}"))
    print(box_bottom())

    # === HANDS ===
    print("\n" + box_top("HANDS → TONES "))
    print(box_line(f"{'Hand':<8} {'Angle':>7} {'Octave':>7} {'Frequency':>12} {'Note':<6} {'Vol':<5}"))
    print(box_separator())
    for name, hand in session.hands.items():
        angle = hand.fraction * 360
        print(box_line(
            f"{name.capitalize():<8} {angle:>6.1f}° {hand.octave:>7} {format_frequency(hand.frequency):>12} "
            f"{note_label(hand.frequency):<6} {hand.gain:.2f}"
        ))
    print(box_separator())
    print(box_line(f"Chord: {session.chord}"))
    print(box_bottom())

    # === OUTPUT ===
    if session.audio_error:
        sound = session.audio_error
    elif session.sound_on:
        sound = "on"
    else:
        sound = "muted"
    print("\n" + box_top("OSCILLOSCOPE "))
    print(box_line(f"Sound: {sound}    Wave: {session.waveform}"))
    print(box_separator())
    for row in render_trace(session.scope_samples(SCOPE_WIDTH * 8)):
        print(box_line(row))
    print(box_bottom())

    print(f"\n{HELP}")
    if message:
        print(f"» {message}")
    print("> ", end="", flush=True)


def read_command():
    """Return a pending input line without blocking, or None."""
    ready, _, _ = select.select([sys.stdin], [], [], 0)
    if not ready:
        return None
    line = sys.stdin.readline()
    if line == "":
        raise QuitRequested()
    return line


def build_session(args) -> Session:
    session = Session()
    session.set_rate(args.rate)
    session.set_waveform(args.wave)
    for name, octave, gain in zip(HANDS, args.octaves, args.volumes):
        session.set_octave(name, octave)
        session.set_gain(name, gain)
    return session


def main():
    parser = argparse.ArgumentParser(description="Analog clock whose hands play continuous tones")
    parser.add_argument("--rate", type=float, default=10, help="Speed control, -100..100 (10 = real time)")
    parser.add_argument("--wave", choices=WAVEFORMS, default="sine", help="Oscillator waveform")
    parser.add_argument("--octaves", nargs=3, metavar=("H", "M", "S"),
                        default=[DEFAULT_OCTAVES[h] for h in HANDS], help="Base octave per hand")
    parser.add_argument("--volumes", nargs=3, type=float, metavar=("H", "M", "S"),
                        default=[DEFAULT_GAINS[h] for h in HANDS], help="Volume per hand (0..1)")
    parser.add_argument("--sound", action="store_true", help="Start with sound on")
    parser.add_argument("--fps", type=float, default=FRAME_RATE, help="Frames per second")
    parser.add_argument("--quiet", action="store_true", help="Don't print status")
    parser.add_argument("--log-file", help="Write log messages to this file")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        filename=args.log_file,
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    session = build_session(args)
    logger.info("Session started at %s", session.clock.readout())
    message = ""
    if args.sound and not session.set_sound(True):
        message = session.audio_error or "Audio unavailable"

    frame_interval = 1.0 / max(1.0, args.fps)

    try:
        while True:
            started = time.monotonic()

            line = read_command()
            if line is not None:
                try:
                    message = apply_command(session, line)
                except CommandError as e:
                    message = str(e)

            session.frame(started * 1000)

            if not args.quiet:
                print_status(session, message)

            time.sleep(max(0.0, frame_interval - (time.monotonic() - started)))

    except (KeyboardInterrupt, QuitRequested):
        print("\n\nStopping...")
    finally:
        session.close()
        print("Goodbye!")


if __name__ == "__main__":
    main()
