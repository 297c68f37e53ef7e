"""Per-run state shared by the frame loop and the controls."""

import logging
from datetime import datetime
from typing import Callable, Optional

import numpy as np

from chords import detect_chord
from pitch import HandState, hand_fraction, fraction_to_frequency, parse_octave
from virtual_clock import VirtualClock
from config import (
    CHORD_MIN_NOTES,
    CHORD_PLACEHOLDER,
    DEFAULT_OCTAVES,
    DEFAULT_WAVEFORM,
    HANDS,
    WAVEFORMS,
)

logger = logging.getLogger(__name__)


def _create_sound_engine(waveform: str):
    # Imported here so the clock keeps running on machines without PortAudio
    from sound_engine import SoundEngine
    return SoundEngine(waveform)


class Session:
    """Clock, hand settings and audio sink for one running session.

    frame() is called once per display frame; control handlers only mutate
    fields, which the next frame picks up.
    """

    def __init__(self, now: Callable[[], datetime] = datetime.now,
                 engine_factory: Callable = _create_sound_engine,
                 chord_min_notes: int = CHORD_MIN_NOTES):
        self.clock = VirtualClock(now)
        self.hands = {name: HandState.default(name) for name in HANDS}
        self.waveform = DEFAULT_WAVEFORM
        self.sound_on = False
        self.chord_min_notes = chord_min_notes
        self.chord = CHORD_PLACEHOLDER
        self.displayed = {name: 0.0 for name in HANDS}
        self.audio_error: Optional[str] = None
        self.engine = None
        self._engine_factory = engine_factory

    @property
    def audio_running(self) -> bool:
        return self.engine is not None and self.engine.running

    def gains(self) -> dict[str, float]:
        return {name: hand.gain for name, hand in self.hands.items()}

    def _hand(self, name: str) -> HandState:
        if name not in self.hands:
            raise ValueError(f"Unknown hand: {name}")
        return self.hands[name]

    def frame(self, timestamp_ms: float):
        """Advance the clock and recompute pitches for one frame."""
        instant = self.clock.tick(timestamp_ms)
        for name, hand in self.hands.items():
            hand.fraction = hand_fraction(name, instant)
            hand.frequency = fraction_to_frequency(hand.fraction, hand.octave)
        self.displayed = {name: hand.frequency for name, hand in self.hands.items()}
        self.chord = detect_chord(self.displayed.values(), self.chord_min_notes)

        if self.audio_running:
            self.engine.update(self.displayed, self.gains())

    # Controls

    def set_rate(self, value: float) -> float:
        return self.clock.set_rate(value)

    def set_octave(self, name: str, value) -> int:
        hand = self._hand(name)
        hand.octave = parse_octave(value, DEFAULT_OCTAVES[name])
        return hand.octave

    def set_gain(self, name: str, value: float) -> float:
        hand = self._hand(name)
        hand.gain = max(0.0, min(1.0, float(value)))
        if self.audio_running:
            self.engine.set_gain(name, hand.gain)
        return hand.gain

    def set_waveform(self, waveform: str):
        if waveform not in WAVEFORMS:
            raise ValueError(f"Unknown waveform: {waveform} (choose from {', '.join(WAVEFORMS)})")
        self.waveform = waveform
        if self.engine is not None:
            self.engine.set_waveform(waveform)

    def sync(self):
        self.clock.sync()

    def ensure_audio(self) -> bool:
        """Start the audio engine on first use.

        Failure leaves the session running silently with audio_error set.
        """
        if self.audio_running:
            return True
        try:
            engine = self._engine_factory(self.waveform)
        except (ImportError, OSError) as e:
            logger.error("Audio unavailable: %s", e)
            self.audio_error = f"Audio unavailable: {e}"
            return False
        if not engine.start():
            self.audio_error = "Failed to start audio output"
            return False
        self.engine = engine
        self.audio_error = None
        for name, hand in self.hands.items():
            engine.set_gain(name, hand.gain)
        if any(self.displayed.values()):
            engine.update(self.displayed, self.gains())
        logger.info("Audio started")
        return True

    def toggle_sound(self) -> bool:
        """Mute/unmute. Returns the new sound_on state."""
        return self.set_sound(not self.sound_on)

    def set_sound(self, on: bool) -> bool:
        if on and not self.ensure_audio():
            self.sound_on = False
            return False
        self.sound_on = on
        if self.engine is not None:
            self.engine.set_muted(not on)
        return self.sound_on

    def scope_samples(self, count: int) -> np.ndarray:
        """Recent output for the oscilloscope; empty while silent."""
        if not (self.sound_on and self.audio_running):
            return np.zeros(0)
        return self.engine.scope_samples(count)

    def close(self):
        if self.engine is not None:
            self.engine.stop()
            self.engine = None
        self.sound_on = False
