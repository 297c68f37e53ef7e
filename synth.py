"""Oscillator voices for the three clock hands."""

import math

import numpy as np

from config import WAVEFORMS, DEFAULT_WAVEFORM, HANDS, RAMP_TIME, MASTER_RAMP_TIME

TWO_PI = 2 * math.pi


def generate_waveform(phases: np.ndarray, waveform: str) -> np.ndarray:
    """Generate samples for an array of phases (radians)."""
    if waveform == "sine":
        return np.sin(phases)
    cycle = (phases / TWO_PI) % 1.0
    if waveform == "square":
        return np.where(cycle < 0.5, 1.0, -1.0)
    elif waveform == "sawtooth":
        return 2.0 * cycle - 1.0
    elif waveform == "triangle":
        return 4.0 * np.abs(((cycle - 0.25) % 1.0) - 0.5) - 1.0
    raise ValueError(f"Unknown waveform: {waveform}")


class Ramp:
    """Linearly interpolates a parameter towards a target."""

    def __init__(self, value: float = 0.0):
        self.value = value
        self.target = value
        self._step = 0.0
        self._remaining = 0

    def set_target(self, target: float, samples: int):
        """Reach target after the given number of samples."""
        self.target = target
        if samples <= 0:
            self.value = target
            self._remaining = 0
            return
        self._step = (target - self.value) / samples
        self._remaining = samples

    def set_value(self, value: float):
        self.set_target(value, 0)

    def render(self, frames: int) -> np.ndarray:
        """Per-sample parameter values for the next block."""
        out = np.full(frames, self.target, dtype=np.float64)
        n = min(frames, self._remaining)
        if n > 0:
            out[:n] = self.value + self._step * np.arange(1, n + 1)
            self._remaining -= n
            self.value = float(out[n - 1])
        if self._remaining == 0:
            self.value = self.target
        return out


class Voice:
    """Phase-continuous oscillator for one hand."""

    def __init__(self, name: str, waveform: str = DEFAULT_WAVEFORM):
        self.name = name
        self.waveform = waveform
        self.phase = 0.0
        self.frequency = Ramp()
        self.gain = Ramp()

    def render(self, frames: int, sample_rate: int) -> np.ndarray:
        freqs = self.frequency.render(frames)
        phases = self.phase + np.cumsum(TWO_PI * freqs / sample_rate)
        self.phase = float(phases[-1] % TWO_PI) if frames else self.phase
        return generate_waveform(phases, self.waveform) * self.gain.render(frames)


class HandMixer:
    """Mixes the hand voices under a master gain used for mute/unmute."""

    def __init__(self, sample_rate: int, waveform: str = DEFAULT_WAVEFORM):
        self.sample_rate = sample_rate
        self.voices = {hand: Voice(hand, waveform) for hand in HANDS}
        self.master = Ramp(0.0)
        self.waveform = waveform

    def _samples(self, seconds: float) -> int:
        return int(seconds * self.sample_rate)

    def set_targets(self, frequencies: dict[str, float], gains: dict[str, float],
                    ramp_time: float = RAMP_TIME):
        """Schedule ramps towards new per-hand frequency and gain."""
        samples = self._samples(ramp_time)
        for hand, voice in self.voices.items():
            if hand in frequencies:
                freq = frequencies[hand]
                # Jump straight to the first real frequency instead of sweeping up from 0
                voice.frequency.set_target(freq, samples if voice.frequency.value > 0 else 0)
            if hand in gains:
                voice.gain.set_target(gains[hand], samples)

    def set_gain(self, hand: str, gain: float):
        self.voices[hand].gain.set_value(gain)

    def set_waveform(self, waveform: str):
        if waveform not in WAVEFORMS:
            raise ValueError(f"Unknown waveform: {waveform}")
        self.waveform = waveform
        for voice in self.voices.values():
            voice.waveform = waveform

    def set_muted(self, muted: bool, ramp_time: float = MASTER_RAMP_TIME):
        self.master.set_target(0.0 if muted else 1.0, self._samples(ramp_time))

    def render(self, frames: int) -> np.ndarray:
        """Mixed samples for the next block."""
        output = np.zeros(frames, dtype=np.float64)
        for voice in self.voices.values():
            output += voice.render(frames, self.sample_rate)
        # Three full-scale voices; keep headroom before soft clipping
        output *= self.master.render(frames) / len(self.voices)
        return output
