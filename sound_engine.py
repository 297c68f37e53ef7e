"""Audio output for the clock hands using sounddevice + numpy."""

import logging
from threading import Lock
from typing import Optional

import numpy as np
import sounddevice as sd

from synth import HandMixer
from oscilloscope import ScopeBuffer
from config import SAMPLE_RATE, BUFFER_SIZE, DEFAULT_WAVEFORM

logger = logging.getLogger(__name__)


class SoundEngine:
    """Plays one tone per clock hand and keeps a copy for the oscilloscope."""

    def __init__(self, waveform: str = DEFAULT_WAVEFORM):
        self.mixer = HandMixer(SAMPLE_RATE, waveform)
        self.scope = ScopeBuffer()
        self._running = False
        self._stream: Optional[sd.OutputStream] = None
        self._lock = Lock()

    @property
    def running(self) -> bool:
        return self._running

    def _audio_callback(self, outdata, frames, time_info, status):
        """Generate audio samples from the hand voices."""
        if status:
            logger.debug("Audio status: %s", status)
        with self._lock:
            samples = self.mixer.render(frames)

        output = np.tanh(samples).astype(np.float32)
        self.scope.write(output)
        outdata[:] = output.reshape(-1, 1)

    def start(self) -> bool:
        """Initialize and start the audio stream."""
        try:
            self._stream = sd.OutputStream(
                samplerate=SAMPLE_RATE,
                blocksize=BUFFER_SIZE,
                channels=1,
                callback=self._audio_callback,
            )
            self._stream.start()
            self._running = True
            return True
        except (sd.PortAudioError, OSError, ValueError) as e:
            logger.error("Failed to start audio: %s", e)
            if self._stream is not None:
                self._stream.close()
            self._stream = None
            return False

    def stop(self):
        """Stop the audio stream."""
        self._running = False
        if self._stream:
            self._stream.stop()
            self._stream.close()
            self._stream = None
        self.scope.clear()

    def update(self, frequencies: dict[str, float], gains: dict[str, float]):
        """Ramp each hand towards its new frequency and gain."""
        with self._lock:
            self.mixer.set_targets(frequencies, gains)

    def set_gain(self, hand: str, gain: float):
        with self._lock:
            self.mixer.set_gain(hand, gain)

    def set_waveform(self, waveform: str):
        with self._lock:
            self.mixer.set_waveform(waveform)

    def set_muted(self, muted: bool):
        with self._lock:
            self.mixer.set_muted(muted)

    def scope_samples(self, count: int) -> np.ndarray:
        return self.scope.read(count)
