"""Text oscilloscope for the mixed output waveform."""

from threading import Lock

import numpy as np

from config import SCOPE_BUFFER, SCOPE_WIDTH, SCOPE_HEIGHT


class ScopeBuffer:
    """Ring buffer holding the most recent output samples.

    Written from the audio callback, read from the frame loop.
    """

    def __init__(self, size: int = SCOPE_BUFFER):
        self._data = np.zeros(size, dtype=np.float32)
        self._pos = 0
        self._lock = Lock()

    def write(self, samples: np.ndarray):
        samples = np.asarray(samples, dtype=np.float32)[-len(self._data):]
        n = len(samples)
        with self._lock:
            end = self._pos + n
            if end <= len(self._data):
                self._data[self._pos:end] = samples
            else:
                split = len(self._data) - self._pos
                self._data[self._pos:] = samples[:split]
                self._data[:n - split] = samples[split:]
            self._pos = end % len(self._data)

    def read(self, count: int = SCOPE_BUFFER) -> np.ndarray:
        """Latest samples, oldest first."""
        with self._lock:
            ordered = np.concatenate((self._data[self._pos:], self._data[:self._pos]))
        return ordered[-count:]

    def clear(self):
        with self._lock:
            self._data[:] = 0
            self._pos = 0


def render_trace(samples, width: int = SCOPE_WIDTH, height: int = SCOPE_HEIGHT) -> list[str]:
    """Draw samples in [-1, 1] as rows of text, top row = +1.

    With no samples the trace is a flat centre line.
    """
    rows = [[" "] * width for _ in range(height)]
    middle = height // 2
    samples = np.asarray(samples, dtype=np.float64)

    if samples.size == 0:
        levels = np.full(width, middle)
    else:
        # Pick one sample per column
        idx = np.linspace(0, samples.size - 1, width).astype(int)
        column = np.clip(samples[idx], -1.0, 1.0)
        levels = np.rint((1.0 - column) / 2.0 * (height - 1)).astype(int)

    for x, y in enumerate(levels):
        rows[y][x] = "*"
    return ["".join(row) for row in rows]
