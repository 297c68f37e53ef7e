# tests/conftest.py
from datetime import datetime

import numpy as np
import pytest

from session import Session

FIXED_NOW = datetime(2024, 1, 1, 12, 20, 35)


class FakeEngine:
    """Stands in for SoundEngine so no audio device is needed."""

    def __init__(self, waveform: str, start_ok: bool = True):
        self.waveform = waveform
        self.running = False
        self.muted = True
        self.stopped = False
        self.updates = []
        self.gains = {}
        self._start_ok = start_ok

    def start(self) -> bool:
        self.running = self._start_ok
        return self._start_ok

    def stop(self):
        self.running = False
        self.stopped = True

    def update(self, frequencies, gains):
        self.updates.append((dict(frequencies), dict(gains)))

    def set_gain(self, hand, gain):
        self.gains[hand] = gain

    def set_waveform(self, waveform):
        self.waveform = waveform

    def set_muted(self, muted):
        self.muted = muted

    def scope_samples(self, count):
        return np.full(count, 0.5)


class EngineFactory:
    """Records every engine it builds."""

    def __init__(self, start_ok: bool = True, error: Exception = None):
        self.start_ok = start_ok
        self.error = error
        self.engines = []

    def __call__(self, waveform):
        if self.error is not None:
            raise self.error
        engine = FakeEngine(waveform, self.start_ok)
        self.engines.append(engine)
        return engine


@pytest.fixture()
def engine_factory() -> EngineFactory:
    return EngineFactory()


@pytest.fixture()
def session(engine_factory) -> Session:
    return Session(now=lambda: FIXED_NOW, engine_factory=engine_factory)
