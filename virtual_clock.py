"""Free-running simulation clock driven by real elapsed time."""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from config import RATE_CONTROL_RANGE, RATE_CONTROL_DEFAULT, RATE_FINE_LIMIT, RATE_MAX

logger = logging.getLogger(__name__)


def control_to_rate(value: float) -> float:
    """Map a rate control value to a time multiplier.

    Two segments: |value| <= 10 maps linearly onto [-1, 1] for fine control
    around real time, larger values stretch out to +/-RATE_MAX at the ends
    of the control. Expects a value already inside RATE_CONTROL_RANGE.
    """
    if value == 0:
        return 0.0
    direction = 1 if value > 0 else -1
    magnitude = abs(value)
    if magnitude <= RATE_FINE_LIMIT:
        return value / RATE_FINE_LIMIT
    span = RATE_CONTROL_RANGE[1] - RATE_FINE_LIMIT
    return direction * (1 + (magnitude - RATE_FINE_LIMIT) * (RATE_MAX - 1) / span)


class VirtualClock:
    """Simulated wall clock that can pause, slow down, speed up and rewind."""

    def __init__(self, now: Callable[[], datetime] = datetime.now):
        self._now = now
        self.instant: datetime = now()
        self.rate = 1.0
        self.control_value: float = RATE_CONTROL_DEFAULT
        self._last_timestamp: Optional[float] = None

    @property
    def hour(self) -> int:
        return self.instant.hour

    @property
    def minute(self) -> int:
        return self.instant.minute

    @property
    def second(self) -> int:
        return self.instant.second

    @property
    def millisecond(self) -> float:
        return self.instant.microsecond / 1000

    def advance(self, elapsed_ms: float) -> datetime:
        """Move the simulated instant by elapsed_ms scaled by the rate."""
        delta = elapsed_ms * self.rate
        if delta:
            self.instant += timedelta(milliseconds=delta)
        return self.instant

    def tick(self, timestamp_ms: float) -> datetime:
        """Advance using a frame timestamp.

        The first frame (and the first one after a sync) has no previous
        timestamp and advances by zero.
        """
        if self._last_timestamp is None:
            self._last_timestamp = timestamp_ms
        elapsed = timestamp_ms - self._last_timestamp
        self._last_timestamp = timestamp_ms
        return self.advance(elapsed)

    def set_rate(self, value: float) -> float:
        """Set the multiplier from a raw control value in [-100, 100]."""
        low, high = RATE_CONTROL_RANGE
        self.control_value = max(low, min(high, value))
        self.rate = control_to_rate(self.control_value)
        return self.rate

    def sync(self):
        """Jump back to real time at normal speed."""
        self.instant = self._now()
        self.rate = 1.0
        self.control_value = RATE_CONTROL_DEFAULT
        self._last_timestamp = None
        logger.info("Clock synced to %s", self.readout())

    def readout(self) -> str:
        """Digital HH:MM:SS readout."""
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"

    def rate_label(self) -> str:
        return f"x{self.rate:.1f}"
