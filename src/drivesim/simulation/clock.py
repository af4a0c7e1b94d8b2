"""
Frame clock - Converts animation timestamps into frame times.
"""

import logging
import numpy as np

logger = logging.getLogger(__name__)


class FrameClock:
    """Tracks the previous frame timestamp.

    Timestamps are in milliseconds, as delivered by an animation-frame
    scheduler. The first tick yields a zero-length frame.
    """

    def __init__(self, start_ms: float | None = None):
        """Initialize clock.

        Args:
            start_ms: Timestamp of the frame before the first tick.
                If None, the first tick's timestamp is used.
        """
        self._last_ms = start_ms

    @property
    def last_ms(self) -> float | None:
        return self._last_ms

    def tick(self, now_ms: float) -> float:
        """Record a frame timestamp.

        Args:
            now_ms: Current timestamp in milliseconds

        Returns:
            Seconds since the previous tick, never negative
        """
        if not np.isfinite(now_ms):
            logger.warning("Non-finite timestamp %r ignored", now_ms)
            return 0.0

        if self._last_ms is None:
            self._last_ms = now_ms
            return 0.0

        dt = (now_ms - self._last_ms) / 1000.0
        self._last_ms = now_ms
        if dt < 0:
            logger.warning("Clock went backwards (dt=%.4fs); using 0", dt)
            return 0.0
        return dt

    def reset(self, start_ms: float | None = None) -> None:
        self._last_ms = start_ms
