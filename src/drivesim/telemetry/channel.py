"""
Telemetry channel - Time series for a single measurement.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque
import numpy as np


@dataclass
class ChannelConfig:
    """Configuration for a telemetry channel."""
    name: str = "unnamed"
    unit: str = ""
    min_value: float = float('-inf')
    max_value: float = float('inf')
    precision: int = 3
    buffer_size: int = 10000


class TelemetryChannel:
    """Bounded time series with running statistics.

    Samples are clamped to the configured range. Statistics cover every
    sample ever recorded, while only the newest ``buffer_size`` samples
    are kept for retrieval.
    """

    def __init__(self, config: ChannelConfig | None = None, name: str = "channel"):
        """Initialize channel.

        Args:
            config: Channel configuration
            name: Channel name (used if config not provided)
        """
        self.config = config or ChannelConfig(name=name)

        self._times: Deque[float] = deque(maxlen=self.config.buffer_size)
        self._values: Deque[float] = deque(maxlen=self.config.buffer_size)

        self._min: float = float('inf')
        self._max: float = float('-inf')
        self._sum: float = 0.0
        self._count: int = 0

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def count(self) -> int:
        """Number of samples recorded since the last clear."""
        return self._count

    @property
    def min_value(self) -> float:
        return self._min if self._count else 0.0

    @property
    def max_value(self) -> float:
        return self._max if self._count else 0.0

    @property
    def mean(self) -> float:
        return self._sum / self._count if self._count else 0.0

    @property
    def last_value(self) -> float:
        return self._values[-1] if self._values else 0.0

    def record(self, time: float, value: float) -> None:
        """Record a sample.

        Args:
            time: Simulation time in seconds
            value: Measured value
        """
        value = float(np.clip(value, self.config.min_value, self.config.max_value))

        self._times.append(time)
        self._values.append(value)

        self._min = min(self._min, value)
        self._max = max(self._max, value)
        self._sum += value
        self._count += 1

    def get_times(self) -> np.ndarray:
        return np.array(self._times, dtype=float)

    def get_values(self) -> np.ndarray:
        return np.array(self._values, dtype=float)

    def get_range(self, start_time: float, end_time: float) -> tuple[np.ndarray, np.ndarray]:
        """Get buffered samples with start_time <= t <= end_time.

        Returns:
            Tuple of (times, values) arrays
        """
        times = self.get_times()
        values = self.get_values()
        mask = (times >= start_time) & (times <= end_time)
        return times[mask], values[mask]

    def clear(self) -> None:
        """Clear all recorded data."""
        self._times.clear()
        self._values.clear()
        self._min = float('inf')
        self._max = float('-inf')
        self._sum = 0.0
        self._count = 0

    def get_state(self) -> dict:
        """Get channel summary.

        Returns:
            Dictionary with name, unit, count and rounded statistics
        """
        p = self.config.precision
        has_data = self._count > 0
        return {
            "name": self.config.name,
            "unit": self.config.unit,
            "count": self._count,
            "min": round(self._min, p) if has_data else None,
            "max": round(self._max, p) if has_data else None,
            "mean": round(self.mean, p) if has_data else None,
            "last": round(self.last_value, p) if has_data else None,
        }
