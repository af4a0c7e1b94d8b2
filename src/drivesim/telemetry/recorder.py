"""
Telemetry recorder - Samples simulation telemetry into channels.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from drivesim.telemetry.channel import TelemetryChannel, ChannelConfig

if TYPE_CHECKING:
    from drivesim.simulation.simulator import Simulator


STANDARD_CHANNELS = {
    "speed_kph": ChannelConfig("speed_kph", "km/h", -400, 400, 1),
    "rpm": ChannelConfig("rpm", "rpm", 0, 10000, 0),
    "gear_index": ChannelConfig("gear_index", "", 0, 16, 0),
    "heading": ChannelConfig("heading", "rad", precision=3),
    "throttle": ChannelConfig("throttle", "", 0, 1, 0),
    "steer": ChannelConfig("steer", "", -1, 1, 0),
    "sliding": ChannelConfig("sliding", "", 0, 1, 0),
}


@dataclass
class RecorderConfig:
    """Recorder configuration."""
    sample_rate_hz: float = 60.0
    channels: List[str] | None = None  # Channels to record (None = all)
    buffer_size: int = 100000          # Per-channel buffer size

    def __post_init__(self) -> None:
        if self.sample_rate_hz <= 0:
            raise ValueError("sample_rate_hz must be > 0")


class TelemetryRecorder:
    """Records frame telemetry at a fixed sample rate.

    Accepts the dictionaries produced by ``Simulator.get_frame_telemetry``.
    Attach to a simulator with ``add_post_step_callback(recorder.on_step)``.
    """

    def __init__(self, config: RecorderConfig | None = None):
        """Initialize recorder.

        Args:
            config: Recorder configuration
        """
        self.config = config or RecorderConfig()

        self._channels: Dict[str, TelemetryChannel] = {}
        names = self.config.channels or list(STANDARD_CHANNELS)
        for name in names:
            base = STANDARD_CHANNELS.get(name, ChannelConfig(name=name))
            cfg = replace(base, buffer_size=self.config.buffer_size)
            self._channels[name] = TelemetryChannel(cfg)

        self._sample_interval = 1.0 / self.config.sample_rate_hz
        self._last_sample_time: float | None = None

    @property
    def channels(self) -> Dict[str, TelemetryChannel]:
        return self._channels

    def get_channel(self, name: str) -> Optional[TelemetryChannel]:
        return self._channels.get(name)

    def record(self, time: float, telemetry: Dict[str, Any]) -> bool:
        """Record a telemetry frame if the sample interval has elapsed.

        Args:
            time: Simulation time
            telemetry: Frame telemetry dictionary

        Returns:
            True if the sample was recorded
        """
        # Time went backwards: the simulator was reset, start a new run
        if self._last_sample_time is not None and time < self._last_sample_time:
            self._last_sample_time = None

        # Small tolerance so a 60 Hz recorder keeps every 60 Hz frame
        if (
            self._last_sample_time is not None
            and time - self._last_sample_time < self._sample_interval - 1e-9
        ):
            return False
        self._last_sample_time = time

        state = telemetry.get("state", {})
        engine = telemetry.get("engine", {})
        transmission = telemetry.get("transmission", {})
        inputs = telemetry.get("inputs", {})

        values = {
            "speed_kph": state.get("speed_kph", 0.0),
            "rpm": engine.get("rpm", 0.0),
            "gear_index": transmission.get("gear_index", 0),
            "heading": state.get("heading_rad", 0.0),
            "throttle": inputs.get("throttle", 0),
            "steer": inputs.get("steer", 0),
            "sliding": float(state.get("sliding", False)),
        }
        for name, value in values.items():
            channel = self._channels.get(name)
            if channel is not None:
                channel.record(time, value)
        return True

    def on_step(self, simulator: "Simulator", dt: float) -> None:
        """Post-step callback for Simulator.add_post_step_callback."""
        self.record(simulator.time, simulator.get_frame_telemetry())

    def get_current_values(self) -> Dict[str, float]:
        """Get most recent value from each channel."""
        return {name: ch.last_value for name, ch in self._channels.items()}

    def get_statistics(self) -> Dict[str, Dict[str, Any]]:
        """Get statistics for all channels."""
        return {name: ch.get_state() for name, ch in self._channels.items()}

    def clear(self) -> None:
        """Clear all recorded data."""
        for channel in self._channels.values():
            channel.clear()
        self._last_sample_time = None

    def get_state(self) -> dict:
        """Get recorder state.

        Returns:
            Dictionary containing recorder state
        """
        return {
            "sample_rate_hz": self.config.sample_rate_hz,
            "total_samples": sum(ch.count for ch in self._channels.values()),
            "channels": self.get_statistics(),
        }
