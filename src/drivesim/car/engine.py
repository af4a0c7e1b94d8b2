"""
Engine component - Torque delivery for the driving simulation.

Simulates:
- Fixed parabolic torque curve peaking at 4000 RPM
- RPM bounds (idle and maximum)
"""

from dataclasses import dataclass
import numpy as np


@dataclass
class EngineConfig:
    """Configuration for the engine.

    The torque curve is a downward parabola:
    torque = max(0, curve_coefficient * (rpm - peak_rpm)^2 + peak_torque)
    """
    # RPM limits
    idle_rpm: float = 900.0
    max_rpm: float = 7000.0
    initial_rpm: float = 1000.0

    # Torque curve
    peak_rpm: float = 4000.0
    peak_torque_nm: float = 280.0
    curve_coefficient: float = -0.000002

    def __post_init__(self) -> None:
        """Validate RPM bounds."""
        if self.idle_rpm < 0:
            raise ValueError("idle_rpm must be >= 0")
        if self.max_rpm <= self.idle_rpm:
            raise ValueError("max_rpm must be greater than idle_rpm")
        if self.curve_coefficient > 0:
            raise ValueError("curve_coefficient must be <= 0 (downward parabola)")


class Engine:
    """Engine with a fixed torque curve.

    RPM is not integrated here: the vehicle slaves it directly to
    wheel speed through the active gear ratio.
    """

    def __init__(self, config: EngineConfig | None = None):
        """Initialize engine with optional custom configuration.

        Args:
            config: Engine configuration. Uses defaults if None.
        """
        self.config = config or EngineConfig()
        self._rpm: float = self._clamp(self.config.initial_rpm)

    def _clamp(self, value: float) -> float:
        return float(np.clip(value, self.config.idle_rpm, self.config.max_rpm))

    @property
    def rpm(self) -> float:
        """Current engine RPM."""
        return self._rpm

    @rpm.setter
    def rpm(self, value: float) -> None:
        """Set engine RPM, clamped to [idle_rpm, max_rpm]."""
        self._rpm = self._clamp(value)

    @property
    def idle_rpm(self) -> float:
        return self.config.idle_rpm

    @property
    def max_rpm(self) -> float:
        return self.config.max_rpm

    def torque_at(self, rpm: float) -> float:
        """Get available torque at the given RPM.

        Pure function of ``rpm``; zero outside the positive lobe of the
        curve (beyond about 11832 RPM from the peak with the default
        config, so never inside the idle/max band).

        Args:
            rpm: Engine RPM to query

        Returns:
            Torque in Nm, never negative
        """
        offset = rpm - self.config.peak_rpm
        return max(0.0, self.config.curve_coefficient * offset**2 + self.config.peak_torque_nm)

    @property
    def torque(self) -> float:
        """Torque available at the current RPM."""
        return self.torque_at(self._rpm)

    def reset(self) -> None:
        """Reset engine to initial state."""
        self._rpm = self._clamp(self.config.initial_rpm)

    def get_state(self) -> dict:
        """Get current engine state for telemetry.

        Returns:
            Dictionary containing engine state values
        """
        return {
            "rpm": self._rpm,
            "torque_nm": self.torque,
            "idle_rpm": self.config.idle_rpm,
            "max_rpm": self.config.max_rpm,
        }
