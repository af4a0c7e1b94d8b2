"""
Vehicle - Per-frame driving dynamics.

Integrates:
- Engine torque curve
- Transmission gear ratio
- Longitudinal speed with per-frame drag decay
- RPM synchronization to wheel speed
- Two-state (grip / slide) steering model
"""

from dataclasses import dataclass, field
from typing import Any, Dict
import numpy as np

from drivesim.car.engine import Engine, EngineConfig
from drivesim.car.transmission import Transmission, TransmissionConfig


@dataclass
class VehicleConfig:
    """Complete vehicle configuration."""
    engine: EngineConfig = field(default_factory=EngineConfig)
    transmission: TransmissionConfig = field(default_factory=TransmissionConfig)

    mass_kg: float = 1200.0
    drag: float = 0.98            # Multiplicative speed decay per frame
    lateral_grip: float = 1.0

    # Steering
    slide_threshold: float = 15.0     # Lateral force per unit of grip
    grip_steer_rate: float = 0.02
    slide_steer_rate: float = 0.04

    # Engine RPM per unit of (speed * ratio)
    rpm_per_speed: float = 60.0

    # Drag decay mode. The default applies `drag` once per update
    # regardless of dt, so decay is tied to the frame rate.
    frame_rate_independent_drag: bool = False
    reference_frame_rate: float = 60.0

    def __post_init__(self) -> None:
        """Validate vehicle parameters."""
        if self.mass_kg <= 0:
            raise ValueError("mass_kg must be > 0")
        if not 0.0 < self.drag <= 1.0:
            raise ValueError("drag must be in (0, 1]")
        if self.lateral_grip < 0:
            raise ValueError("lateral_grip must be >= 0")
        if self.reference_frame_rate <= 0:
            raise ValueError("reference_frame_rate must be > 0")


@dataclass(frozen=True)
class VehicleInputs:
    """Driver control snapshot for one frame.

    Throttle is an on/off gate and steering is digital; there is no
    partial input.
    """
    throttle: int = 0     # 0 or 1
    steer: int = 0        # -1 (left), 0, 1 (right)

    def __post_init__(self) -> None:
        if self.throttle not in (0, 1):
            raise ValueError(f"throttle must be 0 or 1, got {self.throttle!r}")
        if self.steer not in (-1, 0, 1):
            raise ValueError(f"steer must be -1, 0 or 1, got {self.steer!r}")


class Vehicle:
    """Simplified car: engine, gearbox and a point-mass chassis.

    The vehicle exclusively owns its engine and transmission. ``update`` is
    the only method that changes speed, heading and engine RPM; the gear is
    only changed by shift commands sent to ``transmission``.

    Usage:
        vehicle = Vehicle()
        vehicle.transmission.shift_up()
        vehicle.update(VehicleInputs(throttle=1), dt=1 / 60)
        print(vehicle.engine.rpm, vehicle.speed)
    """

    def __init__(self, config: VehicleConfig | None = None):
        """Initialize vehicle with optional configuration.

        Args:
            config: Vehicle configuration. Uses defaults if None.
        """
        self.config = config or VehicleConfig()

        self.engine = Engine(self.config.engine)
        self.transmission = Transmission(self.config.transmission)

        self.speed: float = 0.0       # m/s, negative in reverse
        self.heading: float = 0.0     # radians, unbounded
        self._sliding: bool = False

    @property
    def mass(self) -> float:
        return self.config.mass_kg

    @property
    def drag(self) -> float:
        return self.config.drag

    @property
    def lateral_grip(self) -> float:
        return self.config.lateral_grip

    @property
    def speed_kph(self) -> float:
        """Current speed in km/h."""
        return self.speed * 3.6

    @property
    def is_sliding(self) -> bool:
        """Whether the last update exceeded the lateral grip threshold."""
        return self._sliding

    def is_slide(self, speed: float, steer: float) -> bool:
        """Check whether steering at this speed breaks lateral grip.

        Args:
            speed: Vehicle speed
            steer: Steering input

        Returns:
            True if lateral force is strictly above the grip threshold
        """
        lateral_force = abs(speed * steer)
        return lateral_force > self.config.lateral_grip * self.config.slide_threshold

    def steer_rate(self, speed: float, steer: float) -> float:
        """Heading-rate coefficient for the current traction state."""
        if self.is_slide(speed, steer):
            return self.config.slide_steer_rate
        return self.config.grip_steer_rate

    def synchronized_rpm(self, speed: float, ratio: float) -> float:
        """Engine RPM implied by wheel speed through the gear ratio.

        RPM follows speed instantly: there is no engine inertia, clutch
        slip or wheel slip between the two.
        """
        return abs(speed * ratio * self.config.rpm_per_speed)

    def _drag_factor(self, dt: float) -> float:
        if self.config.frame_rate_independent_drag:
            return self.config.drag ** (dt * self.config.reference_frame_rate)
        return self.config.drag

    def update(self, inputs: VehicleInputs, dt: float) -> None:
        """Advance the vehicle by one frame.

        Args:
            inputs: Driver control snapshot
            dt: Seconds since the previous frame

        Raises:
            ValueError: If dt is negative or not finite. State is untouched.
        """
        if not np.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be finite and >= 0, got {dt!r}")

        ratio = self.transmission.current_ratio()
        torque = self.engine.torque_at(self.engine.rpm)
        drive_force = torque * ratio * inputs.throttle

        # Forward Euler on F = m * a, then drag
        speed = self.speed + (drive_force / self.config.mass_kg) * dt
        speed *= self._drag_factor(dt)

        sliding = self.is_slide(speed, inputs.steer)
        rate = self.config.slide_steer_rate if sliding else self.config.grip_steer_rate

        # Neutral leaves RPM where it was
        if ratio != 0:
            self.engine.rpm = self.synchronized_rpm(speed, ratio)

        self.speed = speed
        self.heading += inputs.steer * speed * rate
        self._sliding = sliding

    def reset(self, heading: float = 0.0) -> None:
        """Reset vehicle to a standstill in the start gear.

        Args:
            heading: Starting heading in radians
        """
        self.engine.reset()
        self.transmission.reset()
        self.speed = 0.0
        self.heading = heading
        self._sliding = False

    def get_telemetry(self) -> Dict[str, Any]:
        """Get complete vehicle telemetry.

        Returns:
            Dictionary containing vehicle, engine and transmission state
        """
        return {
            "state": {
                "speed_mps": self.speed,
                "speed_kph": self.speed_kph,
                "heading_rad": self.heading,
                "heading_deg": float(np.degrees(self.heading)),
                "sliding": self._sliding,
            },
            "engine": self.engine.get_state(),
            "transmission": self.transmission.get_state(),
        }
