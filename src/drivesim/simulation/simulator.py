"""
Simulator - Frame loop driver and simulation context.

Provides:
- Ownership of one vehicle per simulation (no module-level state)
- Time stepping with dt validation at the boundary
- Shift command routing
- Telemetry collection
- Post-step callbacks for dashboards and recorders
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List
import logging
import numpy as np

from drivesim.car.vehicle import Vehicle, VehicleConfig, VehicleInputs
from drivesim.controls.keyboard import ShiftRequest

logger = logging.getLogger(__name__)


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Time stepping
    fixed_dt: float = 1.0 / 60.0     # Default frame time (60 Hz)
    max_dt: float = 0.25             # Longer frames are clamped

    # Telemetry
    enable_telemetry: bool = True
    telemetry_buffer_size: int = 10000

    def __post_init__(self) -> None:
        """Validate time stepping."""
        if self.fixed_dt <= 0:
            raise ValueError("fixed_dt must be > 0")
        if self.max_dt < self.fixed_dt:
            raise ValueError("max_dt must be >= fixed_dt")
        if self.telemetry_buffer_size < 1:
            raise ValueError("telemetry_buffer_size must be >= 1")


StepCallback = Callable[["Simulator", float], None]


class Simulator:
    """Driving simulation context.

    Owns the vehicle and the simulation clock. Independent simulators
    share nothing, so several can run side by side.

    Usage:
        sim = Simulator()
        sim.start()
        sim.shift(ShiftRequest.UP)
        sim.step(VehicleInputs(throttle=1), dt=1 / 60)
    """

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        vehicle: Vehicle | None = None,
        vehicle_config: VehicleConfig | None = None,
    ):
        """Initialize simulator.

        Args:
            config: Simulator configuration. Uses defaults if None.
            vehicle: Vehicle to drive. Created from vehicle_config if None.
            vehicle_config: Configuration for a newly created vehicle
        """
        self.config = config or SimulatorConfig()
        self.vehicle = vehicle or Vehicle(vehicle_config)

        # State
        self._running: bool = False
        self._paused: bool = False
        self._time: float = 0.0
        self._frame: int = 0
        self._last_inputs: VehicleInputs = VehicleInputs()

        self._telemetry_buffer: List[Dict[str, Any]] = []
        self._post_step_callbacks: List[StepCallback] = []

    @property
    def is_running(self) -> bool:
        """Check if simulation is running."""
        return self._running

    @property
    def is_paused(self) -> bool:
        """Check if simulation is paused."""
        return self._paused

    @property
    def time(self) -> float:
        """Current simulation time in seconds."""
        return self._time

    @property
    def frame(self) -> int:
        """Number of frames stepped."""
        return self._frame

    @property
    def last_inputs(self) -> VehicleInputs:
        return self._last_inputs

    def add_post_step_callback(self, callback: StepCallback) -> None:
        """Add callback called after each step.

        Args:
            callback: Function taking (simulator, dt) arguments
        """
        self._post_step_callbacks.append(callback)

    def start(self) -> None:
        """Start the simulation."""
        self._running = True
        self._paused = False
        logger.info("Simulation started")

    def stop(self) -> None:
        """Stop the simulation."""
        self._running = False
        logger.info("Simulation stopped at t=%.3fs after %d frames", self._time, self._frame)

    def pause(self) -> None:
        """Pause the simulation."""
        self._paused = True

    def resume(self) -> None:
        """Resume the simulation."""
        self._paused = False

    def shift(self, request: ShiftRequest) -> bool:
        """Apply a gear change to the vehicle's transmission.

        Shifts are applied immediately, between frames.

        Args:
            request: Shift direction

        Returns:
            True if the gear changed
        """
        transmission = self.vehicle.transmission
        if request == ShiftRequest.UP:
            changed = transmission.shift_up()
        else:
            changed = transmission.shift_down()
        if changed:
            logger.debug("Shifted %s to gear %s", request.name.lower(), transmission.current_gear)
        return changed

    def _sanitize_dt(self, dt: float) -> float:
        if not np.isfinite(dt) or dt < 0:
            logger.warning("Invalid frame time %r clamped to 0", dt)
            return 0.0
        if dt > self.config.max_dt:
            logger.debug("Frame time %.4fs clamped to %.4fs", dt, self.config.max_dt)
            return self.config.max_dt
        return dt

    def step(
        self,
        inputs: VehicleInputs | None = None,
        dt: float | None = None,
    ) -> bool:
        """Advance simulation by one frame.

        Args:
            inputs: Driver controls for this frame (all released if None)
            dt: Frame time in seconds (uses fixed_dt if None)

        Returns:
            True if the vehicle was updated
        """
        if not self._running or self._paused:
            return False

        dt = self.config.fixed_dt if dt is None else self._sanitize_dt(dt)
        inputs = inputs or VehicleInputs()

        self.vehicle.update(inputs, dt)
        self._last_inputs = inputs
        self._time += dt
        self._frame += 1

        if self.config.enable_telemetry:
            self._collect_telemetry()

        for callback in self._post_step_callbacks:
            callback(self, dt)

        return True

    def step_until(
        self,
        condition: Callable[["Simulator"], bool],
        input_provider: Callable[["Simulator"], VehicleInputs] | None = None,
        max_steps: int = 100000,
    ) -> int:
        """Step simulation until condition is met.

        Args:
            condition: Function returning True when should stop
            input_provider: Function providing inputs for the next frame
            max_steps: Maximum steps to take

        Returns:
            Number of steps taken
        """
        steps = 0
        while self._running and steps < max_steps:
            if condition(self):
                break
            inputs = input_provider(self) if input_provider else None
            if not self.step(inputs):
                break
            steps += 1
        return steps

    def get_frame_telemetry(self) -> Dict[str, Any]:
        """Get telemetry for the current frame.

        Returns:
            Vehicle telemetry plus time, frame and the inputs applied
        """
        telemetry = self.vehicle.get_telemetry()
        telemetry["time"] = self._time
        telemetry["frame"] = self._frame
        telemetry["inputs"] = {
            "throttle": self._last_inputs.throttle,
            "steer": self._last_inputs.steer,
        }
        return telemetry

    def _collect_telemetry(self) -> None:
        """Append the current frame to the telemetry buffer."""
        self._telemetry_buffer.append(self.get_frame_telemetry())

        # Limit buffer size
        limit = self.config.telemetry_buffer_size
        if len(self._telemetry_buffer) > limit:
            self._telemetry_buffer = self._telemetry_buffer[-(limit // 2 or 1):]

    def get_telemetry(self) -> List[Dict[str, Any]]:
        """Get collected telemetry frames."""
        return self._telemetry_buffer.copy()

    def clear_telemetry(self) -> None:
        """Clear telemetry buffer."""
        self._telemetry_buffer.clear()

    def reset(self) -> None:
        """Reset vehicle, clock and telemetry. Leaves the simulation stopped."""
        self.vehicle.reset()
        self._time = 0.0
        self._frame = 0
        self._last_inputs = VehicleInputs()
        self._telemetry_buffer.clear()
        self._running = False
        self._paused = False
        logger.info("Simulation reset")

    def get_state(self) -> Dict[str, Any]:
        """Get complete simulation state.

        Returns:
            Dictionary containing simulation state
        """
        return {
            "config": {
                "fixed_dt": self.config.fixed_dt,
                "max_dt": self.config.max_dt,
            },
            "running": self._running,
            "paused": self._paused,
            "time": self._time,
            "frame": self._frame,
            "vehicle": self.vehicle.get_telemetry(),
        }
