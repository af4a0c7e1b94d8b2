"""
Dashboard - Analog gauge readout for the vehicle.

Computes needle angles for the RPM and speed gauges and the gear
indicator text. Drawing the gauges is left to the presentation layer.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from drivesim.car.vehicle import Vehicle

if TYPE_CHECKING:
    from drivesim.simulation.simulator import Simulator


@dataclass
class DashboardConfig:
    """Gauge scales.

    Angles are in degrees; ``zero_angle_deg`` is where a needle rests
    at zero (pointing left on a half-dial).
    """
    rpm_full_scale: float = 7000.0
    rpm_sweep_deg: float = 180.0
    speed_deg_per_mps: float = 4.0
    zero_angle_deg: float = -90.0

    def __post_init__(self) -> None:
        if self.rpm_full_scale <= 0:
            raise ValueError("rpm_full_scale must be > 0")


@dataclass(frozen=True)
class DashboardReadout:
    """Values a gauge cluster displays for one frame."""
    rpm_angle_deg: float
    speed_angle_deg: float
    gear_text: str


class Dashboard:
    """Headless dashboard sink.

    Reads vehicle state after each update; nothing flows back into
    the vehicle.
    """

    def __init__(self, config: DashboardConfig | None = None):
        self.config = config or DashboardConfig()
        self._readout: DashboardReadout | None = None

    @property
    def readout(self) -> DashboardReadout | None:
        """Most recent readout, None before the first update."""
        return self._readout

    def rpm_angle(self, rpm: float) -> float:
        cfg = self.config
        return rpm / cfg.rpm_full_scale * cfg.rpm_sweep_deg + cfg.zero_angle_deg

    def speed_angle(self, speed: float) -> float:
        return speed * self.config.speed_deg_per_mps + self.config.zero_angle_deg

    def update(self, vehicle: Vehicle) -> DashboardReadout:
        """Refresh the readout from vehicle state.

        Args:
            vehicle: Vehicle to display

        Returns:
            New dashboard readout
        """
        self._readout = DashboardReadout(
            rpm_angle_deg=self.rpm_angle(vehicle.engine.rpm),
            speed_angle_deg=self.speed_angle(vehicle.speed),
            gear_text=vehicle.transmission.current_gear,
        )
        return self._readout

    def on_step(self, simulator: "Simulator", dt: float) -> None:
        """Post-step callback for Simulator.add_post_step_callback."""
        self.update(simulator.vehicle)
