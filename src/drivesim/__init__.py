"""
DriveSim - A minimal real-time driving simulation.

This package provides:
- A simplified engine, gearbox and chassis model updated once per frame
- Keyboard-style digital controls with discrete gear shifts
- A headless analog dashboard readout (RPM, speed, gear)
- Telemetry recording and export
"""

__version__ = "0.1.0"

from drivesim.simulation.simulator import Simulator, SimulatorConfig
from drivesim.car.vehicle import Vehicle, VehicleConfig, VehicleInputs

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "Vehicle",
    "VehicleConfig",
    "VehicleInputs",
    "__version__",
]
