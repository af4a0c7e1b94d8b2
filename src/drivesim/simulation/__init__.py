"""
Simulation module - Frame loop driver.

This module contains:
- Simulator: Simulation context owning the vehicle and clock
- FrameClock: Timestamp to frame-time conversion
"""

from drivesim.simulation.simulator import Simulator, SimulatorConfig
from drivesim.simulation.clock import FrameClock

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "FrameClock",
]
