"""
Car module - Vehicle dynamics core.

This module contains all car-related components:
- Engine: Torque curve and RPM bounds
- Transmission: Gear order, ratios, shifting
- Vehicle: Per-frame speed, heading and RPM update
"""

from drivesim.car.engine import Engine, EngineConfig
from drivesim.car.transmission import Transmission, TransmissionConfig, GearTableError
from drivesim.car.vehicle import Vehicle, VehicleConfig, VehicleInputs

__all__ = [
    "Engine",
    "EngineConfig",
    "Transmission",
    "TransmissionConfig",
    "GearTableError",
    "Vehicle",
    "VehicleConfig",
    "VehicleInputs",
]
