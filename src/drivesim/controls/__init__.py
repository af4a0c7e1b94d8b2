"""
Controls module - Driver input capture.

This module contains:
- KeyboardInput: Key events to VehicleInputs snapshots
- KeyBindings: Configurable key names
- ShiftRequest: Discrete gear change commands
"""

from drivesim.controls.keyboard import KeyboardInput, KeyBindings, ShiftRequest

__all__ = [
    "KeyboardInput",
    "KeyBindings",
    "ShiftRequest",
]
