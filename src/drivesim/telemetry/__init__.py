"""
Telemetry module - Recording and export of simulation data.

This module contains:
- TelemetryRecorder: Samples frame telemetry into channels
- TelemetryChannel: Individual time series
- TelemetryExporter: CSV and JSON export
"""

from drivesim.telemetry.recorder import TelemetryRecorder, RecorderConfig
from drivesim.telemetry.channel import TelemetryChannel, ChannelConfig
from drivesim.telemetry.exporter import TelemetryExporter, ExporterConfig

__all__ = [
    "TelemetryRecorder",
    "RecorderConfig",
    "TelemetryChannel",
    "ChannelConfig",
    "TelemetryExporter",
    "ExporterConfig",
]
