#!/usr/bin/env python3
"""
Telemetry Recording Example

This example demonstrates how to:
1. Record telemetry during a simulation
2. Inspect channel statistics
3. Export telemetry to CSV and JSON

Run with: python record_telemetry.py
"""

from pathlib import Path

from drivesim import Simulator, VehicleInputs
from drivesim.controls import ShiftRequest
from drivesim.log import setup_logging
from drivesim.telemetry import TelemetryRecorder, TelemetryExporter, ExporterConfig


def main():
    setup_logging("INFO")
    output_dir = Path(__file__).parent / "output"

    sim = Simulator()
    recorder = TelemetryRecorder()
    sim.add_post_step_callback(recorder.on_step)
    sim.start()

    sim.shift(ShiftRequest.UP)
    for step in range(900):
        phase = step % 300
        if phase < 200:
            inputs = VehicleInputs(throttle=1)
        elif phase < 250:
            inputs = VehicleInputs(throttle=1, steer=1)
        else:
            inputs = VehicleInputs(steer=-1)
        sim.step(inputs)

    sim.stop()

    for name, stats in recorder.get_statistics().items():
        print(f"{name:>10}: min={stats['min']} max={stats['max']} mean={stats['mean']} {stats['unit']}")

    exporter = TelemetryExporter(ExporterConfig(output_dir=str(output_dir)))
    print(f"CSV:  {exporter.export_csv(recorder)}")
    print(f"JSON: {exporter.export_json(recorder)}")


if __name__ == "__main__":
    main()
