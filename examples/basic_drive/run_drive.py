#!/usr/bin/env python3
"""
Basic Drive Example

This example demonstrates how to:
1. Wire keyboard controls and a dashboard to a simulator
2. Drive a scripted sequence of key events through a frame clock
3. Read the dashboard readout each frame

Run with: python run_drive.py
"""

import logging

from drivesim import Simulator
from drivesim.controls import KeyboardInput
from drivesim.dashboard import Dashboard
from drivesim.log import setup_logging
from drivesim.simulation import FrameClock

logger = logging.getLogger("run_drive")

# (frame, key, down)
KEY_SCRIPT = [
    (0, "e", True),     # neutral -> 1st
    (1, "w", True),     # full throttle
    (300, "d", True),   # steer right
    (420, "d", False),
    (480, "w", False),  # coast
    (500, "q", True),   # 1st -> neutral
]


def main():
    setup_logging("DEBUG")

    sim = Simulator()
    keyboard = KeyboardInput()
    dashboard = Dashboard()
    clock = FrameClock()

    keyboard.add_shift_handler(sim.shift)
    sim.add_post_step_callback(dashboard.on_step)
    sim.start()

    events = {}
    for frame, key, down in KEY_SCRIPT:
        events.setdefault(frame, []).append((key, down))

    now_ms = 0.0
    for frame in range(600):
        for key, down in events.get(frame, []):
            keyboard.on_key(key, down)

        # Simulated 60 Hz animation frames
        dt = clock.tick(now_ms)
        now_ms += 1000.0 / 60.0
        sim.step(keyboard.snapshot(), dt)

        if (frame + 1) % 100 == 0:
            readout = dashboard.readout
            logger.info(
                "Frame %d: gear=%s speed=%.2f m/s rpm=%.0f heading=%.2f rad "
                "(needles: rpm %.1f deg, speed %.1f deg)",
                frame + 1,
                readout.gear_text,
                sim.vehicle.speed,
                sim.vehicle.engine.rpm,
                sim.vehicle.heading,
                readout.rpm_angle_deg,
                readout.speed_angle_deg,
            )

    sim.stop()


if __name__ == "__main__":
    main()
