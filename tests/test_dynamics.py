"""Tests for the per-frame vehicle dynamics update."""

import math

import pytest

from drivesim.car.vehicle import Vehicle, VehicleConfig, VehicleInputs

DT = 1.0 / 60.0


def _vehicle_in_gear(gear: str, rpm: float | None = None, speed: float = 0.0) -> Vehicle:
    vehicle = Vehicle()
    vehicle.transmission.set_gear(gear)
    if rpm is not None:
        vehicle.engine.rpm = rpm
    vehicle.speed = speed
    return vehicle


class TestVehicleInputs:
    """Test input snapshot validation."""

    def test_defaults_released(self):
        """Test default snapshot has all controls released."""
        inputs = VehicleInputs()
        assert inputs.throttle == 0
        assert inputs.steer == 0

    @pytest.mark.parametrize("kwargs", [{"throttle": 2}, {"throttle": -1}, {"steer": 2}, {"steer": 0.5}])
    def test_out_of_range_rejected(self, kwargs):
        """Test inputs outside the digital ranges are rejected."""
        with pytest.raises(ValueError):
            VehicleInputs(**kwargs)


class TestVehicleUpdate:
    """Test the vehicle update step."""

    def test_vehicle_initialization(self):
        """Test vehicle starts at rest in neutral."""
        vehicle = Vehicle()
        assert vehicle.speed == 0.0
        assert vehicle.heading == 0.0
        assert vehicle.mass == 1200.0
        assert vehicle.drag == 0.98
        assert vehicle.lateral_grip == 1.0
        assert vehicle.transmission.current_gear == "N"

    def test_first_gear_step_from_peak_torque(self):
        """Test one full-throttle step in first gear at peak torque."""
        vehicle = _vehicle_in_gear("1", rpm=4000)
        vehicle.update(VehicleInputs(throttle=1), DT)

        expected = (280 * 3.5 / 1200) * (1 / 60) * 0.98
        assert vehicle.speed == pytest.approx(expected)
        assert vehicle.speed == pytest.approx(0.013339, rel=1e-4)
        # |0.0133 * 3.5 * 60| is below idle
        assert vehicle.engine.rpm == 900.0

    @pytest.mark.parametrize("gear", ["R", "N", "1", "3", "5"])
    def test_no_throttle_is_pure_decay(self, gear):
        """Test speed only decays by drag without throttle."""
        vehicle = _vehicle_in_gear(gear, rpm=4000, speed=12.5)
        before = vehicle.speed
        vehicle.update(VehicleInputs(throttle=0), DT)
        assert vehicle.speed == before * vehicle.drag

    def test_neutral_holds_rpm(self):
        """Test neutral leaves RPM unchanged regardless of speed."""
        vehicle = _vehicle_in_gear("N", rpm=2500, speed=30.0)
        vehicle.update(VehicleInputs(throttle=1), DT)
        assert vehicle.engine.rpm == 2500.0
        # No drive force in neutral
        assert vehicle.speed == pytest.approx(30.0 * 0.98)

    def test_rpm_synchronized_to_speed(self):
        """Test RPM follows speed through the gear ratio."""
        vehicle = _vehicle_in_gear("2", speed=20.0)
        vehicle.update(VehicleInputs(), DT)
        assert vehicle.engine.rpm == pytest.approx(20.0 * 0.98 * 2.2 * 60)

    def test_rpm_clamped_to_max(self):
        """Test synchronized RPM never exceeds the limit."""
        vehicle = _vehicle_in_gear("1", speed=100.0)
        vehicle.update(VehicleInputs(), DT)
        assert vehicle.engine.rpm == 7000.0

    def test_reverse_drives_backwards(self):
        """Test reverse gear produces negative speed and positive RPM."""
        vehicle = _vehicle_in_gear("R", rpm=4000)
        vehicle.update(VehicleInputs(throttle=1), DT)
        assert vehicle.speed < 0
        assert vehicle.engine.rpm >= vehicle.engine.idle_rpm

    def test_acceleration_from_rest(self):
        """Test holding throttle in first gear moves the car."""
        vehicle = _vehicle_in_gear("1")
        for _ in range(120):
            vehicle.update(VehicleInputs(throttle=1), DT)
        assert vehicle.speed > 0
        assert vehicle.engine.idle_rpm <= vehicle.engine.rpm <= vehicle.engine.max_rpm

    def test_zero_dt_still_applies_drag(self):
        """Test a zero-length frame still applies one drag multiplication."""
        vehicle = _vehicle_in_gear("1", rpm=4000, speed=10.0)
        vehicle.update(VehicleInputs(throttle=1), 0.0)
        assert vehicle.speed == pytest.approx(9.8)
        assert vehicle.heading == 0.0
        assert vehicle.engine.rpm == pytest.approx(9.8 * 3.5 * 60)

    @pytest.mark.parametrize("dt", [-0.01, float("nan"), float("inf")])
    def test_invalid_dt_leaves_state_untouched(self, dt):
        """Test invalid frame times raise before any mutation."""
        vehicle = _vehicle_in_gear("1", rpm=4000, speed=5.0)
        vehicle.heading = 0.3
        with pytest.raises(ValueError):
            vehicle.update(VehicleInputs(throttle=1, steer=1), dt)
        assert vehicle.speed == 5.0
        assert vehicle.heading == 0.3
        assert vehicle.engine.rpm == 4000.0

    def test_update_never_shifts(self):
        """Test the update does not change gear."""
        vehicle = _vehicle_in_gear("3", speed=40.0)
        for _ in range(10):
            vehicle.update(VehicleInputs(throttle=1, steer=1), DT)
        assert vehicle.transmission.current_gear == "3"

    def test_frame_rate_independent_drag(self):
        """Test dt-scaled drag matches legacy drag at the reference rate."""
        config = VehicleConfig(frame_rate_independent_drag=True)
        vehicle = Vehicle(config)
        vehicle.speed = 10.0
        vehicle.update(VehicleInputs(), 1 / 60)
        assert vehicle.speed == pytest.approx(9.8)

        vehicle.speed = 10.0
        vehicle.update(VehicleInputs(), 1 / 30)
        assert vehicle.speed == pytest.approx(10.0 * 0.98**2)

        vehicle.speed = 10.0
        vehicle.update(VehicleInputs(), 0.0)
        assert vehicle.speed == 10.0

    def test_reset(self):
        """Test reset brings the vehicle to rest in neutral."""
        vehicle = _vehicle_in_gear("2", rpm=3000, speed=15.0)
        vehicle.heading = 4.0
        vehicle.reset()
        assert vehicle.speed == 0.0
        assert vehicle.heading == 0.0
        assert vehicle.engine.rpm == 1000.0
        assert vehicle.transmission.current_gear == "N"

    def test_vehicle_telemetry(self):
        """Test vehicle telemetry output."""
        telemetry = Vehicle().get_telemetry()
        assert telemetry["state"]["speed_mps"] == 0.0
        assert telemetry["engine"]["rpm"] == 1000.0
        assert telemetry["transmission"]["gear"] == "N"


class TestSteering:
    """Test the grip/slide steering model."""

    def test_threshold_boundary(self):
        """Test lateral force exactly at the threshold keeps grip."""
        vehicle = Vehicle()
        assert vehicle.steer_rate(15.0, 1) == 0.02
        assert vehicle.steer_rate(-15.0, -1) == 0.02
        assert vehicle.steer_rate(15.0001, 1) == 0.04
        assert vehicle.steer_rate(-15.0001, 1) == 0.04

    def test_slide_checked_after_drag(self):
        """Test the slide check uses the post-drag speed."""
        # 15.2 would slide before drag; 15.2 * 0.98 = 14.896 keeps grip
        vehicle = _vehicle_in_gear("N", speed=15.2)
        vehicle.update(VehicleInputs(steer=1), DT)
        assert not vehicle.is_sliding
        assert vehicle.heading == pytest.approx(15.2 * 0.98 * 0.02)

    def test_update_at_exact_threshold_keeps_grip(self):
        """Test update lands exactly on the threshold after drag and keeps grip."""
        post_drag = 20.0 * 0.98
        vehicle = Vehicle(VehicleConfig(slide_threshold=post_drag))
        vehicle.speed = 20.0
        vehicle.update(VehicleInputs(steer=1), DT)
        assert vehicle.speed == post_drag
        assert not vehicle.is_sliding
        assert vehicle.heading == pytest.approx(post_drag * 0.02)

    def test_update_just_above_threshold_slides(self):
        """Test update just past the threshold after drag slides."""
        post_drag = 20.0 * 0.98
        vehicle = Vehicle(VehicleConfig(slide_threshold=math.nextafter(post_drag, 0.0)))
        vehicle.speed = 20.0
        vehicle.update(VehicleInputs(steer=-1), DT)
        assert vehicle.is_sliding
        assert vehicle.heading == pytest.approx(-post_drag * 0.04)

    def test_grip_heading_change(self):
        """Test heading change below the slide threshold."""
        vehicle = _vehicle_in_gear("N", speed=10.0)
        vehicle.update(VehicleInputs(steer=1), DT)
        assert not vehicle.is_sliding
        assert vehicle.heading == pytest.approx(9.8 * 0.02)

    def test_slide_heading_change(self):
        """Test heading change above the slide threshold."""
        vehicle = _vehicle_in_gear("N", speed=20.0)
        vehicle.update(VehicleInputs(steer=-1), DT)
        assert vehicle.is_sliding
        assert vehicle.heading == pytest.approx(-19.6 * 0.04)

    def test_no_steer_no_heading_change(self):
        """Test heading is unchanged without steering input."""
        vehicle = _vehicle_in_gear("N", speed=50.0)
        vehicle.update(VehicleInputs(), DT)
        assert vehicle.heading == 0.0
        assert not vehicle.is_sliding

    def test_grip_scales_threshold(self):
        """Test more lateral grip raises the slide threshold."""
        vehicle = Vehicle(VehicleConfig(lateral_grip=2.0))
        assert vehicle.steer_rate(20.0, 1) == 0.02
        assert vehicle.steer_rate(31.0, 1) == 0.04

    def test_heading_unbounded(self):
        """Test heading accumulates without wrapping."""
        vehicle = _vehicle_in_gear("N", speed=14.0)
        for _ in range(2000):
            vehicle.speed = 14.0
            vehicle.update(VehicleInputs(steer=1), DT)
        assert vehicle.heading > 100.0
