"""
Keyboard input - Maps key transitions to driver controls.

Provides:
- Held-key state for throttle and steering
- Discrete shift requests on key-down
- Per-frame VehicleInputs snapshots
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List
import logging

from drivesim.car.vehicle import VehicleInputs

logger = logging.getLogger(__name__)


class ShiftRequest(IntEnum):
    """Discrete gear change commands."""
    DOWN = -1
    UP = 1


@dataclass
class KeyBindings:
    """Key names for each control."""
    throttle: str = "w"
    steer_left: str = "a"
    steer_right: str = "d"
    shift_down: str = "q"
    shift_up: str = "e"

    def __post_init__(self) -> None:
        keys = [self.throttle, self.steer_left, self.steer_right, self.shift_down, self.shift_up]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Key bindings must be distinct, got {keys}")


ShiftHandler = Callable[[ShiftRequest], None]


class KeyboardInput:
    """Keyboard state tracker.

    Each key transition overwrites the control it is bound to, so
    releasing one steering key centers the wheel even while the
    opposite key is still held.

    Usage:
        keyboard = KeyboardInput()
        keyboard.add_shift_handler(simulator.shift)
        keyboard.on_key("w", down=True)
        simulator.step(keyboard.snapshot())
    """

    def __init__(self, bindings: KeyBindings | None = None):
        """Initialize with optional custom key bindings.

        Args:
            bindings: Key bindings. Uses w/a/d/q/e if None.
        """
        self.bindings = bindings or KeyBindings()
        self._throttle: int = 0
        self._steer: int = 0
        self._shift_handlers: List[ShiftHandler] = []

    @property
    def throttle(self) -> int:
        return self._throttle

    @property
    def steer(self) -> int:
        return self._steer

    def add_shift_handler(self, handler: ShiftHandler) -> None:
        """Register a callable receiving each ShiftRequest.

        Args:
            handler: Function taking a ShiftRequest
        """
        self._shift_handlers.append(handler)

    def on_key(self, key: str, down: bool) -> None:
        """Process a key press or release.

        Args:
            key: Key name
            down: True on press, False on release
        """
        b = self.bindings
        if key == b.throttle:
            self._throttle = 1 if down else 0
        elif key == b.steer_left:
            self._steer = -1 if down else 0
        elif key == b.steer_right:
            self._steer = 1 if down else 0
        elif down and key == b.shift_up:
            self._dispatch(ShiftRequest.UP)
        elif down and key == b.shift_down:
            self._dispatch(ShiftRequest.DOWN)

    def _dispatch(self, request: ShiftRequest) -> None:
        logger.debug("Shift request: %s", request.name)
        for handler in self._shift_handlers:
            handler(request)

    def snapshot(self) -> VehicleInputs:
        """Get the current control state as an immutable snapshot."""
        return VehicleInputs(throttle=self._throttle, steer=self._steer)

    def release_all(self) -> None:
        """Release all held controls (e.g. when the window loses focus)."""
        self._throttle = 0
        self._steer = 0
