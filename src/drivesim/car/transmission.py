"""
Transmission component - Manual gearbox simulation.

Simulates:
- Ordered gear positions from reverse through fifth
- Fixed ratio per gear (negative for reverse, zero for neutral)
- Instantaneous, clamped up/down shifting
"""

from dataclasses import dataclass, field
from typing import Dict, List


class GearTableError(RuntimeError):
    """A gear label has no entry in the ratio table."""


@dataclass
class TransmissionConfig:
    """Configuration for a five-speed manual gearbox with reverse.

    ``gear_order`` is the shift sequence; shifting up moves one step
    to the right, shifting down one step to the left.
    """
    gear_order: List[str] = field(default_factory=lambda: [
        "R", "N", "1", "2", "3", "4", "5",
    ])

    gear_ratios: Dict[str, float] = field(default_factory=lambda: {
        "R": -3.2,
        "N": 0.0,
        "1": 3.5,
        "2": 2.2,
        "3": 1.5,
        "4": 1.1,
        "5": 0.9,
    })

    start_gear: str = "N"

    def __post_init__(self) -> None:
        """Validate the gear table."""
        if not self.gear_order:
            raise ValueError("gear_order must not be empty")
        missing = [g for g in self.gear_order if g not in self.gear_ratios]
        if missing:
            raise ValueError(f"gear_ratios missing entries for: {missing}")
        if self.start_gear not in self.gear_order:
            raise ValueError(f"start_gear {self.start_gear!r} not in gear_order")


class Transmission:
    """Manual gearbox with instantaneous shifts.

    There is no clutch or synchro delay and no RPM penalty on a shift.
    Shifting past either end of the gear order is a no-op.
    """

    def __init__(self, config: TransmissionConfig | None = None):
        """Initialize transmission with optional custom configuration.

        Args:
            config: Transmission configuration. Uses defaults if None.
        """
        self.config = config or TransmissionConfig()
        self._current_index: int = self.config.gear_order.index(self.config.start_gear)

    @property
    def current_index(self) -> int:
        """Index of the current gear in the gear order."""
        return self._current_index

    @property
    def current_gear(self) -> str:
        """Label of the current gear."""
        return self.config.gear_order[self._current_index]

    @property
    def top_index(self) -> int:
        return len(self.config.gear_order) - 1

    @property
    def is_neutral(self) -> bool:
        """Check if the drivetrain is disengaged."""
        return self.current_ratio() == 0.0

    def get_gear_ratio(self, gear: str) -> float:
        """Get ratio for a gear label.

        Args:
            gear: Gear label

        Returns:
            Gear ratio

        Raises:
            GearTableError: If the label has no ratio
        """
        try:
            return self.config.gear_ratios[gear]
        except KeyError:
            raise GearTableError(f"No ratio defined for gear {gear!r}") from None

    def current_ratio(self) -> float:
        """Ratio of the current gear (0.0 in neutral)."""
        return self.get_gear_ratio(self.current_gear)

    def shift_up(self) -> bool:
        """Shift one gear up.

        Returns:
            True if the gear changed, False if already in top gear
        """
        if self._current_index >= self.top_index:
            return False
        self._current_index += 1
        return True

    def shift_down(self) -> bool:
        """Shift one gear down.

        Returns:
            True if the gear changed, False if already in the lowest position
        """
        if self._current_index <= 0:
            return False
        self._current_index -= 1
        return True

    def set_gear(self, gear: str) -> None:
        """Directly select a gear (for initialization or tests).

        Args:
            gear: Target gear label

        Raises:
            ValueError: If the label is not in the gear order
        """
        if gear not in self.config.gear_order:
            raise ValueError(f"Unknown gear {gear!r}")
        self._current_index = self.config.gear_order.index(gear)

    def reset(self) -> None:
        """Reset transmission to the start gear."""
        self._current_index = self.config.gear_order.index(self.config.start_gear)

    def get_state(self) -> dict:
        """Get current transmission state for telemetry.

        Returns:
            Dictionary containing transmission state values
        """
        return {
            "gear": self.current_gear,
            "gear_index": self._current_index,
            "gear_ratio": self.current_ratio(),
        }
