"""
Value domains for the numeric flight fields. The simulator draws random increments freely and then clamps every field
through these bounds once per update, so the bounds below are the only place the domains are written down.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Bounds:
    lower: int
    upper: int

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"empty bounds: [{self.lower}, {self.upper}]")

    def clamp(self, value: int) -> int:
        return max(self.lower, min(self.upper, value))

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (int, float)):
            return False
        return self.lower <= value <= self.upper


# Flight level (hundreds of feet).
ALTITUDE = Bounds(10, 350)

# Knots.
SPEED = Bounds(180, 700)

TRAFFIC_LEVEL = Bounds(1, 10)

# Climb-out completes once a departing flight reaches this flight level.
CRUISE_TRANSITION_ALTITUDE = 300

# Flights above this level may begin their descent once inside the approach radius.
APPROACH_MIN_ALTITUDE = 100
