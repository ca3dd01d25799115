from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from airtraffic.model.position import Position


class FlightStatus(StrEnum):
    """
    Flight phase. The simulator moves flights from TAKEOFF to ENROUTE to LANDING and never backwards within a leg.
    SCHEDULED is reserved for pre-departure display and is never produced by the simulator itself.
    """

    SCHEDULED = "scheduled"
    TAKEOFF = "takeoff"
    ENROUTE = "enroute"
    LANDING = "landing"


@dataclass(frozen=True, slots=True)
class Flight:
    """
    A snapshot of one simulated flight. Flight objects are immutable; on every tick the simulator builds a new Flight for
    each surviving flight and swaps the whole set in at once, so a snapshot handed to a caller never changes under it.

    `heading` is the initial great-circle bearing from origin to destination, fixed when the leg is assigned. `route` is
    always `(origin position, current position, destination position)` and exists only for drawing the path.
    """

    id: str
    callsign: str
    origin: str
    destination: str
    aircraft_type: str

    position: Position
    altitude: int
    speed: int
    heading: float
    status: FlightStatus
    eta: datetime
    route: tuple[Position, Position, Position]

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError(f"{self.id}: origin and destination are both {self.origin}")
