from dataclasses import dataclass
import math

from airtraffic.model.limits import TRAFFIC_LEVEL
from airtraffic.model.position import Position


@dataclass(frozen=True, slots=True)
class Airport:
    """
    An airport flights can depart from and arrive at. The catalog of airports is fixed when the simulator is built and
    never changes afterwards; flights refer to airports by `id` (normally the IATA code).
    """

    id: str
    name: str
    position: Position
    runway_count: int
    traffic_level: int

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("airport id must not be empty")
        if self.runway_count < 1:
            raise ValueError(f"{self.id}: runway count must be positive, got {self.runway_count}")
        if self.traffic_level not in TRAFFIC_LEVEL:
            raise ValueError(f"{self.id}: traffic level must be in [1, 10], got {self.traffic_level}")
        longitude, latitude = self.position.as_lon_lat()
        if not (math.isfinite(longitude) and -180.0 <= longitude <= 180.0):
            raise ValueError(f"{self.id}: longitude must be in [-180, 180], got {longitude}")
        if not (math.isfinite(latitude) and -90.0 <= latitude <= 90.0):
            raise ValueError(f"{self.id}: latitude must be in [-90, 90], got {latitude}")
