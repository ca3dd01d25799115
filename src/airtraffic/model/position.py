from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True, slots=True)
class Position:
    """
    A location on the surface of Earth, in degrees. Longitude comes first to match the `[longitude, latitude]` order the
    map frontend uses for coordinates. Positions are values: the simulator replaces them rather than mutating them.
    """

    longitude: float
    latitude: float

    @classmethod
    def from_lat_lon(cls, position: tuple[float, float]) -> Self:
        return cls(position[1], position[0])

    def as_lon_lat(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)

    def as_lat_lon(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
