"""
Great-circle geometry on a spherical Earth. Distances are in kilometers and angles in degrees. Distance and projection
are delegated to geopy's `great_circle`; geopy has no bearing function, so the initial bearing is computed here with the
usual forward-azimuth formula.
"""

import math

from geopy.distance import great_circle
from geopy.point import Point

from airtraffic.model.position import Position


KM_PER_NAUTICAL_MILE = 1.852


def knots_to_kmh(knots: float) -> float:
    return knots * KM_PER_NAUTICAL_MILE


def distance_km(start: Position, end: Position) -> float:
    return great_circle(start.as_lat_lon(), end.as_lat_lon()).km


def bearing(start: Position, end: Position) -> float:
    """
    Initial great-circle bearing from `start` toward `end`, normalized to [0, 360).
    """
    lat1 = math.radians(start.latitude)
    lat2 = math.radians(end.latitude)
    delta_lon = math.radians(end.longitude - start.longitude)

    y = math.sin(delta_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lon)
    result = math.degrees(math.atan2(y, x)) % 360.0
    # Tiny negative angles wrap to exactly 360.0 in floating point.
    return 0.0 if result >= 360.0 else result


def destination(start: Position, bearing_deg: float, km: float) -> Position:
    """
    The point reached by travelling `km` from `start` along the great circle with initial bearing `bearing_deg`.
    """
    point = great_circle(kilometers=km).destination(Point(start.latitude, start.longitude), bearing_deg)
    return Position.from_lat_lon((point.latitude, point.longitude))


def interpolate(start: Position, end: Position, fraction: float) -> Position:
    """
    The point `fraction` of the way from `start` to `end` along the great circle joining them.
    """
    if fraction <= 0.0:
        return start
    return destination(start, bearing(start, end), distance_km(start, end) * fraction)
