"""
Utilities for serializing simulator data model objects into JSON for the map frontend. Example:

    flights = simulator.list_flights()
    model.json.dumps({"type": "flights", "flights": flights})

This is equivalent to:

    json.dumps(..., default=<private serialization function>, allow_nan=False, separators=(",", ":"))

Field names are camelCase and positions are `[longitude, latitude]` pairs, which is what the frontend's map layers
expect.
"""

from datetime import datetime
import json
from typing import Any

from airtraffic.model.airport import Airport
from airtraffic.model.flight import Flight
from airtraffic.model.position import Position


def _default(obj: Any) -> Any:
    if isinstance(obj, Flight):
        return {
            "id": obj.id,
            "callsign": obj.callsign,
            "origin": obj.origin,
            "destination": obj.destination,
            "aircraftType": obj.aircraft_type,
            "position": obj.position,
            "altitude": obj.altitude,
            "speed": obj.speed,
            "heading": round(obj.heading, 2),
            "status": obj.status,
            "eta": obj.eta,
            "route": list(obj.route),
        }
    if isinstance(obj, Airport):
        return {
            "id": obj.id,
            "name": obj.name,
            "position": obj.position,
            "runwayCount": obj.runway_count,
            "trafficLevel": obj.traffic_level,
        }
    if isinstance(obj, Position):
        return list(obj.as_lon_lat())
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"object of type {type(obj).__name__!r} is not JSON serializable")


def dumps(obj: Any) -> str:
    return json.dumps(obj, default=_default, allow_nan=False, separators=(",", ":"))
