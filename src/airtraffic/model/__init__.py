"""
This module contains the simulator's data model. The primary classes are Flight and Airport; Position and the value
domains in `limits` support both.

All model objects are frozen dataclasses, so the snapshots the simulator hands out can be shared freely. They can be
serialized to JSON by a convenience method that calls into the `json` package with a special default serializer (and
sets a few other serialization options as well). Example:

    flights = simulator.list_flights()
    model.json.dumps(flights)
"""

from airtraffic.model.airport import Airport
from airtraffic.model.flight import Flight, FlightStatus
from airtraffic.model.position import Position

__all__ = ["Airport", "Flight", "FlightStatus", "Position"]
