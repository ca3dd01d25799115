from collections.abc import Callable, Iterable
import dataclasses
from datetime import datetime, timedelta, timezone
import itertools
import random

from airtraffic import geo
from airtraffic.catalog import AIRCRAFT_TYPES, AIRLINES
from airtraffic.config import SimulatorConfig
from airtraffic.errors import ConfigurationError, RegistryInvariantError
from airtraffic.log import log
from airtraffic.model.airport import Airport
from airtraffic.model.flight import Flight, FlightStatus
from airtraffic.model.limits import ALTITUDE, APPROACH_MIN_ALTITUDE, CRUISE_TRANSITION_ALTITUDE, SPEED
from airtraffic.model.position import Position
from airtraffic.simulation.scheduler import AsyncioScheduler, ScheduledTask, Scheduler


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FlightSimulator:
    """
    The flight registry and simulator. It owns every Flight and Airport record, advances the flights once per tick, and
    answers queries from the display side with immutable snapshots.

    Each tick builds the next generation of flights into a fresh dictionary and swaps it in when the tick is complete,
    so a query never sees a half-updated registry. Flights that reach their destination either continue on a new leg
    under the same id or are retired; the registry is topped back up to `config.min_flights` afterwards.

    The host owns the instance and passes it to whatever needs it. Ticks are driven by `start` and `stop` through the
    injected scheduler, or by calling `tick` directly.
    """

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
        clock: Callable[[], datetime] = _utc_now,
        rng: random.Random | None = None,
        flights: Iterable[Flight] | None = None,
    ):
        self.config = config if config is not None else SimulatorConfig()
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._clock = clock
        self._rng = rng if rng is not None else random.Random(self.config.seed)

        self._airports: dict[str, Airport] = {airport.id: airport for airport in self.config.airports}
        self._airport_ids = tuple(self._airports)
        self._airline_codes = tuple(AIRLINES)
        self._id_counter = itertools.count()
        self._task: ScheduledTask | None = None
        self.tick_count = 0

        if flights is None:
            self._flights: dict[str, Flight] = self._spawn(self.config.initial_flights, self._clock(), {})
        else:
            self._flights = self._adopt(flights)

    def start(self) -> None:
        if self._task is not None:
            return
        log(f"ticking every {self.config.tick_seconds:g}s with {len(self._flights)} flights")
        self._task = self._scheduler.schedule(self.config.tick_seconds, self.tick)

    def stop(self) -> None:
        if self._task is None:
            return
        log(f"stopped after {self.tick_count} ticks")
        self._task.cancel()
        self._task = None

    def is_running(self) -> bool:
        return self._task is not None

    def list_flights(self) -> list[Flight]:
        return list(self._flights.values())

    def get_flight(self, flight_id: str) -> Flight | None:
        return self._flights.get(flight_id)

    def list_airports(self) -> list[Airport]:
        return list(self._airports.values())

    def get_airport(self, airport_id: str) -> Airport | None:
        return self._airports.get(airport_id)

    def flights_arriving_at(self, airport_id: str) -> list[Flight]:
        return [f for f in self._flights.values() if f.destination == airport_id]

    def flights_departing_from(self, airport_id: str) -> list[Flight]:
        """
        Flights out of `airport_id` that are still climbing out. Flights from the airport that have reached cruise are
        no longer considered departures.
        """
        return [f for f in self._flights.values() if f.origin == airport_id and f.status == FlightStatus.TAKEOFF]

    def tick(self) -> None:
        """
        Advance every flight by one tick period and replenish the registry if it fell below the floor.
        """
        now = self._clock()
        next_generation: dict[str, Flight] = {}
        for flight in self._flights.values():
            updated = self._advance(flight, now)
            if updated is not None:
                next_generation[updated.id] = updated

        shortfall = self.config.min_flights - len(next_generation)
        if shortfall > 0:
            count = max(self._rng.randint(1, 3), shortfall)
            next_generation = self._spawn(count, now, next_generation)
            log(f"spawned {count} flights, {len(next_generation)} active")

        self._flights = next_generation
        self.tick_count += 1

    def _advance(self, flight: Flight, now: datetime) -> Flight | None:
        destination = self._airport(flight.destination)
        remaining_km = geo.distance_km(flight.position, destination.position)

        if remaining_km < self.config.arrival_radius_km:
            if self._rng.random() < self.config.reassign_probability:
                return self._reassign(flight, now)
            log(f"{flight.id} ({flight.callsign}) retired at {flight.destination}")
            return None

        step_km = geo.knots_to_kmh(flight.speed) * self.config.tick_seconds / 3600
        position = geo.destination(flight.position, flight.heading, step_km)

        altitude, speed, status = flight.altitude, flight.speed, flight.status
        if status == FlightStatus.TAKEOFF:
            altitude += self._rng.randint(10, 29)
            speed += self._rng.randint(5, 14)
            if altitude >= CRUISE_TRANSITION_ALTITUDE:
                status = FlightStatus.ENROUTE
        elif remaining_km < self.config.approach_radius_km and altitude > APPROACH_MIN_ALTITUDE:
            status = FlightStatus.LANDING
            altitude -= self._rng.randint(5, 14)
            speed -= self._rng.randint(2, 6)
        altitude = ALTITUDE.clamp(altitude)
        speed = SPEED.clamp(speed)

        origin = self._airport(flight.origin)
        return dataclasses.replace(
            flight,
            position=position,
            altitude=altitude,
            speed=speed,
            status=status,
            eta=self._eta(now, position, destination, speed),
            route=(origin.position, position, destination.position),
        )

    def _reassign(self, flight: Flight, now: datetime) -> Flight:
        origin = self._airport(flight.destination)
        destination = self._airports[self._rng.choice([a for a in self._airport_ids if a != origin.id])]
        callsign = self._callsign()
        speed = SPEED.clamp(flight.speed)
        log(f"{flight.id} ({flight.callsign}) continuing {origin.id} -> {destination.id} as {callsign}")
        return dataclasses.replace(
            flight,
            callsign=callsign,
            origin=origin.id,
            destination=destination.id,
            position=origin.position,
            altitude=ALTITUDE.clamp(self._rng.randint(50, 149)),
            speed=speed,
            heading=geo.bearing(origin.position, destination.position),
            status=FlightStatus.TAKEOFF,
            eta=self._eta(now, origin.position, destination, speed),
            route=(origin.position, origin.position, destination.position),
        )

    def _spawn(self, count: int, now: datetime, flights: dict[str, Flight]) -> dict[str, Flight]:
        """
        Return a copy of `flights` with `count` new flights added, each somewhere along its route.
        """
        result = dict(flights)
        for _ in range(count):
            origin_id, destination_id = self._rng.sample(self._airport_ids, 2)
            origin, destination = self._airports[origin_id], self._airports[destination_id]

            progress = self._rng.random()
            position = geo.interpolate(origin.position, destination.position, progress)
            speed = SPEED.clamp(self._rng.randint(400, 699))

            if progress < 0.1:
                status = FlightStatus.TAKEOFF
            elif progress > 0.9:
                status = FlightStatus.LANDING
            else:
                status = FlightStatus.ENROUTE

            flight = Flight(
                id=self._new_id(result),
                callsign=self._callsign(),
                origin=origin.id,
                destination=destination.id,
                aircraft_type=self._rng.choice(AIRCRAFT_TYPES),
                position=position,
                altitude=ALTITUDE.clamp(self._rng.randint(150, 499)),
                speed=speed,
                heading=geo.bearing(origin.position, destination.position),
                status=status,
                eta=self._eta(now, position, destination, speed),
                route=(origin.position, position, destination.position),
            )
            result[flight.id] = flight
        return result

    def _adopt(self, flights: Iterable[Flight]) -> dict[str, Flight]:
        result: dict[str, Flight] = {}
        for flight in flights:
            if flight.id in result:
                raise ConfigurationError(f"duplicate flight id {flight.id}")
            for airport_id in (flight.origin, flight.destination):
                if airport_id not in self._airports:
                    raise ConfigurationError(f"{flight.id}: unknown airport {airport_id}")
            if flight.altitude not in ALTITUDE or flight.speed not in SPEED:
                raise ConfigurationError(f"{flight.id}: altitude {flight.altitude} or speed {flight.speed} out of range")
            result[flight.id] = flight
        return result

    def _airport(self, airport_id: str) -> Airport:
        try:
            return self._airports[airport_id]
        except KeyError:
            raise RegistryInvariantError(f"flight refers to unknown airport {airport_id}") from None

    def _new_id(self, taken: dict[str, Flight]) -> str:
        while True:
            candidate = f"FL{next(self._id_counter)}"
            if candidate not in taken:
                return candidate

    def _callsign(self) -> str:
        return f"{self._rng.choice(self._airline_codes)}{self._rng.randint(1000, 9999)}"

    @staticmethod
    def _eta(now: datetime, position: Position, destination: Airport, speed: int) -> datetime:
        hours = geo.distance_km(position, destination.position) / geo.knots_to_kmh(speed)
        return now + timedelta(hours=hours)
