from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from airtraffic import geo
from airtraffic.model.airport import Airport
from airtraffic.model.flight import Flight, FlightStatus
from airtraffic.model.position import Position


class ManualTask:
    def __init__(self, scheduler: "ManualScheduler", callback: Callable[[], None]):
        self._scheduler = scheduler
        self.callback = callback

    def cancel(self) -> None:
        self._scheduler.tasks.remove(self)


class ManualScheduler:
    """
    Scheduler double whose timers only fire when the test calls `fire`.
    """

    def __init__(self) -> None:
        self.tasks: list[ManualTask] = []
        self.periods: list[float] = []

    def schedule(self, period: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(self, callback)
        self.tasks.append(task)
        self.periods.append(period)
        return task

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for task in list(self.tasks):
                task.callback()


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


AIRPORT_A = Airport("AAA", "Alpha", Position(0.0, 0.0), runway_count=1, traffic_level=1)
AIRPORT_B = Airport("BBB", "Bravo", Position(10.0, 0.0), runway_count=2, traffic_level=5)


def make_flight(
    flight_id: str = "FL0",
    origin: Airport = AIRPORT_A,
    destination: Airport = AIRPORT_B,
    position: Position | None = None,
    status: FlightStatus = FlightStatus.TAKEOFF,
    altitude: int = 100,
    speed: int = 500,
    eta: datetime | None = None,
) -> Flight:
    if position is None:
        position = origin.position
    return Flight(
        id=flight_id,
        callsign="TST1234",
        origin=origin.id,
        destination=destination.id,
        aircraft_type="A320",
        position=position,
        altitude=altitude,
        speed=speed,
        heading=geo.bearing(origin.position, destination.position),
        status=status,
        eta=eta if eta is not None else datetime(2024, 1, 1, tzinfo=timezone.utc),
        route=(origin.position, position, destination.position),
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def two_airports() -> tuple[Airport, Airport]:
    return (AIRPORT_A, AIRPORT_B)
