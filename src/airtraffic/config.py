from collections.abc import Mapping
from dataclasses import dataclass
import os
from typing import Self

from airtraffic.catalog import DEFAULT_AIRPORTS, load_airports
from airtraffic.errors import ConfigurationError
from airtraffic.model.airport import Airport


@dataclass(frozen=True)
class SimulatorConfig:
    """
    Tunable parameters of the flight simulator. The defaults reproduce the reference traffic picture: 50 flights among
    ten major airports, updated every five seconds.
    """

    # Number of flights spawned when the simulator is built.
    initial_flights: int = 50
    # After every tick the registry is topped back up to at least this many flights.
    min_flights: int = 50
    tick_seconds: float = 5.0
    # Chance that a flight reaching its destination continues on a new leg instead of being retired.
    reassign_probability: float = 0.1
    # A leg is complete once the flight is this close to its destination.
    arrival_radius_km: float = 50.0
    # Flights inside this radius start descending.
    approach_radius_km: float = 200.0
    seed: int | None = None
    airports: tuple[Airport, ...] = DEFAULT_AIRPORTS

    def __post_init__(self) -> None:
        if self.initial_flights < 0:
            raise ConfigurationError(f"initial_flights must not be negative, got {self.initial_flights}")
        if self.min_flights < 0:
            raise ConfigurationError(f"min_flights must not be negative, got {self.min_flights}")
        if not self.tick_seconds > 0:
            raise ConfigurationError(f"tick_seconds must be positive, got {self.tick_seconds}")
        if not 0.0 <= self.reassign_probability <= 1.0:
            raise ConfigurationError(f"reassign_probability must be in [0, 1], got {self.reassign_probability}")
        if not 0 < self.arrival_radius_km <= self.approach_radius_km:
            raise ConfigurationError(
                f"need 0 < arrival_radius_km <= approach_radius_km, got {self.arrival_radius_km} and "
                f"{self.approach_radius_km}"
            )
        if len(self.airports) < 2:
            raise ConfigurationError(f"at least two airports are required, got {len(self.airports)}")
        ids = [airport.id for airport in self.airports]
        duplicates = sorted({airport_id for airport_id in ids if ids.count(airport_id) > 1})
        if duplicates:
            raise ConfigurationError(f"duplicate airport ids: {', '.join(duplicates)}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """
        Build a configuration from `SIM_*` environment variables. Unset variables keep their defaults.
        """
        if environ is None:
            environ = os.environ

        kwargs: dict[str, object] = {}
        for name, key, parse in (
            ("initial_flights", "SIM_INITIAL_FLIGHTS", int),
            ("min_flights", "SIM_MIN_FLIGHTS", int),
            ("tick_seconds", "SIM_TICK_SECONDS", float),
            ("reassign_probability", "SIM_REASSIGN_PROBABILITY", float),
            ("seed", "SIM_SEED", int),
        ):
            value = environ.get(key)
            if value is None or not value.strip():
                continue
            try:
                kwargs[name] = parse(value)
            except ValueError as exc:
                raise ConfigurationError(f"{key}: {exc}") from exc

        airports_file = environ.get("SIM_AIRPORTS_FILE")
        if airports_file:
            try:
                kwargs["airports"] = load_airports(airports_file)
            except OSError as exc:
                raise ConfigurationError(f"SIM_AIRPORTS_FILE: {exc}") from exc

        return cls(**kwargs)  # type: ignore[arg-type]
