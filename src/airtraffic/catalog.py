"""
Reference data for the simulation: the built-in airport catalog, airline codes used to make up callsigns, and aircraft
type designators. Deployments can replace the airport catalog with a CSV file; see `load_airports`.
"""

import csv
from pathlib import Path

from airtraffic.errors import ConfigurationError
from airtraffic.model.airport import Airport
from airtraffic.model.position import Position


# fmt: off
DEFAULT_AIRPORTS: tuple[Airport, ...] = (
    Airport("MAD", "Adolfo Suárez Madrid-Barajas",  Position(-3.5667,   40.4667),  runway_count=4, traffic_level=8),
    Airport("BCN", "Barcelona-El Prat",             Position(2.0833,    41.2969),  runway_count=3, traffic_level=7),
    Airport("LHR", "London Heathrow",               Position(-0.4614,   51.4700),  runway_count=2, traffic_level=10),
    Airport("CDG", "Paris Charles de Gaulle",       Position(2.5478,    49.0097),  runway_count=4, traffic_level=9),
    Airport("JFK", "New York John F. Kennedy",      Position(-73.7781,  40.6413),  runway_count=4, traffic_level=8),
    Airport("DXB", "Dubai International",           Position(55.3644,   25.2528),  runway_count=2, traffic_level=9),
    Airport("HND", "Tokyo Haneda",                  Position(139.7798,  35.5494),  runway_count=4, traffic_level=8),
    Airport("SYD", "Sydney Kingsford Smith",        Position(151.1772,  -33.9399), runway_count=3, traffic_level=6),
    Airport("GRU", "São Paulo-Guarulhos",           Position(-46.4728,  -23.4356), runway_count=2, traffic_level=7),
    Airport("CPT", "Cape Town International",       Position(18.6021,   -33.9648), runway_count=2, traffic_level=5),
)

AIRLINES: dict[str, str] = {
    "IBE": "Iberia",
    "RYR": "Ryanair",
    "BAW": "British Airways",
    "AFR": "Air France",
    "DLH": "Lufthansa",
    "UAE": "Emirates",
    "AAL": "American Airlines",
    "DAL": "Delta Air Lines",
    "UAL": "United Airlines",
    "THY": "Turkish Airlines",
}

AIRCRAFT_TYPES: tuple[str, ...] = (
    "A320", "A330", "A350", "A380",
    "B737", "B747", "B777", "B787",
    "E190", "CRJ9", "DH8D", "AT76",
)
# fmt: on


def load_airports(path: str | Path) -> tuple[Airport, ...]:
    """
    Read an airport catalog from a CSV file with the columns `id,name,longitude,latitude,runways,traffic`. Blank lines
    and lines starting with `#` are skipped. Any malformed row raises ConfigurationError naming the file and line.
    """
    airports: list[Airport] = []
    with open(path, newline="", encoding="utf-8") as f:
        for lineno, row in enumerate(csv.reader(f), start=1):
            if not row or not "".join(row).strip() or row[0].lstrip().startswith("#"):
                continue
            if len(row) != 6:
                raise ConfigurationError(f"{path}:{lineno}: expected 6 columns, got {len(row)}")
            airport_id, name, longitude, latitude, runways, traffic = (cell.strip() for cell in row)
            try:
                airports.append(
                    Airport(
                        id=airport_id.upper(),
                        name=name,
                        position=Position(float(longitude), float(latitude)),
                        runway_count=int(runways),
                        traffic_level=int(traffic),
                    )
                )
            except ValueError as exc:
                raise ConfigurationError(f"{path}:{lineno}: {exc}") from exc
    return tuple(airports)
