import asyncio

from airtraffic.api import Server, ServerConfig
from airtraffic.config import SimulatorConfig
from airtraffic.simulation import FlightSimulator

from conftest import AIRPORT_A, AIRPORT_B, make_flight


class RecordingClient:
    def __init__(self) -> None:
        self.sent: list[str] = []

    async def send(self, message: str) -> None:
        self.sent.append(message)


def _server(poll_seconds: float) -> tuple[Server, RecordingClient]:
    config = SimulatorConfig(initial_flights=0, min_flights=0, airports=(AIRPORT_A, AIRPORT_B))
    server = Server(ServerConfig(poll_seconds=poll_seconds), FlightSimulator(config, flights=[make_flight()]))
    client = RecordingClient()
    server._clients.append(client)  # type: ignore[arg-type]  # pylint: disable=protected-access
    server._running = True  # pylint: disable=protected-access
    return server, client


def test_step_broadcasts_flights():
    server, client = _server(poll_seconds=0.01)
    asyncio.run(server.step())
    assert len(client.sent) == 1
    assert client.sent[0].startswith('{"type":"flights"')


def test_no_broadcast_after_stop():
    server, client = _server(poll_seconds=60.0)

    async def scenario() -> None:
        step = asyncio.create_task(server.step())
        await asyncio.sleep(0.05)
        server.stop()
        await asyncio.wait_for(step, timeout=1.0)

    asyncio.run(scenario())
    assert not client.sent
