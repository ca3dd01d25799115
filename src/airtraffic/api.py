import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass

import websockets
from websockets.asyncio.server import serve, ServerConnection, Server as WebsocketsServer

from airtraffic.log import log
from airtraffic.model.json import dumps
from airtraffic.runnable import Runnable
from airtraffic.simulation import FlightSimulator


@dataclass
class ServerConfig:
    listen_host: str = ""
    listen_port: int = 9999
    # How often the flight snapshot is pushed to clients. Matching the tick period gives every tick exactly one frame.
    poll_seconds: float = 5.0


class Server(Runnable):
    """
    Serves the simulator's state to map frontends over websockets. A new client first receives the airport catalog,
    then every client receives the full flight list once per poll interval. The server only reads from the simulator.
    """

    def __init__(self, config: ServerConfig, simulator: FlightSimulator):
        super().__init__()
        self._config = config
        self._simulator = simulator
        self._server: WebsocketsServer | None = None
        self._clients: list[ServerConnection] = []

    async def setup(self) -> None:
        asyncio.create_task(self._serve())

    async def step(self) -> None:
        await self.pause(self._config.poll_seconds)
        if not self.is_running() or not self._clients:
            return

        message = flights_message(self._simulator)
        futures: list[Awaitable[None]] = []
        try:
            for ws in list(self._clients):
                futures.append(ws.send(message))
            await asyncio.gather(*futures)
        except websockets.WebSocketException as exc:
            log(f"websocket exception: {exc}")

    async def teardown(self) -> None:
        if self._server:
            self._server.close()

    async def _serve(self) -> None:
        async with serve(self._handler, self._config.listen_host, self._config.listen_port) as server:
            log(f"listening on {self._config.listen_host}:{self._config.listen_port}")
            self._server = server
            await server.wait_closed()
        log("stopped listening")

    async def _handler(self, ws: ServerConnection) -> None:
        log(f"{ws.remote_address[0]}:{ws.remote_address[1]}: connection established")
        try:
            await ws.send(airports_message(self._simulator))
            await ws.send(flights_message(self._simulator))
        except websockets.WebSocketException as exc:
            log(f"{ws.remote_address[0]}:{ws.remote_address[1]}: initial send failed: {exc}")
            return
        self._clients.append(ws)
        await ws.wait_closed()
        self._clients.remove(ws)
        log(f"{ws.remote_address[0]}:{ws.remote_address[1]}: connection closed")


def airports_message(simulator: FlightSimulator) -> str:
    return dumps({"type": "airports", "airports": simulator.list_airports()})


def flights_message(simulator: FlightSimulator) -> str:
    return dumps({"type": "flights", "flights": simulator.list_flights()})
