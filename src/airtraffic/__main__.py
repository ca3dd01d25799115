import asyncio
import functools
import os
import signal
import sys

from airtraffic import api
import airtraffic.log
from airtraffic.config import SimulatorConfig
from airtraffic.errors import ConfigurationError
from airtraffic.log import log, log_exception
from airtraffic.simulation import AsyncioScheduler, FlightSimulator


async def main() -> int:
    airtraffic.log.set_src_root(os.path.dirname(__file__))

    try:
        sim_config = SimulatorConfig.from_env()
        server_config = api.ServerConfig(
            os.environ.get("API_HOST", ""),
            int(os.environ.get("API_PORT", "9999")),
            float(os.environ.get("API_POLL_SECONDS", "5")),
        )
    except (ConfigurationError, ValueError) as exc:
        log(f"bad configuration: {exc}")
        return os.EX_CONFIG

    failures: list[BaseException] = []

    def fail(exc: BaseException) -> None:
        failures.append(exc)
        simulator.stop()
        server.stop()

    try:
        simulator = FlightSimulator(sim_config, scheduler=AsyncioScheduler(on_error=fail))
    except ConfigurationError as exc:
        log(f"bad configuration: {exc}")
        return os.EX_CONFIG
    server = api.Server(server_config, simulator)
    log(f"{len(simulator.list_flights())} flights among {len(simulator.list_airports())} airports")

    def graceful_shutdown(signame: str) -> None:
        log(signame)
        simulator.stop()
        server.stop()

    loop = asyncio.get_running_loop()
    for signame in ("SIGINT", "SIGTERM"):
        loop.add_signal_handler(getattr(signal, signame), functools.partial(graceful_shutdown, signame))

    simulator.start()
    try:
        await server.run()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        log("uncaught exception")
        log_exception(exc)
        return os.EX_SOFTWARE
    finally:
        simulator.stop()

    return os.EX_SOFTWARE if failures else os.EX_OK


def run() -> None:
    _exit_status = asyncio.run(main())
    log(f"sys.exit({_exit_status})")
    sys.exit(_exit_status)


if __name__ == "__main__":
    run()
