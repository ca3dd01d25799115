import asyncio

from airtraffic.config import SimulatorConfig
from airtraffic.simulation import AsyncioScheduler, FlightSimulator, PeriodicTask


def _small_config(tick_seconds: float = 5.0) -> SimulatorConfig:
    return SimulatorConfig(initial_flights=5, min_flights=5, tick_seconds=tick_seconds, seed=42)


def test_start_is_idempotent(scheduler):
    sim = FlightSimulator(_small_config(), scheduler=scheduler)
    sim.start()
    sim.start()
    assert len(scheduler.tasks) == 1
    assert scheduler.periods == [5.0]
    assert sim.is_running()

    scheduler.fire(3)
    assert sim.tick_count == 3


def test_stop_is_idempotent(scheduler):
    sim = FlightSimulator(_small_config(), scheduler=scheduler)
    sim.stop()
    assert not sim.is_running()

    sim.start()
    sim.stop()
    sim.stop()
    assert not scheduler.tasks
    scheduler.fire()
    assert sim.tick_count == 0


def test_stop_keeps_state_and_restart_resumes(scheduler):
    sim = FlightSimulator(_small_config(), scheduler=scheduler)
    sim.start()
    scheduler.fire()
    snapshot = sim.list_flights()
    sim.stop()
    assert sim.list_flights() == snapshot

    sim.start()
    scheduler.fire()
    assert sim.tick_count == 2
    assert len(scheduler.tasks) == 1


def test_double_start_runs_a_single_timer():
    async def scenario() -> int:
        sim = FlightSimulator(_small_config(tick_seconds=0.05))
        sim.start()
        sim.start()
        await asyncio.sleep(0.28)
        sim.stop()
        return sim.tick_count

    # One timer gives five ticks in 0.28 s; two would give about ten.
    assert 3 <= asyncio.run(scenario()) <= 6


def test_stop_halts_ticking():
    async def scenario() -> tuple[int, int]:
        sim = FlightSimulator(_small_config(tick_seconds=0.02))
        sim.start()
        await asyncio.sleep(0.1)
        sim.stop()
        stopped_at = sim.tick_count
        await asyncio.sleep(0.1)
        return stopped_at, sim.tick_count

    stopped_at, later = asyncio.run(scenario())
    assert stopped_at > 0
    assert later == stopped_at


def test_stop_before_first_run_cancels_task():
    async def scenario() -> int:
        sim = FlightSimulator(_small_config(tick_seconds=0.01))
        sim.start()
        sim.stop()
        await asyncio.sleep(0.1)
        return sim.tick_count

    assert asyncio.run(scenario()) == 0


def test_periodic_task_stops_promptly():
    calls: list[int] = []

    async def scenario() -> None:
        periodic = PeriodicTask(60.0, lambda: calls.append(1))
        task = asyncio.create_task(periodic.run())
        await asyncio.sleep(0.05)
        assert periodic.is_running()
        periodic.stop()
        await asyncio.wait_for(task, timeout=1.0)
        assert not periodic.is_running()

    asyncio.run(scenario())
    assert not calls


def test_callback_failure_is_reported():
    errors: list[BaseException] = []

    def explode() -> None:
        raise RuntimeError("boom")

    async def scenario() -> None:
        AsyncioScheduler(on_error=errors.append).schedule(0.01, explode)
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert len(errors) == 1
    assert str(errors[0]) == "boom"
