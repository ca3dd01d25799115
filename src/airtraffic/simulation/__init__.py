"""
The flight simulation engine: the registry of flights and airports, the per-tick update rules, and the scheduling that
drives them. Hosts construct a FlightSimulator and share it with whatever displays its flights.
"""

from airtraffic.simulation.engine import FlightSimulator
from airtraffic.simulation.scheduler import AsyncioScheduler, PeriodicTask, ScheduledTask, Scheduler

__all__ = ["AsyncioScheduler", "FlightSimulator", "PeriodicTask", "ScheduledTask", "Scheduler"]
