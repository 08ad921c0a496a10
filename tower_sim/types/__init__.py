"""Define types used in the tower simulation."""
from tower_sim.types.aircraft import (
    Aircraft,
    AircraftCharacteristics,
    AircraftType,
    FreightAircraft,
    PassengerAircraft,
    make_aircraft,
)
from tower_sim.types.ground import (
    AirplaneTerminal,
    Gate,
    HelicopterTerminal,
    Terminal,
)
from tower_sim.types.task import Task, TaskList, TaskType
from tower_sim.types.util import Callsign, Tick

__all__ = [
    "Callsign",
    "Tick",
    "Task",
    "TaskList",
    "TaskType",
    "Aircraft",
    "AircraftCharacteristics",
    "AircraftType",
    "FreightAircraft",
    "PassengerAircraft",
    "make_aircraft",
    "Gate",
    "Terminal",
    "AirplaneTerminal",
    "HelicopterTerminal",
]
