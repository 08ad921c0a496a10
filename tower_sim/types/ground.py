"""Define types for terminals and the gates inside them."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from tower_sim.config import MAX_NUM_GATES
from tower_sim.errors import NoSpace, NoSuitableGate
from tower_sim.types.aircraft import Aircraft, AircraftType
from tower_sim.types.util import Callsign
from tower_sim.utils.numeric import as_percentage


@dataclass
class Gate:
    """A single-aircraft parking spot in a terminal.

    Attributes:
        number: The gate number.
        parked: Callsign of the aircraft parked at the gate, if any.
    """

    number: int
    parked: Optional[Callsign] = None

    def is_occupied(self) -> bool:
        return self.parked is not None

    def park(self, aircraft: Aircraft) -> None:
        """Park an aircraft at this gate.

        Raises:
            NoSpace: if another aircraft is already parked here.
        """
        if self.is_occupied():
            raise NoSpace(f"gate {self.number} is occupied by {self.parked}")
        self.parked = aircraft.callsign

    def vacate(self) -> None:
        """Remove the parked aircraft, if any."""
        self.parked = None

    def holds(self, aircraft: Aircraft) -> bool:
        return self.parked is not None and self.parked == aircraft.callsign

    def encode(self) -> str:
        return f"{self.number}:{self.parked if self.is_occupied() else 'empty'}"

    def __str__(self) -> str:
        return f"Gate {self.number} [{self.parked if self.is_occupied() else 'empty'}]"


@dataclass
class Terminal(ABC):
    """A terminal building containing up to MAX_NUM_GATES gates.

    Concrete terminals only serve one type of aircraft, decided by `serves`.

    Attributes:
        number: The terminal number.
        gates: The gates in the terminal, in the order they were added.
        emergency: Whether the terminal is in a state of emergency.
    """

    number: int
    gates: list[Gate] = field(default_factory=list)
    emergency: bool = False

    def __post_init__(self):
        if len(self.gates) > MAX_NUM_GATES:
            raise NoSpace(f"a terminal holds at most {MAX_NUM_GATES} gates")

    @property
    def kind(self) -> str:
        return type(self).__name__

    def add_gate(self, gate: Gate) -> None:
        """Add a gate to the terminal.

        Raises:
            NoSpace: if the terminal already holds MAX_NUM_GATES gates.
        """
        if len(self.gates) >= MAX_NUM_GATES:
            raise NoSpace(f"maximum number of gates reached ({MAX_NUM_GATES})")
        self.gates.append(gate)

    @abstractmethod
    def serves(self, aircraft: Aircraft) -> bool:
        """Return whether aircraft of this type may park in the terminal."""

    def find_unoccupied_gate(self) -> Gate:
        """Return the first unoccupied gate, in the order gates were added.

        Raises:
            NoSuitableGate: if every gate is occupied.
        """
        for gate in self.gates:
            if not gate.is_occupied():
                return gate
        raise NoSuitableGate(f"no unoccupied gate in terminal {self.number}")

    def declare_emergency(self) -> None:
        self.emergency = True

    def clear_emergency(self) -> None:
        self.emergency = False

    def has_emergency(self) -> bool:
        return self.emergency

    def calculate_occupancy_level(self) -> int:
        """Return the percentage of occupied gates, or 0 for a terminal without gates."""
        occupied = sum(1 for gate in self.gates if gate.is_occupied())
        return as_percentage(occupied, len(self.gates))

    def encode(self) -> str:
        header = (
            f"{self.kind}:{self.number}:{str(self.emergency).lower()}:{len(self.gates)}"
        )
        return "\n".join([header] + [gate.encode() for gate in self.gates])

    def __str__(self) -> str:
        text = f"{self.kind} {self.number}, {len(self.gates)} gates"
        if self.emergency:
            text += " (EMERGENCY)"
        return text


@dataclass
class AirplaneTerminal(Terminal):
    def serves(self, aircraft: Aircraft) -> bool:
        return aircraft.aircraft_type == AircraftType.AIRPLANE


@dataclass
class HelicopterTerminal(Terminal):
    def serves(self, aircraft: Aircraft) -> bool:
        return aircraft.aircraft_type == AircraftType.HELICOPTER


TERMINAL_KINDS: dict[str, type[Terminal]] = {
    cls.__name__: cls for cls in (AirplaneTerminal, HelicopterTerminal)
}
