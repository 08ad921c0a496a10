"""Define the queues of aircraft waiting to land and take off.

Queues hold callsigns rather than aircraft. The aircraft themselves live in a
shared fleet mapping (owned by the control tower) that each queue resolves
callsigns against.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from tower_sim.config import CRITICAL_FUEL_PERCENT
from tower_sim.types import Aircraft, Callsign, PassengerAircraft

Fleet = dict[Callsign, Aircraft]


@runtime_checkable
class AircraftQueue(Protocol):
    """A queue of aircraft waiting for the runway.

    The order in which aircraft leave the queue depends on the implementation.
    `peek` and `pop` return None when the queue is empty, and `ordered` returns a
    new list in the order aircraft would be popped.
    """

    kind: str
    fleet: Fleet

    def push(self, aircraft: Aircraft) -> None:
        ...

    def pop(self) -> Optional[Aircraft]:
        ...

    def peek(self) -> Optional[Aircraft]:
        ...

    def ordered(self) -> list[Aircraft]:
        ...

    def contains(self, aircraft: Aircraft) -> bool:
        ...

    def __len__(self) -> int:
        ...


def _check_registered(fleet: Fleet, aircraft: Aircraft) -> None:
    if fleet.get(aircraft.callsign) is not aircraft:
        raise KeyError(f"{aircraft.callsign} is not part of this queue's fleet")


@dataclass
class LandingQueue:
    """Aircraft waiting in the air to land, ordered by urgency.

    The next aircraft to land is the first one added (among those still queued)
    from the most urgent non-empty group, where the groups in order are:
    aircraft in an emergency, aircraft with critically low fuel, passenger
    aircraft, and all remaining aircraft. Groups are computed on every call, since
    fuel and emergency state change while aircraft wait.

    Attributes:
        fleet: The aircraft that callsigns in the queue refer to.
        entries: Queued callsigns in the order they were added.
        critical_fuel_percent: Fuel percentage at or below which an aircraft is
            critically low on fuel.
    """

    kind = "LandingQueue"

    fleet: Fleet = field(default_factory=dict)
    entries: list[Callsign] = field(default_factory=list)
    critical_fuel_percent: int = CRITICAL_FUEL_PERCENT

    def priority(self, aircraft: Aircraft) -> int:
        """Return the urgency group of an aircraft (lower lands first)."""
        if aircraft.has_emergency():
            return 0
        if aircraft.fuel_percent_remaining() <= self.critical_fuel_percent:
            return 1
        if isinstance(aircraft, PassengerAircraft):
            return 2
        return 3

    def push(self, aircraft: Aircraft) -> None:
        _check_registered(self.fleet, aircraft)
        self.entries.append(aircraft.callsign)

    def _next_index(self) -> Optional[int]:
        if not self.entries:
            return None
        # min() keeps the earliest entry among equal priorities
        return min(
            range(len(self.entries)),
            key=lambda i: self.priority(self.fleet[self.entries[i]]),
        )

    def peek(self) -> Optional[Aircraft]:
        index = self._next_index()
        if index is None:
            return None
        return self.fleet[self.entries[index]]

    def pop(self) -> Optional[Aircraft]:
        index = self._next_index()
        if index is None:
            return None
        return self.fleet[self.entries.pop(index)]

    def ordered(self) -> list[Aircraft]:
        """Return every queued aircraft in landing order, without changing the queue.

        An aircraft added more than once appears once per entry.
        """
        aircraft = [self.fleet[callsign] for callsign in self.entries]
        # sorted() is stable, so insertion order is kept within a group
        return sorted(aircraft, key=self.priority)

    def contains(self, aircraft: Aircraft) -> bool:
        return (
            aircraft.callsign in self.entries
            and self.fleet.get(aircraft.callsign) is aircraft
        )

    def __len__(self) -> int:
        return len(self.entries)

    def encode(self) -> str:
        return encode_queue(self)

    def __str__(self) -> str:
        return describe_queue(self)


@dataclass
class TakeoffQueue:
    """Aircraft waiting on the ground to take off, in first-in-first-out order.

    Attributes:
        fleet: The aircraft that callsigns in the queue refer to.
        entries: Queued callsigns, front of the queue first.
    """

    kind = "TakeoffQueue"

    fleet: Fleet = field(default_factory=dict)
    entries: deque[Callsign] = field(default_factory=deque)

    def __post_init__(self):
        self.entries = deque(self.entries)

    def push(self, aircraft: Aircraft) -> None:
        _check_registered(self.fleet, aircraft)
        self.entries.append(aircraft.callsign)

    def peek(self) -> Optional[Aircraft]:
        if not self.entries:
            return None
        return self.fleet[self.entries[0]]

    def pop(self) -> Optional[Aircraft]:
        if not self.entries:
            return None
        return self.fleet[self.entries.popleft()]

    def ordered(self) -> list[Aircraft]:
        return [self.fleet[callsign] for callsign in self.entries]

    def contains(self, aircraft: Aircraft) -> bool:
        return (
            aircraft.callsign in self.entries
            and self.fleet.get(aircraft.callsign) is aircraft
        )

    def __len__(self) -> int:
        return len(self.entries)

    def encode(self) -> str:
        return encode_queue(self)

    def __str__(self) -> str:
        return describe_queue(self)


def encode_queue(queue: AircraftQueue) -> str:
    """Encode a queue as `Kind:count`, plus a line of callsigns in queue order."""
    callsigns = [aircraft.callsign for aircraft in queue.ordered()]
    header = f"{queue.kind}:{len(callsigns)}"
    if not callsigns:
        return header
    return header + "\n" + ",".join(callsigns)


def describe_queue(queue: AircraftQueue) -> str:
    callsigns = ", ".join(aircraft.callsign for aircraft in queue.ordered())
    return f"{queue.kind} [{callsigns}]"
