"""Define the control tower that schedules the airport one tick at a time."""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from tower_sim.config import LANDING_TICK_PARITY
from tower_sim.errors import NoSuitableGate
from tower_sim.queues import Fleet, LandingQueue, TakeoffQueue
from tower_sim.types import Aircraft, Callsign, Gate, TaskType, Terminal, Tick

logger = logging.getLogger("ControlTower")


@dataclass
class ControlTower:
    """The control tower of an airport.

    The tower owns every aircraft under its jurisdiction. Queues and the loading
    map refer to aircraft by callsign, resolved through `fleet`.

    Attributes:
        fleet: All managed aircraft keyed by callsign, in the order they were added.
        ticks_elapsed: Number of ticks elapsed since the tower was first created.
        landing_queue: Aircraft waiting to land. Created empty if not given.
        takeoff_queue: Aircraft waiting to take off. Created empty if not given.
        loading: Callsigns of aircraft loading at a gate, mapped to the number of
            ticks left before they finish.
        terminals: Terminals in the order they were added.
        landing_parity: Parity of `ticks_elapsed` on which the tower tries to land
            an aircraft before letting one take off.
    """

    fleet: Fleet = field(default_factory=dict)
    ticks_elapsed: Tick = 0
    landing_queue: Optional[LandingQueue] = None
    takeoff_queue: Optional[TakeoffQueue] = None
    loading: dict[Callsign, int] = field(default_factory=dict)
    terminals: list[Terminal] = field(default_factory=list)
    landing_parity: int = LANDING_TICK_PARITY

    def __post_init__(self):
        if self.ticks_elapsed < 0:
            raise ValueError("ticks elapsed must be non-negative")
        if self.landing_parity not in (0, 1):
            raise ValueError("landing parity must be 0 or 1")

        if self.landing_queue is None:
            self.landing_queue = LandingQueue(fleet=self.fleet)
        if self.takeoff_queue is None:
            self.takeoff_queue = TakeoffQueue(fleet=self.fleet)

        # Queues must resolve callsigns against the tower's own aircraft
        for queue in (self.landing_queue, self.takeoff_queue):
            if queue.fleet is not self.fleet:
                raise ValueError(f"{queue.kind} does not share the tower's fleet")
        for callsign in self.loading:
            if callsign not in self.fleet:
                raise ValueError(f"loading aircraft {callsign} is not in the fleet")

    @property
    def aircraft(self) -> list[Aircraft]:
        """All managed aircraft, in the order they were added."""
        return list(self.fleet.values())

    def add_terminal(self, terminal: Terminal) -> None:
        self.terminals.append(terminal)

    def add_aircraft(self, aircraft: Aircraft) -> None:
        """Bring an aircraft under the jurisdiction of this tower.

        Aircraft that are waiting or loading are parked at a suitable gate straight
        away. Once added, the aircraft is placed in the queue matching its current
        task.

        Args:
            aircraft: The aircraft to add.

        Raises:
            NoSuitableGate: if the aircraft needs a gate and none is available. The
                aircraft is not added in that case.
            ValueError: if an aircraft with the same callsign is already managed.
        """
        if aircraft.callsign in self.fleet:
            raise ValueError(f"{aircraft.callsign} is already managed by this tower")

        if aircraft.current_task_type in (TaskType.WAIT, TaskType.LOAD):
            try:
                gate = self.find_unoccupied_gate(aircraft)
            except NoSuitableGate:
                logger.warning(f"no suitable gate to admit {aircraft.callsign}")
                raise
            gate.park(aircraft)
            logger.debug(f"{aircraft.callsign} parked at gate {gate.number} on arrival")

        self.fleet[aircraft.callsign] = aircraft
        self.place_aircraft_in_queues(aircraft)

    def find_unoccupied_gate(self, aircraft: Aircraft) -> Gate:
        """Find an unoccupied gate in a terminal that serves the given aircraft.

        Terminals are checked in the order they were added, skipping terminals in
        an emergency and terminals serving a different type of aircraft.

        Raises:
            NoSuitableGate: if no compatible terminal has an unoccupied gate.
        """
        for terminal in self.terminals:
            if terminal.has_emergency() or not terminal.serves(aircraft):
                continue
            try:
                return terminal.find_unoccupied_gate()
            except NoSuitableGate:
                continue
        raise NoSuitableGate(f"no gate available for {aircraft.callsign}")

    def find_gate_of_aircraft(self, aircraft: Aircraft) -> Optional[Gate]:
        """Return the gate the aircraft is parked at, or None if it is not parked."""
        for terminal in self.terminals:
            for gate in terminal.gates:
                if gate.holds(aircraft):
                    return gate
        return None

    def try_land_aircraft(self) -> bool:
        """Try to land the most urgent aircraft in the landing queue.

        If no suitable gate is free the aircraft stays queued.

        Returns:
            True if an aircraft landed and was parked at a gate.
        """
        aircraft = self.landing_queue.peek()
        if aircraft is None:
            return False

        try:
            gate = self.find_unoccupied_gate(aircraft)
        except NoSuitableGate:
            logger.warning(f"{aircraft.callsign} cannot land: no suitable gate")
            return False

        self.landing_queue.pop()
        gate.park(aircraft)
        aircraft.unload()
        aircraft.task_list.advance()
        logger.debug(f"{aircraft.callsign} landed at gate {gate.number}")
        return True

    def try_take_off_aircraft(self) -> bool:
        """Let the aircraft at the front of the takeoff queue take off.

        Returns:
            True if an aircraft took off.
        """
        aircraft = self.takeoff_queue.pop()
        if aircraft is None:
            return False
        aircraft.task_list.advance()
        logger.debug(f"{aircraft.callsign} took off")
        return True

    def load_aircraft(self) -> None:
        """Count down loading times, releasing aircraft that have finished loading."""
        for callsign, remaining in list(self.loading.items()):
            remaining = max(remaining - 1, 0)
            if remaining > 0:
                self.loading[callsign] = remaining
                continue

            aircraft = self.fleet[callsign]
            gate = self.find_gate_of_aircraft(aircraft)
            if gate is None:
                logger.warning(f"{callsign} finished loading but is not at a gate")
            else:
                gate.vacate()
            aircraft.task_list.advance()
            del self.loading[callsign]
            logger.debug(f"{callsign} finished loading")

    def place_aircraft_in_queues(self, aircraft: Aircraft) -> None:
        """Make sure the aircraft is queued according to its current task.

        Calling this repeatedly never queues an aircraft twice.
        """
        task_type = aircraft.current_task_type
        if task_type == TaskType.LAND:
            if not self.landing_queue.contains(aircraft):
                self.landing_queue.push(aircraft)
        elif task_type == TaskType.TAKEOFF:
            if not self.takeoff_queue.contains(aircraft):
                self.takeoff_queue.push(aircraft)
        elif task_type == TaskType.LOAD:
            if aircraft.callsign not in self.loading:
                self.loading[aircraft.callsign] = aircraft.loading_time()

    def place_all_aircraft_in_queues(self) -> None:
        for aircraft in self.aircraft:
            self.place_aircraft_in_queues(aircraft)

    def is_landing_tick(self) -> bool:
        return self.ticks_elapsed % 2 == self.landing_parity

    def tick(self) -> None:
        """Advance the simulation by one tick.

        1. Every aircraft ticks, and those that are away or waiting move on to their
           next task.
        2. Loading aircraft count down, leaving their gate when done.
        3. On landing ticks an aircraft tries to land, falling back to a takeoff if
           none can; on other ticks an aircraft tries to take off.
        4. Every aircraft is placed in the queue for its (possibly new) task.
        """
        for aircraft in self.aircraft:
            aircraft.tick()
            if aircraft.current_task_type in (TaskType.AWAY, TaskType.WAIT):
                aircraft.task_list.advance()

        self.load_aircraft()

        if self.is_landing_tick():
            if not self.try_land_aircraft():
                self.try_take_off_aircraft()
        else:
            self.try_take_off_aircraft()

        self.place_all_aircraft_in_queues()

        self.ticks_elapsed += 1

    def snapshot(self) -> dict[str, Any]:
        """Return a flat record of the tower's current state."""
        record = {
            "tick": self.ticks_elapsed,
            "num_aircraft": len(self.fleet),
            "landing": len(self.landing_queue),
            "takeoff": len(self.takeoff_queue),
            "loading": len(self.loading),
            "emergencies": sum(1 for a in self.fleet.values() if a.has_emergency()),
        }
        for terminal in self.terminals:
            key = f"{terminal.kind}_{terminal.number}_occupancy"
            record[key] = terminal.calculate_occupancy_level()
        return record

    def __str__(self) -> str:
        return (
            f"ControlTower: {len(self.terminals)} terminals, "
            f"{len(self.fleet)} total aircraft "
            f"({len(self.landing_queue)} LAND, {len(self.takeoff_queue)} TAKEOFF, "
            f"{len(self.loading)} LOAD)"
        )
