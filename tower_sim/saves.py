"""Read and write the plain-text save format for a control tower.

A save is made of four sections, each normally stored in its own file:

    tick                  number of ticks elapsed
    aircraft              count, then one encoded aircraft per line
    queues                takeoff queue, landing queue and loading aircraft
    terminalsWithGates    count, then each encoded terminal followed by its gates

Any problem with a section is reported as a MalformedSave error; nothing is
partially loaded.
"""
import logging
import os
import re
from typing import Optional, TextIO

from tower_sim.config import MAX_NUM_GATES
from tower_sim.errors import InvalidTaskSequence, MalformedSave, NoSpace
from tower_sim.queues import AircraftQueue, Fleet, LandingQueue, TakeoffQueue
from tower_sim.tower import ControlTower
from tower_sim.types import (
    Aircraft,
    AircraftCharacteristics,
    Callsign,
    Gate,
    Task,
    TaskList,
    TaskType,
    Terminal,
    make_aircraft,
)
from tower_sim.types.ground import TERMINAL_KINDS

logger = logging.getLogger("Saves")

LOADING_KIND = "LoadingAircraft"
EMPTY_GATE = "empty"

SAVE_FILES = {
    "tick": "tick.txt",
    "aircraft": "aircraft.txt",
    "queues": "queues.txt",
    "terminals": "terminalsWithGates.txt",
}

_INT_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _read_line(stream: TextIO) -> Optional[str]:
    """Read one line without its line terminator, or None at the end of the stream."""
    line = stream.readline()
    if line == "":
        return None
    return line.rstrip("\r\n")


def _require_line(stream: TextIO, what: str) -> str:
    line = _read_line(stream)
    if line is None:
        raise MalformedSave(f"expected {what}, reached end of input")
    return line


def _require_end(stream: TextIO) -> None:
    if _read_line(stream) is not None:
        raise MalformedSave("unexpected data after the end of the section")


def _parse_int(
    text: str,
    what: str,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise MalformedSave(f"{what} is not an integer: {text!r}")
    value = int(text)
    if minimum is not None and value < minimum:
        raise MalformedSave(f"{what} must be at least {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise MalformedSave(f"{what} must be at most {maximum}, got {value}")
    return value


def _parse_bool(text: str, what: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise MalformedSave(f"{what} must be true or false, got {text!r}")


def _lookup(fleet: Fleet, callsign: Callsign) -> Aircraft:
    try:
        return fleet[callsign]
    except KeyError as err:
        raise MalformedSave(f"unknown callsign {callsign!r}") from err


def _split_header(line: str, expected_kind: str) -> int:
    """Parse a `Kind:count` header, returning the count."""
    if line.count(":") != 1:
        raise MalformedSave(f"malformed header {line!r}")
    kind, count = line.split(":")
    if kind != expected_kind:
        raise MalformedSave(f"expected {expected_kind}, got {kind!r}")
    return _parse_int(count, f"{kind} count", minimum=0)


def load_tick(stream: TextIO) -> int:
    """Load the number of elapsed ticks."""
    line = _require_line(stream, "tick count")
    return _parse_int(line, "tick count", minimum=0)


def read_task_list(text: str) -> TaskList:
    """Decode a task list such as `WAIT,LOAD@75,TAKEOFF,AWAY,LAND`.

    Only LOAD tasks may carry a load percentage; a bare LOAD loads 0%.
    """
    tasks = []
    for token in text.split(","):
        parts = token.split("@")
        if len(parts) > 2:
            raise MalformedSave(f"task {token!r} has more than one '@'")
        try:
            task_type = TaskType[parts[0]]
        except KeyError as err:
            raise MalformedSave(f"unknown task type {parts[0]!r}") from err

        load_percent = 0
        if len(parts) == 2:
            if task_type != TaskType.LOAD:
                raise MalformedSave(f"{task_type} tasks do not carry a load percent")
            load_percent = _parse_int(parts[1], "load percent", minimum=0)
        tasks.append(Task(task_type, load_percent))

    try:
        return TaskList(tasks)
    except InvalidTaskSequence as err:
        raise MalformedSave(f"invalid task list {text!r}") from err


def read_aircraft(line: str) -> Aircraft:
    """Decode an aircraft from `callsign:MODEL:tasks:fuel:emergency:cargo`."""
    tokens = line.split(":")
    if len(tokens) != 6:
        raise MalformedSave(f"expected 6 aircraft fields, got {len(tokens)}")
    callsign, model, tasks, fuel, emergency, cargo = tokens

    if not callsign:
        raise MalformedSave("aircraft callsign is empty")
    try:
        characteristics = AircraftCharacteristics[model]
    except KeyError as err:
        raise MalformedSave(f"unknown aircraft model {model!r}") from err

    if not _FLOAT_PATTERN.fullmatch(fuel):
        raise MalformedSave(f"fuel amount is not a number: {fuel!r}")
    fuel_amount = float(fuel)
    if not 0 <= fuel_amount <= characteristics.fuel_capacity:
        raise MalformedSave(f"fuel amount {fuel_amount} out of range for {model}")

    capacity = (
        characteristics.passenger_capacity
        if characteristics.carries_passengers
        else characteristics.freight_capacity
    )
    cargo_amount = _parse_int(cargo, "cargo amount", minimum=0, maximum=capacity)

    return make_aircraft(
        callsign,
        characteristics,
        read_task_list(tasks),
        fuel_amount,
        cargo=cargo_amount,
        emergency=_parse_bool(emergency, "aircraft emergency"),
    )


def load_aircraft(stream: TextIO) -> list[Aircraft]:
    """Load the list of aircraft, in the order they appear."""
    count = _parse_int(_require_line(stream, "aircraft count"), "aircraft count", 0)

    aircraft = []
    seen = set()
    line = _read_line(stream)
    while line is not None:
        loaded = read_aircraft(line)
        if loaded.callsign in seen:
            raise MalformedSave(f"duplicate callsign {loaded.callsign!r}")
        seen.add(loaded.callsign)
        aircraft.append(loaded)
        line = _read_line(stream)

    if len(aircraft) != count:
        raise MalformedSave(f"expected {count} aircraft, read {len(aircraft)}")
    return aircraft


def read_queue(stream: TextIO, fleet: Fleet, queue: AircraftQueue) -> None:
    """Read a `Kind:count` queue section into the given queue."""
    count = _split_header(_require_line(stream, f"{queue.kind} header"), queue.kind)
    if count == 0:
        return

    callsigns = _require_line(stream, f"{queue.kind} callsigns").split(",")
    if len(callsigns) != count:
        raise MalformedSave(
            f"{queue.kind} lists {len(callsigns)} aircraft, expected {count}"
        )
    for callsign in callsigns:
        queue.push(_lookup(fleet, callsign))


def read_loading_aircraft(
    stream: TextIO, fleet: Fleet, loading: dict[Callsign, int]
) -> None:
    """Read the loading aircraft section into the given loading map."""
    count = _split_header(_require_line(stream, "loading header"), LOADING_KIND)
    if count == 0:
        return

    entries = _require_line(stream, "loading aircraft").split(",")
    if len(entries) != count:
        raise MalformedSave(f"{len(entries)} loading aircraft listed, expected {count}")
    for entry in entries:
        if entry.count(":") != 1:
            raise MalformedSave(f"malformed loading entry {entry!r}")
        callsign, ticks = entry.split(":")
        aircraft = _lookup(fleet, callsign)
        loading[aircraft.callsign] = _parse_int(ticks, "ticks remaining", minimum=1)


def load_queues(
    stream: TextIO,
    fleet: Fleet,
    takeoff_queue: TakeoffQueue,
    landing_queue: LandingQueue,
    loading: dict[Callsign, int],
) -> None:
    """Load the takeoff queue, landing queue and loading map, in that order."""
    read_queue(stream, fleet, takeoff_queue)
    read_queue(stream, fleet, landing_queue)
    read_loading_aircraft(stream, fleet, loading)
    _require_end(stream)


def read_gate(line: str, fleet: Fleet, parked: set[Callsign]) -> Gate:
    """Decode a gate from `number:callsign` or `number:empty`.

    Args:
        line: The encoded gate.
        fleet: The aircraft that callsigns refer to.
        parked: Callsigns already parked at other gates. Updated in place.
    """
    if line.count(":") != 1:
        raise MalformedSave(f"malformed gate {line!r}")
    number, callsign = line.split(":")
    gate = Gate(_parse_int(number, "gate number", minimum=1))
    if callsign != EMPTY_GATE:
        if callsign in parked:
            raise MalformedSave(f"{callsign} is parked at more than one gate")
        gate.park(_lookup(fleet, callsign))
        parked.add(callsign)
    return gate


def read_terminal(
    line: str,
    stream: TextIO,
    fleet: Fleet,
    parked: Optional[set[Callsign]] = None,
) -> Terminal:
    """Decode a terminal header and read its gates from the following lines.

    `parked` collects the callsigns parked so far, so that an aircraft parked
    at two gates is rejected across terminals too.
    """
    if parked is None:
        parked = set()
    tokens = line.split(":")
    if len(tokens) != 4:
        raise MalformedSave(f"malformed terminal {line!r}")
    kind, number, emergency, num_gates = tokens

    try:
        terminal_cls = TERMINAL_KINDS[kind]
    except KeyError as err:
        raise MalformedSave(f"unknown terminal kind {kind!r}") from err
    terminal = terminal_cls(
        _parse_int(number, "terminal number", minimum=1),
        emergency=_parse_bool(emergency, "terminal emergency"),
    )

    gate_count = _parse_int(num_gates, "gate count", minimum=0, maximum=MAX_NUM_GATES)
    for _ in range(gate_count):
        gate = read_gate(_require_line(stream, "gate"), fleet, parked)
        try:
            terminal.add_gate(gate)
        except NoSpace as err:
            raise MalformedSave(str(err)) from err
    return terminal


def load_terminals_with_gates(stream: TextIO, fleet: Fleet) -> list[Terminal]:
    """Load every terminal together with its gates."""
    count = _parse_int(_require_line(stream, "terminal count"), "terminal count", 0)
    parked: set[Callsign] = set()
    terminals = [
        read_terminal(_require_line(stream, "terminal"), stream, fleet, parked)
        for _ in range(count)
    ]
    _require_end(stream)
    return terminals


def create_control_tower(
    tick: TextIO,
    aircraft: TextIO,
    queues: TextIO,
    terminals: TextIO,
    **tower_kwargs,
) -> ControlTower:
    """Build a control tower from the four sections of a save.

    Aircraft, gates and queues are restored exactly as saved: nothing is parked
    or queued again.

    Args:
        tick: Stream holding the number of elapsed ticks.
        aircraft: Stream holding the aircraft list.
        queues: Stream holding the queues and loading aircraft.
        terminals: Stream holding the terminals and their gates.
        tower_kwargs: Extra ControlTower settings, such as `landing_parity`.
    """
    ticks_elapsed = load_tick(tick)
    fleet = {a.callsign: a for a in load_aircraft(aircraft)}
    loaded_terminals = load_terminals_with_gates(terminals, fleet)

    landing_queue = LandingQueue(fleet=fleet)
    takeoff_queue = TakeoffQueue(fleet=fleet)
    loading: dict[Callsign, int] = {}
    load_queues(queues, fleet, takeoff_queue, landing_queue, loading)

    logger.debug(
        f"loaded {len(fleet)} aircraft and {len(loaded_terminals)} terminals "
        f"at tick {ticks_elapsed}"
    )
    return ControlTower(
        fleet=fleet,
        ticks_elapsed=ticks_elapsed,
        landing_queue=landing_queue,
        takeoff_queue=takeoff_queue,
        loading=loading,
        terminals=loaded_terminals,
        **tower_kwargs,
    )


def encode_loading(loading: dict[Callsign, int]) -> str:
    header = f"{LOADING_KIND}:{len(loading)}"
    if not loading:
        return header
    entries = ",".join(f"{callsign}:{ticks}" for callsign, ticks in loading.items())
    return header + "\n" + entries


def _write_lines(stream: TextIO, lines: list[str]) -> None:
    for line in lines:
        stream.write(line + "\n")


def save_control_tower(
    tower: ControlTower,
    tick: TextIO,
    aircraft: TextIO,
    queues: TextIO,
    terminals: TextIO,
) -> None:
    """Write the four sections of a save for the given tower."""
    _write_lines(tick, [str(tower.ticks_elapsed)])
    _write_lines(
        aircraft, [str(len(tower.fleet))] + [a.encode() for a in tower.aircraft]
    )
    _write_lines(
        queues,
        [
            tower.takeoff_queue.encode(),
            tower.landing_queue.encode(),
            encode_loading(tower.loading),
        ],
    )
    _write_lines(
        terminals,
        [str(len(tower.terminals))] + [t.encode() for t in tower.terminals],
    )


def load_save_directory(directory: str, **tower_kwargs) -> ControlTower:
    """Load a control tower from a directory holding the four save files."""
    paths = {
        section: os.path.join(directory, filename)
        for section, filename in SAVE_FILES.items()
    }
    with open(paths["tick"]) as tick, open(paths["aircraft"]) as aircraft, open(
        paths["queues"]
    ) as queues, open(paths["terminals"]) as terminals:
        return create_control_tower(tick, aircraft, queues, terminals, **tower_kwargs)


def write_save_directory(tower: ControlTower, directory: str) -> None:
    """Write a control tower's save files into a directory, creating it if needed."""
    os.makedirs(directory, exist_ok=True)
    paths = {
        section: os.path.join(directory, filename)
        for section, filename in SAVE_FILES.items()
    }
    with open(paths["tick"], "w") as tick, open(paths["aircraft"], "w") as aircraft, open(
        paths["queues"], "w"
    ) as queues, open(paths["terminals"], "w") as terminals:
        save_control_tower(tower, tick, aircraft, queues, terminals)
