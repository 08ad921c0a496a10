"""Define types for the aircraft managed by the control tower."""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from tower_sim.config import AWAY_FUEL_BURN, FUEL_DENSITY, PASSENGER_WEIGHT
from tower_sim.types.task import TaskList, TaskType
from tower_sim.types.util import Callsign
from tower_sim.utils.numeric import as_percentage, round_half_up


class AircraftType(Enum):
    AIRPLANE = "AIRPLANE"
    HELICOPTER = "HELICOPTER"

    def __str__(self) -> str:
        return self.value


class AircraftCharacteristics(Enum):
    """Fixed characteristics of each supported aircraft model.

    Each value is (type, empty weight in kg, max takeoff weight in kg, fuel capacity
    in litres, passenger capacity, freight capacity in kg).
    """

    AIRBUS_A320 = (AircraftType.AIRPLANE, 42600, 78000, 27200, 150, 0)
    BOEING_747_8F = (AircraftType.AIRPLANE, 197131, 447700, 226117, 0, 137756)
    ROBINSON_R44 = (AircraftType.HELICOPTER, 658, 1134, 190, 4, 0)
    BOEING_787 = (AircraftType.AIRPLANE, 119950, 227930, 126206, 242, 0)
    FOKKER_100 = (AircraftType.AIRPLANE, 24375, 44450, 13365, 97, 0)
    SIKORSKY_SKYCRANE = (AircraftType.HELICOPTER, 8724, 21319, 3328, 0, 9000)

    def __init__(
        self,
        type: AircraftType,
        empty_weight: int,
        max_takeoff_weight: int,
        fuel_capacity: float,
        passenger_capacity: int,
        freight_capacity: int,
    ):
        self.type = type
        self.empty_weight = empty_weight
        self.max_takeoff_weight = max_takeoff_weight
        self.fuel_capacity = fuel_capacity
        self.passenger_capacity = passenger_capacity
        self.freight_capacity = freight_capacity

    @property
    def carries_passengers(self) -> bool:
        return self.freight_capacity == 0

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Aircraft(ABC):
    """An aircraft under the jurisdiction of a control tower.

    Aircraft compare by identity; two objects with the same callsign are still
    different aircraft.

    Attributes:
        callsign: Unique callsign of the aircraft.
        characteristics: The model of the aircraft.
        task_list: The circular list of tasks the aircraft cycles through.
        fuel_amount: Litres of fuel on board.
        emergency: Whether the aircraft is in a state of emergency.
    """

    callsign: Callsign
    characteristics: AircraftCharacteristics
    task_list: TaskList
    fuel_amount: float
    emergency: bool = False

    def __post_init__(self):
        if self.fuel_amount < 0:
            raise ValueError(f"{self.callsign}: fuel amount must be non-negative")
        if self.fuel_amount > self.characteristics.fuel_capacity:
            raise ValueError(
                f"{self.callsign}: fuel amount exceeds capacity of "
                f"{self.characteristics.fuel_capacity}"
            )

    @property
    def aircraft_type(self) -> AircraftType:
        return self.characteristics.type

    @property
    def current_task_type(self) -> TaskType:
        return self.task_list.current().type

    def fuel_percent_remaining(self) -> int:
        return as_percentage(self.fuel_amount, self.characteristics.fuel_capacity)

    def total_weight(self) -> float:
        return (
            self.characteristics.empty_weight
            + self.fuel_amount * FUEL_DENSITY
            + self.cargo_weight()
        )

    def declare_emergency(self) -> None:
        self.emergency = True

    def clear_emergency(self) -> None:
        self.emergency = False

    def has_emergency(self) -> bool:
        return self.emergency

    def tick(self) -> None:
        """Update fuel for one tick of the current task.

        Aircraft that are away burn a fixed fraction of their fuel capacity, and
        aircraft that are loading are refuelled evenly over their loading time.
        """
        capacity = self.characteristics.fuel_capacity
        task_type = self.current_task_type
        if task_type == TaskType.AWAY:
            self.fuel_amount = max(0.0, self.fuel_amount - AWAY_FUEL_BURN * capacity)
        elif task_type == TaskType.LOAD:
            self.fuel_amount = min(
                capacity, self.fuel_amount + capacity / self.loading_time()
            )

    @abstractmethod
    def cargo(self) -> int:
        """Return the amount of cargo on board (passengers or kg of freight)."""

    @abstractmethod
    def cargo_capacity(self) -> int:
        pass

    @abstractmethod
    def cargo_weight(self) -> float:
        pass

    @abstractmethod
    def loading_time(self) -> int:
        """Return the number of ticks needed to complete the current LOAD task."""

    @abstractmethod
    def unload(self) -> None:
        """Remove all cargo from the aircraft."""

    def occupancy_level(self) -> int:
        return as_percentage(self.cargo(), self.cargo_capacity())

    def _amount_to_load(self) -> int:
        """Cargo requested by the current task, as a rounded share of capacity."""
        load_percent = self.task_list.current().load_percent
        return round_half_up(self.cargo_capacity() * load_percent / 100)

    def encode(self) -> str:
        return ":".join(
            [
                self.callsign,
                self.characteristics.name,
                self.task_list.encode(),
                f"{self.fuel_amount:.2f}",
                str(self.emergency).lower(),
                str(self.cargo()),
            ]
        )

    def __str__(self) -> str:
        text = (
            f"{self.aircraft_type} {self.callsign} {self.characteristics} "
            f"{self.current_task_type}"
        )
        if self.emergency:
            text += " (EMERGENCY)"
        return text


@dataclass(eq=False)
class PassengerAircraft(Aircraft):
    """An aircraft that carries passengers.

    Attributes:
        passengers: Number of passengers on board.
    """

    passengers: int = 0

    def __post_init__(self):
        super().__post_init__()
        if not 0 <= self.passengers <= self.characteristics.passenger_capacity:
            raise ValueError(
                f"{self.callsign}: passenger count must be between 0 and "
                f"{self.characteristics.passenger_capacity}"
            )

    def tick(self) -> None:
        super().tick()
        if self.current_task_type == TaskType.LOAD:
            boarding = math.ceil(self._amount_to_load() / self.loading_time())
            self.passengers = min(self.cargo_capacity(), self.passengers + boarding)

    def cargo(self) -> int:
        return self.passengers

    def cargo_capacity(self) -> int:
        return self.characteristics.passenger_capacity

    def cargo_weight(self) -> float:
        return self.passengers * PASSENGER_WEIGHT

    def loading_time(self) -> int:
        # One tick per order of magnitude of boarding passengers
        to_load = self._amount_to_load()
        if to_load <= 0:
            return 1
        return max(1, round_half_up(math.log10(to_load)))

    def unload(self) -> None:
        self.passengers = 0


@dataclass(eq=False)
class FreightAircraft(Aircraft):
    """An aircraft that carries freight.

    Attributes:
        freight_amount: Kilograms of freight on board.
    """

    freight_amount: int = 0

    def __post_init__(self):
        super().__post_init__()
        if not 0 <= self.freight_amount <= self.characteristics.freight_capacity:
            raise ValueError(
                f"{self.callsign}: freight amount must be between 0 and "
                f"{self.characteristics.freight_capacity}"
            )

    def tick(self) -> None:
        super().tick()
        if self.current_task_type == TaskType.LOAD:
            loaded = math.ceil(self._amount_to_load() / self.loading_time())
            self.freight_amount = min(
                self.cargo_capacity(), self.freight_amount + loaded
            )

    def cargo(self) -> int:
        return self.freight_amount

    def cargo_capacity(self) -> int:
        return self.characteristics.freight_capacity

    def cargo_weight(self) -> float:
        return self.freight_amount

    def loading_time(self) -> int:
        to_load = self._amount_to_load()
        if to_load < 1000:
            return 1
        if to_load < 50000:
            return 2
        return 3

    def unload(self) -> None:
        self.freight_amount = 0


def make_aircraft(
    callsign: Callsign,
    characteristics: AircraftCharacteristics,
    task_list: TaskList,
    fuel_amount: float,
    cargo: int = 0,
    emergency: bool = False,
) -> Aircraft:
    """Create a passenger or freight aircraft, depending on the model's capacities."""
    if characteristics.carries_passengers:
        return PassengerAircraft(
            callsign, characteristics, task_list, fuel_amount, emergency, cargo
        )
    return FreightAircraft(
        callsign, characteristics, task_list, fuel_amount, emergency, cargo
    )
