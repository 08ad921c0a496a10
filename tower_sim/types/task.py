"""Define types for the tasks an aircraft cycles through."""
from dataclasses import dataclass, field
from enum import Enum

from tower_sim.errors import InvalidTaskSequence


class TaskType(Enum):
    """Operation categories an aircraft can be performing."""

    AWAY = "AWAY"
    LAND = "LAND"
    WAIT = "WAIT"
    LOAD = "LOAD"
    TAKEOFF = "TAKEOFF"

    def __str__(self) -> str:
        return self.value


# Task types that may directly precede each task type in a task list
ALLOWED_PREDECESSORS = {
    TaskType.AWAY: {TaskType.AWAY, TaskType.TAKEOFF},
    TaskType.LAND: {TaskType.AWAY},
    TaskType.WAIT: {TaskType.LAND, TaskType.WAIT},
    TaskType.LOAD: {TaskType.LAND, TaskType.WAIT},
    TaskType.TAKEOFF: {TaskType.LOAD},
}


@dataclass(frozen=True)
class Task:
    """A task assigned to an aircraft.

    Attributes:
        type: The type of the task.
        load_percent: Percentage of maximum capacity to load at the gate. Only
            meaningful for LOAD tasks, 0 otherwise.
    """

    type: TaskType
    load_percent: int = 0

    def __post_init__(self):
        if self.load_percent < 0:
            raise ValueError(f"load percent must be non-negative, got {self.load_percent}")
        if self.type != TaskType.LOAD and self.load_percent != 0:
            raise ValueError(f"{self.type} tasks do not carry a load percent")

    def encode(self) -> str:
        if self.type == TaskType.LOAD:
            return f"{self.type}@{self.load_percent}"
        return str(self.type)

    def __str__(self) -> str:
        if self.type == TaskType.LOAD:
            return f"{self.type} at {self.load_percent}%"
        return str(self.type)


@dataclass
class TaskList:
    """A circular list of tasks for an aircraft to cycle through.

    Every task must be allowed to follow the task before it, including the wrap
    from the last task back to the first.

    Attributes:
        tasks: The tasks to cycle through.
        current_index: Index of the current task in the list.
    """

    tasks: list[Task]
    current_index: int = field(default=0)

    def __post_init__(self):
        self.tasks = list(self.tasks)
        validate_task_sequence(self.tasks)
        if not 0 <= self.current_index < len(self.tasks):
            raise InvalidTaskSequence(
                f"current index {self.current_index} outside task list of "
                f"length {len(self.tasks)}"
            )

    def current(self) -> Task:
        return self.tasks[self.current_index]

    def peek_next(self) -> Task:
        """Return the task after the current one without moving to it."""
        return self.tasks[(self.current_index + 1) % len(self.tasks)]

    def advance(self) -> None:
        """Move the current task forward by one, wrapping past the end."""
        self.current_index = (self.current_index + 1) % len(self.tasks)

    def encode(self) -> str:
        """Encode the task list, starting from the current task and wrapping around."""
        n = len(self.tasks)
        return ",".join(
            self.tasks[(self.current_index + i) % n].encode() for i in range(n)
        )

    def __len__(self) -> int:
        return len(self.tasks)

    def __str__(self) -> str:
        return (
            f"TaskList currently on {self.current()} "
            f"[{self.current_index + 1}/{len(self.tasks)}]"
        )


def validate_task_sequence(tasks: list[Task]) -> None:
    """Check that a sequence of tasks forms a legal cycle.

    Args:
        tasks: The tasks to check, in order.

    Raises:
        InvalidTaskSequence: if the sequence is empty or any task may not follow
            its predecessor (the first task is checked against the last).
    """
    if not tasks:
        raise InvalidTaskSequence("task list must contain at least one task")

    for i, task in enumerate(tasks):
        previous = tasks[i - 1]  # index -1 wraps to the last task
        if previous.type not in ALLOWED_PREDECESSORS[task.type]:
            raise InvalidTaskSequence(
                f"{task.type} may not follow {previous.type} (position {i})"
            )
