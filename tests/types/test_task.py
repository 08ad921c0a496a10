"""Test the tower_sim.types.task module."""
import unittest

from tower_sim.errors import InvalidTaskSequence
from tower_sim.types import Task, TaskList, TaskType


def make_tasks(*types):
    return [Task(task_type) for task_type in types]


class TestTask(unittest.TestCase):
    def test_load_task_encoding(self):
        task = Task(TaskType.LOAD, 75)
        self.assertEqual(task.encode(), "LOAD@75")
        self.assertEqual(str(task), "LOAD at 75%")

    def test_other_task_encoding(self):
        task = Task(TaskType.TAKEOFF)
        self.assertEqual(task.load_percent, 0)
        self.assertEqual(task.encode(), "TAKEOFF")
        self.assertEqual(str(task), "TAKEOFF")

    def test_negative_load_percent(self):
        with self.assertRaises(ValueError):
            Task(TaskType.LOAD, -1)

    def test_load_percent_on_non_load_task(self):
        with self.assertRaises(ValueError):
            Task(TaskType.AWAY, 10)


class TestTaskList(unittest.TestCase):
    def setUp(self):
        self.task_list = TaskList(
            [
                Task(TaskType.AWAY),
                Task(TaskType.LAND),
                Task(TaskType.WAIT),
                Task(TaskType.LOAD, 75),
                Task(TaskType.TAKEOFF),
            ]
        )

    def test_starts_on_first_task(self):
        self.assertEqual(self.task_list.current(), Task(TaskType.AWAY))

    def test_peek_next_does_not_move(self):
        self.assertEqual(self.task_list.peek_next(), Task(TaskType.LAND))
        self.assertEqual(self.task_list.current(), Task(TaskType.AWAY))

    def test_peek_next_wraps(self):
        for _ in range(4):
            self.task_list.advance()
        self.assertEqual(self.task_list.current().type, TaskType.TAKEOFF)
        self.assertEqual(self.task_list.peek_next().type, TaskType.AWAY)

    def test_advance_wraps_to_start(self):
        for _ in range(5):
            self.task_list.advance()
        self.assertEqual(self.task_list.current_index, 0)

    def test_cyclic_closure(self):
        # Advancing once per task comes back to the starting task, from any start
        for start in range(len(self.task_list)):
            self.task_list.current_index = start
            before = self.task_list.current()
            for _ in range(len(self.task_list)):
                self.task_list.advance()
            self.assertIs(self.task_list.current(), before)
            self.assertEqual(self.task_list.current_index, start)

    def test_encode_starts_from_current_task(self):
        self.task_list.advance()
        self.task_list.advance()
        self.assertEqual(self.task_list.encode(), "WAIT,LOAD@75,TAKEOFF,AWAY,LAND")

    def test_str(self):
        self.task_list.advance()
        self.task_list.advance()
        self.assertEqual(str(self.task_list), "TaskList currently on WAIT [3/5]")

    def test_single_away_task_is_valid(self):
        task_list = TaskList(make_tasks(TaskType.AWAY))
        task_list.advance()
        self.assertEqual(task_list.current().type, TaskType.AWAY)

    def test_empty_task_list(self):
        with self.assertRaises(InvalidTaskSequence):
            TaskList([])

    def test_illegal_adjacency(self):
        # TAKEOFF may only follow LOAD
        with self.assertRaises(InvalidTaskSequence):
            TaskList(
                make_tasks(TaskType.AWAY, TaskType.LAND, TaskType.TAKEOFF)
            )

    def test_illegal_wrap_around(self):
        # Every pair is legal except LAND following WAIT when wrapping around
        with self.assertRaises(InvalidTaskSequence):
            TaskList(make_tasks(TaskType.LAND, TaskType.WAIT))

    def test_wait_after_wait_is_legal(self):
        task_list = TaskList(
            make_tasks(
                TaskType.AWAY,
                TaskType.LAND,
                TaskType.WAIT,
                TaskType.WAIT,
                TaskType.LOAD,
                TaskType.TAKEOFF,
            )
        )
        self.assertEqual(len(task_list), 6)

    def test_invalid_task_sequence_is_a_value_error(self):
        with self.assertRaises(ValueError):
            TaskList(make_tasks(TaskType.LOAD))


if __name__ == "__main__":
    unittest.main()
