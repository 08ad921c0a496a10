"""Test the tower_sim.simulation module."""
import unittest

from tower_sim.simulation import history_to_dataframe, simulate
from tower_sim.tower import ControlTower
from tower_sim.types import (
    AircraftCharacteristics,
    AirplaneTerminal,
    FreightAircraft,
    Gate,
    Task,
    TaskList,
    TaskType,
)


class TestSimulate(unittest.TestCase):
    def setUp(self):
        characteristics = AircraftCharacteristics.BOEING_747_8F
        self.tower = ControlTower(terminals=[AirplaneTerminal(1, [Gate(1), Gate(2)])])
        for callsign in ("UPS1", "UPS2", "UPS3"):
            tasks = TaskList(
                [
                    Task(TaskType.AWAY),
                    Task(TaskType.LAND),
                    Task(TaskType.LOAD, 10),
                    Task(TaskType.TAKEOFF),
                ]
            )
            self.tower.add_aircraft(
                FreightAircraft(callsign, characteristics, tasks, characteristics.fuel_capacity)
            )

    def test_one_row_per_tick(self):
        history = simulate(self.tower, 12)
        self.assertEqual(len(history), 12)
        self.assertEqual(list(history.index), list(range(1, 13)))
        self.assertEqual(self.tower.ticks_elapsed, 12)
        self.assertIn("AirplaneTerminal_1_occupancy", history.columns)
        self.assertTrue((history["num_aircraft"] == 3).all())
        self.assertTrue(history["AirplaneTerminal_1_occupancy"].between(0, 100).all())

    def test_first_tick_queues_arrivals(self):
        history = simulate(self.tower, 1)
        self.assertEqual(history.loc[1, "landing"], 3)

    def test_zero_ticks(self):
        history = simulate(self.tower, 0)
        self.assertTrue(history.empty)
        self.assertEqual(self.tower.ticks_elapsed, 0)

    def test_negative_ticks(self):
        with self.assertRaises(ValueError):
            simulate(self.tower, -1)


class TestHistoryToDataframe(unittest.TestCase):
    def test_indexed_by_tick(self):
        records = [
            {"tick": 3, "landing": 1, "takeoff": 0},
            {"tick": 4, "landing": 0, "takeoff": 1},
        ]
        history = history_to_dataframe(records)
        self.assertEqual(history.index.name, "tick")
        self.assertEqual(history.loc[4, "takeoff"], 1)


if __name__ == "__main__":
    unittest.main()
