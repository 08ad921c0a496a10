"""Test the tower_sim.types.aircraft module."""
import unittest

from tower_sim.types import (
    Aircraft,
    AircraftCharacteristics,
    AircraftType,
    FreightAircraft,
    PassengerAircraft,
    Task,
    TaskList,
    TaskType,
    make_aircraft,
)


def turnaround_tasks(load_percent=60):
    return TaskList(
        [
            Task(TaskType.AWAY),
            Task(TaskType.LAND),
            Task(TaskType.WAIT),
            Task(TaskType.LOAD, load_percent),
            Task(TaskType.TAKEOFF),
        ]
    )


def loading_tasks(load_percent):
    return TaskList(
        [
            Task(TaskType.LOAD, load_percent),
            Task(TaskType.TAKEOFF),
            Task(TaskType.AWAY),
            Task(TaskType.LAND),
        ]
    )


class TestPassengerAircraft(unittest.TestCase):
    def setUp(self):
        self.characteristics = AircraftCharacteristics.AIRBUS_A320
        self.aircraft = PassengerAircraft(
            "ABC123",
            self.characteristics,
            turnaround_tasks(),
            self.characteristics.fuel_capacity,
            passengers=100,
        )

    def test_fuel_percent_remaining(self):
        self.assertEqual(self.aircraft.fuel_percent_remaining(), 100)
        self.aircraft.fuel_amount = self.characteristics.fuel_capacity * 0.2
        self.assertEqual(self.aircraft.fuel_percent_remaining(), 20)

    def test_tick_away_burns_fuel(self):
        self.aircraft.tick()
        self.assertAlmostEqual(self.aircraft.fuel_amount, 27200 * 0.9)

    def test_tick_away_fuel_never_negative(self):
        self.aircraft.fuel_amount = 100.0
        self.aircraft.tick()
        self.assertEqual(self.aircraft.fuel_amount, 0.0)

    def test_tick_other_tasks_keep_fuel(self):
        self.aircraft.task_list.advance()  # LAND
        self.aircraft.tick()
        self.assertEqual(self.aircraft.fuel_amount, 27200)

    def test_tick_load_refuels_and_boards(self):
        aircraft = PassengerAircraft(
            "ABC123", self.characteristics, loading_tasks(100), 0.0
        )
        # 150 passengers take two ticks to board
        self.assertEqual(aircraft.loading_time(), 2)
        aircraft.tick()
        self.assertAlmostEqual(aircraft.fuel_amount, 27200 / 2)
        self.assertEqual(aircraft.passengers, 75)
        aircraft.tick()
        self.assertAlmostEqual(aircraft.fuel_amount, 27200)
        self.assertEqual(aircraft.passengers, 150)
        aircraft.tick()
        self.assertAlmostEqual(aircraft.fuel_amount, 27200)
        self.assertEqual(aircraft.passengers, 150)

    def test_loading_time_has_a_minimum_of_one(self):
        helicopter = PassengerAircraft(
            "VH-BFK",
            AircraftCharacteristics.ROBINSON_R44,
            loading_tasks(75),
            40.0,
        )
        self.assertEqual(helicopter.loading_time(), 1)
        empty_load = PassengerAircraft(
            "ABC123", self.characteristics, loading_tasks(0), 0.0
        )
        self.assertEqual(empty_load.loading_time(), 1)

    def test_unload(self):
        self.aircraft.unload()
        self.assertEqual(self.aircraft.passengers, 0)
        self.assertEqual(self.aircraft.occupancy_level(), 0)

    def test_occupancy_level(self):
        self.assertEqual(self.aircraft.occupancy_level(), 67)

    def test_total_weight(self):
        expected = 42600 + 27200 * 0.8 + 100 * 90
        self.assertAlmostEqual(self.aircraft.total_weight(), expected)

    def test_emergency(self):
        self.assertFalse(self.aircraft.has_emergency())
        self.aircraft.declare_emergency()
        self.assertTrue(self.aircraft.has_emergency())
        self.assertEqual(str(self.aircraft), "AIRPLANE ABC123 AIRBUS_A320 AWAY (EMERGENCY)")
        self.aircraft.clear_emergency()
        self.assertFalse(self.aircraft.has_emergency())

    def test_str(self):
        self.assertEqual(str(self.aircraft), "AIRPLANE ABC123 AIRBUS_A320 AWAY")

    def test_encode(self):
        self.assertEqual(
            self.aircraft.encode(),
            "ABC123:AIRBUS_A320:AWAY,LAND,WAIT,LOAD@60,TAKEOFF:27200.00:false:100",
        )

    def test_too_much_fuel(self):
        with self.assertRaises(ValueError):
            PassengerAircraft(
                "ABC123", self.characteristics, turnaround_tasks(), 30000.0
            )

    def test_too_many_passengers(self):
        with self.assertRaises(ValueError):
            PassengerAircraft(
                "ABC123", self.characteristics, turnaround_tasks(), 0.0, passengers=151
            )

    def test_compares_by_identity(self):
        twin = PassengerAircraft(
            "ABC123",
            self.characteristics,
            turnaround_tasks(),
            self.characteristics.fuel_capacity,
            passengers=100,
        )
        self.assertNotEqual(self.aircraft, twin)


class TestFreightAircraft(unittest.TestCase):
    def setUp(self):
        self.characteristics = AircraftCharacteristics.BOEING_747_8F

    def make(self, load_percent, freight=0):
        return FreightAircraft(
            "UPS119",
            self.characteristics,
            loading_tasks(load_percent),
            4000.0,
            freight_amount=freight,
        )

    def test_loading_time_by_freight_amount(self):
        self.assertEqual(self.make(0).loading_time(), 1)
        self.assertEqual(self.make(1).loading_time(), 2)  # 1378 kg
        self.assertEqual(self.make(50).loading_time(), 3)  # 68878 kg

    def test_unload(self):
        aircraft = self.make(0, freight=1414)
        self.assertEqual(aircraft.cargo(), 1414)
        aircraft.unload()
        self.assertEqual(aircraft.cargo(), 0)

    def test_encode(self):
        aircraft = self.make(50, freight=1414)
        self.assertEqual(
            aircraft.encode(),
            "UPS119:BOEING_747_8F:LOAD@50,TAKEOFF,AWAY,LAND:4000.00:false:1414",
        )

    def test_too_much_freight(self):
        with self.assertRaises(ValueError):
            self.make(0, freight=137757)


class TestMakeAircraft(unittest.TestCase):
    def test_passenger_model(self):
        aircraft = make_aircraft(
            "QFA481", AircraftCharacteristics.BOEING_787, turnaround_tasks(), 100.0, 5
        )
        self.assertIsInstance(aircraft, PassengerAircraft)
        self.assertEqual(aircraft.passengers, 5)
        self.assertEqual(aircraft.aircraft_type, AircraftType.AIRPLANE)

    def test_freight_model(self):
        aircraft = make_aircraft(
            "SKY1",
            AircraftCharacteristics.SIKORSKY_SKYCRANE,
            turnaround_tasks(),
            100.0,
            500,
            emergency=True,
        )
        self.assertIsInstance(aircraft, FreightAircraft)
        self.assertEqual(aircraft.freight_amount, 500)
        self.assertTrue(aircraft.has_emergency())
        self.assertEqual(aircraft.aircraft_type, AircraftType.HELICOPTER)


class TestAircraft(unittest.TestCase):
    def test_base_class_is_abstract(self):
        characteristics = AircraftCharacteristics.AIRBUS_A320
        with self.assertRaises(TypeError):
            Aircraft("ABC123", characteristics, turnaround_tasks(), 100.0)


if __name__ == "__main__":
    unittest.main()
