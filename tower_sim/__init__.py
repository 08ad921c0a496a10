"""Tick-based simulation of an airport control tower."""
