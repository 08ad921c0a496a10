"""Default constants for the tower simulation."""

# Maximum number of gates a single terminal can hold
MAX_NUM_GATES = 6

# Aircraft at or below this fuel percentage are prioritised for landing
CRITICAL_FUEL_PERCENT = 20

# Elapsed-tick parity (ticks % 2) on which the tower tries to land before taking off
LANDING_TICK_PARITY = 1

# Aircraft physical constants
FUEL_DENSITY = 0.8  # kg per litre
PASSENGER_WEIGHT = 90  # kg
AWAY_FUEL_BURN = 0.1  # fraction of fuel capacity burned per tick away
