"""Define utility types used throughout the simulation."""
Callsign = str
Tick = int
