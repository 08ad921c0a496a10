"""Define the errors raised by the tower simulation."""


class TowerSimError(Exception):
    """Base class for all errors raised by the simulation."""


class InvalidTaskSequence(TowerSimError, ValueError):
    """A sequence of tasks breaks the legal task ordering."""


class NoSuitableGate(TowerSimError):
    """No unoccupied gate is available for an aircraft."""


class NoSpace(TowerSimError):
    """A gate or terminal has no room left."""


class MalformedSave(TowerSimError):
    """Saved simulation state could not be read."""
