"""Exceptions raised across the performance engine."""


class GigLoadError(Exception):
    """The gig (or its venue, or the performing profile) could not be loaded."""


class GigStateError(Exception):
    """The gig is not in a state that allows a performance."""


class PersistenceError(Exception):
    """A write to the store failed."""


class DuplicateSettlementError(PersistenceError):
    """A settlement already exists for this gig."""


class SimulationStateError(Exception):
    """The simulator was driven out of order."""


class SimulationCancelled(Exception):
    """The simulation was cancelled before the last stage finished."""
