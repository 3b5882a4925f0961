class ProtodiskError(Exception):
    """Base class for errors raised by protodisk"""


class InvariantViolation(ProtodiskError):
    """
    Internal bookkeeping went wrong. These indicate a bug in the engine and
    are never raised for unusual but valid configurations.
    """


class DustBandInvariantError(InvariantViolation):
    pass


class PlanetOrderError(InvariantViolation):
    pass


class FinalizedSystemError(ProtodiskError):
    """Raised when a finalized system is modified"""
