"""Exceptions raised by the BCMP solvers."""

from __future__ import annotations


class BcmpError(Exception):
    """Base class for every error raised by the package."""


class MissingInputError(BcmpError, ValueError):
    """A required argument is ``None`` or absent."""

    def __init__(self, name: str):
        super().__init__(f"Required input '{name}' is missing.")
        self.name = name


class DimensionMismatchError(BcmpError, ValueError):
    """Rate matrices, server counts and station types disagree in shape."""


class UnknownStationTypeError(BcmpError, ValueError):
    """A station type outside the supported set."""

    def __init__(self, station_type: object, station: int):
        super().__init__(f"Station {station} has unknown type: {station_type!r}")
        self.station_type = station_type
        self.station = station


class InconsistentRatesError(BcmpError, ZeroDivisionError):
    """Non-zero mean number in system paired with a zero arrival rate."""

    def __init__(self, station: int, klass: int, queue_length: float):
        super().__init__(
            f"Arrival rate of class {klass} at station {station} is zero "
            f"but its mean number in system is {queue_length:g}."
        )
        self.station = station
        self.klass = klass
        self.queue_length = queue_length


class UnstableStationError(BcmpError, ValueError):
    """Utilization outside the region where the steady-state formulas hold."""

    def __init__(self, station: int | None, rho: float):
        where = f"station {station}" if station is not None else "station"
        super().__init__(f"Unstable {where}: rho = {rho:g} must be < 1.")
        self.station = station
        self.rho = rho


class InvalidParameterError(BcmpError, ValueError):
    """A numeric parameter outside its domain (negative rate, zero servers...)."""


class RoutingError(BcmpError, ValueError):
    """Routing matrices are malformed or describe a network that is not open."""
