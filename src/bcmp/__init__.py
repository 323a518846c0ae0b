"""Steady-state parameters of BCMP queueing networks."""

from .closed_solver import solve_closed, solve_closed_continuation
from .errors import (
    BcmpError,
    DimensionMismatchError,
    InconsistentRatesError,
    InvalidParameterError,
    MissingInputError,
    RoutingError,
    UnknownStationTypeError,
    UnstableStationError,
)
from .jackson import JacksonSolver, NetworkInput, scale_arrivals, solve_traffic_equations
from .numeric import ZERO_TOLERANCE, blocking_probabilities, blocking_probability, erlang_c, factorial
from .open_solver import solve_open
from .results import NetworkOutput, StationStatistics
from .scenarios import get_network, list_scenarios, load_network
from .stations import StationType

__all__ = [
    "BcmpError",
    "DimensionMismatchError",
    "InconsistentRatesError",
    "InvalidParameterError",
    "JacksonSolver",
    "MissingInputError",
    "NetworkInput",
    "NetworkOutput",
    "RoutingError",
    "StationStatistics",
    "StationType",
    "UnknownStationTypeError",
    "UnstableStationError",
    "ZERO_TOLERANCE",
    "blocking_probabilities",
    "blocking_probability",
    "erlang_c",
    "factorial",
    "get_network",
    "list_scenarios",
    "load_network",
    "scale_arrivals",
    "solve_closed",
    "solve_closed_continuation",
    "solve_open",
    "solve_traffic_equations",
]
