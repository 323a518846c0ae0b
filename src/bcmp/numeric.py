"""Factorial and Erlang-C style helpers shared by the solvers."""

from __future__ import annotations

import math
from numbers import Integral
from typing import List, Sequence

from .errors import (
    DimensionMismatchError,
    InconsistentRatesError,
    InvalidParameterError,
    UnstableStationError,
)

ZERO_TOLERANCE = 1e-7


def is_zero(value: float) -> bool:
    """Return True when |value| is below the solver tolerance."""
    return abs(value) < ZERO_TOLERANCE


def factorial(n: int) -> int:
    """Return n! rejecting negative and non-integral input."""
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidParameterError(f"factorial expects an int, got {n!r}.")
    if n < 0:
        raise InvalidParameterError(f"factorial is undefined for negative n={n}.")
    return math.factorial(n)


def _tail_term(m: int, rho: float) -> float:
    """(m·ρ)^m / (m! · (1 − ρ))"""
    return (m * rho) ** m / (factorial(m) * (1.0 - rho))


def erlang_c(m: int, rho: float) -> float:
    """
    Probability that an arriving customer finds all ``m`` servers busy.

    ``rho`` is the per-server utilization. The normalising sum runs over
    ``k = 0 .. m-1``.

    Raises:
        UnstableStationError: when rho >= 1.
    """
    if rho >= 1.0:
        raise UnstableStationError(None, rho)
    x = m * rho
    tail = _tail_term(m, rho)
    head = sum(x**k / factorial(k) for k in range(m))
    return tail / (head + tail)


def blocking_probability(m: int, rho: float) -> float:
    """
    Blocking probability ``Pmi`` used by the closed-network correction.

    Unlike :func:`erlang_c` the normalising sum stops at ``j = m-2``, so a
    loaded single-server station always yields 1 (an idle one yields 0).

    Raises:
        UnstableStationError: when rho >= 1.
    """
    if m < 1:
        raise InvalidParameterError("Number of servers m must be >= 1.")
    if rho >= 1.0:
        raise UnstableStationError(None, rho)
    x = m * rho
    if m == 1 and x == 0:
        return 0.0
    tail = _tail_term(m, rho)
    head = sum(x**j / factorial(j) for j in range(m - 1))
    return tail / (head + tail)


def blocking_probabilities(server_counts: Sequence[int], utilizations: Sequence[float]) -> List[float]:
    """Vectorised :func:`blocking_probability`, one value per station."""
    if len(server_counts) != len(utilizations):
        raise DimensionMismatchError(
            f"{len(server_counts)} server counts but {len(utilizations)} utilizations."
        )
    result = []
    for station, (m, rho) in enumerate(zip(server_counts, utilizations)):
        try:
            result.append(blocking_probability(m, rho))
        except UnstableStationError as exc:
            raise UnstableStationError(station, exc.rho) from exc
    return result


def time_in_system(queue_length: float, arrival_rate: float, station: int, klass: int) -> float:
    """
    Little's law ``T = K / λ`` guarding the zero-arrival case.

    A class with no arrivals contributes 0 as long as its queue length is
    also zero; anything else means the inputs contradict each other.
    """
    if is_zero(arrival_rate):
        if is_zero(queue_length):
            return 0.0
        raise InconsistentRatesError(station, klass, queue_length)
    return queue_length / arrival_rate
