"""Argument checks shared by the open and closed solvers."""

from __future__ import annotations

from numbers import Integral
from typing import Sequence

from .errors import DimensionMismatchError, InvalidParameterError, MissingInputError


def require(**arguments: object) -> None:
    """Raise MissingInputError for the first argument that is None."""
    for name, value in arguments.items():
        if value is None:
            raise MissingInputError(name)


def check_matrix(name: str, matrix: Sequence[Sequence[float]], rows: int, columns: int) -> None:
    """Validate a rectangular ``rows x columns`` matrix."""
    if len(matrix) != rows:
        raise DimensionMismatchError(f"{name} has {len(matrix)} rows, expected {rows}.")
    for index, row in enumerate(matrix):
        if row is None:
            raise MissingInputError(f"{name}[{index}]")
        if len(row) != columns:
            raise DimensionMismatchError(
                f"{name}[{index}] has length {len(row)}, expected {columns}."
            )


def is_int(value: object) -> bool:
    """True for ints, numpy integers included, but not for bools."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def check_server_counts(server_counts: Sequence[int]) -> None:
    for station, m in enumerate(server_counts):
        if not is_int(m) or m < 1:
            raise InvalidParameterError(
                f"Number of servers at station {station} must be an int >= 1, got {m!r}."
            )


def check_service_rate(mu: float, station: int, klass: int) -> None:
    if not mu > 0:
        raise InvalidParameterError(
            f"Service rate of class {klass} at station {station} must be strictly positive."
        )


def check_arrival_rate(lam: float, station: int, klass: int) -> None:
    if not lam >= 0:
        raise InvalidParameterError(
            f"Arrival rate of class {klass} at station {station} must be non-negative."
        )


def check_length(name: str, values: Sequence[object], expected: int) -> None:
    if len(values) != expected:
        raise DimensionMismatchError(f"{name} has length {len(values)}, expected {expected}.")
