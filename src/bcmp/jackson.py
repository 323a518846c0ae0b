"""Open-network orchestration: traffic equations followed by the open solver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import MissingInputError, RoutingError
from .numeric import ZERO_TOLERANCE
from .open_solver import solve_open
from .results import NetworkOutput, StationStatistics
from .validation import check_matrix

logger = logging.getLogger(__name__)

Matrix = Tuple[Tuple[float, ...], ...]
ParametersSolver = Callable[..., Sequence[StationStatistics]]


def _freeze(matrix) -> Matrix:
    return tuple(tuple(float(v) for v in row) for row in matrix)


@dataclass(frozen=True)
class NetworkInput:
    """Description of an open multi-class network.

    ``service_rates`` and ``external_arrivals`` are class-major (R x N).
    ``routing[r][i][j]`` is the probability that a class ``r`` customer
    leaving station ``i`` moves to station ``j``; the rest of the row leaves
    the network. Without routing the external rates are used as-is.
    """

    server_counts: Tuple[int, ...]
    service_rates: Matrix
    external_arrivals: Matrix
    station_types: Tuple[object, ...]
    routing: Optional[Tuple[Matrix, ...]] = None
    name: str = ""

    def __post_init__(self) -> None:
        for field in ("server_counts", "service_rates", "external_arrivals", "station_types"):
            if getattr(self, field) is None:
                raise MissingInputError(field)
        object.__setattr__(self, "server_counts", tuple(self.server_counts))
        object.__setattr__(self, "service_rates", _freeze(self.service_rates))
        object.__setattr__(self, "external_arrivals", _freeze(self.external_arrivals))
        object.__setattr__(self, "station_types", tuple(self.station_types))
        if self.routing is not None:
            object.__setattr__(self, "routing", tuple(_freeze(p) for p in self.routing))

    @property
    def num_classes(self) -> int:
        return len(self.service_rates)

    @property
    def num_stations(self) -> int:
        return len(self.server_counts)


def solve_traffic_equations(
    external_arrivals: Sequence[Sequence[float]],
    routing: Optional[Sequence[Sequence[Sequence[float]]]] = None,
) -> List[List[float]]:
    """
    Resolve total arrival rates per class and station.

    For every class solves ``lambda_r = lambda0_r + P_r^T lambda_r``.

    Raises:
        DimensionMismatchError: when external_arrivals is ragged.
        RoutingError: on malformed routing or a singular system (a class
            whose customers never leave the network).
    """
    if external_arrivals is None:
        raise MissingInputError("external_arrivals")
    n_classes = len(external_arrivals)
    n_stations = len(external_arrivals[0]) if n_classes else 0
    check_matrix("external_arrivals", external_arrivals, n_classes, n_stations)
    lam0 = np.asarray(external_arrivals, dtype=float).reshape(n_classes, n_stations)
    if routing is None:
        return lam0.tolist()

    if len(routing) != n_classes:
        raise RoutingError(f"{len(routing)} routing matrices for {n_classes} classes.")

    rates = []
    for r in range(n_classes):
        try:
            P = np.asarray(routing[r], dtype=float)
        except (TypeError, ValueError) as exc:
            raise RoutingError(
                f"Routing matrix of class {r} is not a stations x stations matrix."
            ) from exc
        if P.shape != (n_stations, n_stations):
            raise RoutingError(
                f"Routing matrix of class {r} has shape {P.shape}, "
                f"expected {(n_stations, n_stations)}."
            )
        if (P < 0).any():
            raise RoutingError(f"Routing matrix of class {r} has negative probabilities.")
        if (P.sum(axis=1) > 1.0 + ZERO_TOLERANCE).any():
            raise RoutingError(f"Routing matrix of class {r} has rows summing above 1.")

        A = np.eye(n_stations) - P.T
        try:
            lam_r = np.linalg.solve(A, lam0[r])
        except np.linalg.LinAlgError as exc:
            raise RoutingError(f"Traffic equations of class {r} are singular (closed chain).") from exc
        lam_r[(lam_r < 0) & (lam_r > -ZERO_TOLERANCE)] = 0.0
        if (lam_r < 0).any():
            raise RoutingError(f"Traffic equations of class {r} produced negative rates.")
        rates.append(lam_r.tolist())
    logger.debug("resolved arrival rates: %s", rates)
    return rates


class JacksonSolver:
    """Solve an open network end to end and aggregate the result."""

    def __init__(self, parameters_solver: ParametersSolver = solve_open):
        self._parameters_solver = parameters_solver

    def solve(self, network: NetworkInput) -> NetworkOutput:
        arrival_rates = solve_traffic_equations(network.external_arrivals, network.routing)
        stations = self._parameters_solver(
            network.server_counts,
            network.service_rates,
            arrival_rates,
            network.station_types,
        )
        output = NetworkOutput.from_stations(stations)
        logger.debug("network %r: total time %.6f", network.name, output.time)
        return output


def scale_arrivals(network: NetworkInput, factor: float) -> NetworkInput:
    """Return a copy of ``network`` with every external rate multiplied by ``factor``."""
    scaled = tuple(tuple(rate * factor for rate in row) for row in network.external_arrivals)
    return replace(network, external_arrivals=scaled)
