"""Steady-state parameters of an open BCMP network."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence

from .errors import UnknownStationTypeError, UnstableStationError
from .numeric import erlang_c, time_in_system
from .results import StationStatistics
from .stations import StationType, parse_station_types
from .validation import (
    check_arrival_rate,
    check_length,
    check_matrix,
    check_server_counts,
    check_service_rate,
    require,
)

logger = logging.getLogger(__name__)


def _queue_length_type1(m: int, lam: float, mu: float, rho_i: float) -> float:
    """M/M/m mean number in system of one class, given station utilization rho_i."""
    rho_ir = lam / (m * mu)
    return m * rho_ir + rho_ir * erlang_c(m, rho_i) / (1.0 - rho_i)


def _queue_length_type3(m: int, lam: float, mu: float, rho_i: float) -> float:
    return lam / mu


QUEUE_LENGTH: Dict[StationType, Callable[[int, float, float, float], float]] = {
    StationType.TYPE1: _queue_length_type1,
    StationType.TYPE3: _queue_length_type3,
}


def solve_open(
    server_counts: Sequence[int],
    service_rates: Sequence[Sequence[float]],
    arrival_rates: Sequence[Sequence[float]],
    station_types: Sequence[object],
) -> List[StationStatistics]:
    """
    Compute per-station statistics for an open network.

    Args:
        server_counts: ``m[i]`` servers at station ``i``.
        service_rates: ``mu[r][i]``, class-major (R x N).
        arrival_rates: ``lambda[r][i]``, class-major (R x N).
        station_types: one :class:`StationType` (or 1 / 3) per station.

    Raises:
        MissingInputError, DimensionMismatchError, UnknownStationTypeError,
        InvalidParameterError: before any computation.
        UnstableStationError: when a TYPE1 station has rho_i >= 1.
        InconsistentRatesError: non-zero queue length with zero arrivals.
    """
    require(
        server_counts=server_counts,
        service_rates=service_rates,
        arrival_rates=arrival_rates,
        station_types=station_types,
    )
    n_classes = len(service_rates)
    n_stations = len(server_counts)
    check_matrix("service_rates", service_rates, n_classes, n_stations)
    check_matrix("arrival_rates", arrival_rates, n_classes, n_stations)
    check_length("station_types", station_types, n_stations)
    types = parse_station_types(station_types)
    check_server_counts(server_counts)
    for r in range(n_classes):
        for i in range(n_stations):
            check_service_rate(service_rates[r][i], i, r)
            check_arrival_rate(arrival_rates[r][i], i, r)

    result = []
    for i in range(n_stations):
        m = server_counts[i]
        rho_i = sum(arrival_rates[r][i] / (m * service_rates[r][i]) for r in range(n_classes))
        station_type = types[i]
        if station_type is StationType.TYPE1 and rho_i >= 1.0:
            raise UnstableStationError(i, rho_i)
        try:
            queue_length = QUEUE_LENGTH[station_type]
        except KeyError as exc:
            raise UnknownStationTypeError(station_type, i) from exc

        k_i = [
            queue_length(m, arrival_rates[r][i], service_rates[r][i], rho_i)
            for r in range(n_classes)
        ]
        t_i = [time_in_system(k_i[r], arrival_rates[r][i], i, r) for r in range(n_classes)]
        logger.debug("station %d (%s, m=%d): rho=%.6f K=%s", i, station_type.name, m, rho_i, k_i)
        result.append(
            StationStatistics(
                service_time=sum(t_i),
                queue_length=sum(k_i),
                utilization=rho_i,
                class_queue_lengths=tuple(k_i),
                class_service_times=tuple(t_i),
            )
        )
    return result
