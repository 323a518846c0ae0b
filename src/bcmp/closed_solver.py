"""Closed BCMP networks with externally resolved arrival rates."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .errors import InvalidParameterError, UnstableStationError
from .numeric import blocking_probability, time_in_system
from .results import StationStatistics
from .stations import StationType, parse_station_types
from .validation import (
    check_arrival_rate,
    check_length,
    check_matrix,
    check_server_counts,
    check_service_rate,
    is_int,
    require,
)

logger = logging.getLogger(__name__)


def solve_closed(
    server_counts: Sequence[int],
    service_rates: Sequence[Sequence[float]],
    visit_ratios: Sequence[Sequence[float]],
    station_types: Sequence[object],
    population_sizes: Sequence[int],
) -> List[StationStatistics]:
    """
    Solve a closed network from visit ratios and populations alone.

    Resolving the per-class throughputs needs an iterative fixed point
    (SUM, MVA or convolution) which this package does not provide; use
    :func:`solve_closed_continuation` with pre-resolved arrival rates.
    """
    raise NotImplementedError(
        "Closed networks require pre-resolved arrival rates; "
        "use solve_closed_continuation()."
    )


def _correction(factor: float, rho_i: float, station: int) -> float:
    denominator = 1.0 - factor * rho_i
    if denominator <= 0:
        raise UnstableStationError(station, rho_i)
    return denominator


def solve_closed_continuation(
    server_counts: Sequence[int],
    service_rates: Sequence[Sequence[float]],
    population_sizes: Sequence[int],
    station_types: Sequence[object],
    arrival_rates: Sequence[Sequence[float]],
) -> List[StationStatistics]:
    """
    Compute per-station statistics of a closed network.

    Matrices are station-major here: ``service_rates[i][r]`` and
    ``arrival_rates[i][r]``. ``population_sizes[r]`` is the fixed number of
    class ``r`` customers circulating in the network.

    The reported utilization is ``sum_r lambda_ir / mu_ir`` (not divided by
    the server count).
    """
    require(
        server_counts=server_counts,
        service_rates=service_rates,
        population_sizes=population_sizes,
        station_types=station_types,
        arrival_rates=arrival_rates,
    )
    n_stations = len(server_counts)
    n_classes = len(population_sizes)
    check_matrix("service_rates", service_rates, n_stations, n_classes)
    check_matrix("arrival_rates", arrival_rates, n_stations, n_classes)
    check_length("station_types", station_types, n_stations)
    types = parse_station_types(station_types)
    check_server_counts(server_counts)
    for r, k in enumerate(population_sizes):
        if not is_int(k) or k < 1:
            raise InvalidParameterError(f"Population of class {r} must be an int >= 1, got {k!r}.")
    for i in range(n_stations):
        for r in range(n_classes):
            check_service_rate(service_rates[i][r], i, r)
            check_arrival_rate(arrival_rates[i][r], i, r)

    result = []
    for i in range(n_stations):
        m = server_counts[i]
        rho_ir = [arrival_rates[i][r] / service_rates[i][r] for r in range(n_classes)]
        rho_i = sum(rho_ir)
        multi_server = types[i] is StationType.TYPE1 and m > 1
        if multi_server:
            try:
                pmi = blocking_probability(m, rho_i)
            except UnstableStationError as exc:
                raise UnstableStationError(i, rho_i) from exc

        k_i = []
        for r in range(n_classes):
            population = population_sizes[r]
            if types[i] is not StationType.TYPE1:
                k_i.append(rho_ir[r])
            elif m == 1:
                factor = (population - 1.0) / population
                k_i.append(rho_ir[r] / _correction(factor, rho_i, i))
            else:
                if population == m:
                    raise InvalidParameterError(
                        f"Population of class {r} equals the {m} servers of station {i}."
                    )
                factor = (population - m - 1.0) / (population - m)
                k_i.append(m * rho_ir[r] + rho_ir[r] / _correction(factor, rho_i, i) * pmi)

        t_i = [time_in_system(k_i[r], arrival_rates[i][r], i, r) for r in range(n_classes)]
        logger.debug("station %d (%s, m=%d): rho=%.6f K=%s", i, types[i].name, m, rho_i, k_i)
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
