"""Unit tests for the open-network solver."""

import math

import numpy as np
import pytest

from bcmp.errors import (
    DimensionMismatchError,
    InconsistentRatesError,
    InvalidParameterError,
    MissingInputError,
    UnknownStationTypeError,
    UnstableStationError,
)
from bcmp.numeric import erlang_c
from bcmp.open_solver import solve_open
from bcmp.stations import StationType

T1 = StationType.TYPE1
T3 = StationType.TYPE3


@pytest.mark.parametrize("lam", [0.1, 1.0, 25.0])
def test_delay_station_time_is_mean_service_time(lam):
    (stats,) = solve_open([1], [[2.0]], [[lam]], [T3])
    assert math.isclose(stats.queue_length, lam / 2.0)
    assert math.isclose(stats.service_time, 0.5)


def test_single_server_reduces_to_mm1():
    lam, mu = 0.7, 1.0
    (stats,) = solve_open([1], [[mu]], [[lam]], [T1])
    assert math.isclose(stats.service_time, 1.0 / (mu - lam), abs_tol=1e-6)
    assert math.isclose(stats.queue_length, 0.7 / 0.3, abs_tol=1e-6)
    assert math.isclose(stats.utilization, 0.7)


def test_multi_server_matches_erlang_c():
    lam, mu, m = 1.7, 1.0, 2
    (stats,) = solve_open([m], [[mu]], [[lam]], [T1])
    rho = lam / (m * mu)
    expected_L = lam / mu + erlang_c(m, rho) * rho / (1 - rho)
    assert math.isclose(stats.queue_length, expected_L, rel_tol=1e-9)
    assert math.isclose(stats.service_time, expected_L / lam, rel_tol=1e-9)
    # Little's law between the two reported figures
    assert math.isclose(stats.queue_length, lam * stats.service_time, rel_tol=1e-9)


def test_two_classes_share_single_server():
    (stats,) = solve_open([1], [[1.0], [1.0]], [[0.2], [0.3]], [T1])
    assert math.isclose(stats.class_queue_lengths[0], 0.4)
    assert math.isclose(stats.class_queue_lengths[1], 0.6)
    # each class sees T = 1 / (mu - lambda_total)
    assert math.isclose(stats.class_service_times[0], 2.0)
    assert math.isclose(stats.class_service_times[1], 2.0)
    assert math.isclose(stats.service_time, 4.0)


def test_results_follow_station_order():
    stats = solve_open([1, 1], [[2.0, 4.0]], [[1.0, 1.0]], [T1, T3])
    assert math.isclose(stats[0].service_time, 1.0)
    assert math.isclose(stats[1].service_time, 0.25)


def test_integer_station_types_are_accepted():
    (stats,) = solve_open([1], [[1.0]], [[0.5]], [1])
    assert math.isclose(stats.service_time, 2.0)


def test_zero_arrivals_contribute_nothing():
    stats = solve_open([1, 1], [[1.0, 1.0], [1.0, 1.0]], [[0.5, 0.0], [0.0, 0.0]], [T1, T3])
    assert math.isclose(stats[0].class_service_times[1], 0.0)
    assert math.isclose(stats[0].service_time, 2.0)
    assert stats[1].service_time == 0.0


def test_queue_length_without_arrivals_is_inconsistent():
    # lambda below the zero tolerance but lambda / mu clearly positive
    with pytest.raises(InconsistentRatesError) as excinfo:
        solve_open([1], [[1e-9]], [[1e-8]], [T3])
    assert excinfo.value.station == 0
    assert excinfo.value.klass == 0


def test_class_count_mismatch():
    with pytest.raises(DimensionMismatchError):
        solve_open([1], [[1.0], [1.0]], [[0.5]], [T1])


def test_station_count_mismatch():
    with pytest.raises(DimensionMismatchError):
        solve_open([1, 1], [[1.0, 1.0]], [[0.5]], [T1, T1])


def test_station_types_length_mismatch():
    with pytest.raises(DimensionMismatchError):
        solve_open([1, 1], [[1.0, 1.0]], [[0.5, 0.5]], [T1])


def test_mismatch_detected_before_numeric_work():
    # the unstable station would raise if any formula ran
    with pytest.raises(DimensionMismatchError):
        solve_open([1, 1], [[1.0, 1.0]], [[5.0, 0.5, 0.1]], [T1, T1])


@pytest.mark.parametrize("missing", range(4))
def test_missing_inputs(missing):
    args = [[1], [[1.0]], [[0.5]], [T1]]
    args[missing] = None
    with pytest.raises(MissingInputError):
        solve_open(*args)


def test_unknown_station_type():
    with pytest.raises(UnknownStationTypeError) as excinfo:
        solve_open([1, 1], [[1.0, 1.0]], [[0.5, 0.5]], [T1, 2])
    assert excinfo.value.station == 1
    assert excinfo.value.station_type == 2


def test_unstable_station_fails_fast():
    with pytest.raises(UnstableStationError):
        solve_open([1], [[1.0]], [[1.0]], [T1])


def test_delay_station_has_no_stability_limit():
    (stats,) = solve_open([1], [[1.0]], [[5.0]], [T3])
    assert math.isclose(stats.service_time, 1.0)


def test_invalid_rates_are_rejected():
    with pytest.raises(InvalidParameterError):
        solve_open([1], [[0.0]], [[0.5]], [T1])
    with pytest.raises(InvalidParameterError):
        solve_open([1], [[1.0]], [[-0.5]], [T1])
    with pytest.raises(InvalidParameterError):
        solve_open([0], [[1.0]], [[0.5]], [T1])


def test_non_ascii_digit_station_type_is_unknown():
    with pytest.raises(UnknownStationTypeError) as excinfo:
        solve_open([1], [[1.0]], [[0.5]], ["²"])
    assert excinfo.value.station == 0


def test_numpy_inputs_are_accepted():
    (stats,) = solve_open(np.array([1]), np.array([[1.0]]), np.array([[0.5]]), np.array([1]))
    assert math.isclose(stats.service_time, 2.0)
