"""Tests for the load sweep script."""

import argparse
import math

import pytest

from bcmp.scenarios import get_network
from sweep import parse_factor_list, resolve_network, run_sweep


def test_unstable_load_is_recorded_not_raised():
    rows = list(run_sweep(get_network("mm1"), [1.0, 2.5]))
    stable = [row for row in rows if row["factor"] == 1.0]
    unstable = [row for row in rows if row["factor"] == 2.5]

    assert len(stable) == 1
    assert stable[0]["status"] == "ok"
    assert math.isclose(stable[0]["service_time"], 2.0)

    assert len(unstable) == 1
    assert unstable[0]["status"] == "unstable"
    assert unstable[0]["station"] == 0
    assert math.isnan(unstable[0]["service_time"])
    assert math.isnan(unstable[0]["total_time"])
    assert math.isclose(unstable[0]["utilization"], 1.25)


def test_parse_factor_list_sorts_and_deduplicates():
    assert parse_factor_list("1.5, 0.5,1.5") == [0.5, 1.5]


def test_parse_factor_list_rejects_negative():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_factor_list("-1")


def test_malformed_network_file_exits(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    args = argparse.Namespace(scenario=None, network=path)
    with pytest.raises(SystemExit):
        resolve_network(args)
