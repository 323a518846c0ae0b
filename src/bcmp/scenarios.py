"""Pre-defined example networks and a JSON loader."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, Union

from .errors import MissingInputError
from .jackson import NetworkInput
from .stations import StationType

T1 = StationType.TYPE1
T3 = StationType.TYPE3

SCENARIOS: Dict[str, NetworkInput] = {
    # Single M/M/1 queue, ρ = 0.5.
    "MM1": NetworkInput(
        name="mm1",
        server_counts=(1,),
        service_rates=((1.0,),),
        external_arrivals=((0.5,),),
        station_types=(T1,),
    ),
    # Two single-server stations in series.
    "TANDEM": NetworkInput(
        name="tandem",
        server_counts=(1, 1),
        service_rates=((2.0, 3.0),),
        external_arrivals=((1.0, 0.0),),
        station_types=(T1, T1),
        routing=(((0.0, 1.0), (0.0, 0.0)),),
    ),
    # Half of the served customers return to the same queue.
    "FEEDBACK": NetworkInput(
        name="feedback",
        server_counts=(1,),
        service_rates=((4.0,),),
        external_arrivals=((1.0,),),
        station_types=(T1,),
        routing=(((0.5,),),),
    ),
    # Two classes sharing a CPU, class 1 also visiting a think-time delay station.
    "TWO-CLASS": NetworkInput(
        name="two-class",
        server_counts=(2, 1),
        service_rates=((3.0, 0.5), (2.0, 0.5)),
        external_arrivals=((1.0, 0.0), (1.5, 0.0)),
        station_types=(T1, T3),
        routing=(
            ((0.0, 0.4), (1.0, 0.0)),
            ((0.0, 0.0), (0.0, 0.0)),
        ),
    ),
    # Reception desk feeding a pool of agents.
    "CALL-CENTER": NetworkInput(
        name="call-center",
        server_counts=(1, 4),
        service_rates=((12.0, 1.0),),
        external_arrivals=((3.0, 0.0),),
        station_types=(T1, T1),
        routing=(((0.0, 1.0), (0.0, 0.0)),),
    ),
}


def list_scenarios() -> Iterable[str]:
    """Return available scenario identifiers."""
    return sorted(SCENARIOS.keys())


def get_network(name: str) -> NetworkInput:
    key = name.upper()
    if key not in SCENARIOS:
        raise KeyError(f"Scenario '{name}' is not defined. Available: {list_scenarios()}")
    return SCENARIOS[key]


REQUIRED_KEYS = ("server_counts", "service_rates", "external_arrivals", "station_types")


def network_from_dict(data: Dict[str, object]) -> NetworkInput:
    for key in REQUIRED_KEYS:
        if key not in data:
            raise MissingInputError(key)
    return NetworkInput(
        name=str(data.get("name", "")),
        server_counts=data["server_counts"],
        service_rates=data["service_rates"],
        external_arrivals=data["external_arrivals"],
        station_types=data["station_types"],
        routing=data.get("routing"),
    )


def load_network(path: Union[str, Path]) -> NetworkInput:
    """Read a network description from a JSON file."""
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object.")
    network = network_from_dict(data)
    if not network.name:
        network = replace(network, name=path.stem)
    return network
