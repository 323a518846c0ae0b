"""Command line interface to solve one open BCMP network."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from bcmp import (
    BcmpError,
    JacksonSolver,
    NetworkInput,
    NetworkOutput,
    get_network,
    list_scenarios,
    load_network,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute steady-state parameters of an open BCMP network."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--scenario",
        type=str.upper,
        choices=list(list_scenarios()),
        help="Named example network.",
    )
    source.add_argument("--network", type=Path, help="JSON file describing the network.")
    parser.add_argument(
        "--outputs",
        type=Path,
        default=Path("outputs/stations.csv"),
        help="Path where the per-station CSV will be written.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log intermediate values.")
    return parser.parse_args()


def resolve_network(args: argparse.Namespace) -> NetworkInput:
    if args.scenario:
        return get_network(args.scenario)
    if not args.network.exists():
        raise SystemExit(f"Network file not found: {args.network}")
    try:
        return load_network(args.network)
    except (ValueError, TypeError) as exc:
        raise SystemExit(f"Invalid network file {args.network}: {exc}") from exc


def stations_frame(output: NetworkOutput) -> pd.DataFrame:
    rows = []
    for station, stats in enumerate(output.station_stats):
        rows.append(
            {
                "station": station,
                "service_time": stats.service_time,
                "queue_length": stats.queue_length,
                "utilization": stats.utilization,
            }
        )
    return pd.DataFrame(rows, columns=["station", "service_time", "queue_length", "utilization"])


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def main() -> None:
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    network = resolve_network(args)
    try:
        output = JacksonSolver().solve(network)
    except BcmpError as exc:
        raise SystemExit(f"Cannot solve network '{network.name}': {exc}") from exc

    df = stations_frame(output)
    ensure_parent(args.outputs)
    df.to_csv(args.outputs, index=False)

    print(f"\nRed: {network.name or '-'} ({network.num_stations} estaciones, {network.num_classes} clases)")
    print(f"  {'i':>3} {'T_i':>12} {'K_i':>12} {'rho_i':>10}")
    for row in df.itertuples(index=False):
        print(
            f"  {row.station:>3d} {row.service_time:>12.6f} "
            f"{row.queue_length:>12.6f} {row.utilization:>10.4f}"
        )
    print(f"\nTiempo total: {output.time:.6f}")
    print(f"Resultados guardados en {args.outputs.resolve()}")


if __name__ == "__main__":
    main()
