"""Sweep the external load of a network and plot the resulting times."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, List

import matplotlib.pyplot as plt
import pandas as pd
from tqdm import tqdm

from bcmp import (
    BcmpError,
    JacksonSolver,
    NetworkInput,
    UnstableStationError,
    get_network,
    list_scenarios,
    load_network,
    scale_arrivals,
)


def parse_factor_list(spec: str) -> List[float]:
    values = []
    for chunk in spec.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            factor = float(chunk)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Invalid load factor '{chunk}'.") from exc
        if factor < 0:
            raise argparse.ArgumentTypeError("Every load factor must be >= 0.")
        values.append(factor)
    if not values:
        raise argparse.ArgumentTypeError("Provide at least one load factor via --factors.")
    return sorted(set(values))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sweep external arrival rates of a BCMP network.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--scenario",
        type=str.upper,
        choices=list(list_scenarios()),
        help="Named example network.",
    )
    source.add_argument("--network", type=Path, help="JSON file describing the network.")
    parser.add_argument(
        "--factors",
        type=parse_factor_list,
        default=parse_factor_list("0.25,0.5,0.75,1.0,1.25,1.5"),
        help='Comma-separated multipliers applied to the external arrivals (e.g. "0.5,1,1.5").',
    )
    parser.add_argument(
        "--results-out",
        type=Path,
        default=Path("outputs/sweep_results.csv"),
        help="CSV with one row per (factor, station).",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("reports"),
        help="Directory where the sweep figure will be written.",
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


def run_sweep(network: NetworkInput, factors: Iterable[float]) -> Iterable[dict]:
    """Yield one row per station for every factor; unstable loads yield a single skipped row."""
    solver = JacksonSolver()
    for factor in tqdm(list(factors), desc="Sweeping", unit="load"):
        try:
            output = solver.solve(scale_arrivals(network, factor))
        except UnstableStationError as exc:
            yield {
                "factor": factor,
                "station": exc.station,
                "status": "unstable",
                "total_time": float("nan"),
                "service_time": float("nan"),
                "queue_length": float("nan"),
                "utilization": exc.rho,
            }
            continue
        for station, stats in enumerate(output.station_stats):
            yield {
                "factor": factor,
                "station": station,
                "status": "ok",
                "total_time": output.time,
                "service_time": stats.service_time,
                "queue_length": stats.queue_length,
                "utilization": stats.utilization,
            }


def plot_total_time(df: pd.DataFrame, network: NetworkInput, reports_dir: Path) -> Path:
    solved = df[df["status"] == "ok"]
    totals = solved.groupby("factor")["total_time"].first()
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(totals.index, totals.values, marker="o", label="T total")
    for station, group in solved.groupby("station"):
        ax.plot(
            group["factor"],
            group["service_time"],
            linestyle="--",
            marker="x",
            label=f"T_{int(station)}",
        )
    ax.set_xlabel("Factor de carga")
    ax.set_ylabel("Tiempo en el sistema")
    ax.set_title(f"Tiempo vs. carga ({network.name or 'red'})")
    ax.legend()
    fig.tight_layout()
    path = reports_dir / "sweep_time_vs_load.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def main() -> None:
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    network = resolve_network(args)
    try:
        rows = list(run_sweep(network, args.factors))
    except BcmpError as exc:
        raise SystemExit(f"Cannot solve network '{network.name}': {exc}") from exc

    df = pd.DataFrame(rows)
    args.results_out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.results_out, index=False)

    args.reports_dir.mkdir(parents=True, exist_ok=True)
    figure = plot_total_time(df, network, args.reports_dir)

    skipped = sorted(df.loc[df["status"] == "unstable", "factor"].unique())
    if skipped:
        print(f"Cargas inestables omitidas: {', '.join(f'{f:g}' for f in skipped)}")
    print(f"Resultados del barrido: {args.results_out.resolve()}")
    print(f"Grafico guardado en {figure.resolve()}")


if __name__ == "__main__":
    main()
