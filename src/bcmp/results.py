"""Result records returned by the solvers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class StationStatistics:
    """Steady-state metrics of one station, aggregated over classes."""

    service_time: float
    queue_length: float
    utilization: float
    class_queue_lengths: Tuple[float, ...] = ()
    class_service_times: Tuple[float, ...] = ()

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class NetworkOutput:
    """Network-wide summary: total time plus the per-station records."""

    time: float
    station_stats: Tuple[StationStatistics, ...]

    @classmethod
    def from_stations(cls, stations) -> "NetworkOutput":
        stats = tuple(stations)
        return cls(time=sum(s.service_time for s in stats), station_stats=stats)

    def as_dict(self) -> Dict[str, object]:
        """Return the summary as nested plain dictionaries (handy for JSON)."""
        return asdict(self)
