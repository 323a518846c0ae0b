"""Station types recognised by the solvers."""

from __future__ import annotations

from enum import Enum
from numbers import Integral
from typing import List, Sequence

from .errors import UnknownStationTypeError


class StationType(Enum):
    """BCMP station types.

    TYPE1 is a multi-server FCFS station with exponential service, TYPE3 an
    infinite-server (delay) station.
    """

    TYPE1 = 1
    TYPE3 = 3


def parse_station_type(value: object, station: int) -> StationType:
    """Accept an enum member, its integer value or its name."""
    if isinstance(value, StationType):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key.isdecimal():
            value = int(key)
        elif key in StationType.__members__:
            return StationType[key]
        else:
            raise UnknownStationTypeError(value, station)
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise UnknownStationTypeError(value, station)
    try:
        return StationType(int(value))
    except ValueError as exc:
        raise UnknownStationTypeError(value, station) from exc


def parse_station_types(values: Sequence[object]) -> List[StationType]:
    return [parse_station_type(value, station) for station, value in enumerate(values)]
