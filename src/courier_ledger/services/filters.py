"""Date-range and courier/area predicates shared by every view."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Protocol, Sequence, TypeVar, Union

from ..models.domain import ALL, DeliveryEntry

DateLike = Union[date, datetime]


class Dated(Protocol):
    date: datetime


class CourierScoped(Protocol):
    courier_name: str


T = TypeVar("T", bound=Dated)
C = TypeVar("C", bound=CourierScoped)


@dataclass(frozen=True, slots=True)
class DateRange:
    """Filter window. ``end`` defaults to ``start`` and always covers its whole day."""

    start: Optional[DateLike] = None
    end: Optional[DateLike] = None


def as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def end_of_day(value: DateLike) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.max)


def filter_by_date_range(events: Iterable[T], date_range: Optional[DateRange] = None) -> List[T]:
    """Keep events dated within ``date_range``.

    The lower bound is compared at ``start``'s exact instant; callers wanting
    whole days pass a midnight ``start``. The upper bound runs through the end
    of ``end``'s day whatever time it carries, so events logged later on the
    last day stay in. Without a start date every event is returned.
    """
    if date_range is None or date_range.start is None:
        return list(events)

    lower = as_datetime(date_range.start)
    upper = end_of_day(date_range.end if date_range.end is not None else date_range.start)
    return [event for event in events if lower <= as_datetime(event.date) <= upper]


def filter_by_courier(events: Iterable[C], courier: Optional[str] = ALL) -> List[C]:
    """Keep events for ``courier``; ``"All"`` is a sentinel, not a name."""
    if courier is None or courier == ALL:
        return list(events)
    return [event for event in events if event.courier_name == courier]


def filter_by_area(
    entries: Iterable[DeliveryEntry],
    area: Optional[str] = ALL,
    rvp_area: Optional[str] = None,
) -> List[DeliveryEntry]:
    """Keep delivery entries with any delivered or returned parcels in ``area``.

    Reverse pickups are billed at ``rvp_area``'s rates, so entries carrying
    them also belong to that area's view.
    """
    if area is None or area == ALL:
        return list(entries)
    return [
        entry
        for entry in entries
        if (entry.delivered.get(area) or 0) > 0
        or (entry.returned.get(area) or 0) > 0
        or (area == rvp_area and (entry.rvp or 0) > 0)
    ]


def restrict_to_area(
    entries: Iterable[DeliveryEntry],
    area: Optional[str] = ALL,
    rvp_area: Optional[str] = None,
) -> List[DeliveryEntry]:
    """Drop other areas' counters so totals only count parcels from ``area``.

    Reverse pickups stay only when ``area`` is the RVP area. COD and on-spot
    advances are recorded per entry, not per area, and are kept whole.
    """
    if area is None or area == ALL:
        return list(entries)
    restricted: List[DeliveryEntry] = []
    for entry in entries:
        delivered = entry.delivered.get(area) or 0
        returned = entry.returned.get(area) or 0
        restricted.append(
            replace(
                entry,
                delivered={area: delivered} if delivered else {},
                returned={area: returned} if returned else {},
                rvp=entry.rvp if area == rvp_area else 0,
            )
        )
    return restricted


def apply_filters(
    events: Sequence[C],
    date_range: Optional[DateRange] = None,
    courier: Optional[str] = ALL,
) -> List[C]:
    return filter_by_courier(filter_by_date_range(events, date_range), courier)
