"""
Calendar utilities shared by the holiday, academic event and report services.

- Interval overlap on inclusive calendar-day ranges
- Scope matching (campus / academic cycle / event type)
- Working-day counting (Monday-Friday, excluding holiday ranges)
- Calendar month bounds and month decomposition of a date range
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import FrozenSet, Iterable, List, Optional, Tuple
from uuid import UUID


def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """
    Check whether two inclusive date ranges intersect.

    A single shared boundary day counts as an overlap.
    """
    return a_start <= b_end and b_start <= a_end


@dataclass(frozen=True)
class CalendarScope:
    """
    The population a holiday or event applies to.

    An empty campus set means the record applies to every campus. The academic
    cycle and event type dimensions are only set for academic events; when set
    on both sides they must be equal for the scopes to match.
    """
    campus_ids: FrozenSet[UUID] = field(default_factory=frozenset)
    applies_to_all: bool = False
    academic_cycle_id: Optional[UUID] = None
    event_type: Optional[object] = None

    @classmethod
    def for_holiday(cls, affects_all: bool, campus_ids: Optional[Iterable[UUID]] = None) -> "CalendarScope":
        campus_set = frozenset(campus_ids or [])
        return cls(
            campus_ids=frozenset() if affects_all else campus_set,
            applies_to_all=affects_all or not campus_set
        )

    @classmethod
    def for_event(
        cls,
        academic_cycle_id: Optional[UUID],
        event_type: Optional[object],
        campus_ids: Optional[Iterable[UUID]] = None
    ) -> "CalendarScope":
        campus_set = frozenset(campus_ids or [])
        return cls(
            campus_ids=campus_set,
            applies_to_all=not campus_set,
            academic_cycle_id=academic_cycle_id,
            event_type=event_type
        )

    def matches(self, other: "CalendarScope") -> bool:
        """Check whether two scopes cover a common population."""
        if (
            self.academic_cycle_id is not None
            and other.academic_cycle_id is not None
            and self.academic_cycle_id != other.academic_cycle_id
        ):
            return False

        if (
            self.event_type is not None
            and other.event_type is not None
            and self.event_type != other.event_type
        ):
            return False

        if self.applies_to_all or other.applies_to_all:
            return True

        return bool(self.campus_ids & other.campus_ids)


def find_conflicts(start_date: date, end_date: date, scope: CalendarScope, candidates, scope_of) -> list:
    """
    Return the candidates whose scope matches and whose date range overlaps.

    Args:
        start_date: Start of the range being validated
        end_date: End of the range being validated
        scope: Scope of the record being validated
        candidates: Existing records (anything with start_date/end_date)
        scope_of: Callable returning the CalendarScope of a candidate
    """
    return [
        candidate for candidate in candidates
        if scope.matches(scope_of(candidate))
        and overlaps(start_date, end_date, candidate.start_date, candidate.end_date)
    ]


def is_covered(day: date, ranges) -> bool:
    """Check whether a day falls inside any of the given start_date/end_date ranges."""
    return any(r.start_date <= day <= r.end_date for r in ranges)


def working_days(start_date: date, end_date: date, holidays) -> int:
    """
    Count working days in the inclusive range [start_date, end_date].

    A working day is Monday-Friday and not covered by any holiday range.
    Holidays are not filtered by scope here; callers pass the set that
    applies to the population they are reporting on.
    """
    holidays = list(holidays)
    total = 0
    current = start_date

    while current <= end_date:
        if current.weekday() < 5 and not is_covered(current, holidays):
            total += 1
        current += timedelta(days=1)

    return total


def month_bounds(target_date: date) -> Tuple[date, date]:
    """Get the first and last day of the calendar month containing target_date."""
    last_day = calendar.monthrange(target_date.year, target_date.month)[1]
    return (
        target_date.replace(day=1),
        target_date.replace(day=last_day)
    )


def months_in_range(start_date: date, end_date: date) -> List[date]:
    """
    Get the first day of every calendar month touched by a date range.

    Returns:
        List of month start dates in ascending order
    """
    months = []
    current = start_date.replace(day=1)

    while current <= end_date:
        months.append(current)
        if current.month == 12:
            current = current.replace(year=current.year + 1, month=1)
        else:
            current = current.replace(month=current.month + 1)

    return months
