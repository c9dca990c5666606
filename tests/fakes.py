"""In-memory repositories mirroring the SQLAlchemy query semantics."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from app.core.exceptions import NotFoundError
from app.models import AcademicCalendarEvent, AcademicCycle, Campus, Class, Holiday, Term


def _load(store: dict, ids: List[UUID], label: str) -> list:
    unique_ids = list(dict.fromkeys(ids))
    missing = [i for i in unique_ids if i not in store]
    if missing:
        raise NotFoundError(f"{label} not found: {', '.join(sorted(str(m) for m in missing))}")
    return [store[i] for i in unique_ids]


def _page(records: list, page: int, page_size: int) -> list:
    offset = (page - 1) * page_size
    return records[offset:offset + page_size]


def _by_start(records: Iterable) -> list:
    return sorted(records, key=lambda r: (r.start_date, r.name))


class FakeHolidayRepository:
    def __init__(self, campuses: Iterable[Campus] = ()):
        self.campuses: Dict[UUID, Campus] = {c.id: c for c in campuses}
        self.holidays: Dict[UUID, Holiday] = {}

    def _active(self) -> List[Holiday]:
        return [h for h in self.holidays.values() if h.status.participates_in_conflicts]

    @staticmethod
    def _applies_to_campus(holiday: Holiday, campus_id: Optional[UUID]) -> bool:
        if campus_id is None:
            return holiday.affects_all
        return holiday.affects_all or campus_id in holiday.campus_ids

    async def get(self, holiday_id):
        return self.holidays.get(holiday_id)

    async def find_overlapping(self, start_date, end_date, exclude_id=None):
        return [
            h for h in self._active()
            if h.start_date <= end_date and h.end_date >= start_date and h.id != exclude_id
        ]

    async def add(self, holiday, campus_ids):
        holiday.campuses = _load(self.campuses, campus_ids, "Campus")
        holiday.id = uuid.uuid4()
        self.holidays[holiday.id] = holiday
        return holiday

    async def save(self, holiday, campus_ids=None):
        if campus_ids is not None:
            holiday.campuses = _load(self.campuses, campus_ids, "Campus")
        self.holidays[holiday.id] = holiday
        return holiday

    async def list(self, filters) -> Tuple[List[Holiday], int]:
        matches = [
            h for h in self._active()
            if (not filters.start_date or h.end_date >= filters.start_date)
            and (not filters.end_date or h.start_date <= filters.end_date)
            and (not filters.type or h.type == filters.type)
            and (not filters.campus_id or self._applies_to_campus(h, filters.campus_id))
        ]
        matches = _by_start(matches)
        return _page(matches, filters.page, filters.page_size), len(matches)

    async def find_in_range(self, start_date, end_date, campus_id=None):
        return _by_start(
            h for h in self._active()
            if h.start_date <= end_date and h.end_date >= start_date
            and (not campus_id or self._applies_to_campus(h, campus_id))
        )

    async def find_covering(self, day, campus_id=None):
        covering = _by_start(
            h for h in self._active()
            if h.start_date <= day <= h.end_date and self._applies_to_campus(h, campus_id)
        )
        return covering[0] if covering else None


class FakeAcademicEventRepository:
    def __init__(
        self,
        campuses: Iterable[Campus] = (),
        cycles: Iterable[AcademicCycle] = (),
        classes: Iterable[Class] = ()
    ):
        self.campuses: Dict[UUID, Campus] = {c.id: c for c in campuses}
        self.cycles: Dict[UUID, AcademicCycle] = {c.id: c for c in cycles}
        self.classes: Dict[UUID, Class] = {c.id: c for c in classes}
        self.events: Dict[UUID, AcademicCalendarEvent] = {}

    def _active(self) -> List[AcademicCalendarEvent]:
        return [e for e in self.events.values() if e.status.participates_in_conflicts]

    @staticmethod
    def _applies_to_campus(event: AcademicCalendarEvent, campus_id: UUID) -> bool:
        return not event.campus_ids or campus_id in event.campus_ids

    async def get(self, event_id):
        return self.events.get(event_id)

    async def find_overlapping(self, start_date, end_date, academic_cycle_id=None, event_type=None, exclude_id=None):
        return [
            e for e in self._active()
            if e.start_date <= end_date and e.end_date >= start_date
            and (not academic_cycle_id or e.academic_cycle_id == academic_cycle_id)
            and (not event_type or e.type == event_type)
            and e.id != exclude_id
        ]

    def _attach(self, event, campus_ids, class_ids):
        if campus_ids is not None:
            event.campuses = _load(self.campuses, campus_ids, "Campus")
        if class_ids is not None:
            event.classes = _load(self.classes, class_ids, "Class")
        event.academic_cycle = self.cycles.get(event.academic_cycle_id)

    async def add(self, event, campus_ids, class_ids):
        self._attach(event, campus_ids, class_ids)
        event.id = uuid.uuid4()
        self.events[event.id] = event
        return event

    async def save(self, event, campus_ids=None, class_ids=None):
        self._attach(event, campus_ids, class_ids)
        self.events[event.id] = event
        return event

    async def list(self, filters):
        matches = [
            e for e in self._active()
            if (not filters.start_date or e.end_date >= filters.start_date)
            and (not filters.end_date or e.start_date <= filters.end_date)
            and (not filters.type or e.type == filters.type)
            and (not filters.academic_cycle_id or e.academic_cycle_id == filters.academic_cycle_id)
            and (not filters.campus_id or self._applies_to_campus(e, filters.campus_id))
            and (not filters.class_id or filters.class_id in e.class_ids)
        ]
        matches = _by_start(matches)
        return _page(matches, filters.page, filters.page_size), len(matches)

    async def find_in_range(self, start_date, end_date, academic_cycle_id=None, campus_id=None, event_type=None):
        return _by_start(
            e for e in self._active()
            if e.start_date <= end_date and e.end_date >= start_date
            and (not academic_cycle_id or e.academic_cycle_id == academic_cycle_id)
            and (not campus_id or self._applies_to_campus(e, campus_id))
            and (not event_type or e.type == event_type)
        )


class FakeTermRepository:
    def __init__(self, terms: Iterable[Term] = ()):
        self.terms: Dict[UUID, Term] = {t.id: t for t in terms}

    async def get_with_cycle(self, term_id):
        return self.terms.get(term_id)


class FakeUserRepository:
    def __init__(self, names: Optional[Dict[UUID, str]] = None):
        self.names = dict(names or {})
        self.lookups: List[List[UUID]] = []

    async def get_display_names(self, user_ids):
        ids = list(user_ids)
        self.lookups.append(ids)
        return {i: self.names[i] for i in ids if i in self.names}


class FailingEventRepository(FakeAcademicEventRepository):
    """Event repository whose range query blows up, for report failure paths."""

    async def find_in_range(self, *args, **kwargs):
        raise RuntimeError("connection reset")


def make_campus(code: str, name: Optional[str] = None) -> Campus:
    return Campus(id=uuid.uuid4(), code=code, name=name or f"{code} Campus")


def make_cycle(name: str, start_date: date, end_date: date) -> AcademicCycle:
    return AcademicCycle(id=uuid.uuid4(), name=name, start_date=start_date, end_date=end_date)


def make_class(name: str, campus: Optional[Campus] = None) -> Class:
    return Class(id=uuid.uuid4(), name=name, code=name.upper(), campus_id=campus.id if campus else None)


def make_term(name: str, start_date: date, end_date: date, cycle: AcademicCycle) -> Term:
    return Term(
        id=uuid.uuid4(),
        name=name,
        start_date=start_date,
        end_date=end_date,
        academic_cycle_id=cycle.id,
        academic_cycle=cycle
    )
