"""
Repository contracts for the calendar services.

Services depend on these protocols only; the SQLAlchemy implementations live
in sqlalchemy_calendar_repository.py and tests provide in-memory fakes.

Range, list and overlap queries only return records whose status
participates in conflict checks (see SystemStatus.participates_in_conflicts).
get() returns a record regardless of status.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Protocol, Tuple
from uuid import UUID

from app.models.academic_calendar import Holiday, AcademicCalendarEvent, AcademicEventType
from app.models.campus import Term
from app.schemas.holiday import HolidayListFilters
from app.schemas.academic_calendar import AcademicEventListFilters


class HolidayRepository(Protocol):
    async def get(self, holiday_id: UUID) -> Optional[Holiday]:
        raise NotImplementedError

    async def find_overlapping(
        self,
        start_date: date,
        end_date: date,
        exclude_id: Optional[UUID] = None
    ) -> List[Holiday]:
        """Active holidays intersecting [start_date, end_date], any scope."""

        raise NotImplementedError

    async def add(self, holiday: Holiday, campus_ids: List[UUID]) -> Holiday:
        raise NotImplementedError

    async def save(self, holiday: Holiday, campus_ids: Optional[List[UUID]] = None) -> Holiday:
        """Persist changes; campus_ids, when given, replaces the campus set."""

        raise NotImplementedError

    async def list(self, filters: HolidayListFilters) -> Tuple[List[Holiday], int]:
        """Return one page of active holidays and the total match count."""

        raise NotImplementedError

    async def find_in_range(
        self,
        start_date: date,
        end_date: date,
        campus_id: Optional[UUID] = None
    ) -> List[Holiday]:
        """Active holidays intersecting the range, ordered by start_date."""

        raise NotImplementedError

    async def find_covering(self, day: date, campus_id: Optional[UUID] = None) -> Optional[Holiday]:
        """First active holiday containing the day that applies to all or to campus_id."""

        raise NotImplementedError


class AcademicEventRepository(Protocol):
    async def get(self, event_id: UUID) -> Optional[AcademicCalendarEvent]:
        raise NotImplementedError

    async def find_overlapping(
        self,
        start_date: date,
        end_date: date,
        academic_cycle_id: Optional[UUID] = None,
        event_type: Optional[AcademicEventType] = None,
        exclude_id: Optional[UUID] = None
    ) -> List[AcademicCalendarEvent]:
        """Active events intersecting the range, narrowed by cycle and type when given."""

        raise NotImplementedError

    async def add(
        self,
        event: AcademicCalendarEvent,
        campus_ids: List[UUID],
        class_ids: List[UUID]
    ) -> AcademicCalendarEvent:
        raise NotImplementedError

    async def save(
        self,
        event: AcademicCalendarEvent,
        campus_ids: Optional[List[UUID]] = None,
        class_ids: Optional[List[UUID]] = None
    ) -> AcademicCalendarEvent:
        """Persist changes; campus_ids/class_ids, when given, replace the sets."""

        raise NotImplementedError

    async def list(self, filters: AcademicEventListFilters) -> Tuple[List[AcademicCalendarEvent], int]:
        raise NotImplementedError

    async def find_in_range(
        self,
        start_date: date,
        end_date: date,
        academic_cycle_id: Optional[UUID] = None,
        campus_id: Optional[UUID] = None,
        event_type: Optional[AcademicEventType] = None
    ) -> List[AcademicCalendarEvent]:
        raise NotImplementedError


class TermRepository(Protocol):
    async def get_with_cycle(self, term_id: UUID) -> Optional[Term]:
        raise NotImplementedError


class UserRepository(Protocol):
    async def get_display_names(self, user_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map user ids to display names; unknown ids are simply absent."""

        raise NotImplementedError
