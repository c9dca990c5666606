"""
Academic Calendar Service

Manages academic calendar events (registration, add/drop, examinations, ...).
- Every event belongs to an academic cycle
- Events may be institution-wide (no campuses) or campus-specific
- No two active events of the same type in the same cycle and campus scope
  may overlap in dates
- Class associations are replaced wholesale on update
"""

import logging
import math
from datetime import date, datetime, timezone
from typing import List, Optional
from uuid import UUID

from app.core.exceptions import NotFoundError, ValidationError
from app.models.academic_calendar import AcademicCalendarEvent, AcademicEventType, SystemStatus
from app.repositories.calendar_repository import AcademicEventRepository
from app.schemas.academic_calendar import (
    AcademicEventCreate,
    AcademicEventUpdate,
    AcademicEventListFilters,
    AcademicEventListResponse,
    AcademicEventResponse
)
from app.utils.calendar_utils import CalendarScope, find_conflicts

logger = logging.getLogger(__name__)

DATE_ORDER_MESSAGE = "Start date must be before end date"

REQUIRED_FIELDS = ("name", "start_date", "end_date", "type", "academic_cycle_id")


class AcademicCalendarService:
    """
    Service for academic calendar events.

    Scope for overlap purposes is (academic cycle, event type, campus set).
    """

    def __init__(self, repository: AcademicEventRepository):
        """
        Initialize the academic calendar service.

        Args:
            repository: Event persistence
        """
        self.repository = repository

    @staticmethod
    def _validate_dates(start_date: date, end_date: date) -> None:
        if start_date > end_date:
            raise ValidationError(DATE_ORDER_MESSAGE)

    @staticmethod
    def scope_of(event: AcademicCalendarEvent) -> CalendarScope:
        return CalendarScope.for_event(event.academic_cycle_id, event.type, event.campus_ids)

    @staticmethod
    def overlap_message(event_type: AcademicEventType) -> str:
        return f"There are overlapping {event_type.value} events in the selected date range"

    async def check_event_conflicts(
        self,
        start_date: date,
        end_date: date,
        academic_cycle_id: Optional[UUID] = None,
        campus_ids: Optional[List[UUID]] = None,
        event_type: Optional[AcademicEventType] = None,
        exclude_event_id: Optional[UUID] = None
    ) -> List[AcademicCalendarEvent]:
        """
        Find active events that would conflict with the given range and scope.

        Args:
            start_date: First day of the candidate range
            end_date: Last day of the candidate range
            academic_cycle_id: Restrict to one cycle (any cycle when omitted)
            campus_ids: Candidate campuses; empty means institution-wide
            event_type: Restrict to one type (any type when omitted)
            exclude_event_id: Event to ignore, used when updating

        Returns:
            Conflicting events ordered by start date
        """
        self._validate_dates(start_date, end_date)

        candidates = await self.repository.find_overlapping(
            start_date,
            end_date,
            academic_cycle_id=academic_cycle_id,
            event_type=event_type,
            exclude_id=exclude_event_id
        )
        scope = CalendarScope.for_event(academic_cycle_id, event_type, campus_ids)
        conflicts = find_conflicts(start_date, end_date, scope, candidates, self.scope_of)
        return sorted(conflicts, key=lambda e: (e.start_date, e.name))

    async def _ensure_no_overlap(
        self,
        start_date: date,
        end_date: date,
        academic_cycle_id: UUID,
        event_type: AcademicEventType,
        campus_ids: List[UUID],
        exclude_event_id: Optional[UUID] = None
    ) -> None:
        conflicts = await self.check_event_conflicts(
            start_date,
            end_date,
            academic_cycle_id=academic_cycle_id,
            campus_ids=campus_ids,
            event_type=event_type,
            exclude_event_id=exclude_event_id
        )
        if conflicts:
            conflict_ids = [str(e.id) for e in conflicts]
            logger.warning(
                f"Rejected {event_type.value} event {start_date} - {end_date}: overlaps {', '.join(conflict_ids)}"
            )
            raise ValidationError(self.overlap_message(event_type), conflicts=conflict_ids)

    async def _get_live_event(self, event_id: UUID) -> AcademicCalendarEvent:
        event = await self.repository.get(event_id)
        if not event or event.status.is_deleted:
            raise NotFoundError("Academic calendar event not found")
        return event

    async def create_event(self, data: AcademicEventCreate, created_by: UUID) -> AcademicCalendarEvent:
        """
        Create an academic event.

        Raises:
            ValidationError: Start after end, or an overlapping event of the
                same type in the same cycle and campus scope
        """
        self._validate_dates(data.start_date, data.end_date)

        campus_ids = list(dict.fromkeys(data.campus_ids))
        class_ids = list(dict.fromkeys(data.class_ids))
        await self._ensure_no_overlap(
            data.start_date,
            data.end_date,
            data.academic_cycle_id,
            data.type,
            campus_ids
        )

        event = AcademicCalendarEvent(
            name=data.name,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            type=data.type,
            academic_cycle_id=data.academic_cycle_id,
            status=SystemStatus.ACTIVE,
            created_by=created_by
        )
        event = await self.repository.add(event, campus_ids, class_ids)
        logger.info(f"Created {event.type.value} event: {event.name} ({event.start_date} - {event.end_date})")
        return event

    async def update_event(self, event_id: UUID, data: AcademicEventUpdate) -> AcademicCalendarEvent:
        """
        Apply a partial update and re-validate against the other active events.

        Provided campus and class lists replace the stored ones.
        """
        event = await self._get_live_event(event_id)

        update_data = data.model_dump(exclude_unset=True)
        campus_ids = update_data.pop("campus_ids", None)
        class_ids = update_data.pop("class_ids", None)
        for field in REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        if campus_ids is not None:
            campus_ids = list(dict.fromkeys(campus_ids))
        if class_ids is not None:
            class_ids = list(dict.fromkeys(class_ids))

        start_date = update_data.get("start_date", event.start_date)
        end_date = update_data.get("end_date", event.end_date)
        self._validate_dates(start_date, end_date)

        await self._ensure_no_overlap(
            start_date,
            end_date,
            update_data.get("academic_cycle_id", event.academic_cycle_id),
            update_data.get("type", event.type),
            campus_ids if campus_ids is not None else event.campus_ids,
            exclude_event_id=event.id
        )

        for field, value in update_data.items():
            setattr(event, field, value)

        event = await self.repository.save(event, campus_ids=campus_ids, class_ids=class_ids)
        logger.info(f"Updated academic event: {event.name}")
        return event

    async def delete_event(self, event_id: UUID) -> None:
        """Soft delete an academic event."""
        event = await self._get_live_event(event_id)

        event.status = SystemStatus.DELETED
        event.deleted_at = datetime.now(timezone.utc)
        await self.repository.save(event)
        logger.info(f"Soft deleted academic event: {event.name}")

    async def get_event(self, event_id: UUID) -> AcademicCalendarEvent:
        return await self._get_live_event(event_id)

    async def list_events(self, filters: AcademicEventListFilters) -> AcademicEventListResponse:
        events, total = await self.repository.list(filters)

        return AcademicEventListResponse(
            items=[AcademicEventResponse.model_validate(e) for e in events],
            total=total,
            page=filters.page,
            page_size=filters.page_size,
            total_pages=math.ceil(total / filters.page_size)
        )

    async def get_events_in_range(
        self,
        start_date: date,
        end_date: date,
        academic_cycle_id: Optional[UUID] = None,
        campus_id: Optional[UUID] = None,
        event_type: Optional[AcademicEventType] = None
    ) -> List[AcademicCalendarEvent]:
        """Get active events intersecting a range, ordered by start date."""
        self._validate_dates(start_date, end_date)
        return await self.repository.find_in_range(
            start_date,
            end_date,
            academic_cycle_id=academic_cycle_id,
            campus_id=campus_id,
            event_type=event_type
        )
