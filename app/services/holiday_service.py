"""
Holiday Service

Manages holidays for the institution and its campuses:
- No two active holidays whose scopes intersect may overlap in dates,
  whatever their type (a day cannot be declared a holiday twice for the
  same population)
- A holiday either affects all campuses or an explicit campus list
- Deletes are soft: status=DELETED plus a deleted_at timestamp
"""

import logging
import math
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from app.core.exceptions import NotFoundError, ValidationError
from app.models.academic_calendar import Holiday, SystemStatus
from app.repositories.calendar_repository import HolidayRepository
from app.schemas.holiday import (
    HolidayCreate,
    HolidayUpdate,
    HolidayListFilters,
    HolidayListResponse,
    HolidayResponse
)
from app.utils.calendar_utils import CalendarScope, find_conflicts

logger = logging.getLogger(__name__)

OVERLAP_MESSAGE = "There are overlapping holidays in the selected date range"
DATE_ORDER_MESSAGE = "Start date must be before end date"

# Fields that cannot be cleared through a partial update
REQUIRED_FIELDS = ("name", "start_date", "end_date", "type", "affects_all")


class HolidayService:
    """Service for holiday CRUD, range queries and overlap checks."""

    def __init__(self, repository: HolidayRepository):
        self.repository = repository

    @staticmethod
    def _validate_dates(start_date: date, end_date: date) -> None:
        if start_date > end_date:
            raise ValidationError(DATE_ORDER_MESSAGE)

    @staticmethod
    def _normalize_scope(affects_all: bool, campus_ids: Optional[List[UUID]]) -> Tuple[bool, List[UUID]]:
        """
        Holidays affecting all campuses keep no campus list, and a holiday
        with no campuses is stored as affecting all.
        """
        campus_ids = list(dict.fromkeys(campus_ids or []))
        if affects_all or not campus_ids:
            return True, []
        return False, campus_ids

    @staticmethod
    def scope_of(holiday: Holiday) -> CalendarScope:
        return CalendarScope.for_holiday(holiday.affects_all, holiday.campus_ids)

    async def _ensure_no_overlap(
        self,
        start_date: date,
        end_date: date,
        scope: CalendarScope,
        exclude_id: Optional[UUID] = None
    ) -> None:
        candidates = await self.repository.find_overlapping(start_date, end_date, exclude_id=exclude_id)
        conflicts = find_conflicts(start_date, end_date, scope, candidates, self.scope_of)

        if conflicts:
            conflict_ids = [str(h.id) for h in conflicts]
            logger.warning(
                f"Rejected holiday {start_date} - {end_date}: overlaps {', '.join(conflict_ids)}"
            )
            raise ValidationError(OVERLAP_MESSAGE, conflicts=conflict_ids)

    async def _get_live_holiday(self, holiday_id: UUID) -> Holiday:
        holiday = await self.repository.get(holiday_id)
        if not holiday or holiday.status.is_deleted:
            raise NotFoundError("Holiday not found")
        return holiday

    async def create_holiday(self, data: HolidayCreate, created_by: UUID) -> Holiday:
        """
        Create a holiday after validating its dates and scope.

        Args:
            data: Holiday fields and optional campus list
            created_by: Acting user, supplied explicitly by the caller

        Raises:
            ValidationError: Start after end, or an overlapping holiday in scope
        """
        self._validate_dates(data.start_date, data.end_date)

        affects_all, campus_ids = self._normalize_scope(data.affects_all, data.campus_ids)
        await self._ensure_no_overlap(
            data.start_date,
            data.end_date,
            CalendarScope.for_holiday(affects_all, campus_ids)
        )

        holiday = Holiday(
            name=data.name,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            type=data.type,
            affects_all=affects_all,
            status=SystemStatus.ACTIVE,
            created_by=created_by
        )
        holiday = await self.repository.add(holiday, campus_ids)
        logger.info(f"Created holiday: {holiday.name} ({holiday.start_date} - {holiday.end_date})")
        return holiday

    async def update_holiday(self, holiday_id: UUID, data: HolidayUpdate) -> Holiday:
        """
        Apply a partial update.

        Unspecified fields keep their stored values; the merged record is
        re-validated against the other active holidays. A provided campus
        list replaces the previous one.
        """
        holiday = await self._get_live_holiday(holiday_id)

        update_data = data.model_dump(exclude_unset=True)
        campus_ids = update_data.pop("campus_ids", None)
        for field in REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        start_date = update_data.get("start_date", holiday.start_date)
        end_date = update_data.get("end_date", holiday.end_date)
        self._validate_dates(start_date, end_date)

        affects_all, merged_campus_ids = self._normalize_scope(
            update_data.get("affects_all", holiday.affects_all),
            campus_ids if campus_ids is not None else holiday.campus_ids
        )
        await self._ensure_no_overlap(
            start_date,
            end_date,
            CalendarScope.for_holiday(affects_all, merged_campus_ids),
            exclude_id=holiday.id
        )

        for field, value in update_data.items():
            setattr(holiday, field, value)

        replacement_campus_ids = None
        if campus_ids is not None or "affects_all" in update_data:
            holiday.affects_all = affects_all
            replacement_campus_ids = merged_campus_ids

        holiday = await self.repository.save(holiday, campus_ids=replacement_campus_ids)
        logger.info(f"Updated holiday: {holiday.name}")
        return holiday

    async def delete_holiday(self, holiday_id: UUID) -> None:
        """Soft delete a holiday. Its row is kept for historical reports."""
        holiday = await self._get_live_holiday(holiday_id)

        holiday.status = SystemStatus.DELETED
        holiday.deleted_at = datetime.now(timezone.utc)
        await self.repository.save(holiday)
        logger.info(f"Soft deleted holiday: {holiday.name}")

    async def get_holiday(self, holiday_id: UUID) -> Holiday:
        return await self._get_live_holiday(holiday_id)

    async def list_holidays(self, filters: HolidayListFilters) -> HolidayListResponse:
        """Get a page of active holidays with optional date, type and campus filters."""
        holidays, total = await self.repository.list(filters)

        return HolidayListResponse(
            items=[HolidayResponse.model_validate(h) for h in holidays],
            total=total,
            page=filters.page,
            page_size=filters.page_size,
            total_pages=math.ceil(total / filters.page_size)
        )

    async def is_holiday(self, day: date, campus_id: Optional[UUID] = None) -> bool:
        """Check whether an active holiday covering the day applies to all campuses or to campus_id."""
        return await self.repository.find_covering(day, campus_id) is not None

    async def get_holidays_in_range(
        self,
        start_date: date,
        end_date: date,
        campus_id: Optional[UUID] = None
    ) -> List[Holiday]:
        """Get active holidays intersecting a range, ordered by start date."""
        self._validate_dates(start_date, end_date)
        return await self.repository.find_in_range(start_date, end_date, campus_id=campus_id)
