"""
Calendar Report Service

Builds monthly and term calendar reports from active holidays and academic
events: counts and records grouped by type, plus working-day totals.
Reports are computed on every request and never stored.
"""

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from app.core.exceptions import CalendarError, InternalError, NotFoundError
from app.models.academic_calendar import Holiday, AcademicCalendarEvent
from app.repositories.calendar_repository import TermRepository, UserRepository
from app.schemas.calendar_report import (
    EventReportRecord,
    HolidayReportRecord,
    EventTypeGroup,
    HolidayTypeGroup,
    ReportSummary,
    ReportPeriod,
    MonthlyCalendarReport,
    TermInfo,
    TermCalendarReport
)
from app.services.academic_calendar_service import AcademicCalendarService
from app.services.holiday_service import HolidayService
from app.utils.calendar_utils import month_bounds, months_in_range, working_days

logger = logging.getLogger(__name__)


class CalendarReportService:
    """Service for generating calendar reports."""

    def __init__(
        self,
        holiday_service: HolidayService,
        event_service: AcademicCalendarService,
        term_repository: TermRepository,
        user_repository: UserRepository,
        unknown_creator_name: str = "Unknown"
    ):
        self.holiday_service = holiday_service
        self.event_service = event_service
        self.term_repository = term_repository
        self.user_repository = user_repository
        self.unknown_creator_name = unknown_creator_name

    async def _fetch_range(self, start_date: date, end_date: date, campus_id: Optional[UUID]):
        """Fetch events and holidays for a range concurrently."""
        events, holidays = await asyncio.gather(
            self.event_service.get_events_in_range(start_date, end_date, campus_id=campus_id),
            self.holiday_service.get_holidays_in_range(start_date, end_date, campus_id=campus_id)
        )
        return events, holidays

    def _format_event(self, event: AcademicCalendarEvent, creator_names: Dict[UUID, str]) -> EventReportRecord:
        return EventReportRecord(
            id=event.id,
            name=event.name,
            description=event.description,
            start_date=event.start_date,
            end_date=event.end_date,
            type=event.type.value,
            academic_cycle=event.academic_cycle.name if event.academic_cycle else None,
            created_by=creator_names.get(event.created_by, self.unknown_creator_name)
        )

    def _format_holiday(self, holiday: Holiday, creator_names: Dict[UUID, str]) -> HolidayReportRecord:
        return HolidayReportRecord(
            id=holiday.id,
            name=holiday.name,
            description=holiday.description,
            start_date=holiday.start_date,
            end_date=holiday.end_date,
            type=holiday.type.value,
            affects_all=holiday.affects_all,
            created_by=creator_names.get(holiday.created_by, self.unknown_creator_name)
        )

    async def _summarize(
        self,
        start_date: date,
        end_date: date,
        events: List[AcademicCalendarEvent],
        holidays: List[Holiday]
    ) -> ReportSummary:
        """Group records by type and count working days for the period."""
        creator_names = await self.user_repository.get_display_names(
            [e.created_by for e in events] + [h.created_by for h in holidays]
        )

        # Groups keep the order in which a type first appears
        events_by_type: Dict[str, List[EventReportRecord]] = {}
        for event in events:
            events_by_type.setdefault(event.type.value, []).append(
                self._format_event(event, creator_names)
            )

        holidays_by_type: Dict[str, List[HolidayReportRecord]] = {}
        for holiday in holidays:
            holidays_by_type.setdefault(holiday.type.value, []).append(
                self._format_holiday(holiday, creator_names)
            )

        return ReportSummary(
            total_events=len(events),
            total_holidays=len(holidays),
            working_days=working_days(start_date, end_date, holidays),
            events_by_type=[
                EventTypeGroup(type=event_type, count=len(records), records=records)
                for event_type, records in events_by_type.items()
            ],
            holidays_by_type=[
                HolidayTypeGroup(type=holiday_type, count=len(records), records=records)
                for holiday_type, records in holidays_by_type.items()
            ]
        )

    async def generate_monthly_report(
        self,
        target_date: date,
        campus_id: Optional[UUID] = None
    ) -> MonthlyCalendarReport:
        """
        Generate the report for the calendar month containing target_date.

        Args:
            target_date: Any day of the month to report on
            campus_id: Narrow holidays and events to one campus population

        Returns:
            MonthlyCalendarReport with period bounds and summary
        """
        start_date, end_date = month_bounds(target_date)

        try:
            events, holidays = await self._fetch_range(start_date, end_date, campus_id)
            summary = await self._summarize(start_date, end_date, events, holidays)
        except CalendarError:
            raise
        except Exception as e:
            logger.error(f"Failed to generate monthly calendar report for {start_date:%B %Y}: {e}", exc_info=True)
            raise InternalError("Failed to generate monthly calendar report", cause=e) from e

        return MonthlyCalendarReport(
            period=ReportPeriod(
                start=start_date,
                end=end_date,
                month=start_date.strftime("%B %Y")
            ),
            campus_id=campus_id,
            summary=summary
        )

    async def generate_term_report(
        self,
        term_id: UUID,
        campus_id: Optional[UUID] = None
    ) -> TermCalendarReport:
        """
        Generate the report for a term plus one monthly breakdown per
        calendar month the term touches.

        Raises:
            NotFoundError: Term does not exist
            InternalError: Any other failure while assembling the report
        """
        try:
            term = await self.term_repository.get_with_cycle(term_id)
            if not term:
                raise NotFoundError("Term not found")

            events, holidays = await self._fetch_range(term.start_date, term.end_date, campus_id)
            summary = await self._summarize(term.start_date, term.end_date, events, holidays)

            monthly_breakdowns = []
            for month_start in months_in_range(term.start_date, term.end_date):
                monthly_breakdowns.append(
                    await self.generate_monthly_report(month_start, campus_id=campus_id)
                )

            return TermCalendarReport(
                term=TermInfo(
                    id=term.id,
                    name=term.name,
                    academic_cycle=term.academic_cycle.name if term.academic_cycle else None,
                    start_date=term.start_date,
                    end_date=term.end_date
                ),
                campus_id=campus_id,
                summary=summary,
                monthly_breakdowns=monthly_breakdowns
            )
        except NotFoundError:
            raise
        except Exception as e:
            logger.error(f"Failed to generate term calendar report for term {term_id}: {e}", exc_info=True)
            raise InternalError("Failed to generate term calendar report", cause=e) from e
