"""
FastAPI dependencies for the calendar routers.

Builds services over SQLAlchemy repositories and resolves the acting user.
"""

from typing import Optional
from uuid import UUID
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import AsyncSessionLocal, get_calendar_write_db
from app.repositories.sqlalchemy_calendar_repository import (
    SqlAlchemyHolidayRepository,
    SqlAlchemyAcademicEventRepository,
    SqlAlchemyTermRepository,
    SqlAlchemyUserRepository
)
from app.services.holiday_service import HolidayService
from app.services.academic_calendar_service import AcademicCalendarService
from app.services.calendar_report_service import CalendarReportService
from app.services.calendar_pdf_service import CalendarPdfService


async def get_current_actor_id(
    x_user_id: Optional[UUID] = Header(None, alias="X-User-Id")
) -> UUID:
    """Acting user for created_by; the configured system actor when no user is given."""
    return x_user_id or settings.SYSTEM_ACTOR_ID


async def get_holiday_service(
    db: AsyncSession = Depends(get_calendar_write_db)
) -> HolidayService:
    return HolidayService(SqlAlchemyHolidayRepository(db))


async def get_academic_calendar_service(
    db: AsyncSession = Depends(get_calendar_write_db)
) -> AcademicCalendarService:
    return AcademicCalendarService(SqlAlchemyAcademicEventRepository(db))


async def get_calendar_report_service():
    # Events and holidays are fetched concurrently, one session each
    async with AsyncSessionLocal() as events_db, AsyncSessionLocal() as holidays_db:
        yield CalendarReportService(
            holiday_service=HolidayService(SqlAlchemyHolidayRepository(holidays_db)),
            event_service=AcademicCalendarService(SqlAlchemyAcademicEventRepository(events_db)),
            term_repository=SqlAlchemyTermRepository(events_db),
            user_repository=SqlAlchemyUserRepository(events_db),
            unknown_creator_name=settings.UNKNOWN_CREATOR_NAME
        )


def get_calendar_pdf_service() -> CalendarPdfService:
    return CalendarPdfService(title=settings.REPORT_TITLE or "Academic Calendar Report")
