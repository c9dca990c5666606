"""
API endpoints for calendar reports.

Reports are generated on demand, either as JSON or rendered to PDF.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from typing import Optional
from datetime import date
from uuid import UUID

from app.core.dependencies import get_calendar_report_service, get_calendar_pdf_service
from app.core.exceptions import InternalError, NotFoundError
from app.services.calendar_report_service import CalendarReportService
from app.services.calendar_pdf_service import CalendarPdfService
from app.schemas.calendar_report import MonthlyCalendarReport, TermCalendarReport

router = APIRouter(prefix="/calendar/reports")


async def _monthly_report(
    service: CalendarReportService,
    target_date: date,
    campus_id: Optional[UUID]
) -> MonthlyCalendarReport:
    try:
        return await service.generate_monthly_report(target_date, campus_id=campus_id)
    except InternalError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


async def _term_report(
    service: CalendarReportService,
    term_id: UUID,
    campus_id: Optional[UUID]
) -> TermCalendarReport:
    try:
        return await service.generate_term_report(term_id, campus_id=campus_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InternalError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={filename}"
        }
    )


@router.get("/monthly", response_model=MonthlyCalendarReport)
async def get_monthly_report(
    target_date: date = Query(..., alias="date", description="Any day in the month to report on"),
    campus_id: Optional[UUID] = Query(None),
    service: CalendarReportService = Depends(get_calendar_report_service)
):
    """Get the calendar report for the month containing the given day."""
    return await _monthly_report(service, target_date, campus_id)


@router.get("/monthly/pdf")
async def get_monthly_report_pdf(
    target_date: date = Query(..., alias="date"),
    campus_id: Optional[UUID] = Query(None),
    service: CalendarReportService = Depends(get_calendar_report_service),
    pdf_service: CalendarPdfService = Depends(get_calendar_pdf_service)
):
    report = await _monthly_report(service, target_date, campus_id)
    buffer = pdf_service.render_monthly_report(report)
    return _pdf_response(buffer.getvalue(), f"calendar-{report.period.start:%Y-%m}.pdf")


@router.get("/terms/{term_id}", response_model=TermCalendarReport)
async def get_term_report(
    term_id: UUID,
    campus_id: Optional[UUID] = Query(None),
    service: CalendarReportService = Depends(get_calendar_report_service)
):
    """Get the calendar report for a term with one breakdown per month."""
    return await _term_report(service, term_id, campus_id)


@router.get("/terms/{term_id}/pdf")
async def get_term_report_pdf(
    term_id: UUID,
    campus_id: Optional[UUID] = Query(None),
    service: CalendarReportService = Depends(get_calendar_report_service),
    pdf_service: CalendarPdfService = Depends(get_calendar_pdf_service)
):
    report = await _term_report(service, term_id, campus_id)
    buffer = pdf_service.render_term_report(report)
    return _pdf_response(buffer.getvalue(), f"term-calendar-{term_id}.pdf")
