"""
Pydantic schemas for calendar reports.

Reports are computed on every request and never persisted.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from uuid import UUID


class EventReportRecord(BaseModel):
    """An academic event as listed in a report."""
    id: UUID
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    type: str
    academic_cycle: Optional[str] = None
    created_by: str


class HolidayReportRecord(BaseModel):
    """A holiday as listed in a report."""
    id: UUID
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    type: str
    affects_all: bool
    created_by: str


class EventTypeGroup(BaseModel):
    type: str
    count: int
    records: List[EventReportRecord] = Field(default_factory=list)


class HolidayTypeGroup(BaseModel):
    type: str
    count: int
    records: List[HolidayReportRecord] = Field(default_factory=list)


class ReportSummary(BaseModel):
    """Counts, grouped records and working days for a report period."""
    total_events: int
    total_holidays: int
    working_days: int
    events_by_type: List[EventTypeGroup] = Field(default_factory=list)
    holidays_by_type: List[HolidayTypeGroup] = Field(default_factory=list)


class ReportPeriod(BaseModel):
    start: date
    end: date
    month: str  # e.g., "December 2024"


class MonthlyCalendarReport(BaseModel):
    period: ReportPeriod
    campus_id: Optional[UUID] = None
    summary: ReportSummary


class TermInfo(BaseModel):
    id: UUID
    name: str
    academic_cycle: Optional[str] = None
    start_date: date
    end_date: date


class TermCalendarReport(BaseModel):
    term: TermInfo
    campus_id: Optional[UUID] = None
    summary: ReportSummary
    monthly_breakdowns: List[MonthlyCalendarReport] = Field(default_factory=list)
