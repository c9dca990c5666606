# Schemas package
from .holiday import (
    CampusSummary, HolidayBase, HolidayCreate, HolidayUpdate, HolidayResponse,
    HolidayListFilters, HolidayListResponse, HolidayCheckResponse
)
from .academic_calendar import (
    ClassSummary, AcademicCycleSummary,
    AcademicEventBase, AcademicEventCreate, AcademicEventUpdate, AcademicEventResponse,
    AcademicEventListFilters, AcademicEventListResponse,
    EventConflictCheck, EventConflictResponse
)
from .calendar_report import (
    EventReportRecord, HolidayReportRecord, EventTypeGroup, HolidayTypeGroup,
    ReportSummary, ReportPeriod, MonthlyCalendarReport, TermInfo, TermCalendarReport
)
