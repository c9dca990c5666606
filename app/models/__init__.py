# Models package
from .user import User, UserRole
from .academic_calendar import (
    Holiday, AcademicCalendarEvent,
    SystemStatus, HolidayType, AcademicEventType,
    holiday_campuses, academic_event_campuses, academic_event_classes
)
from .campus import Campus, AcademicCycle, Term
from .class_model import Class
