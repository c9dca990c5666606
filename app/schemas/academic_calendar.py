"""
Pydantic schemas for academic calendar events.

Includes schemas for:
- Event create/update/response
- Event listing filters and pages
- Conflict checks against existing events
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from app.models.academic_calendar import AcademicEventType, SystemStatus
from app.schemas.holiday import CampusSummary


class ClassSummary(BaseModel):
    id: UUID
    name: Optional[str] = None
    code: Optional[str] = None

    class Config:
        from_attributes = True


class AcademicCycleSummary(BaseModel):
    id: UUID
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    class Config:
        from_attributes = True


# Academic Event Base
class AcademicEventBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Name of the event")
    description: Optional[str] = None
    start_date: date = Field(..., description="First day of the event (inclusive)")
    end_date: date = Field(..., description="Last day of the event (inclusive)")
    type: AcademicEventType
    academic_cycle_id: UUID = Field(..., description="Owning academic cycle")


class AcademicEventCreate(AcademicEventBase):
    """Schema for creating an academic calendar event."""
    campus_ids: List[UUID] = Field(default_factory=list, description="Empty means institution-wide")
    class_ids: List[UUID] = Field(default_factory=list)


class AcademicEventUpdate(BaseModel):
    """Schema for updating an academic event. All fields optional."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[AcademicEventType] = None
    academic_cycle_id: Optional[UUID] = None
    campus_ids: Optional[List[UUID]] = Field(None, description="Replaces the campus set when provided")
    class_ids: Optional[List[UUID]] = Field(None, description="Replaces the class set when provided")


class AcademicEventResponse(AcademicEventBase):
    """Schema for academic event response."""
    id: UUID
    status: SystemStatus
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    academic_cycle: Optional[AcademicCycleSummary] = None
    campuses: List[CampusSummary] = Field(default_factory=list)
    classes: List[ClassSummary] = Field(default_factory=list)

    class Config:
        from_attributes = True


class AcademicEventListFilters(BaseModel):
    """Filters accepted by the event listing."""
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[AcademicEventType] = None
    academic_cycle_id: Optional[UUID] = None
    campus_id: Optional[UUID] = None
    class_id: Optional[UUID] = None


class AcademicEventListResponse(BaseModel):
    """Schema for a page of academic events."""
    items: List[AcademicEventResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class EventConflictCheck(BaseModel):
    """Candidate range to test against existing active events."""
    start_date: date
    end_date: date
    academic_cycle_id: Optional[UUID] = None
    campus_ids: List[UUID] = Field(default_factory=list)
    type: Optional[AcademicEventType] = None
    exclude_event_id: Optional[UUID] = None


class EventConflictResponse(BaseModel):
    has_conflicts: bool
    conflicts: List[AcademicEventResponse]
