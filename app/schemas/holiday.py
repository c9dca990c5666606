"""
Pydantic schemas for Holiday model.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from app.models.academic_calendar import HolidayType, SystemStatus


class CampusSummary(BaseModel):
    """Campus as embedded in holiday and event responses."""
    id: UUID
    code: Optional[str] = None
    name: Optional[str] = None

    class Config:
        from_attributes = True


# Holiday Base Schema
class HolidayBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Name of the holiday")
    description: Optional[str] = None
    start_date: date = Field(..., description="First day of the holiday (inclusive)")
    end_date: date = Field(..., description="Last day of the holiday (inclusive)")
    type: HolidayType
    affects_all: bool = Field(True, description="Applies to every campus when true")


class HolidayCreate(HolidayBase):
    """Schema for creating a new holiday."""
    campus_ids: List[UUID] = Field(default_factory=list, description="Campuses affected when affects_all is false")


class HolidayUpdate(BaseModel):
    """Schema for updating a holiday. All fields optional."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[HolidayType] = None
    affects_all: Optional[bool] = None
    campus_ids: Optional[List[UUID]] = Field(None, description="Replaces the campus set when provided")


class HolidayResponse(HolidayBase):
    """Schema for holiday response."""
    id: UUID
    status: SystemStatus
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    campuses: List[CampusSummary] = Field(default_factory=list)

    class Config:
        from_attributes = True


class HolidayListFilters(BaseModel):
    """Filters accepted by the holiday listing."""
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[HolidayType] = None
    campus_id: Optional[UUID] = None


class HolidayListResponse(BaseModel):
    """Schema for a page of holidays."""
    items: List[HolidayResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class HolidayCheckResponse(BaseModel):
    day: date
    campus_id: Optional[UUID] = None
    is_holiday: bool
