"""
API endpoints for managing holidays.

Holidays either affect every campus or an explicit campus list. Overlapping
holidays for the same campus population are rejected whatever their type.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import date
from uuid import UUID

from app.core.config import settings
from app.core.dependencies import get_current_actor_id, get_holiday_service
from app.core.exceptions import NotFoundError, ValidationError
from app.models.academic_calendar import HolidayType
from app.services.holiday_service import HolidayService
from app.schemas.holiday import (
    HolidayCreate,
    HolidayUpdate,
    HolidayResponse,
    HolidayListFilters,
    HolidayListResponse,
    HolidayCheckResponse
)

router = APIRouter(prefix="/calendar/holidays")


@router.post("", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
async def create_holiday(
    holiday_data: HolidayCreate,
    service: HolidayService = Depends(get_holiday_service),
    actor_id: UUID = Depends(get_current_actor_id)
):
    """Create a holiday. Fails if it overlaps an active holiday in the same scope."""
    try:
        return await service.create_holiday(holiday_data, created_by=actor_id)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.get("", response_model=HolidayListResponse)
async def list_holidays(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    start_date: Optional[date] = Query(None, description="Holidays ending on or after this day"),
    end_date: Optional[date] = Query(None, description="Holidays starting on or before this day"),
    type: Optional[HolidayType] = Query(None, description="Filter by holiday type"),
    campus_id: Optional[UUID] = Query(None, description="Holidays affecting all campuses or this one"),
    service: HolidayService = Depends(get_holiday_service)
):
    """Get a page of active holidays."""
    filters = HolidayListFilters(
        page=page,
        page_size=page_size,
        start_date=start_date,
        end_date=end_date,
        type=type,
        campus_id=campus_id
    )
    return await service.list_holidays(filters)


@router.get("/range", response_model=List[HolidayResponse])
async def get_holidays_in_range(
    start_date: date = Query(...),
    end_date: date = Query(...),
    campus_id: Optional[UUID] = Query(None),
    service: HolidayService = Depends(get_holiday_service)
):
    """Get all active holidays intersecting a date range, ordered by start date."""
    try:
        return await service.get_holidays_in_range(start_date, end_date, campus_id=campus_id)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/check", response_model=HolidayCheckResponse)
async def check_holiday(
    day: date = Query(..., description="Day to check"),
    campus_id: Optional[UUID] = Query(None),
    service: HolidayService = Depends(get_holiday_service)
):
    """Check whether a day is a holiday for all campuses or for the given campus."""
    is_holiday = await service.is_holiday(day, campus_id=campus_id)
    return HolidayCheckResponse(day=day, campus_id=campus_id, is_holiday=is_holiday)


@router.get("/{holiday_id}", response_model=HolidayResponse)
async def get_holiday(
    holiday_id: UUID,
    service: HolidayService = Depends(get_holiday_service)
):
    """Get a specific holiday by ID."""
    try:
        return await service.get_holiday(holiday_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.patch("/{holiday_id}", response_model=HolidayResponse)
async def update_holiday(
    holiday_id: UUID,
    holiday_data: HolidayUpdate,
    service: HolidayService = Depends(get_holiday_service)
):
    """Update a holiday. Only the provided fields change."""
    try:
        return await service.update_holiday(holiday_id, holiday_data)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_holiday(
    holiday_id: UUID,
    service: HolidayService = Depends(get_holiday_service)
):
    """Soft delete a holiday."""
    try:
        await service.delete_holiday(holiday_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return None
