from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import date
from uuid import UUID

from app.core.config import settings
from app.core.dependencies import get_current_actor_id, get_academic_calendar_service
from app.core.exceptions import NotFoundError, ValidationError
from app.models.academic_calendar import AcademicEventType
from app.services.academic_calendar_service import AcademicCalendarService
from app.schemas.academic_calendar import (
    AcademicEventCreate,
    AcademicEventUpdate,
    AcademicEventResponse,
    AcademicEventListFilters,
    AcademicEventListResponse,
    EventConflictCheck,
    EventConflictResponse
)

router = APIRouter(prefix="/calendar/events")


@router.post("", response_model=AcademicEventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: AcademicEventCreate,
    service: AcademicCalendarService = Depends(get_academic_calendar_service),
    actor_id: UUID = Depends(get_current_actor_id)
):
    """Create an academic calendar event."""
    try:
        return await service.create_event(event_data, created_by=actor_id)
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


@router.get("", response_model=AcademicEventListResponse)
async def list_events(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    type: Optional[AcademicEventType] = Query(None),
    academic_cycle_id: Optional[UUID] = Query(None),
    campus_id: Optional[UUID] = Query(None),
    class_id: Optional[UUID] = Query(None),
    service: AcademicCalendarService = Depends(get_academic_calendar_service)
):
    """Get a page of active academic events."""
    filters = AcademicEventListFilters(
        page=page,
        page_size=page_size,
        start_date=start_date,
        end_date=end_date,
        type=type,
        academic_cycle_id=academic_cycle_id,
        campus_id=campus_id,
        class_id=class_id
    )
    return await service.list_events(filters)


@router.get("/range", response_model=List[AcademicEventResponse])
async def get_events_in_range(
    start_date: date = Query(...),
    end_date: date = Query(...),
    academic_cycle_id: Optional[UUID] = Query(None),
    campus_id: Optional[UUID] = Query(None),
    type: Optional[AcademicEventType] = Query(None),
    service: AcademicCalendarService = Depends(get_academic_calendar_service)
):
    try:
        return await service.get_events_in_range(
            start_date,
            end_date,
            academic_cycle_id=academic_cycle_id,
            campus_id=campus_id,
            event_type=type
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.post("/conflicts", response_model=EventConflictResponse)
async def check_event_conflicts(
    check: EventConflictCheck,
    service: AcademicCalendarService = Depends(get_academic_calendar_service)
):
    """Preview which active events a candidate range would conflict with."""
    try:
        conflicts = await service.check_event_conflicts(
            check.start_date,
            check.end_date,
            academic_cycle_id=check.academic_cycle_id,
            campus_ids=check.campus_ids,
            event_type=check.type,
            exclude_event_id=check.exclude_event_id
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return EventConflictResponse(
        has_conflicts=bool(conflicts),
        conflicts=[AcademicEventResponse.model_validate(e) for e in conflicts]
    )


@router.get("/{event_id}", response_model=AcademicEventResponse)
async def get_event(
    event_id: UUID,
    service: AcademicCalendarService = Depends(get_academic_calendar_service)
):
    try:
        return await service.get_event(event_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.patch("/{event_id}", response_model=AcademicEventResponse)
async def update_event(
    event_id: UUID,
    event_data: AcademicEventUpdate,
    service: AcademicCalendarService = Depends(get_academic_calendar_service)
):
    """Update an academic event. Campus and class lists are replaced when given."""
    try:
        return await service.update_event(event_id, event_data)
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


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    service: AcademicCalendarService = Depends(get_academic_calendar_service)
):
    """Soft delete an academic event."""
    try:
        await service.delete_event(event_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return None
