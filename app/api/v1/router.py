from fastapi import APIRouter

from .holidays import router as holidays_router
from .academic_calendar import router as academic_calendar_router
from .calendar_reports import router as calendar_reports_router

# Create main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(holidays_router, tags=["Holidays"])
api_router.include_router(academic_calendar_router, tags=["Academic Calendar"])
api_router.include_router(calendar_reports_router, tags=["Calendar Reports"])
