from __future__ import annotations

import uuid
from datetime import date

import pytest

from app.services.academic_calendar_service import AcademicCalendarService
from app.services.calendar_report_service import CalendarReportService
from app.services.holiday_service import HolidayService
from tests.fakes import (
    FakeAcademicEventRepository,
    FakeHolidayRepository,
    FakeTermRepository,
    FakeUserRepository,
    make_campus,
    make_class,
    make_cycle,
    make_term,
)


# Make anyio run on asyncio only
@pytest.fixture(scope="session", autouse=True)
def anyio_backend():
    return "asyncio"


@pytest.fixture
def actor_id():
    return uuid.uuid4()


@pytest.fixture
def north():
    return make_campus("NORTH")


@pytest.fixture
def south():
    return make_campus("SOUTH")


@pytest.fixture
def cycle():
    return make_cycle("2024-2025", date(2024, 8, 1), date(2025, 7, 31))


@pytest.fixture
def other_cycle():
    return make_cycle("2025-2026", date(2025, 8, 1), date(2026, 7, 31))


@pytest.fixture
def class_a(north):
    return make_class("7A", north)


@pytest.fixture
def term(cycle):
    return make_term("Fall 2024", date(2024, 10, 15), date(2024, 12, 20), cycle)


@pytest.fixture
def holiday_repo(north, south):
    return FakeHolidayRepository(campuses=[north, south])


@pytest.fixture
def event_repo(north, south, cycle, other_cycle, class_a):
    return FakeAcademicEventRepository(
        campuses=[north, south],
        cycles=[cycle, other_cycle],
        classes=[class_a]
    )


@pytest.fixture
def user_repo(actor_id):
    return FakeUserRepository({actor_id: "Registrar Office"})


@pytest.fixture
def holiday_service(holiday_repo):
    return HolidayService(holiday_repo)


@pytest.fixture
def event_service(event_repo):
    return AcademicCalendarService(event_repo)


@pytest.fixture
def report_service(holiday_service, event_service, term, user_repo):
    return CalendarReportService(
        holiday_service=holiday_service,
        event_service=event_service,
        term_repository=FakeTermRepository([term]),
        user_repository=user_repo
    )
