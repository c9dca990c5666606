from __future__ import annotations

import uuid
from datetime import date

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.models.academic_calendar import AcademicEventType, SystemStatus
from app.schemas.academic_calendar import AcademicEventCreate, AcademicEventListFilters, AcademicEventUpdate

pytestmark = pytest.mark.anyio


def event(name, start, end, cycle, type=AcademicEventType.EXAMINATION, campus_ids=None, class_ids=None):
    return AcademicEventCreate(
        name=name,
        start_date=start,
        end_date=end,
        type=type,
        academic_cycle_id=cycle.id,
        campus_ids=campus_ids or [],
        class_ids=class_ids or []
    )


async def test_create_event_round_trips(event_service, cycle, north, class_a, actor_id):
    created = await event_service.create_event(
        event("Finals", date(2024, 12, 9), date(2024, 12, 13), cycle, campus_ids=[north.id], class_ids=[class_a.id]),
        created_by=actor_id
    )

    fetched = await event_service.get_event(created.id)
    assert fetched.type == AcademicEventType.EXAMINATION
    assert fetched.academic_cycle_id == cycle.id
    assert fetched.academic_cycle.name == "2024-2025"
    assert fetched.campus_ids == [north.id]
    assert fetched.class_ids == [class_a.id]
    assert fetched.created_by == actor_id


async def test_create_rejects_reversed_dates(event_service, event_repo, cycle, actor_id):
    with pytest.raises(ValidationError):
        await event_service.create_event(
            event("Backwards", date(2024, 12, 13), date(2024, 12, 9), cycle), created_by=actor_id
        )
    assert event_repo.events == {}


async def test_same_type_same_cycle_overlap_is_rejected(event_service, cycle, actor_id):
    first = await event_service.create_event(
        event("Midterms", date(2024, 10, 14), date(2024, 10, 18), cycle), created_by=actor_id
    )

    with pytest.raises(ValidationError) as exc:
        await event_service.create_event(
            event("Retakes", date(2024, 10, 18), date(2024, 10, 22), cycle), created_by=actor_id
        )

    assert exc.value.message == "There are overlapping examination events in the selected date range"
    assert exc.value.conflicts == [str(first.id)]


async def test_different_type_may_overlap(event_service, cycle, actor_id):
    await event_service.create_event(
        event("Midterms", date(2024, 10, 14), date(2024, 10, 18), cycle), created_by=actor_id
    )
    created = await event_service.create_event(
        event("Grading", date(2024, 10, 14), date(2024, 10, 18), cycle, type=AcademicEventType.GRADING),
        created_by=actor_id
    )
    assert created.type == AcademicEventType.GRADING


async def test_different_cycle_may_overlap(event_service, cycle, other_cycle, actor_id):
    await event_service.create_event(
        event("Registration", date(2025, 8, 1), date(2025, 8, 5), cycle, type=AcademicEventType.REGISTRATION),
        created_by=actor_id
    )
    created = await event_service.create_event(
        event("Registration", date(2025, 8, 1), date(2025, 8, 5), other_cycle, type=AcademicEventType.REGISTRATION),
        created_by=actor_id
    )
    assert created.academic_cycle_id == other_cycle.id


async def test_disjoint_campuses_may_overlap(event_service, cycle, north, south, actor_id):
    await event_service.create_event(
        event("North exams", date(2024, 12, 9), date(2024, 12, 13), cycle, campus_ids=[north.id]),
        created_by=actor_id
    )
    created = await event_service.create_event(
        event("South exams", date(2024, 12, 9), date(2024, 12, 13), cycle, campus_ids=[south.id]),
        created_by=actor_id
    )
    assert created.campus_ids == [south.id]


async def test_institution_wide_event_conflicts_with_campus_event(event_service, cycle, north, actor_id):
    await event_service.create_event(
        event("North exams", date(2024, 12, 9), date(2024, 12, 13), cycle, campus_ids=[north.id]),
        created_by=actor_id
    )

    with pytest.raises(ValidationError):
        await event_service.create_event(
            event("Everyone exams", date(2024, 12, 12), date(2024, 12, 16), cycle), created_by=actor_id
        )


async def test_check_event_conflicts_without_cycle_or_type(event_service, cycle, other_cycle, actor_id):
    await event_service.create_event(
        event("Registration", date(2024, 9, 2), date(2024, 9, 6), cycle, type=AcademicEventType.REGISTRATION),
        created_by=actor_id
    )
    await event_service.create_event(
        event("Orientation", date(2024, 9, 1), date(2024, 9, 3), other_cycle, type=AcademicEventType.ORIENTATION),
        created_by=actor_id
    )

    conflicts = await event_service.check_event_conflicts(date(2024, 9, 3), date(2024, 9, 4))
    assert [e.name for e in conflicts] == ["Orientation", "Registration"]

    narrowed = await event_service.check_event_conflicts(
        date(2024, 9, 3), date(2024, 9, 4), event_type=AcademicEventType.REGISTRATION
    )
    assert [e.name for e in narrowed] == ["Registration"]


async def test_check_event_conflicts_excludes_given_event(event_service, cycle, actor_id):
    created = await event_service.create_event(
        event("Midterms", date(2024, 10, 14), date(2024, 10, 18), cycle), created_by=actor_id
    )

    conflicts = await event_service.check_event_conflicts(
        date(2024, 10, 14), date(2024, 10, 18), academic_cycle_id=cycle.id, exclude_event_id=created.id
    )
    assert conflicts == []


async def test_update_replaces_classes(event_service, event_repo, cycle, north, class_a, actor_id):
    created = await event_service.create_event(
        event("Finals", date(2024, 12, 9), date(2024, 12, 13), cycle, class_ids=[class_a.id]),
        created_by=actor_id
    )

    updated = await event_service.update_event(created.id, AcademicEventUpdate(class_ids=[]))
    assert updated.class_ids == []

    updated = await event_service.update_event(created.id, AcademicEventUpdate(campus_ids=[north.id]))
    assert updated.campus_ids == [north.id]
    assert updated.class_ids == []


async def test_update_keeps_unspecified_fields(event_service, cycle, actor_id):
    created = await event_service.create_event(
        event("Finals", date(2024, 12, 9), date(2024, 12, 13), cycle), created_by=actor_id
    )

    updated = await event_service.update_event(created.id, AcademicEventUpdate(description="Bring ID"))

    assert updated.name == "Finals"
    assert updated.description == "Bring ID"
    assert updated.end_date == date(2024, 12, 13)


async def test_update_into_overlap_is_rejected(event_service, cycle, actor_id):
    await event_service.create_event(
        event("Midterms", date(2024, 10, 14), date(2024, 10, 18), cycle), created_by=actor_id
    )
    finals = await event_service.create_event(
        event("Finals", date(2024, 12, 9), date(2024, 12, 13), cycle), created_by=actor_id
    )

    with pytest.raises(ValidationError):
        await event_service.update_event(
            finals.id, AcademicEventUpdate(start_date=date(2024, 10, 18), end_date=date(2024, 10, 20))
        )


async def test_update_with_unknown_class_is_not_found(event_service, cycle, actor_id):
    created = await event_service.create_event(
        event("Finals", date(2024, 12, 9), date(2024, 12, 13), cycle), created_by=actor_id
    )

    with pytest.raises(NotFoundError):
        await event_service.update_event(created.id, AcademicEventUpdate(class_ids=[uuid.uuid4()]))


async def test_soft_delete_event(event_service, event_repo, cycle, actor_id):
    created = await event_service.create_event(
        event("Finals", date(2024, 12, 9), date(2024, 12, 13), cycle), created_by=actor_id
    )

    await event_service.delete_event(created.id)

    with pytest.raises(NotFoundError):
        await event_service.get_event(created.id)
    assert event_repo.events[created.id].status == SystemStatus.DELETED
    assert event_repo.events[created.id].deleted_at is not None
    assert await event_service.get_events_in_range(date(2024, 12, 1), date(2024, 12, 31)) == []


async def test_get_missing_event_is_not_found(event_service):
    with pytest.raises(NotFoundError):
        await event_service.get_event(uuid.uuid4())


async def test_list_events_filters(event_service, cycle, north, south, class_a, actor_id):
    await event_service.create_event(
        event("Everyone", date(2024, 9, 2), date(2024, 9, 2), cycle, type=AcademicEventType.ORIENTATION),
        created_by=actor_id
    )
    await event_service.create_event(
        event("North", date(2024, 9, 3), date(2024, 9, 3), cycle, campus_ids=[north.id], class_ids=[class_a.id]),
        created_by=actor_id
    )
    await event_service.create_event(
        event("South", date(2024, 9, 3), date(2024, 9, 3), cycle, campus_ids=[south.id]),
        created_by=actor_id
    )

    north_page = await event_service.list_events(AcademicEventListFilters(campus_id=north.id))
    assert [e.name for e in north_page.items] == ["Everyone", "North"]

    class_page = await event_service.list_events(AcademicEventListFilters(class_id=class_a.id))
    assert [e.name for e in class_page.items] == ["North"]

    typed = await event_service.list_events(AcademicEventListFilters(type=AcademicEventType.ORIENTATION))
    assert typed.total == 1

    paged = await event_service.list_events(AcademicEventListFilters(page=2, page_size=2))
    assert paged.total == 3
    assert paged.total_pages == 2
    assert [e.name for e in paged.items] == ["South"]


async def test_events_in_range_by_campus(event_service, cycle, north, south, actor_id):
    await event_service.create_event(
        event("North", date(2024, 9, 3), date(2024, 9, 3), cycle, campus_ids=[north.id]),
        created_by=actor_id
    )
    await event_service.create_event(
        event("Everyone", date(2024, 9, 2), date(2024, 9, 2), cycle, type=AcademicEventType.ORIENTATION),
        created_by=actor_id
    )

    south_events = await event_service.get_events_in_range(date(2024, 9, 1), date(2024, 9, 30), campus_id=south.id)
    assert [e.name for e in south_events] == ["Everyone"]

    all_events = await event_service.get_events_in_range(date(2024, 9, 1), date(2024, 9, 30))
    assert [e.name for e in all_events] == ["Everyone", "North"]
