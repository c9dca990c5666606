"""
SQLAlchemy implementations of the calendar repositories.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, func
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundError
from app.models.academic_calendar import Holiday, AcademicCalendarEvent, AcademicEventType, SystemStatus
from app.models.campus import Campus, Term
from app.models.class_model import Class
from app.models.user import User, UserRole
from app.schemas.holiday import HolidayListFilters
from app.schemas.academic_calendar import AcademicEventListFilters

logger = logging.getLogger(__name__)


async def _load_by_ids(db: AsyncSession, model, ids: List[UUID], label: str) -> list:
    """Load referenced rows, failing if any id does not exist."""
    if not ids:
        return []

    unique_ids = list(dict.fromkeys(ids))
    result = await db.execute(select(model).where(model.id.in_(unique_ids)))
    rows = list(result.scalars().all())

    missing = set(unique_ids) - {row.id for row in rows}
    if missing:
        raise NotFoundError(f"{label} not found: {', '.join(sorted(str(m) for m in missing))}")

    return rows


class SqlAlchemyHolidayRepository:
    """Holiday persistence over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _base_query():
        return select(Holiday).options(selectinload(Holiday.campuses))

    @staticmethod
    def _active():
        return Holiday.status.in_(SystemStatus.conflict_statuses())

    @staticmethod
    def _applies_to_campus(campus_id: Optional[UUID]):
        if campus_id is None:
            return Holiday.affects_all == True
        return or_(
            Holiday.affects_all == True,
            Holiday.campuses.any(Campus.id == campus_id)
        )

    async def get(self, holiday_id: UUID) -> Optional[Holiday]:
        result = await self.db.execute(
            self._base_query()
            .where(Holiday.id == holiday_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def find_overlapping(
        self,
        start_date: date,
        end_date: date,
        exclude_id: Optional[UUID] = None
    ) -> List[Holiday]:
        query = self._base_query().where(
            and_(
                self._active(),
                Holiday.start_date <= end_date,
                Holiday.end_date >= start_date
            )
        )
        if exclude_id:
            query = query.where(Holiday.id != exclude_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(self, holiday: Holiday, campus_ids: List[UUID]) -> Holiday:
        holiday.campuses = await _load_by_ids(self.db, Campus, campus_ids, "Campus")
        self.db.add(holiday)
        await self.db.commit()
        return await self.get(holiday.id)

    async def save(self, holiday: Holiday, campus_ids: Optional[List[UUID]] = None) -> Holiday:
        if campus_ids is not None:
            holiday.campuses = await _load_by_ids(self.db, Campus, campus_ids, "Campus")
        await self.db.commit()
        return await self.get(holiday.id)

    def _list_conditions(self, filters: HolidayListFilters) -> list:
        conditions = [self._active()]

        if filters.start_date:
            conditions.append(Holiday.end_date >= filters.start_date)
        if filters.end_date:
            conditions.append(Holiday.start_date <= filters.end_date)
        if filters.type:
            conditions.append(Holiday.type == filters.type)
        if filters.campus_id:
            conditions.append(self._applies_to_campus(filters.campus_id))

        return conditions

    async def list(self, filters: HolidayListFilters) -> Tuple[List[Holiday], int]:
        conditions = self._list_conditions(filters)

        count_result = await self.db.execute(
            select(func.count(Holiday.id)).where(and_(*conditions))
        )
        total = count_result.scalar() or 0

        query = (
            self._base_query()
            .where(and_(*conditions))
            .order_by(Holiday.start_date.asc(), Holiday.name.asc())
            .offset((filters.page - 1) * filters.page_size)
            .limit(filters.page_size)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def find_in_range(
        self,
        start_date: date,
        end_date: date,
        campus_id: Optional[UUID] = None
    ) -> List[Holiday]:
        query = self._base_query().where(
            and_(
                self._active(),
                Holiday.start_date <= end_date,
                Holiday.end_date >= start_date
            )
        )
        if campus_id:
            query = query.where(self._applies_to_campus(campus_id))

        query = query.order_by(Holiday.start_date.asc(), Holiday.name.asc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_covering(self, day: date, campus_id: Optional[UUID] = None) -> Optional[Holiday]:
        query = self._base_query().where(
            and_(
                self._active(),
                Holiday.start_date <= day,
                Holiday.end_date >= day,
                self._applies_to_campus(campus_id)
            )
        ).order_by(Holiday.start_date.asc()).limit(1)

        result = await self.db.execute(query)
        return result.scalars().first()


class SqlAlchemyAcademicEventRepository:
    """Academic calendar event persistence over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _base_query():
        return select(AcademicCalendarEvent).options(
            selectinload(AcademicCalendarEvent.academic_cycle),
            selectinload(AcademicCalendarEvent.campuses),
            selectinload(AcademicCalendarEvent.classes)
        )

    @staticmethod
    def _active():
        return AcademicCalendarEvent.status.in_(SystemStatus.conflict_statuses())

    @staticmethod
    def _applies_to_campus(campus_id: UUID):
        # Events without campuses are institution-wide
        return or_(
            ~AcademicCalendarEvent.campuses.any(),
            AcademicCalendarEvent.campuses.any(Campus.id == campus_id)
        )

    async def get(self, event_id: UUID) -> Optional[AcademicCalendarEvent]:
        result = await self.db.execute(
            self._base_query()
            .where(AcademicCalendarEvent.id == event_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def find_overlapping(
        self,
        start_date: date,
        end_date: date,
        academic_cycle_id: Optional[UUID] = None,
        event_type: Optional[AcademicEventType] = None,
        exclude_id: Optional[UUID] = None
    ) -> List[AcademicCalendarEvent]:
        query = self._base_query().where(
            and_(
                self._active(),
                AcademicCalendarEvent.start_date <= end_date,
                AcademicCalendarEvent.end_date >= start_date
            )
        )
        if academic_cycle_id:
            query = query.where(AcademicCalendarEvent.academic_cycle_id == academic_cycle_id)
        if event_type:
            query = query.where(AcademicCalendarEvent.type == event_type)
        if exclude_id:
            query = query.where(AcademicCalendarEvent.id != exclude_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(
        self,
        event: AcademicCalendarEvent,
        campus_ids: List[UUID],
        class_ids: List[UUID]
    ) -> AcademicCalendarEvent:
        event.campuses = await _load_by_ids(self.db, Campus, campus_ids, "Campus")
        event.classes = await _load_by_ids(self.db, Class, class_ids, "Class")
        self.db.add(event)
        await self.db.commit()
        return await self.get(event.id)

    async def save(
        self,
        event: AcademicCalendarEvent,
        campus_ids: Optional[List[UUID]] = None,
        class_ids: Optional[List[UUID]] = None
    ) -> AcademicCalendarEvent:
        if campus_ids is not None:
            event.campuses = await _load_by_ids(self.db, Campus, campus_ids, "Campus")
        if class_ids is not None:
            event.classes = await _load_by_ids(self.db, Class, class_ids, "Class")
        await self.db.commit()
        return await self.get(event.id)

    def _list_conditions(self, filters: AcademicEventListFilters) -> list:
        conditions = [self._active()]

        if filters.start_date:
            conditions.append(AcademicCalendarEvent.end_date >= filters.start_date)
        if filters.end_date:
            conditions.append(AcademicCalendarEvent.start_date <= filters.end_date)
        if filters.type:
            conditions.append(AcademicCalendarEvent.type == filters.type)
        if filters.academic_cycle_id:
            conditions.append(AcademicCalendarEvent.academic_cycle_id == filters.academic_cycle_id)
        if filters.campus_id:
            conditions.append(self._applies_to_campus(filters.campus_id))
        if filters.class_id:
            conditions.append(AcademicCalendarEvent.classes.any(Class.id == filters.class_id))

        return conditions

    async def list(self, filters: AcademicEventListFilters) -> Tuple[List[AcademicCalendarEvent], int]:
        conditions = self._list_conditions(filters)

        count_result = await self.db.execute(
            select(func.count(AcademicCalendarEvent.id)).where(and_(*conditions))
        )
        total = count_result.scalar() or 0

        query = (
            self._base_query()
            .where(and_(*conditions))
            .order_by(AcademicCalendarEvent.start_date.asc(), AcademicCalendarEvent.name.asc())
            .offset((filters.page - 1) * filters.page_size)
            .limit(filters.page_size)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def find_in_range(
        self,
        start_date: date,
        end_date: date,
        academic_cycle_id: Optional[UUID] = None,
        campus_id: Optional[UUID] = None,
        event_type: Optional[AcademicEventType] = None
    ) -> List[AcademicCalendarEvent]:
        query = self._base_query().where(
            and_(
                self._active(),
                AcademicCalendarEvent.start_date <= end_date,
                AcademicCalendarEvent.end_date >= start_date
            )
        )
        if academic_cycle_id:
            query = query.where(AcademicCalendarEvent.academic_cycle_id == academic_cycle_id)
        if campus_id:
            query = query.where(self._applies_to_campus(campus_id))
        if event_type:
            query = query.where(AcademicCalendarEvent.type == event_type)

        query = query.order_by(AcademicCalendarEvent.start_date.asc(), AcademicCalendarEvent.name.asc())
        result = await self.db.execute(query)
        return list(result.scalars().all())


class SqlAlchemyTermRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_with_cycle(self, term_id: UUID) -> Optional[Term]:
        result = await self.db.execute(
            select(Term)
            .options(selectinload(Term.academic_cycle))
            .where(Term.id == term_id)
        )
        return result.scalars().first()


class SqlAlchemyUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_display_names(self, user_ids: Iterable[UUID]) -> Dict[UUID, str]:
        ids = [user_id for user_id in set(user_ids) if user_id is not None]
        if not ids:
            return {}

        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user.display_name for user in result.scalars().all()}

    async def ensure_system_actor(
        self,
        actor_id: UUID,
        username: str,
        email: str,
        full_name: str
    ) -> User:
        """Create the system actor user if it does not exist yet."""
        result = await self.db.execute(select(User).where(User.id == actor_id))
        user = result.scalars().first()
        if user:
            return user

        user = User(
            id=actor_id,
            email=email,
            username=username,
            full_name=full_name,
            role=UserRole.SYSTEM,
            is_active=True
        )
        self.db.add(user)
        await self.db.commit()
        logger.info(f"Created system actor user: {username}")
        return user
