"""
Academic Calendar Models

Holidays and academic calendar events, scoped by campus (and, for events,
by academic cycle and class). Both are soft-deleted: a deleted record keeps
its row with status=DELETED and a deleted_at timestamp.
"""

from sqlalchemy import Column, String, Date, DateTime, Text, Boolean, ForeignKey, Table, Index, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid
import enum

from app.core.database import Base


class SystemStatus(enum.Enum):
    """Lifecycle status shared by holidays and academic events."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"
    ARCHIVED_CURRENT_YEAR = "archived_current_year"
    ARCHIVED_PREVIOUS_YEAR = "archived_previous_year"
    ARCHIVED_HISTORICAL = "archived_historical"
    DELETED = "deleted"

    @property
    def participates_in_conflicts(self) -> bool:
        """Whether records in this status take part in overlap checks, listings and reports."""
        return self is SystemStatus.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self is SystemStatus.DELETED

    @classmethod
    def conflict_statuses(cls):
        return [status for status in cls if status.participates_in_conflicts]


class HolidayType(enum.Enum):
    NATIONAL = "national"
    RELIGIOUS = "religious"
    INSTITUTIONAL = "institutional"
    ADMINISTRATIVE = "administrative"
    WEATHER = "weather"
    OTHER = "other"


class AcademicEventType(enum.Enum):
    REGISTRATION = "registration"
    ADD_DROP = "add_drop"
    WITHDRAWAL = "withdrawal"
    EXAMINATION = "examination"
    GRADING = "grading"
    ORIENTATION = "orientation"
    GRADUATION = "graduation"
    OTHER = "other"


holiday_campuses = Table(
    "holiday_campuses",
    Base.metadata,
    Column("holiday_id", UUID(as_uuid=True), ForeignKey("holidays.id", ondelete="CASCADE"), primary_key=True),
    Column("campus_id", UUID(as_uuid=True), ForeignKey("campuses.id", ondelete="CASCADE"), primary_key=True),
)

academic_event_campuses = Table(
    "academic_event_campuses",
    Base.metadata,
    Column("event_id", UUID(as_uuid=True), ForeignKey("academic_calendar_events.id", ondelete="CASCADE"), primary_key=True),
    Column("campus_id", UUID(as_uuid=True), ForeignKey("campuses.id", ondelete="CASCADE"), primary_key=True),
)

academic_event_classes = Table(
    "academic_event_classes",
    Base.metadata,
    Column("event_id", UUID(as_uuid=True), ForeignKey("academic_calendar_events.id", ondelete="CASCADE"), primary_key=True),
    Column("class_id", UUID(as_uuid=True), ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
)


class Holiday(Base):
    """
    A holiday covering the inclusive calendar-day range [start_date, end_date].

    When affects_all is set the holiday applies to every campus and the
    campuses collection is kept empty.
    """
    __tablename__ = "holidays"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    type = Column(SQLEnum(HolidayType), nullable=False)
    affects_all = Column(Boolean, default=True, nullable=False)
    status = Column(SQLEnum(SystemStatus), nullable=False, default=SystemStatus.ACTIVE)

    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    campuses = relationship("Campus", secondary=holiday_campuses, back_populates="holidays")
    creator = relationship("User", foreign_keys=[created_by])

    __table_args__ = (
        Index("ix_holidays_status_dates", "status", "start_date", "end_date"),
    )

    @property
    def campus_ids(self):
        return [campus.id for campus in self.campuses]

    def __repr__(self):
        return f"<Holiday(name='{self.name}', start={self.start_date}, end={self.end_date})>"


class AcademicCalendarEvent(Base):
    """
    An academic event (registration, examination, ...) owned by an academic cycle.

    An event without campuses applies to the whole institution. Classes are an
    optional set of classes the event applies to.
    """
    __tablename__ = "academic_calendar_events"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    type = Column(SQLEnum(AcademicEventType), nullable=False)
    academic_cycle_id = Column(UUID(as_uuid=True), ForeignKey("academic_cycles.id", ondelete="CASCADE"), nullable=False)
    status = Column(SQLEnum(SystemStatus), nullable=False, default=SystemStatus.ACTIVE)

    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    academic_cycle = relationship("AcademicCycle", back_populates="events")
    campuses = relationship("Campus", secondary=academic_event_campuses, back_populates="academic_events")
    classes = relationship("Class", secondary=academic_event_classes, back_populates="academic_events")
    creator = relationship("User", foreign_keys=[created_by])

    __table_args__ = (
        Index("ix_academic_events_cycle_type_dates", "academic_cycle_id", "type", "start_date", "end_date"),
    )

    @property
    def campus_ids(self):
        return [campus.id for campus in self.campuses]

    @property
    def class_ids(self):
        return [class_.id for class_ in self.classes]

    def __repr__(self):
        return f"<AcademicCalendarEvent(name='{self.name}', type={self.type}, start={self.start_date})>"
