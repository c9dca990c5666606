"""
Campus and academic cycle models.

These are owned by the campus administration screens; the calendar services
only read them (campus scope, report boundaries for terms and cycles).
"""

from sqlalchemy import Column, String, Date, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.models.academic_calendar import holiday_campuses, academic_event_campuses


class Campus(Base):
    __tablename__ = "campuses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=func.now())
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now())

    holidays = relationship("Holiday", secondary=holiday_campuses, back_populates="campuses")
    academic_events = relationship("AcademicCalendarEvent", secondary=academic_event_campuses, back_populates="campuses")
    classes = relationship("Class", back_populates="campus")

    def __repr__(self):
        return f"<Campus(code='{self.code}', name='{self.name}')>"


class AcademicCycle(Base):
    __tablename__ = "academic_cycles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)  # e.g., "2024-2025"
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), default=func.now())
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now())

    terms = relationship("Term", back_populates="academic_cycle")
    events = relationship("AcademicCalendarEvent", back_populates="academic_cycle")

    def __repr__(self):
        return f"<AcademicCycle(name='{self.name}')>"


class Term(Base):
    __tablename__ = "terms"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)  # e.g., "Fall 2024"
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    academic_cycle_id = Column(UUID(as_uuid=True), ForeignKey("academic_cycles.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=func.now())
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now())

    academic_cycle = relationship("AcademicCycle", back_populates="terms")

    def __repr__(self):
        return f"<Term(name='{self.name}', start={self.start_date}, end={self.end_date})>"
