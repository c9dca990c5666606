from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.models.academic_calendar import academic_event_classes


class Class(Base):
    __tablename__ = "classes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)
    code = Column(String(50), nullable=True)
    campus_id = Column(UUID(as_uuid=True), ForeignKey('campuses.id'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now())
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now())

    campus = relationship("Campus", back_populates="classes")
    academic_events = relationship("AcademicCalendarEvent", secondary=academic_event_classes, back_populates="classes")

    def __repr__(self):
        return f"<Class(name='{self.name}', code='{self.code}')>"
