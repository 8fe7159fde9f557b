from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from planner.database import Base

class Timetable(Base):
    """Generated study timetable, one per course"""
    __tablename__ = "timetables"
    
    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), unique=True, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    topics = Column(JSON, nullable=False)  # [{"title", "hours"}] used for generation
    entries = Column(JSON, nullable=False)  # [{"date", "sessions": [...]}]
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    course = relationship("Course", back_populates="timetable")
