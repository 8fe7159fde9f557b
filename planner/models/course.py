from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from planner.database import Base

class Course(Base):
    """Course whose topics are scheduled into a timetable"""
    __tablename__ = "courses"
    
    id = Column(Integer, primary_key=True, index=True)
    subject = Column(String, nullable=False)
    difficulty = Column(String, nullable=False, default="intermediate")
    topics = Column(JSON, nullable=False, default=list)  # [{"title", "estimated_hours", "status"}]
    completed_topics = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    timetable = relationship("Timetable", back_populates="course", uselist=False)
