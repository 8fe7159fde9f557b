from pydantic import BaseModel, Field
from typing import List, Optional

class TopicInput(BaseModel):
    """Raw topic as supplied by a caller; hours of 0 or None request estimation"""
    title: Optional[str] = None
    hours: Optional[float] = None

class Topic(BaseModel):
    """Normalized topic ready for scheduling"""
    title: str = Field(min_length=1)
    hours: float = Field(gt=0, description="Estimated study hours")

class StudySession(BaseModel):
    """A single study or break block within a day"""
    topic: str
    start_time: str = Field(alias="startTime", description="HH:MM")
    end_time: str = Field(alias="endTime", description="HH:MM")
    duration: int = Field(ge=0, description="Duration in minutes")
    is_break: bool = Field(default=False, alias="isBreak")
    completed: bool = False

    class Config:
        populate_by_name = True

class DayEntry(BaseModel):
    """All sessions scheduled on one calendar day"""
    date: str = Field(description="Date in YYYY-MM-DD format")
    sessions: List[StudySession] = Field(default_factory=list)

class ScheduleResult(BaseModel):
    """Outcome of a timetable generation request"""
    entries: List[DayEntry] = Field(default_factory=list)
    topics: List[Topic] = Field(default_factory=list)
    incomplete: bool = Field(default=False, description="Safety bound hit; plan may be missing topics")
    used_fallback: bool = False

    def to_json(self) -> List[dict]:
        """Entries in the JSON shape stored with a timetable"""
        return [entry.model_dump(by_alias=True) for entry in self.entries]

class CourseTopic(BaseModel):
    """Topic stored on a course"""
    title: str
    estimated_hours: float
    status: str = "pending"

class CourseCreate(BaseModel):
    """Schema for creating a course"""
    subject: str
    difficulty: str = "intermediate"
    topics: List[CourseTopic] = Field(default_factory=list)
