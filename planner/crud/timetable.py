import copy
from datetime import date
from sqlalchemy.orm import Session
from planner.models import Course, Timetable
from planner.schemas import ScheduleResult
from planner.exceptions import CourseNotFoundError, TimetableNotFoundError, SessionNotFoundError
from planner.logger import logger
from typing import Optional

def save_timetable(
    db: Session,
    course_id: int,
    start_date: date,
    end_date: date,
    result: ScheduleResult
) -> Timetable:
    """Create or replace the timetable of a course"""
    topics = [topic.model_dump() for topic in result.topics]
    entries = result.to_json()
    
    timetable = get_timetable(db, course_id)
    if timetable:
        timetable.start_date = start_date
        timetable.end_date = end_date
        timetable.topics = topics
        timetable.entries = entries
    else:
        timetable = Timetable(
            course_id=course_id,
            start_date=start_date,
            end_date=end_date,
            topics=topics,
            entries=entries
        )
        db.add(timetable)
    
    db.commit()
    db.refresh(timetable)
    return timetable

def get_timetable(db: Session, course_id: int) -> Optional[Timetable]:
    """Get the timetable stored for a course"""
    return db.query(Timetable).filter(Timetable.course_id == course_id).first()

def mark_session_completed(
    db: Session,
    course_id: int,
    date_index: int,
    session_index: int,
    completed: bool = True
) -> Timetable:
    """
    Set the completed flag of one stored session.
    
    Completing a study session moves its course topic to "in-progress", and to
    "completed" once every study session of that topic is done.
    
    Raises:
        CourseNotFoundError, TimetableNotFoundError, SessionNotFoundError
    """
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise CourseNotFoundError(f"Course {course_id} not found")
    
    timetable = get_timetable(db, course_id)
    if not timetable:
        raise TimetableNotFoundError(f"Timetable not found for course {course_id}")
    
    entries = copy.deepcopy(timetable.entries)
    if not 0 <= date_index < len(entries) or not 0 <= session_index < len(entries[date_index]["sessions"]):
        raise SessionNotFoundError(f"Session {date_index}/{session_index} not found")
    
    session = entries[date_index]["sessions"][session_index]
    session["completed"] = completed
    timetable.entries = entries
    
    if completed and not session["isBreak"]:
        _update_topic_progress(course, entries, session["topic"])
    
    db.commit()
    db.refresh(timetable)
    return timetable

def _update_topic_progress(course: Course, entries: list, topic_title: str):
    """Advance the course topic status after one of its sessions is completed"""
    topics = copy.deepcopy(course.topics or [])
    topic = next((t for t in topics if t["title"] == topic_title), None)
    if topic is None or topic.get("status") == "completed":
        return
    
    topic["status"] = "in-progress"
    
    topic_sessions = [
        session
        for entry in entries
        for session in entry["sessions"]
        if not session["isBreak"] and session["topic"] == topic_title
    ]
    if all(session["completed"] for session in topic_sessions):
        topic["status"] = "completed"
        course.completed_topics = (course.completed_topics or 0) + 1
        logger.info(f"Course {course.id}: topic '{topic_title}' completed")
    
    course.topics = topics
