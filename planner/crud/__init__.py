from planner.crud.course import (
    create_course,
    get_course,
    resolve_course_topics,
    sync_course_topics
)
from planner.crud.timetable import save_timetable, get_timetable, mark_session_completed

__all__ = [
    "create_course",
    "get_course",
    "resolve_course_topics",
    "sync_course_topics",
    "save_timetable",
    "get_timetable",
    "mark_session_completed",
]
