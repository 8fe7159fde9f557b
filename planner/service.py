"""Course-level timetable generation used by the CLI and the streamlit app"""

from datetime import date
from typing import Any, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from planner.crud import get_course, resolve_course_topics, sync_course_topics, save_timetable
from planner.day_range import parse_date
from planner.exceptions import CourseNotFoundError
from planner.logger import logger
from planner.models import Timetable
from planner.scheduler import generate_timetable
from planner.schemas import ScheduleResult


def generate_course_timetable(
    db: Session,
    course_id: int,
    start_date: Union[date, str],
    end_date: Union[date, str],
    topics: Optional[List[Any]] = None
) -> Tuple[Timetable, ScheduleResult]:
    """Generate and store the timetable of a course

    Args:
        db: Database session
        course_id: Course to plan
        start_date: First day of the plan
        end_date: Last day of the plan, inclusive
        topics: Optional topics used when the course has none stored

    Returns:
        tuple: (saved Timetable, ScheduleResult)
    """
    course = get_course(db, course_id)
    if not course:
        raise CourseNotFoundError(f"Course {course_id} not found")

    start = parse_date(start_date)
    end = parse_date(end_date)

    study_topics = resolve_course_topics(course, topics)
    logger.info(f"Course {course_id}: generating timetable for {len(study_topics)} topics, {start} to {end}")

    result = generate_timetable(study_topics, start, end, difficulty=course.difficulty)
    sync_course_topics(db, course, result.topics)

    timetable = save_timetable(db, course_id, start, end, result)
    return timetable, result
