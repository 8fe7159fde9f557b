from sqlalchemy.orm import Session
from planner.models import Course
from planner.schemas import CourseCreate, Topic
from planner.estimator import normalize_topics, generate_default_topics
from typing import Any, List, Optional

def create_course(db: Session, course: CourseCreate) -> Course:
    """Create a new course"""
    db_course = Course(**course.model_dump())
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    return db_course

def get_course(db: Session, course_id: int) -> Optional[Course]:
    """Get course by ID"""
    return db.query(Course).filter(Course.id == course_id).first()

def resolve_course_topics(course: Course, request_topics: Optional[List[Any]] = None) -> List[Topic]:
    """
    Pick the topics to schedule for a course.
    
    Topics stored on the course win, then topics from the request, then a
    default syllabus for the course subject. Missing hours are estimated with
    the course difficulty.
    """
    if course.topics:
        return normalize_topics(course.topics, course.difficulty)
    if request_topics:
        return normalize_topics(request_topics, course.difficulty)
    return generate_default_topics(course.subject, course.difficulty)

def sync_course_topics(db: Session, course: Course, topics: List[Topic]) -> Course:
    """Add scheduled topics the course does not have yet"""
    seen_titles = {topic["title"] for topic in course.topics or []}
    new_topics = []
    for topic in topics:
        if topic.title in seen_titles:
            continue
        seen_titles.add(topic.title)
        new_topics.append({"title": topic.title, "estimated_hours": topic.hours, "status": "pending"})

    if new_topics:
        # Reassign so SQLAlchemy sees the JSON change
        course.topics = list(course.topics or []) + new_topics
        db.commit()
        db.refresh(course)
    return course
