from planner.models.course import Course
from planner.models.timetable import Timetable

__all__ = [
    "Course",
    "Timetable"
]
