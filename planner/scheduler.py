import math
import warnings
from datetime import date
from typing import Any, Iterator, List, Optional, Union

from planner.config import settings
from planner.day_range import DayRange, build_day_range
from planner.estimator import normalize_topics
from planner.exceptions import EmptyTopicListError, SchedulingOverrunWarning
from planner.logger import logger
from planner.schemas import DayEntry, ScheduleResult, StudySession, Topic

BREAK_TITLE = "Break"
FALLBACK_BREAK_MINUTES = 15
LAST_MINUTE_OF_DAY = 23 * 60 + 59


def get_planner():
    """Factory function to return a planner configured from settings"""
    return StudyPlanner(
        day_start_hour=settings.day_start_hour,
        day_end_hour=settings.day_end_hour,
        max_day_iterations=settings.max_day_iterations,
        max_session_iterations=settings.max_session_iterations,
    )


def format_clock(minutes: int) -> str:
    """Minutes since midnight as HH:MM"""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def topic_minutes(topic: Topic) -> int:
    return max(1, round(topic.hours * 60))


def calculate_daily_budget(total_hours: float, available_days: int, is_very_short: bool) -> int:
    """
    Maximum study hours to place on one day.

    An even split of the total over the available days, capped at 6 hours for
    very short ranges and otherwise at 3/4/5/6 hours as the total grows past
    10/20/40 hours.
    """
    optimal = math.ceil(total_hours / max(1, available_days))

    if is_very_short:
        cap = 6
    elif total_hours <= 10:
        cap = 3
    elif total_hours <= 20:
        cap = 4
    elif total_hours <= 40:
        cap = 5
    else:
        cap = 6

    return max(1, min(optimal, cap))


def break_minutes(session_minutes: int, is_very_short: bool) -> int:
    """Break length after a study session of the given length"""
    if is_very_short:
        if session_minutes <= 60:
            return 5
        if session_minutes <= 120:
            return 10
        return 15

    if session_minutes <= 30:
        return 5
    if session_minutes <= 60:
        return 10
    if session_minutes <= 90:
        return 15
    return 20


class _TopicCursor:
    """Walks the topic list, tracking minutes left on the current topic"""

    def __init__(self, topics: List[Topic]):
        self.topics = topics
        self.index = 0
        self.remaining = topic_minutes(topics[0]) if topics else 0

    @property
    def done(self) -> bool:
        return self.index >= len(self.topics)

    @property
    def current(self) -> Topic:
        return self.topics[self.index]

    def consume(self, minutes: int):
        self.remaining -= minutes
        if self.remaining <= 0:
            self.index += 1
            if not self.done:
                self.remaining = topic_minutes(self.current)


class StudyPlanner:
    """Packs topics into time-stamped study sessions across calendar days"""

    def __init__(
        self,
        day_start_hour: int = 9,
        day_end_hour: int = 21,
        max_day_iterations: int = 1000,
        max_session_iterations: int = 100,
    ):
        if not 0 <= day_start_hour < day_end_hour <= 23:
            raise ValueError(
                f"Invalid study day window {day_start_hour}:00-{day_end_hour}:00"
            )
        self.day_start_hour = day_start_hour
        self.day_end_hour = day_end_hour
        self.max_day_iterations = max_day_iterations
        self.max_session_iterations = max_session_iterations

    def generate(self, topics: List[Topic], day_range: DayRange) -> ScheduleResult:
        """
        Build a schedule for normalized topics over a day range.

        Days in the range are filled first; topics left over when the range
        ends go onto overflow days after the end date.

        Args:
            topics: Normalized topics, in study order
            day_range: Output of `build_day_range`

        Returns:
            ScheduleResult; `incomplete` is set when the day bound ran out
            before every topic was placed
        """
        total_hours = sum(topic.hours for topic in topics)
        daily_budget = calculate_daily_budget(
            total_hours, len(day_range.study_days), day_range.is_very_short
        )
        logger.info(
            f"Planning {len(topics)} topics ({total_hours:g}h) over {day_range.total_days} days "
            f"({len(day_range.study_days)} study days), {daily_budget}h/day"
        )

        cursor = _TopicCursor(topics)
        entries = []
        in_overflow = False

        for iteration, day in enumerate(self._candidate_days(day_range)):
            if cursor.done:
                break
            if iteration >= self.max_day_iterations:
                break

            if day > day_range.end and not in_overflow:
                in_overflow = True
                logger.warning(
                    f"{len(topics) - cursor.index} topics left after {day_range.end}, "
                    f"adding days from {day}"
                )

            entry = self._pack_day(day, cursor, daily_budget * 60, day_range.is_very_short)
            if entry.sessions:
                entries.append(entry)

        incomplete = not cursor.done
        if incomplete:
            logger.warning(
                f"Stopped after {self.max_day_iterations} days with "
                f"{len(topics) - cursor.index} topics unscheduled"
            )

        return ScheduleResult(entries=entries, topics=topics, incomplete=incomplete)

    def _candidate_days(self, day_range: DayRange) -> Iterator[date]:
        """Study days of the range, then overflow days"""
        yield from day_range.study_days
        for day in day_range.overflow_days():
            if not day_range.skips(day):
                yield day

    def _pack_day(self, day: date, cursor: _TopicCursor, budget_minutes: int, is_very_short: bool) -> DayEntry:
        """Fill one day from the cursor until the budget, clock, or topics run out"""
        clock = self.day_start_hour * 60
        day_end = self.day_end_hour * 60
        used = 0
        sessions = []

        for _ in range(self.max_session_iterations):
            if cursor.done:
                break

            chunk = min(cursor.remaining, budget_minutes - used, day_end - clock)
            if chunk <= 0:
                break

            sessions.append(StudySession(
                topic=cursor.current.title,
                start_time=format_clock(clock),
                end_time=format_clock(clock + chunk),
                duration=chunk,
                is_break=False,
            ))
            clock += chunk
            used += chunk
            cursor.consume(chunk)

            if cursor.done or used >= budget_minutes:
                break

            pause = break_minutes(chunk, is_very_short)
            if clock + pause >= day_end:
                break

            sessions.append(StudySession(
                topic=BREAK_TITLE,
                start_time=format_clock(clock),
                end_time=format_clock(clock + pause),
                duration=pause,
                is_break=True,
            ))
            clock += pause

        # session bound can stop right after a break
        if sessions and sessions[-1].is_break:
            sessions.pop()

        logger.debug(f"{day}: {len(sessions)} sessions, {used} study minutes")
        return DayEntry(date=day.isoformat(), sessions=sessions)


def generate_simple_plan(topics: List[Topic], day_range: DayRange, day_start_hour: int = 9) -> ScheduleResult:
    """
    Last-resort planner: an even number of topics per day, back to back from
    the start hour with 15 minute breaks between them.

    A topic that cannot start before midnight moves to the next study day;
    topics still unplaced after the last study day leave the plan incomplete.
    """
    days = day_range.study_days
    per_day = math.ceil(len(topics) / len(days))
    entries = []
    index = 0

    for day in days:
        if index >= len(topics):
            break
        clock = day_start_hour * 60
        sessions = []

        for topic in topics[index:index + per_day]:
            if sessions:
                if clock + FALLBACK_BREAK_MINUTES >= LAST_MINUTE_OF_DAY:
                    break
                sessions.append(StudySession(
                    topic=BREAK_TITLE,
                    start_time=format_clock(clock),
                    end_time=format_clock(clock + FALLBACK_BREAK_MINUTES),
                    duration=FALLBACK_BREAK_MINUTES,
                    is_break=True,
                ))
                clock += FALLBACK_BREAK_MINUTES

            end = min(clock + topic_minutes(topic), LAST_MINUTE_OF_DAY)
            sessions.append(StudySession(
                topic=topic.title,
                start_time=format_clock(clock),
                end_time=format_clock(end),
                duration=end - clock,
            ))
            clock = end
            index += 1

        entries.append(DayEntry(date=day.isoformat(), sessions=sessions))

    incomplete = index < len(topics)
    if incomplete:
        logger.warning(f"Simple planner ran out of days with {len(topics) - index} topics unscheduled")

    return ScheduleResult(entries=entries, topics=topics, incomplete=incomplete, used_fallback=True)


def generate_timetable(
    topics: List[Any],
    start_date: Union[date, str],
    end_date: Union[date, str],
    difficulty: Optional[str] = None,
    planner: Optional[StudyPlanner] = None,
) -> ScheduleResult:
    """
    Generate a study timetable for a date range.

    Args:
        topics: Topic strings, dicts, or objects with title/hours
        start_date: First day of the plan (date or YYYY-MM-DD)
        end_date: Last day of the plan, inclusive
        difficulty: Course difficulty used to estimate missing hours
        planner: Planner to use instead of the configured default

    Returns:
        ScheduleResult with the day entries and the normalized topics

    Raises:
        InvalidRangeError: If end_date is before start_date
        EmptyTopicListError: If no topics are given
    """
    day_range = build_day_range(start_date, end_date)
    if not topics:
        raise EmptyTopicListError("At least one topic is required to build a timetable")

    normalized = normalize_topics(topics, difficulty)
    planner = planner or get_planner()

    try:
        result = planner.generate(normalized, day_range)
    except Exception:
        logger.exception("Study planner failed, using simple fallback planner")
        result = generate_simple_plan(normalized, day_range, planner.day_start_hour)

    if result.incomplete:
        warnings.warn(
            "Scheduling stopped before every topic was placed; the plan may be incomplete",
            SchedulingOverrunWarning,
            stacklevel=2,
        )
    return result
