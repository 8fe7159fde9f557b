from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Union

from planner.exceptions import InvalidRangeError

# Ranges of this many days or fewer schedule on weekends too
VERY_SHORT_RANGE_DAYS = 2


def parse_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, datetime, or YYYY-MM-DD string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        if len(text) == 10:
            return datetime.strptime(text, "%Y-%m-%d").date()
        # ISO datetime strings, e.g. from JSON payloads
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise InvalidRangeError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


@dataclass(frozen=True)
class DayRange:
    """Calendar days between a start and end date, inclusive"""
    start: date
    end: date
    days: List[date]
    study_days: List[date]

    @property
    def total_days(self) -> int:
        return len(self.days)

    @property
    def is_very_short(self) -> bool:
        return self.total_days <= VERY_SHORT_RANGE_DAYS

    def skips(self, day: date) -> bool:
        """Whether `day` is left out of scheduling for this range"""
        return not self.is_very_short and is_weekend(day)

    def overflow_days(self):
        """Yield every calendar day after the range end; callers filter with `skips`"""
        day = self.end
        while True:
            day += timedelta(days=1)
            yield day


def build_day_range(start_date: Union[date, str], end_date: Union[date, str]) -> DayRange:
    """
    Enumerate the days of a study range.

    Weekends are excluded from `study_days` unless the range spans two days or
    fewer. At least one study day is always returned.

    Raises:
        InvalidRangeError: If end_date is before start_date.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if end < start:
        raise InvalidRangeError(f"End date {end} is before start date {start}")

    total_days = (end - start).days + 1
    days = [start + timedelta(days=i) for i in range(total_days)]

    if total_days <= VERY_SHORT_RANGE_DAYS:
        study_days = list(days)
    else:
        study_days = [day for day in days if not is_weekend(day)]

    if not study_days:
        study_days = [start]

    return DayRange(start=start, end=end, days=days, study_days=study_days)
