"""Topic normalization and study-hour estimation."""

import math
from typing import Any, List, Optional

from planner.config import settings
from planner.logger import logger
from planner.schemas import Topic, TopicInput

DIFFICULTY_BASE_HOURS = {
    "beginner": 1.5,
    "intermediate": 2.5,
    "advanced": 3.5,
    "expert": 4.0,
}
DEFAULT_BASE_HOURS = 2.0

# Checked in order; the first group with a matching keyword wins
KEYWORD_MULTIPLIERS = [
    (
        ("advanced", "complex", "architecture", "algorithm", "optimization",
         "framework", "implementation", "deep", "neural"),
        1.5,
    ),
    (
        ("practice", "exercise", "lab", "application", "project", "case study"),
        1.3,
    ),
    (
        ("core", "fundamental", "principle", "concept", "theory", "foundation"),
        1.1,
    ),
    (
        ("introduction", "basic", "overview", "getting started", "beginner"),
        0.7,
    ),
    (
        ("review", "summary", "recap", "conclusion"),
        0.6,
    ),
]

DEFAULT_TOPIC_TEMPLATES = [
    "Introduction to {subject}",
    "Basic Concepts in {subject}",
    "Core Principles of {subject}",
    "Advanced Topics in {subject}",
    "Practical Applications of {subject}",
    "Case Studies in {subject}",
    "Review and Assessment of {subject}",
]


def estimate_topic_hours(title: str, difficulty: Optional[str] = None) -> float:
    """
    Estimate study hours for a topic from its title and the course difficulty.

    The difficulty picks a base value (unknown labels use 2 hours); the first
    keyword group found in the title scales it.
    """
    difficulty = (difficulty or settings.default_difficulty).lower()
    base_hours = DIFFICULTY_BASE_HOURS.get(difficulty, DEFAULT_BASE_HOURS)

    lower_title = (title or "").lower()
    for keywords, multiplier in KEYWORD_MULTIPLIERS:
        if any(keyword in lower_title for keyword in keywords):
            return round(base_hours * multiplier, 2)

    return base_hours


def _usable_hours(value: Any) -> Optional[float]:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(hours) or hours <= 0:
        return None
    return hours


def _coerce_raw_topic(raw: Any) -> TopicInput:
    if isinstance(raw, TopicInput):
        return raw
    if isinstance(raw, Topic):
        return TopicInput(title=raw.title, hours=raw.hours)
    if isinstance(raw, str):
        return TopicInput(title=raw)
    if isinstance(raw, dict):
        title = raw.get("title", raw.get("topic"))
        hours = raw.get("hours", raw.get("estimated_hours"))
    else:
        title = getattr(raw, "title", None)
        hours = getattr(raw, "hours", None)
    return TopicInput(
        title=str(title) if title is not None else None,
        hours=_usable_hours(hours),
    )


def normalize_topics(raw_topics: List[Any], difficulty: Optional[str] = None) -> List[Topic]:
    """
    Turn strings, dicts, or topic-like objects into strict `Topic` values.

    Blank titles become "Topic N" (1-based position) and missing, non-positive,
    or non-finite hours are replaced by `estimate_topic_hours`.
    """
    topics = []
    for index, raw in enumerate(raw_topics):
        topic_input = _coerce_raw_topic(raw)

        title = (topic_input.title or "").strip()
        if not title:
            title = f"Topic {index + 1}"

        hours = _usable_hours(topic_input.hours)
        if hours is None:
            hours = estimate_topic_hours(title, difficulty)
            logger.debug(f"Estimated {hours} hours for topic: {title}")

        topics.append(Topic(title=title, hours=hours))

    return topics


def generate_default_topics(subject: str, difficulty: Optional[str] = None) -> List[Topic]:
    """Placeholder syllabus for a subject when no topics are available"""
    return [
        Topic(title=title, hours=estimate_topic_hours(title, difficulty))
        for title in (template.format(subject=subject) for template in DEFAULT_TOPIC_TEMPLATES)
    ]
