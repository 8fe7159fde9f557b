import math

import pytest

from planner.estimator import estimate_topic_hours, normalize_topics, generate_default_topics
from planner.schemas import Topic, TopicInput


@pytest.mark.parametrize(
    "title, difficulty, expected",
    [
        ("A", "advanced", 3.5),
        ("Advanced Neural Networks", "intermediate", 3.75),
        ("Lab Exercises", "beginner", 1.95),
        ("Core Concepts", "expert", 4.4),
        ("Introduction to Python", "intermediate", 1.75),
        ("Final Review", "beginner", 0.9),
        ("Something Else", "unknown", 2.0),
    ],
)
def test_estimate_topic_hours(title, difficulty, expected):
    assert estimate_topic_hours(title, difficulty) == pytest.approx(expected)


def test_first_matching_keyword_group_wins():
    # "advanced" is checked before "introduction"
    assert estimate_topic_hours("Introduction to Advanced Topics", "intermediate") == pytest.approx(3.75)


def test_difficulty_is_case_insensitive():
    assert estimate_topic_hours("Graphs", "ADVANCED") == 3.5


def test_normalize_accepts_strings_dicts_and_models():
    topics = normalize_topics(
        ["  Sorting  ", {"title": "Graphs", "hours": 2}, TopicInput(title="Trees", hours=1.5)],
        "intermediate",
    )

    assert topics == [
        Topic(title="Sorting", hours=2.5),
        Topic(title="Graphs", hours=2),
        Topic(title="Trees", hours=1.5),
    ]


def test_normalize_repairs_titles_and_hours():
    topics = normalize_topics(
        [
            {"title": "", "hours": 1},
            {"hours": 0},
            {"title": "Negative", "hours": -3},
            {"title": "Nan", "hours": float("nan")},
            {"title": "Inf", "hours": math.inf},
            {"title": "Text", "hours": "abc"},
            {"topic": "Stored", "estimated_hours": 1.25},
        ],
        "advanced",
    )

    assert [t.title for t in topics] == ["Topic 1", "Topic 2", "Negative", "Nan", "Inf", "Text", "Stored"]
    assert topics[0].hours == 1
    assert all(t.hours == 3.5 for t in topics[1:6])
    assert topics[6].hours == 1.25


def test_normalize_is_deterministic():
    raw = [{"title": None, "hours": None}, "Review"]
    assert normalize_topics(raw) == normalize_topics(raw)


def test_normalize_empty_list():
    assert normalize_topics([]) == []


def test_generate_default_topics():
    topics = generate_default_topics("Python", "beginner")

    assert len(topics) == 7
    assert topics[0].title == "Introduction to Python"
    assert topics[0].hours == pytest.approx(1.05)
    assert topics[3].title == "Advanced Topics in Python"
    assert topics[3].hours == pytest.approx(2.25)
    assert topics[-1].title == "Review and Assessment of Python"
    assert topics[-1].hours == pytest.approx(0.9)
    assert all(t.hours > 0 for t in topics)
