import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

import cli
from planner.crud import get_course, get_timetable

runner = CliRunner()


@pytest.fixture(autouse=True)
def use_test_database(monkeypatch, session_factory):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)


def test_parse_topic_args():
    assert cli.parse_topic_args("Intro:1.5, Loops ,Ratio 3:2:x,") == [
        {"title": "Intro", "hours": 1.5},
        {"title": "Loops", "hours": None},
        {"title": "Ratio 3:2:x", "hours": None},
    ]


def test_estimate():
    result = runner.invoke(cli.app, ["estimate", "Introduction", "--difficulty", "beginner"])

    assert result.exit_code == 0
    assert "Introduction" in result.output
    assert "1.05" in result.output


def test_generate_json():
    result = runner.invoke(
        cli.app,
        ["generate", "--start", "2024-01-01", "--end", "2024-01-01", "--topics", "A:1,B:1,C:1", "--json"],
    )

    assert result.exit_code == 0
    entries = json.loads(result.output)
    assert len(entries) == 1
    assert [s["topic"] for s in entries[0]["sessions"]] == ["A", "Break", "B", "Break", "C"]
    assert entries[0]["sessions"][0]["startTime"] == "09:00"


def test_generate_json_stdout_is_parseable(tmp_path):
    env = dict(
        os.environ,
        LOG_PATH=str(tmp_path / "planner.log"),
        DATABASE_URL=f"sqlite:///{tmp_path / 'planner.db'}",
        LOG_LEVEL="DEBUG",
    )
    completed = subprocess.run(
        [sys.executable, "cli.py", "generate", "--start", "2024-01-01", "--end", "2024-01-01",
         "--topics", "A:1", "--json"],
        cwd=Path(__file__).resolve().parents[1],
        env=env,
        capture_output=True,
        text=True,
    )

    assert completed.returncode == 0, completed.stderr
    entries = json.loads(completed.stdout)
    assert entries[0]["sessions"][0]["topic"] == "A"
    assert "Planning 1 topics" in completed.stderr


def test_generate_table_from_file(tmp_path):
    path = tmp_path / "topics.csv"
    path.write_text("title,hours\nSorting,1\n")

    result = runner.invoke(
        cli.app, ["generate", "--start", "2024-01-01", "--end", "2024-01-02", "--topics-file", str(path)]
    )

    assert result.exit_code == 0
    assert "Timetable generated: 1 study days" in result.output
    assert "Sorting" in result.output


def test_generate_rejects_reversed_range():
    result = runner.invoke(
        cli.app, ["generate", "--start", "2024-01-05", "--end", "2024-01-01", "--topics", "A:1"]
    )

    assert result.exit_code == 1
    assert "before start date" in result.output


def test_generate_without_topics_fails():
    result = runner.invoke(cli.app, ["generate", "--start", "2024-01-01", "--end", "2024-01-02"])

    assert result.exit_code == 1
    assert "At least one topic" in result.output


def test_course_workflow(session_factory):
    result = runner.invoke(cli.app, ["create-course", "--subject", "Python", "--topics", "Intro:1,Loops:1"])
    assert result.exit_code == 0
    assert "Course ID: 1" in result.output

    result = runner.invoke(
        cli.app, ["generate", "--course-id", "1", "--start", "2024-01-01", "--end", "2024-01-01"]
    )
    assert result.exit_code == 0
    assert "Saved for course 1." in result.output

    result = runner.invoke(cli.app, ["view", "1"])
    assert result.exit_code == 0
    assert "Python Timetable" in result.output
    assert "Intro" in result.output

    result = runner.invoke(cli.app, ["complete", "1", "0", "0"])
    assert result.exit_code == 0
    assert "marked completed" in result.output

    db = session_factory()
    try:
        assert get_course(db, 1).completed_topics == 1
        assert get_timetable(db, 1).entries[0]["sessions"][0]["completed"] is True
    finally:
        db.close()


def test_view_missing_course():
    result = runner.invoke(cli.app, ["view", "7"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_complete_missing_course():
    result = runner.invoke(cli.app, ["complete", "7", "0", "0"])

    assert result.exit_code == 1
    assert "Course 7 not found" in result.output


def test_generate_missing_topics_file(tmp_path):
    result = runner.invoke(
        cli.app,
        ["generate", "--start", "2024-01-01", "--end", "2024-01-02", "--topics-file", str(tmp_path / "missing.csv")],
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
