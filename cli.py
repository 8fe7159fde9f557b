import typer
from rich.console import Console
from rich.table import Table
from typing import Optional, List
import json

from planner.database import SessionLocal, init_db
from planner.crud import create_course, get_course, get_timetable, mark_session_completed
from planner.schemas import CourseCreate, CourseTopic, DayEntry
from planner.estimator import estimate_topic_hours, normalize_topics
from planner.exceptions import PlannerError
from planner.scheduler import generate_timetable
from planner.service import generate_course_timetable
from planner.topic_loader import TopicLoader

app = typer.Typer(help="Study Planner CLI - turn course topics into a day-by-day timetable")
console = Console()


def parse_topic_args(topics: str) -> List[dict]:
    """Parse "Title:hours, Title, ..." into topic dicts; hours are optional"""
    parsed = []
    for part in topics.split(","):
        part = part.strip()
        if not part:
            continue
        title, hours = part, None
        if ":" in part:
            head, tail = part.rsplit(":", 1)
            try:
                title, hours = head.strip(), float(tail)
            except ValueError:
                pass
        parsed.append({"title": title, "hours": hours})
    return parsed


def print_schedule(entries: List[DayEntry]):
    """Render day entries as a table"""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="cyan", width=12)
    table.add_column("Time", style="green")
    table.add_column("Topic", style="yellow")
    table.add_column("Duration", style="blue", justify="right")
    table.add_column("Done", justify="center")

    for day_index, entry in enumerate(entries):
        for session_index, session in enumerate(entry.sessions):
            topic_str = f"[dim]{session.topic}[/dim]" if session.is_break else session.topic
            table.add_row(
                f"{day_index}.{session_index}",
                entry.date if session_index == 0 else "",
                f"{session.start_time}-{session.end_time}",
                topic_str,
                f"{session.duration} min",
                "✓" if session.completed else ""
            )

    console.print(table)


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command("create-course")
def create_course_cmd(
    subject: str = typer.Option(..., prompt="Course subject"),
    difficulty: str = typer.Option("intermediate", help="beginner, intermediate, advanced or expert"),
    topics: Optional[str] = typer.Option(None, help="Topics (comma-separated, optional hours: 'Intro:1.5,Loops')")
):
    """Create a course, optionally with its topics"""
    db = SessionLocal()
    try:
        topic_list = normalize_topics(parse_topic_args(topics), difficulty) if topics else []
        course_data = CourseCreate(
            subject=subject,
            difficulty=difficulty,
            topics=[CourseTopic(title=t.title, estimated_hours=t.hours) for t in topic_list]
        )
        course = create_course(db, course_data)
        console.print(f"[green]✓[/green] Course created successfully! Course ID: {course.id}")
        console.print(f"  Subject: {course.subject} ({course.difficulty})")
        console.print(f"  Topics: {len(course.topics)}")
    finally:
        db.close()


@app.command()
def estimate(
    titles: List[str] = typer.Argument(..., help="Topic titles"),
    difficulty: str = typer.Option("intermediate", help="Course difficulty")
):
    """Show estimated study hours for topic titles"""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Topic", style="yellow")
    table.add_column("Hours", style="blue", justify="right")

    for title in titles:
        table.add_row(title, f"{estimate_topic_hours(title, difficulty):g}")

    console.print(table)


@app.command()
def generate(
    start_date: str = typer.Option(..., "--start", help="Start date (YYYY-MM-DD)"),
    end_date: str = typer.Option(..., "--end", help="End date (YYYY-MM-DD), inclusive"),
    topics: Optional[str] = typer.Option(None, help="Topics (comma-separated, optional hours: 'Intro:1.5,Loops')"),
    topics_file: Optional[str] = typer.Option(None, help="CSV or Excel file with title/hours columns"),
    difficulty: str = typer.Option("intermediate", help="Used to estimate missing hours"),
    course_id: Optional[int] = typer.Option(None, help="Store the timetable for this course"),
    as_json: bool = typer.Option(False, "--json", help="Print the timetable as JSON")
):
    """Generate a study timetable"""
    db = SessionLocal()
    try:
        topic_list = []
        if topics_file:
            topic_list.extend(TopicLoader.auto_parse(topics_file))
        if topics:
            topic_list.extend(parse_topic_args(topics))

        if course_id is not None:
            _, result = generate_course_timetable(db, course_id, start_date, end_date, topic_list or None)
        else:
            result = generate_timetable(topic_list, start_date, end_date, difficulty)

        if as_json:
            console.print_json(json.dumps(result.to_json()))
            return

        console.print(f"\n[green]✓[/green] [bold]Timetable generated: {len(result.entries)} study days[/bold]\n")
        print_schedule(result.entries)

        if result.used_fallback:
            console.print("[yellow]Used the simple planner; session times are approximate.[/yellow]")
        if result.incomplete:
            console.print("[yellow]⚠️  The plan may be incomplete.[/yellow]")
        if course_id is not None:
            console.print(f"Saved for course {course_id}.")
    except (PlannerError, ValueError, OSError) as e:
        console.print(f"[red]✗[/red] Error: {str(e)}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def view(course_id: int):
    """View the stored timetable of a course"""
    db = SessionLocal()
    try:
        course = get_course(db, course_id)
        if not course:
            console.print(f"[red]✗[/red] Course ID {course_id} not found")
            raise typer.Exit(code=1)

        timetable = get_timetable(db, course_id)
        if not timetable:
            console.print(f"[yellow]No timetable found for course {course_id}[/yellow]")
            return

        console.print(f"\n[bold]{course.subject} Timetable[/bold]")
        console.print(f"Range: {timetable.start_date} to {timetable.end_date}")
        console.print(f"Topics completed: {course.completed_topics}/{len(course.topics)}\n")

        print_schedule([DayEntry(**entry) for entry in timetable.entries])
    finally:
        db.close()


@app.command()
def complete(
    course_id: int = typer.Argument(..., help="Course ID"),
    date_index: int = typer.Argument(..., help="Day number (first column before the dot)"),
    session_index: int = typer.Argument(..., help="Session number (after the dot)"),
    undo: bool = typer.Option(False, "--undo", help="Mark the session as not completed")
):
    """Mark a stored session as completed"""
    db = SessionLocal()
    try:
        timetable = mark_session_completed(db, course_id, date_index, session_index, not undo)
        session = timetable.entries[date_index]["sessions"][session_index]
        status = "not completed" if undo else "completed"
        console.print(f"[green]✓[/green] {session['topic']} on {timetable.entries[date_index]['date']} marked {status}")
    except PlannerError as e:
        console.print(f"[red]✗[/red] Error: {str(e)}")
        raise typer.Exit(code=1)
    finally:
        db.close()


if __name__ == "__main__":
    app()
