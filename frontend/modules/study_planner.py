"""Study planner page - generate and track the course timetable"""

import streamlit as st
from datetime import date, timedelta, datetime
import sys
import os

# Add parent directory to path to import planner
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from planner.crud import get_timetable, mark_session_completed
from planner.exceptions import PlannerError
from planner.service import generate_course_timetable


def show_study_planner_page(db, course):
    """Display the course timetable with completion tracking
    
    Args:
        db: Database session
        course: Course object
    """
    st.title("📅 Study Planner")
    
    timetable = get_timetable(db, course.id)
    
    with st.expander("Generate timetable", expanded=timetable is None):
        _show_generation_form(db, course)
    
    if not timetable:
        st.info("No timetable yet. Pick a date range above to generate one.")
        return
    
    _show_summary(timetable)
    _show_days(db, course, timetable)


def _show_generation_form(db, course):
    """Form to (re)generate the timetable for a date range"""
    with st.form("generate_timetable_form"):
        today = date.today()
        col1, col2 = st.columns(2)
        with col1:
            start_date = st.date_input("Start Date", value=today)
        with col2:
            end_date = st.date_input("End Date", value=today + timedelta(days=13))
        
        submitted = st.form_submit_button("Generate Timetable", type="primary")
    
    if submitted:
        with st.spinner("Planning study sessions..."):
            try:
                _, result = generate_course_timetable(db, course.id, start_date, end_date)
            except PlannerError as e:
                st.error(str(e))
                return
        
        if result.incomplete:
            st.warning("⚠️ The plan may be incomplete.")
        st.success(f"✅ Timetable generated with {len(result.entries)} study days")
        st.rerun()


def _show_summary(timetable):
    """Display completion metrics"""
    study_sessions = [
        session
        for entry in timetable.entries
        for session in entry["sessions"]
        if not session["isBreak"]
    ]
    completed = len([s for s in study_sessions if s["completed"]])
    total = len(study_sessions)
    
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Study Sessions", total)
    with col2:
        st.metric("Completed", completed)
    with col3:
        completion_pct = int((completed / total) * 100) if total > 0 else 0
        st.metric("Progress", f"{completion_pct}%")
    
    st.progress(completion_pct / 100)
    st.caption(f"{timetable.start_date.strftime('%b %d')} - {timetable.end_date.strftime('%b %d, %Y')}")
    st.divider()


def _show_days(db, course, timetable):
    """Display sessions grouped by day"""
    today_str = date.today().strftime("%Y-%m-%d")
    
    for date_index, entry in enumerate(timetable.entries):
        day_name = datetime.strptime(entry["date"], "%Y-%m-%d").strftime("%A, %B %d")
        is_today = entry["date"] == today_str
        
        with st.expander(f"{'🔔 ' if is_today else ''}{day_name}", expanded=is_today):
            for session_index, session in enumerate(entry["sessions"]):
                _show_session_row(db, course, date_index, session_index, session)


def _show_session_row(db, course, date_index, session_index, session):
    """Display a single session with a completion checkbox"""
    col_time, col_topic, col_check = st.columns([1.5, 4, 0.5])
    
    with col_time:
        st.caption(f"{session['startTime']} - {session['endTime']}")
    
    with col_topic:
        if session["isBreak"]:
            st.caption(f"☕ Break ({session['duration']} min)")
        else:
            st.markdown(f"**{session['topic']}**")
            st.caption(f"{session['duration']} min")
    
    with col_check:
        if not session["isBreak"]:
            completed = st.checkbox(
                "✓",
                value=session["completed"],
                key=f"check_{course.id}_{date_index}_{session_index}",
                label_visibility="collapsed"
            )
            if completed != session["completed"]:
                mark_session_completed(db, course.id, date_index, session_index, completed)
                st.rerun()
