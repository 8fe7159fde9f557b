"""Study Planner - Main application file"""

import streamlit as st
import sys
import os

# Add parent directory to path to import planner
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from planner.database import SessionLocal, init_db
from planner.crud import get_course

# Import page modules
from modules.setup_course import show_setup_page
from modules.study_planner import show_study_planner_page

# Initialize database
init_db()

# ===================================================================
# PAGE CONFIGURATION & SESSION STATE
# ===================================================================

st.set_page_config(
    page_title="Study Planner",
    page_icon="📚",
    layout="wide"
)

if 'course_id' not in st.session_state:
    st.session_state.course_id = 1  # Default course, can be switched in the sidebar

# Get database session
@st.cache_resource
def get_db():
    return SessionLocal()

db = get_db()

# ===================================================================
# COURSE CHECK
# ===================================================================

course = get_course(db, st.session_state.course_id)
if not course:
    # Show course setup page if no course exists
    show_setup_page(db)
    st.stop()

# ===================================================================
# SIDEBAR
# ===================================================================

st.sidebar.title("📚 Study Planner")
st.sidebar.markdown(f"**Course:** {course.subject}")
st.sidebar.markdown(f"**Difficulty:** {course.difficulty}")
st.sidebar.markdown(f"**Topics completed:** {course.completed_topics}/{len(course.topics)}")
st.sidebar.divider()

selected_id = st.sidebar.number_input("Course ID", min_value=1, value=st.session_state.course_id, step=1)
if selected_id != st.session_state.course_id:
    st.session_state.course_id = int(selected_id)
    st.rerun()

if st.sidebar.button("➕ New Course", use_container_width=True):
    st.session_state.course_id = 0
    st.rerun()

# ===================================================================
# PAGE
# ===================================================================

show_study_planner_page(db, course)

st.sidebar.divider()
st.sidebar.caption("Study Planner v1.0")
