"""Course setup page"""

import streamlit as st
import sys
import os

# Add parent directory to path to import planner
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from planner.crud import create_course
from planner.estimator import normalize_topics, DIFFICULTY_BASE_HOURS
from planner.schemas import CourseCreate, CourseTopic


def show_setup_page(db):
    """Display course setup form
    
    Args:
        db: Database session
    """
    st.title("📚 Welcome to Study Planner!")
    st.markdown("### Let's set up your course")
    
    with st.form("course_setup_form"):
        subject = st.text_input("Subject *", placeholder="e.g., Machine Learning")
        
        difficulty = st.selectbox(
            "Difficulty *",
            options=list(DIFFICULTY_BASE_HOURS),
            index=1
        )
        
        st.subheader("Topics")
        st.caption("One topic per line. Add hours after a colon, or leave them out to estimate.")
        topics_text = st.text_area("Topics", placeholder="Introduction to ML\nLinear Regression: 2\nNeural Networks")
        
        submitted = st.form_submit_button("Create Course", type="primary", use_container_width=True)
    
    if submitted:
        if not subject:
            st.error("Please enter a subject")
            return
        
        raw_topics = []
        for line in topics_text.splitlines():
            if not line.strip():
                continue
            title, _, hours = line.partition(":")
            raw_topics.append({"title": title.strip(), "hours": hours.strip() or None})
        
        try:
            topics = normalize_topics(raw_topics, difficulty)
            course = create_course(db, CourseCreate(
                subject=subject,
                difficulty=difficulty,
                topics=[CourseTopic(title=t.title, estimated_hours=t.hours) for t in topics]
            ))
            st.session_state.course_id = course.id
            
            st.success(f"✅ Course created: {subject}")
            st.rerun()
        except Exception as e:
            st.error(f"Error creating course: {str(e)}")
