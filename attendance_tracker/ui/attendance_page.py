"""Attendance tab."""
import streamlit as st

from attendance_tracker.services.registration_service import record_attendance
from attendance_tracker.ui.html_utils import set_feedback


def render_attendance_page():
    """Render the attendance form."""
    st.markdown("### Record Attendance")
    st.caption("Mark attendance for registered participants")

    with st.form("attendance_form", clear_on_submit=False):
        phone = st.text_input("Phone Number", placeholder="+254 700 000 000", key="att_phone")
        sessions = st.number_input("Number of Sessions", min_value=1, value=1, step=1, key="att_sessions")
        submit = st.form_submit_button("Record Attendance", width="stretch", type="primary")

    if submit:
        success, message = record_attendance(phone, int(sessions))
        if success:
            for key in ("att_phone", "att_sessions"):
                st.session_state.pop(key, None)
            set_feedback("success", f"✅ {message}")
            st.rerun()
        else:
            st.error(f"❌ {message}")
