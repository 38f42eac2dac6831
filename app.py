"""
AttendanceTracker
Participant registration and attendance management
"""
import logging
import streamlit as st

from attendance_tracker.services.auth_service import current_user, logout
from attendance_tracker.ui.attendance_page import render_attendance_page
from attendance_tracker.ui.dashboard import render_dashboard
from attendance_tracker.ui.html_utils import html_block, show_feedback
from attendance_tracker.ui.login_page import render_login_page
from attendance_tracker.ui.participants_page import render_participants_page
from attendance_tracker.ui.register_page import render_register_page

logger = logging.getLogger(__name__)


# Streamlit page config
st.set_page_config(
    page_title="AttendanceTracker",
    page_icon="✅",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def apply_custom_css():
    """Apply app-wide styles."""
    st.markdown(html_block("""
        <style>
        .stApp {
            background: linear-gradient(135deg, #f8fafc 0%, #f1f5f9 100%);
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}

        .app-header { text-align: center; margin-bottom: 24px; }
        .app-header h1 { margin-bottom: 4px; }
        .app-header div { opacity: 0.75; font-size: 1.1rem; }

        .stButton > button {
            border-radius: 10px;
            font-weight: 600;
        }
        </style>
    """), unsafe_allow_html=True)


def render_header(username: str):
    """Title row with the signed-in user and a sign-out button."""
    title_col, user_col = st.columns([5, 1], gap="small")
    with title_col:
        st.markdown(html_block("""
            <div class="app-header">
                <h1>AttendanceTracker</h1>
                <div>Simple and efficient participant attendance management</div>
            </div>
        """), unsafe_allow_html=True)
    with user_col:
        st.caption(f"Signed in as **{username}**")
        if st.button("🚪 Sign Out", width="stretch", key="nav_logout"):
            logout()
            st.rerun()


def render_tabs():
    """Render the four main tabs."""
    dashboard_tab, register_tab, attendance_tab, participants_tab = st.tabs(
        ["📊 Dashboard", "➕ Register", "📋 Attendance", "👥 Participants"]
    )

    with dashboard_tab:
        render_dashboard()
    with register_tab:
        render_register_page()
    with attendance_tab:
        render_attendance_page()
    with participants_tab:
        render_participants_page()


def main():
    """App entry point."""
    try:
        apply_custom_css()

        user = current_user()
        if user is None:
            render_login_page()
            return

        show_feedback()
        render_header(user.username)
        render_tabs()
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("Something went wrong, please refresh the page")
        with st.expander("🔍 Error details"):
            st.code(str(e))

        if st.button("🔄 Reset"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
