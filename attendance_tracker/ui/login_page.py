"""Login page shown until a user signs in."""
import streamlit as st

from attendance_tracker.services.auth_service import login
from attendance_tracker.ui.html_utils import html_block, set_feedback

DEMO_ACCOUNTS = (
    ("Admin", "admin", "admin123"),
    ("User", "user", "user123"),
)


def _inject_login_styles():
    st.markdown(html_block("""
        <style>
        .login-title { text-align: center; margin-bottom: 4px; }
        .login-description { text-align: center; opacity: 0.75; margin-bottom: 16px; }
        </style>
    """), unsafe_allow_html=True)


def render_login_page():
    """Render the sign-in form and demo account hints."""
    _inject_login_styles()

    with st.form("login_form", clear_on_submit=False):
        st.markdown("<h1 class='login-title'>AttendanceTracker</h1>", unsafe_allow_html=True)
        st.markdown(
            "<div class='login-description'>Sign in to manage participant attendance</div>",
            unsafe_allow_html=True,
        )

        username = st.text_input("Username", placeholder="Enter your username", key="login_username")
        password = st.text_input(
            "Password", type="password", placeholder="Enter your password", key="login_password"
        )
        submit = st.form_submit_button("Sign In", width="stretch", type="primary")

    if submit:
        success, message = login(username, password)
        if success:
            set_feedback("success", f"✅ {message}")
            st.rerun()
        else:
            st.error(f"❌ {message}")

    with st.expander("Demo accounts"):
        for label, username, password in DEMO_ACCOUNTS:
            st.markdown(f"**{label}**: `{username}` / `{password}`")
