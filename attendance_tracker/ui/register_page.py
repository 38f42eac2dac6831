"""Register tab: single registration form and bulk import."""
import streamlit as st

from attendance_tracker.models.participant import COUNTIES, Gender
from attendance_tracker.services.registration_service import register_participant
from attendance_tracker.ui.html_utils import set_feedback
from attendance_tracker.ui.import_panel import render_import_panel

GENDER_OPTIONS = [gender.value for gender in Gender]


def render_register_page():
    """Render the registration form followed by the CSV import panel."""
    st.markdown("### Register New Participant")
    st.caption("Add a new participant to the attendance system")

    with st.form("register_form", clear_on_submit=False):
        phone = st.text_input("Phone Number", placeholder="+254 700 000 000", key="reg_phone")
        name = st.text_input("Full Name", placeholder="Enter full name", key="reg_name")

        gender_col, county_col = st.columns(2, gap="small")
        with gender_col:
            gender = st.selectbox(
                "Gender",
                options=GENDER_OPTIONS,
                index=None,
                placeholder="Select gender",
                format_func=str.capitalize,
                key="reg_gender",
            )
        with county_col:
            county = st.selectbox(
                "County",
                options=COUNTIES,
                index=None,
                placeholder="Select county",
                key="reg_county",
            )

        submit = st.form_submit_button("Register Participant", width="stretch", type="primary")

    if submit:
        success, message = register_participant(phone, name, gender or "", county or "")
        if success:
            for key in ("reg_phone", "reg_name", "reg_gender", "reg_county"):
                st.session_state.pop(key, None)
            set_feedback("success", f"✅ {message}")
            st.rerun()
        else:
            st.error(f"❌ {message}")

    st.divider()
    render_import_panel()
