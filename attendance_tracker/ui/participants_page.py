"""Participants tab: everyone registered, with attendance."""
import logging

import streamlit as st

from attendance_tracker.services.participant_service import get_all_participants
from attendance_tracker.ui.import_panel import participant_rows

logger = logging.getLogger(__name__)


def render_participants_page():
    """Render the participant table."""
    st.markdown("### All Participants")
    st.caption("Complete list of registered participants and their attendance")

    try:
        participants = get_all_participants()
    except Exception as exc:
        logger.exception("Failed to load participants")
        st.error(f"Error loading participants: {exc}")
        return

    if not participants:
        st.info("No participants registered yet. Use the Register tab to add the first one.")
        return

    st.dataframe(participant_rows(participants), hide_index=True, width="stretch")
