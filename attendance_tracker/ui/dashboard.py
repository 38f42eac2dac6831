"""Dashboard tab: headline statistics and top counties."""
import logging
from html import escape

import streamlit as st

from attendance_tracker.services.participant_service import get_participant_store
from attendance_tracker.services.stats_service import DashboardStats, compute_dashboard_stats
from attendance_tracker.ui.html_utils import html_block, stat_card_html

logger = logging.getLogger(__name__)


def _percentage_caption(percentage: int) -> str:
    return f"{percentage}% of participants"


def _county_rows_html(stats: DashboardStats) -> str:
    """Ranked list of the busiest counties."""
    top = stats.top_counties()
    if not top:
        return "<div class='county-empty'>No participants registered yet</div>"

    rows = []
    for rank, (county, count) in enumerate(top, start=1):
        label = "participant" if count == 1 else "participants"
        rows.append(
            f"<div class='county-row'><span class='county-rank'>{rank}</span>"
            f"<span class='county-name'>{escape(county)}</span>"
            f"<span class='county-count'>{count} {label}</span></div>"
        )
    return "\n".join(rows)


def _inject_dashboard_styles():
    st.markdown(html_block("""
        <style>
        .stat-card {
            border-radius: 14px;
            padding: 18px 20px;
            margin-bottom: 12px;
        }
        .stat-card__title { font-size: 0.85rem; font-weight: 600; }
        .stat-card__value { font-size: 1.9rem; font-weight: 700; margin-top: 6px; }
        .stat-card__caption { font-size: 0.8rem; opacity: 0.8; }
        .county-row {
            display: flex;
            gap: 12px;
            align-items: center;
            padding: 8px 0;
            border-bottom: 1px solid rgba(148, 163, 184, 0.3);
        }
        .county-rank { font-weight: 700; width: 24px; }
        .county-name { flex: 1; }
        .county-count { opacity: 0.8; }
        .county-empty { opacity: 0.7; padding: 12px 0; }
        </style>
    """), unsafe_allow_html=True)


def render_dashboard():
    """Render the dashboard tab."""
    _inject_dashboard_styles()

    try:
        store = get_participant_store()
    except Exception as exc:
        logger.exception("Failed to load participants for dashboard")
        st.error(f"Error loading participants: {exc}")
        return

    stats = compute_dashboard_stats(store)

    cols = st.columns(4, gap="small")
    cards = [
        ("Total Participants", stats.total_participants, "", "blue"),
        ("Total Sessions", stats.total_sessions, "", "emerald"),
        (
            "Female Participants",
            stats.female_count,
            _percentage_caption(stats.female_percentage),
            "pink",
        ),
        (
            "Male Participants",
            stats.male_count,
            _percentage_caption(stats.male_percentage),
            "indigo",
        ),
    ]
    for col, (title, value, caption, accent) in zip(cols, cards):
        with col:
            st.markdown(stat_card_html(title, value, caption, accent), unsafe_allow_html=True)

    st.markdown("### Top Counties by Participation")
    st.caption("Counties with the most registered participants")
    st.markdown(_county_rows_html(stats), unsafe_allow_html=True)
