"""Utilities for preparing HTML snippets before rendering in Streamlit."""
from html import escape
from textwrap import dedent
from typing import Dict, Tuple

import streamlit as st

# (background gradient, text colour) per card accent
CARD_ACCENTS: Dict[str, Tuple[str, str]] = {
    "blue": ("linear-gradient(135deg, #dbeafe 0%, #bfdbfe 100%)", "#1e3a8a"),
    "emerald": ("linear-gradient(135deg, #d1fae5 0%, #a7f3d0 100%)", "#064e3b"),
    "pink": ("linear-gradient(135deg, #fce7f3 0%, #fbcfe8 100%)", "#831843"),
    "indigo": ("linear-gradient(135deg, #e0e7ff 0%, #c7d2fe 100%)", "#312e81"),
}

FEEDBACK_KEY = "ui_feedback"


def html_block(template: str) -> str:
    """
    Normalize multi-line HTML so Streamlit doesn't treat it as Markdown code.

    Lines with four or more leading spaces render as code blocks, so every
    line is dedented and left-stripped.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def stat_card_html(title: str, value: object, caption: str = "", accent: str = "blue") -> str:
    """Render one dashboard statistic card."""
    background, color = CARD_ACCENTS.get(accent, CARD_ACCENTS["blue"])
    caption_html = f"<div class='stat-card__caption'>{escape(caption)}</div>" if caption else ""
    return html_block(f"""
        <div class="stat-card" style="background: {background}; color: {color};">
            <div class="stat-card__title">{escape(title)}</div>
            <div class="stat-card__value">{escape(str(value))}</div>
            {caption_html}
        </div>
    """)


def set_feedback(level: str, message: str) -> None:
    """Queue a message to show after the next rerun."""
    st.session_state[FEEDBACK_KEY] = (level, message)


def show_feedback() -> None:
    """Show and clear the queued message, if any."""
    feedback = st.session_state.pop(FEEDBACK_KEY, None)
    if not feedback:
        return

    level, message = feedback
    if level == "success":
        st.success(message)
    elif level == "error":
        st.error(message)
    elif level == "warning":
        st.warning(message)
    else:
        st.info(message)
