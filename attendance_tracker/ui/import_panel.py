"""Bulk CSV import: template download, upload, preview, commit."""
import logging
from typing import Dict, List, Optional, Tuple

import streamlit as st

from attendance_tracker.models.import_batch import ImportBatchResult
from attendance_tracker.models.participant import Participant
from attendance_tracker.services.import_service import (
    COLUMNS,
    TEMPLATE_FILENAME,
    build_template,
    import_participants,
    parse_import,
    validate_upload_filename,
)
from attendance_tracker.services.participant_service import get_participant_store
from attendance_tracker.ui.html_utils import set_feedback
from attendance_tracker.utils.exceptions import UnreadableInputError

logger = logging.getLogger(__name__)

DIALOG_DECORATOR = getattr(st, "dialog", None) or getattr(st, "experimental_dialog", None)

IMPORT_BATCH_KEY = "import_batch"
IMPORT_SIGNATURE_KEY = "import_upload_signature"
IMPORT_NONCE_KEY = "import_uploader_nonce"
IMPORT_OPEN_PREVIEW_KEY = "import_open_preview"


def participant_rows(participants: List[Participant]) -> List[Dict[str, object]]:
    """Table rows for a list of participants."""
    return [
        {
            "Phone": p.phone,
            "Name": p.name,
            "Gender": p.gender.value,
            "County": p.county.value,
            "Sessions": p.attendance_count,
        }
        for p in participants
    ]


def preview_summary(batch: ImportBatchResult) -> str:
    """One-line description shown at the top of the preview."""
    entries = "entry" if batch.valid_count == 1 else "entries"
    return f"Review the participants before importing. {batch.valid_count} valid {entries} found."


def _upload_signature(uploaded) -> Tuple[str, int]:
    return uploaded.name, uploaded.size


def _ensure_import_state() -> None:
    if IMPORT_NONCE_KEY not in st.session_state:
        st.session_state[IMPORT_NONCE_KEY] = 0


def _reset_import() -> None:
    """Discard the preview and clear the uploader widget."""
    st.session_state.pop(IMPORT_BATCH_KEY, None)
    st.session_state.pop(IMPORT_SIGNATURE_KEY, None)
    st.session_state.pop(IMPORT_OPEN_PREVIEW_KEY, None)
    st.session_state[IMPORT_NONCE_KEY] = st.session_state.get(IMPORT_NONCE_KEY, 0) + 1


def _request_preview() -> None:
    """Open the preview dialog on the next render."""
    st.session_state[IMPORT_OPEN_PREVIEW_KEY] = True


def _take_preview_request() -> bool:
    """
    Consume a pending request to open the preview dialog.

    The dialog is only opened on the run that asked for it, so closing it
    with its own close control keeps it closed on later reruns.
    """
    return bool(st.session_state.pop(IMPORT_OPEN_PREVIEW_KEY, False))

def _parse_upload(uploaded) -> Optional[ImportBatchResult]:
    """Validate and parse an uploaded file; errors are shown inline."""
    is_valid, error_msg = validate_upload_filename(uploaded.name)
    if not is_valid:
        st.error(f"❌ {error_msg}")
        return None

    try:
        return parse_import(uploaded.getvalue(), get_participant_store())
    except UnreadableInputError as e:
        logger.warning(f"Unreadable upload {uploaded.name}: {e}")
        st.error(f"❌ Could not read {uploaded.name}: {e}")
        return None


def _render_preview(batch: ImportBatchResult) -> None:
    """Errors and valid rows side by side, then the commit decision."""
    st.caption(preview_summary(batch))

    if batch.errors:
        st.error(f"{batch.error_count} Error(s) Found")
        st.markdown("\n".join(f"- {message}" for message in batch.error_messages()))

    if batch.candidates:
        st.markdown(f"**Valid Participants ({batch.valid_count})**")
        st.dataframe(participant_rows(batch.candidates), hide_index=True, width="stretch")

    cancel_col, import_col = st.columns(2, gap="small")
    with cancel_col:
        if st.button("Cancel", key="import_cancel", width="stretch"):
            _reset_import()
            st.rerun()

    with import_col:
        if st.button(
            f"Import {batch.valid_count} Participants",
            key="import_commit",
            width="stretch",
            type="primary",
            disabled=not batch.ready_to_commit,
        ):
            success, message = import_participants(batch)
            if success:
                _reset_import()
                set_feedback("success", f"✅ {message}")
                st.rerun()
            else:
                st.error(f"❌ {message}")


def render_import_panel():
    """Render the bulk import section of the Register tab."""
    _ensure_import_state()

    st.markdown("### Bulk Import via CSV")
    st.caption("Upload a CSV file to register multiple participants at once (perfect for 50+ people)")

    info_col, template_col = st.columns([3, 1], gap="small")
    with info_col:
        st.info(f"CSV Format Required: your CSV file should have columns: {', '.join(COLUMNS)}")
    with template_col:
        st.download_button(
            "Download Template",
            data=build_template(),
            file_name=TEMPLATE_FILENAME,
            mime="text/csv",
            width="stretch",
        )

    uploaded = st.file_uploader(
        "Upload CSV File",
        type=["csv"],
        key=f"import_uploader_{st.session_state[IMPORT_NONCE_KEY]}",
        help="Maximum file size: 10MB. Supported format: CSV",
    )

    if uploaded is None:
        st.session_state.pop(IMPORT_BATCH_KEY, None)
        st.session_state.pop(IMPORT_SIGNATURE_KEY, None)
        st.session_state.pop(IMPORT_OPEN_PREVIEW_KEY, None)
        return

    signature = _upload_signature(uploaded)
    if st.session_state.get(IMPORT_SIGNATURE_KEY) != signature:
        batch = _parse_upload(uploaded)
        if batch is None:
            return
        st.session_state[IMPORT_BATCH_KEY] = batch
        st.session_state[IMPORT_SIGNATURE_KEY] = signature
        _request_preview()

    batch = st.session_state.get(IMPORT_BATCH_KEY)
    if batch is None:
        return

    if DIALOG_DECORATOR:
        open_preview = _take_preview_request()
        if not open_preview:
            open_preview = st.button(
                f"Review import ({batch.valid_count} valid, {batch.error_count} with errors)",
                key="import_review",
            )
        if not open_preview:
            return

        @DIALOG_DECORATOR("CSV Import Preview", width="large")
        def _dialog():
            _render_preview(batch)

        _dialog()
    else:
        st.markdown("#### CSV Import Preview")
        _render_preview(batch)
