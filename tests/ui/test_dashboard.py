"""Tests for dashboard and import preview UI helpers."""
from unittest.mock import MagicMock, patch

from attendance_tracker.models.import_batch import ImportBatchResult
from attendance_tracker.models.participant import County, Gender, Participant
from attendance_tracker.models.participant_store import ParticipantStore
from attendance_tracker.services.stats_service import DashboardStats
from attendance_tracker.ui.dashboard import _county_rows_html, _percentage_caption
from attendance_tracker.ui.html_utils import FEEDBACK_KEY, html_block, set_feedback, show_feedback, stat_card_html
from attendance_tracker.ui.import_panel import (
    IMPORT_BATCH_KEY,
    IMPORT_NONCE_KEY,
    IMPORT_OPEN_PREVIEW_KEY,
    IMPORT_SIGNATURE_KEY,
    _reset_import,
    participant_rows,
    preview_summary,
    render_import_panel,
)


def make_participant(phone="+254700000000", name="John Doe"):
    return Participant(phone=phone, name=name, gender=Gender.MALE, county=County.NAIROBI, attendance_count=2)


class TestStatCard:
    """Tests for stat card rendering."""

    def test_card_contains_title_and_value(self):
        html = stat_card_html("Total Participants", 42)

        assert "Total Participants" in html
        assert ">42<" in html

    def test_caption_only_when_given(self):
        assert "stat-card__caption" not in stat_card_html("Males", 3)
        assert "60% of participants" in stat_card_html("Males", 3, caption=_percentage_caption(60))

    def test_unknown_accent_falls_back_to_blue(self):
        assert stat_card_html("X", 1, accent="nope") == stat_card_html("X", 1, accent="blue")

    def test_values_are_escaped(self):
        html = stat_card_html("<b>", "<script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_html_block_has_no_indented_lines(self):
        html = html_block("""
            <div>
                <span>x</span>
            </div>
        """)

        assert all(not line.startswith(" ") for line in html.splitlines())


class TestCountyRows:
    """Tests for the top counties list."""

    def test_empty_message(self):
        assert "No participants registered yet" in _county_rows_html(DashboardStats())

    def test_rows_ranked(self):
        stats = DashboardStats(total_participants=3, county_counts={"Kisumu": 1, "Nairobi": 2})

        html = _county_rows_html(stats)

        assert html.index("Nairobi") < html.index("Kisumu")
        assert "2 participants" in html
        assert "1 participant<" in html


class TestImportPreview:
    """Tests for import preview helpers."""

    def test_participant_rows(self):
        rows = participant_rows([make_participant()])

        assert rows == [{
            "Phone": "+254700000000",
            "Name": "John Doe",
            "Gender": "male",
            "County": "Nairobi",
            "Sessions": 2,
        }]

    def test_preview_summary_plural(self):
        batch = ImportBatchResult(candidates=[make_participant("1"), make_participant("2")])

        assert preview_summary(batch) == "Review the participants before importing. 2 valid entries found."

    def test_preview_summary_singular(self):
        batch = ImportBatchResult(candidates=[make_participant()])

        assert preview_summary(batch).endswith("1 valid entry found.")

    @patch('attendance_tracker.ui.import_panel.st')
    def test_reset_import_clears_preview_and_uploader(self, mock_st):
        mock_st.session_state = {
            IMPORT_BATCH_KEY: ImportBatchResult(),
            IMPORT_SIGNATURE_KEY: ("a.csv", 10),
            IMPORT_NONCE_KEY: 2,
        }

        _reset_import()

        assert IMPORT_BATCH_KEY not in mock_st.session_state
        assert IMPORT_SIGNATURE_KEY not in mock_st.session_state
        assert mock_st.session_state[IMPORT_NONCE_KEY] == 3
        assert IMPORT_OPEN_PREVIEW_KEY not in mock_st.session_state


def recording_dialog(opened):
    """Stand-in for st.dialog that records each time the dialog is shown."""
    def decorator(title, width=None):
        def wrap(fn):
            def show():
                opened.append(title)
            return show
        return wrap
    return decorator


class TestImportPanelDialog:
    """The preview dialog opens once per upload and on request."""

    def setup_mock_st(self, mock_st):
        mock_st.session_state = {}
        mock_st.columns.return_value = (MagicMock(), MagicMock())
        uploaded = MagicMock()
        uploaded.name = "participants.csv"
        uploaded.size = 40
        uploaded.getvalue.return_value = b"+254700000000,John Doe,male,Nairobi"
        mock_st.file_uploader.return_value = uploaded

    @patch('attendance_tracker.ui.import_panel.get_participant_store', return_value=ParticipantStore())
    @patch('attendance_tracker.ui.import_panel.st')
    def test_dismissed_dialog_stays_closed(self, mock_st, _store):
        self.setup_mock_st(mock_st)
        mock_st.button.return_value = False
        opened = []

        with patch('attendance_tracker.ui.import_panel.DIALOG_DECORATOR', recording_dialog(opened)):
            render_import_panel()
            render_import_panel()
            render_import_panel()

        assert opened == ["CSV Import Preview"]
        assert mock_st.session_state[IMPORT_BATCH_KEY].valid_count == 1

    @patch('attendance_tracker.ui.import_panel.get_participant_store', return_value=ParticipantStore())
    @patch('attendance_tracker.ui.import_panel.st')
    def test_review_button_reopens_dialog(self, mock_st, _store):
        self.setup_mock_st(mock_st)
        mock_st.button.return_value = False
        opened = []

        with patch('attendance_tracker.ui.import_panel.DIALOG_DECORATOR', recording_dialog(opened)):
            render_import_panel()
            render_import_panel()
            mock_st.button.return_value = True
            render_import_panel()

        assert len(opened) == 2
        assert mock_st.button.call_args.kwargs["key"] == "import_review"

    @patch('attendance_tracker.ui.import_panel.st')
    def test_removing_upload_clears_preview(self, mock_st):
        self.setup_mock_st(mock_st)
        mock_st.file_uploader.return_value = None
        mock_st.session_state.update({
            IMPORT_BATCH_KEY: ImportBatchResult(),
            IMPORT_SIGNATURE_KEY: ("a.csv", 10),
            IMPORT_OPEN_PREVIEW_KEY: True,
        })

        render_import_panel()

        assert IMPORT_BATCH_KEY not in mock_st.session_state
        assert IMPORT_OPEN_PREVIEW_KEY not in mock_st.session_state


class TestFeedback:
    """Tests for queued feedback messages."""

    @patch('attendance_tracker.ui.html_utils.st')
    def test_feedback_shown_once(self, mock_st):
        mock_st.session_state = {}

        set_feedback("success", "Saved")
        show_feedback()
        show_feedback()

        mock_st.success.assert_called_once_with("Saved")
        assert FEEDBACK_KEY not in mock_st.session_state

    @patch('attendance_tracker.ui.html_utils.st')
    def test_unknown_level_shown_as_info(self, mock_st):
        mock_st.session_state = {FEEDBACK_KEY: ("other", "Heads up")}

        show_feedback()

        mock_st.info.assert_called_once_with("Heads up")
