"""Tests for Participant model."""
import pytest

from attendance_tracker.models.participant import COUNTIES, County, Gender, Participant


def make_participant(**overrides):
    fields = {
        "phone": "+254700000000",
        "name": "John Doe",
        "gender": Gender.MALE,
        "county": County.NAIROBI,
    }
    fields.update(overrides)
    return Participant(**fields)


class TestParticipantValidation:
    """Tests for participant data validation."""

    def test_create_valid_participant(self):
        participant = make_participant()

        assert participant.phone == "+254700000000"
        assert participant.attendance_count == 0

    def test_empty_phone_raises_error(self):
        with pytest.raises(ValueError, match="Phone number cannot be empty"):
            make_participant(phone="  ")

    def test_empty_name_raises_error(self):
        with pytest.raises(ValueError, match="Name cannot be empty"):
            make_participant(name="")

    def test_raw_gender_string_rejected(self):
        """Gender must already be converted to the enum."""
        with pytest.raises(ValueError, match="Gender must be a Gender"):
            make_participant(gender="male")

    def test_raw_county_string_rejected(self):
        with pytest.raises(ValueError, match="County must be a County"):
            make_participant(county="Nairobi")

    def test_negative_attendance_raises_error(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            make_participant(attendance_count=-1)


class TestRecordAttendance:
    """Tests for attendance increments."""

    def test_increments_count(self):
        participant = make_participant(attendance_count=2)

        participant.record_attendance(3)

        assert participant.attendance_count == 5

    @pytest.mark.parametrize("sessions", [0, -2, True])
    def test_rejects_non_positive_sessions(self, sessions):
        participant = make_participant()

        with pytest.raises(ValueError, match="greater than 0"):
            participant.record_attendance(sessions)

        assert participant.attendance_count == 0


class TestParsing:
    """Tests for enum parsing and serialization."""

    def test_gender_parse_is_case_insensitive(self):
        assert Gender.parse("Male") is Gender.MALE
        assert Gender.parse("FEMALE") is Gender.FEMALE
        assert Gender.parse("other") is None

    def test_county_parse_is_case_sensitive(self):
        assert County.parse("Nairobi") is County.NAIROBI
        assert County.parse("nairobi") is None

    def test_county_list_keeps_display_names(self):
        assert len(COUNTIES) == 50
        assert "Homa Bay" in COUNTIES
        assert "Murang'a" in COUNTIES

    def test_from_dict_converts_strings(self):
        participant = Participant.from_dict({
            "phone": "+254700000001",
            "name": "Jane Smith",
            "gender": "female",
            "county": "Mombasa",
            "attendance_count": 4,
        })

        assert participant.gender is Gender.FEMALE
        assert participant.county is County.MOMBASA
        assert participant.attendance_count == 4

    def test_from_dict_defaults_attendance_to_zero(self):
        participant = Participant.from_dict({
            "phone": "+254700000001",
            "name": "Jane Smith",
            "gender": "female",
            "county": "Mombasa",
        })

        assert participant.attendance_count == 0

    def test_from_dict_missing_field_raises_error(self):
        with pytest.raises(ValueError, match="Missing required participant field: county"):
            Participant.from_dict({"phone": "1", "name": "A", "gender": "male"})

    def test_from_dict_unknown_county_raises_error(self):
        with pytest.raises(ValueError, match="Invalid county"):
            Participant.from_dict({"phone": "1", "name": "A", "gender": "male", "county": "Atlantis"})

    def test_to_dict_uses_plain_strings(self):
        assert make_participant().to_dict() == {
            "phone": "+254700000000",
            "name": "John Doe",
            "gender": "male",
            "county": "Nairobi",
            "attendance_count": 0,
        }
