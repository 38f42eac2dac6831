"""Unit tests for stats_service."""
from attendance_tracker.models.participant import County, Gender, Participant
from attendance_tracker.models.participant_store import ParticipantStore
from attendance_tracker.services.stats_service import compute_dashboard_stats


def participant(phone, gender, county, sessions=0):
    return Participant(phone=phone, name=f"P{phone}", gender=gender, county=county, attendance_count=sessions)


class TestDashboardStats:
    """Test compute_dashboard_stats."""

    def test_empty_store(self):
        stats = compute_dashboard_stats(ParticipantStore())

        assert stats.total_participants == 0
        assert stats.total_sessions == 0
        assert stats.male_percentage == 0
        assert stats.female_percentage == 0
        assert stats.top_counties() == []

    def test_totals_and_gender_split(self):
        store = ParticipantStore([
            participant("1", Gender.MALE, County.NAIROBI, 3),
            participant("2", Gender.FEMALE, County.NAIROBI, 1),
            participant("3", Gender.FEMALE, County.MOMBASA, 0),
        ])

        stats = compute_dashboard_stats(store)

        assert stats.total_participants == 3
        assert stats.total_sessions == 4
        assert (stats.male_count, stats.female_count) == (1, 2)
        assert (stats.male_percentage, stats.female_percentage) == (33, 67)

    def test_half_rounds_up(self):
        store = ParticipantStore([
            participant(str(i), Gender.MALE if i == 0 else Gender.FEMALE, County.LAMU) for i in range(8)
        ])

        stats = compute_dashboard_stats(store)

        # 1/8 = 12.5%
        assert stats.male_percentage == 13

    def test_top_counties_limited_and_ranked(self):
        counties = [County.KISUMU] * 3 + [County.NAKURU] * 2 + [
            County.MERU, County.EMBU, County.VOI, County.LAMU, County.BUSIA,
        ]
        store = ParticipantStore(
            participant(str(i), Gender.MALE, county) for i, county in enumerate(counties)
        )

        top = compute_dashboard_stats(store).top_counties()

        assert top[:2] == [("Kisumu", 3), ("Nakuru", 2)]
        assert len(top) == 5
        # ties keep first-seen order
        assert [name for name, _ in top[2:]] == ["Meru", "Embu", "Voi"]
