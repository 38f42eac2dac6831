"""Dashboard statistics."""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from attendance_tracker.models.participant import Gender, Participant

TOP_COUNTY_LIMIT = 5


def _percentage(part: int, total: int) -> int:
    """Whole-number percentage rounded half up; 0 when total is 0."""
    if total == 0:
        return 0
    return int(part * 100 / total + 0.5)


@dataclass
class DashboardStats:
    """Headline numbers shown on the dashboard."""

    total_participants: int = 0
    male_count: int = 0
    female_count: int = 0
    total_sessions: int = 0
    county_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def male_percentage(self) -> int:
        return _percentage(self.male_count, self.total_participants)

    @property
    def female_percentage(self) -> int:
        return _percentage(self.female_count, self.total_participants)

    def top_counties(self, limit: int = TOP_COUNTY_LIMIT) -> List[Tuple[str, int]]:
        """
        Counties with the most participants.

        Ties keep the order in which the county first appeared.
        """
        ranked = sorted(self.county_counts.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]


def compute_dashboard_stats(participants: Iterable[Participant]) -> DashboardStats:
    """Aggregate a store (or any participant iterable) into DashboardStats."""
    stats = DashboardStats()
    counties: Counter = Counter()

    for participant in participants:
        stats.total_participants += 1
        if participant.gender is Gender.MALE:
            stats.male_count += 1
        elif participant.gender is Gender.FEMALE:
            stats.female_count += 1
        stats.total_sessions += participant.attendance_count
        counties[participant.county.value] += 1

    stats.county_counts = dict(counties)
    return stats
