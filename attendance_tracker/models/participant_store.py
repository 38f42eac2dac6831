"""Ordered participant collection."""
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

from attendance_tracker.models.participant import Participant
from attendance_tracker.utils.exceptions import DuplicateParticipantError, ParticipantNotFoundError


class ParticipantStore:
    """
    All registered participants in registration order.

    Phone numbers are unique within a store. Records are only ever appended;
    attendance updates mutate the stored Participant in place.
    """

    def __init__(self, participants: Optional[Iterable[Participant]] = None):
        self._participants: List[Participant] = []
        self._by_phone: Dict[str, Participant] = {}
        if participants:
            self.extend(participants)

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(self._participants)

    def __contains__(self, phone: object) -> bool:
        return phone in self._by_phone

    def contains(self, phone: str) -> bool:
        """Check whether a phone number is already registered."""
        return phone in self._by_phone

    def get(self, phone: str) -> Optional[Participant]:
        """Return the participant registered under phone, or None."""
        return self._by_phone.get(phone)

    def require(self, phone: str) -> Participant:
        """
        Return the participant registered under phone.

        Raises:
            ParticipantNotFoundError: If phone isn't registered
        """
        participant = self._by_phone.get(phone)
        if participant is None:
            raise ParticipantNotFoundError(phone)
        return participant

    def phones(self) -> Set[str]:
        return set(self._by_phone)

    def add(self, participant: Participant) -> None:
        """
        Append one participant.

        Raises:
            DuplicateParticipantError: If the phone number is already registered
        """
        if participant.phone in self._by_phone:
            raise DuplicateParticipantError(participant.phone)
        self._participants.append(participant)
        self._by_phone[participant.phone] = participant

    def extend(self, participants: Iterable[Participant]) -> None:
        """
        Append participants in order, all or nothing.

        Raises:
            DuplicateParticipantError: If any phone collides with the store or
                repeats within participants; the store is left unchanged
        """
        incoming = list(participants)
        seen: Set[str] = set()
        for participant in incoming:
            if participant.phone in self._by_phone or participant.phone in seen:
                raise DuplicateParticipantError(participant.phone)
            seen.add(participant.phone)

        for participant in incoming:
            self._participants.append(participant)
            self._by_phone[participant.phone] = participant

    def copy(self) -> "ParticipantStore":
        """Return an independent store holding copies of every participant."""
        return ParticipantStore(
            Participant.from_dict(p.to_dict()) for p in self._participants
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"participants": [p.to_dict() for p in self._participants]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantStore":
        """
        Build a store from the JSON file layout.

        Raises:
            ValueError: If a record is malformed
            DuplicateParticipantError: If the file repeats a phone number
        """
        if not isinstance(data, dict):
            raise ValueError("Participant store must be a JSON object")
        records = data.get("participants", [])
        if not isinstance(records, list):
            raise ValueError("'participants' must be a list")
        return cls(Participant.from_dict(record) for record in records)
