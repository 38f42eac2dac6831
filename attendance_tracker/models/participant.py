"""Participant data model."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Gender(str, Enum):
    """Accepted participant genders."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: str) -> Optional["Gender"]:
        """Return the gender matching value case-insensitively, or None."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class County(str, Enum):
    """Counties a participant can be registered under."""

    NAIROBI = "Nairobi"
    MOMBASA = "Mombasa"
    KISUMU = "Kisumu"
    NAKURU = "Nakuru"
    ELDORET = "Eldoret"
    THIKA = "Thika"
    MALINDI = "Malindi"
    KITALE = "Kitale"
    GARISSA = "Garissa"
    KAKAMEGA = "Kakamega"
    MERU = "Meru"
    NYERI = "Nyeri"
    MACHAKOS = "Machakos"
    KERICHO = "Kericho"
    EMBU = "Embu"
    MIGORI = "Migori"
    BUNGOMA = "Bungoma"
    LAMU = "Lamu"
    NAIVASHA = "Naivasha"
    VOI = "Voi"
    WAJIR = "Wajir"
    MARSABIT = "Marsabit"
    ISIOLO = "Isiolo"
    MANDERA = "Mandera"
    MOYALE = "Moyale"
    KAPENGURIA = "Kapenguria"
    HOMA_BAY = "Homa Bay"
    SIAYA = "Siaya"
    BUSIA = "Busia"
    KILIFI = "Kilifi"
    KWALE = "Kwale"
    TAITA_TAVETA = "Taita Taveta"
    TANA_RIVER = "Tana River"
    SAMBURU = "Samburu"
    TRANS_NZOIA = "Trans Nzoia"
    UASIN_GISHU = "Uasin Gishu"
    ELGEYO_MARAKWET = "Elgeyo Marakwet"
    NANDI = "Nandi"
    BARINGO = "Baringo"
    LAIKIPIA = "Laikipia"
    NYANDUA = "Nyandua"
    KIRINYAGA = "Kirinyaga"
    MURANGA = "Murang'a"
    KIAMBU = "Kiambu"
    TURKANA = "Turkana"
    WEST_POKOT = "West Pokot"
    BOMET = "Bomet"
    KAJIADO = "Kajiado"
    MAKUENI = "Makueni"
    KITUI = "Kitui"

    @classmethod
    def parse(cls, value: str) -> Optional["County"]:
        """Return the county with exactly this name, or None (case-sensitive)."""
        try:
            return cls(value)
        except ValueError:
            return None


# Display order for dropdowns
COUNTIES = [county.value for county in County]


@dataclass
class Participant:
    """A registered participant, keyed by phone number."""

    phone: str
    name: str
    gender: Gender
    county: County
    attendance_count: int = 0

    def __post_init__(self):
        """Validate participant data after initialization."""
        if not self.phone or not self.phone.strip():
            raise ValueError("Phone number cannot be empty")

        if not self.name or not self.name.strip():
            raise ValueError("Name cannot be empty")

        if not isinstance(self.gender, Gender):
            raise ValueError(f"Gender must be a Gender, got: {self.gender!r}")

        if not isinstance(self.county, County):
            raise ValueError(f"County must be a County, got: {self.county!r}")

        if isinstance(self.attendance_count, bool) or not isinstance(self.attendance_count, int):
            raise ValueError("Attendance count must be an integer")

        if self.attendance_count < 0:
            raise ValueError("Attendance count cannot be negative")

    def record_attendance(self, sessions: int) -> None:
        """
        Add attended sessions to the running count.

        Args:
            sessions: Number of sessions attended (must be positive)

        Raises:
            ValueError: If sessions is not a positive integer
        """
        if isinstance(sessions, bool) or not isinstance(sessions, int) or sessions <= 0:
            raise ValueError("Number of sessions must be greater than 0")
        self.attendance_count += sessions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phone": self.phone,
            "name": self.name,
            "gender": self.gender.value,
            "county": self.county.value,
            "attendance_count": self.attendance_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """
        Build a participant from its stored JSON form.

        Raises:
            ValueError: If a field is missing or holds an unknown value
        """
        for key in ("phone", "name", "gender", "county"):
            if key not in data:
                raise ValueError(f"Missing required participant field: {key}")

        gender = Gender.parse(data["gender"])
        if gender is None:
            raise ValueError(f"Invalid gender: {data['gender']}")

        county = County.parse(data["county"])
        if county is None:
            raise ValueError(f"Invalid county: {data['county']}")

        return cls(
            phone=data["phone"],
            name=data["name"],
            gender=gender,
            county=county,
            attendance_count=data.get("attendance_count", 0),
        )
