"""Instructor profile, weekly availability and fee models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from ..errors import ValidationError


class Weekday(str, Enum):
    """Days of the week, keyed the way availability is stored."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def parse(cls, name: str) -> "Weekday":
        """Weekday from a case-insensitive name ("Monday", "monday")."""
        try:
            return cls(name.lower())
        except ValueError:
            raise ValidationError(f"Invalid weekday: {name}") from None

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        """Weekday of a calendar date."""
        return list(cls)[day.weekday()]


DEFAULT_SLOT_START = "09:00"
DEFAULT_SLOT_END = "17:00"


@dataclass
class TimeSlot:
    """A recurring time-of-day window.

    Start and end are stored as entered ("09:00"). Nothing checks that
    start precedes end or that slots on the same day do not overlap.
    """

    start: str = DEFAULT_SLOT_START
    end: str = DEFAULT_SLOT_END

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: dict) -> "TimeSlot":
        return cls(start=data["start"], end=data["end"])


@dataclass
class Availability:
    """Weekly recurring availability: weekday -> list of time slots."""

    slots: dict[Weekday, list[TimeSlot]] = field(
        default_factory=lambda: {day: [] for day in Weekday}
    )

    def for_day(self, day: Weekday) -> list[TimeSlot]:
        return self.slots.get(day, [])

    def add_slot(self, day: Weekday, slot: TimeSlot | None = None) -> TimeSlot:
        """Append a slot (09:00-17:00 unless given) to a weekday."""
        slot = slot or TimeSlot()
        self.slots.setdefault(day, []).append(slot)
        return slot

    def remove_slot(self, day: Weekday, index: int) -> None:
        """Remove the slot at a position; out-of-range indexes are ignored."""
        day_slots = self.slots.get(day, [])
        self.slots[day] = [s for i, s in enumerate(day_slots) if i != index]

    def clear(self, day: Weekday) -> None:
        self.slots[day] = []

    def to_dict(self) -> dict:
        """Convert to the stored weekday map."""
        return {
            day.value: [slot.to_dict() for slot in self.slots.get(day, [])]
            for day in Weekday
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "Availability":
        """Create from a weekday map; missing weekdays become empty."""
        availability = cls()
        for key, slots in (data or {}).items():
            availability.slots[Weekday.parse(key)] = [TimeSlot.from_dict(s) for s in slots]
        return availability


@dataclass
class InstructorFees:
    """Prices an instructor charges, plus the platform's cut."""

    session_fee: float = 0.0
    video_fee: float = 0.0
    workout_plan_fee: float = 0.0
    platform_commission_rate: float = 0.0

    def to_dict(self) -> dict:
        return {
            "session_fee": self.session_fee,
            "video_fee": self.video_fee,
            "workout_plan_fee": self.workout_plan_fee,
            "platform_commission_rate": self.platform_commission_rate,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "InstructorFees":
        data = data or {}
        return cls(
            session_fee=data.get("session_fee") or 0.0,
            video_fee=data.get("video_fee") or 0.0,
            workout_plan_fee=data.get("workout_plan_fee") or 0.0,
            platform_commission_rate=data.get("platform_commission_rate") or 0.0,
        )


@dataclass
class InstructorStats:
    """Display counters shown on an instructor's public page."""

    rating: float = 0.0
    review_count: int = 0
    total_clients: int = 0
    total_sessions: int = 0

    def to_dict(self) -> dict:
        return {
            "rating": self.rating,
            "review_count": self.review_count,
            "total_clients": self.total_clients,
            "total_sessions": self.total_sessions,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "InstructorStats":
        data = data or {}
        return cls(
            rating=data.get("rating", 0.0),
            review_count=data.get("review_count", 0),
            total_clients=data.get("total_clients", 0),
            total_sessions=data.get("total_sessions", 0),
        )


@dataclass
class InstructorProfile:
    """Public profile, schedule and pricing of an instructor."""

    user_id: str
    bio: str = ""
    specialties: list[str] = field(default_factory=list)
    verified: bool = False
    availability: Availability = field(default_factory=Availability)
    fees: InstructorFees = field(default_factory=InstructorFees)
    stats: InstructorStats = field(default_factory=InstructorStats)
    updated_at: datetime | None = None

    @staticmethod
    def parse_specialties(raw: str) -> list[str]:
        """Split a comma-separated specialties field."""
        return [s.strip() for s in raw.split(",") if s.strip()]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "bio": self.bio,
            "specialties": self.specialties,
            "verified": self.verified,
            "availability": self.availability.to_dict(),
            "fees": self.fees.to_dict(),
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict, updated_at: datetime | None = None) -> "InstructorProfile":
        return cls(
            user_id=data["user_id"],
            bio=data.get("bio", ""),
            specialties=data.get("specialties", []),
            verified=bool(data.get("verified", False)),
            availability=Availability.from_dict(data.get("availability")),
            fees=InstructorFees.from_dict(data.get("fees")),
            stats=InstructorStats.from_dict(data.get("stats")),
            updated_at=updated_at,
        )
