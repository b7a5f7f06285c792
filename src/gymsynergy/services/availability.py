"""Reconcile an instructor's weekly availability with booked sessions."""

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from ..db.repositories import InstructorProfileRepository, SessionRepository
from ..errors import NotFoundError
from ..models.instructor import Availability, TimeSlot, Weekday
from ..models.session import Session


@dataclass
class SlotAvailability:
    """A configured slot and whether it is still free on a given date."""

    start: str
    end: str
    available: bool

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "available": self.available}


def slots_for_date(availability: Availability, day: date) -> list[TimeSlot]:
    """Configured slots for the weekday of a calendar date."""
    return availability.for_day(Weekday.from_date(day))


def is_slot_available(slot: TimeSlot, sessions: list[Session], day: date) -> bool:
    """A slot is taken only by a session on the same date with identical times.

    Session status is not consulted and overlapping-but-unequal sessions do
    not block the slot.
    """
    for session in sessions:
        if (
            session.date == day
            and session.start_time == slot.start
            and session.end_time == slot.end
        ):
            return False
    return True


def compute_free_slots(
    availability: Availability, sessions: list[Session], day: date
) -> list[SlotAvailability]:
    """Mark each configured slot for `day` as available or taken, in configured order."""
    return [
        SlotAvailability(
            start=slot.start,
            end=slot.end,
            available=is_slot_available(slot, sessions, day),
        )
        for slot in slots_for_date(availability, day)
    ]


class AvailabilityService:
    """Load availability and bookings from the database and reconcile them."""

    def __init__(self, db_path: Path | None = None):
        self.profiles = InstructorProfileRepository(db_path)
        self.sessions = SessionRepository(db_path)

    async def get_availability(self, instructor_id: str) -> Availability:
        profile = await self.profiles.get(instructor_id)
        if profile is None:
            raise NotFoundError("Instructor not found")
        return profile.availability

    async def free_slots(self, instructor_id: str, day: date) -> list[SlotAvailability]:
        """Slots for `day` with their availability."""
        availability = await self.get_availability(instructor_id)
        booked = await self.sessions.list_for_instructor_on(instructor_id, day)
        return compute_free_slots(availability, booked, day)

    async def set_availability(self, instructor_id: str, availability: Availability) -> Availability:
        """Replace the weekly availability. Slots are stored as given."""
        if not await self.profiles.update_availability(instructor_id, availability):
            raise NotFoundError("Instructor not found")
        return availability
