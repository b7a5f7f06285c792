"""Tests for availability-to-free-slot reconciliation."""

import asyncio
from datetime import date

import pytest

from gymsynergy.db.repositories import SessionRepository
from gymsynergy.errors import NotFoundError
from gymsynergy.models.instructor import Availability, TimeSlot, Weekday
from gymsynergy.models.session import Session, SessionStatus
from gymsynergy.services.accounts import AccountService
from gymsynergy.services.availability import (
    AvailabilityService,
    compute_free_slots,
    is_slot_available,
    slots_for_date,
)

MONDAY = date(2024, 6, 3)


def make_session(day=MONDAY, start="09:00", end="10:00", status=SessionStatus.SCHEDULED):
    return Session(
        instructor_id="i1",
        client_id="c1",
        date=day,
        start_time=start,
        end_time=end,
        status=status,
    )


@pytest.fixture
def availability():
    weekly = Availability()
    weekly.add_slot(Weekday.MONDAY, TimeSlot("09:00", "10:00"))
    weekly.add_slot(Weekday.MONDAY, TimeSlot("10:00", "11:00"))
    weekly.add_slot(Weekday.MONDAY, TimeSlot("14:00", "15:00"))
    return weekly


class TestFreeSlots:
    """A slot is taken iff a session on that date has identical start/end."""

    def test_slots_follow_weekday_of_date(self, availability):
        assert len(slots_for_date(availability, MONDAY)) == 3
        assert slots_for_date(availability, date(2024, 6, 4)) == []

    def test_exact_match_marks_slot_unavailable(self, availability):
        slots = compute_free_slots(availability, [make_session()], MONDAY)

        assert [s.available for s in slots] == [False, True, True]

    def test_configured_order_preserved(self, availability):
        slots = compute_free_slots(availability, [], MONDAY)
        assert [s.start for s in slots] == ["09:00", "10:00", "14:00"]

    def test_overlap_without_exact_match_does_not_block(self, availability):
        """09:30-10:30 overlaps two slots but equals neither."""
        slots = compute_free_slots(availability, [make_session(start="09:30", end="10:30")], MONDAY)

        assert all(s.available for s in slots)

    def test_matching_start_only_does_not_block(self):
        slot = TimeSlot("09:00", "10:00")
        assert is_slot_available(slot, [make_session(end="09:45")], MONDAY)

    def test_session_on_other_date_does_not_block(self):
        slot = TimeSlot("09:00", "10:00")
        other_monday = date(2024, 6, 10)
        assert is_slot_available(slot, [make_session(day=other_monday)], MONDAY)

    def test_cancelled_session_still_blocks(self):
        """Session status is not consulted."""
        slot = TimeSlot("09:00", "10:00")
        cancelled = make_session(status=SessionStatus.CANCELLED)
        assert not is_slot_available(slot, [cancelled], MONDAY)

    def test_day_without_slots_yields_empty_list(self):
        assert compute_free_slots(Availability(), [make_session()], MONDAY) == []

    def test_to_dict(self, availability):
        slot = compute_free_slots(availability, [], MONDAY)[0]
        assert slot.to_dict() == {"start": "09:00", "end": "10:00", "available": True}


class TestAvailabilityService:
    """Tests for the database-backed availability service."""

    def test_free_slots_from_database(self, db_path, email_service, instructor_form, availability):
        async def scenario():
            instructor = await AccountService(db_path, email_service).signup(instructor_form)
            service = AvailabilityService(db_path)
            await service.set_availability(instructor.id, availability)

            booked = make_session(start="10:00", end="11:00")
            booked.instructor_id = instructor.id
            await SessionRepository(db_path).create(booked)

            return await service.free_slots(instructor.id, MONDAY)

        slots = asyncio.run(scenario())

        assert [s.available for s in slots] == [True, False, True]

    def test_unknown_instructor(self, db_path):
        service = AvailabilityService(db_path)

        with pytest.raises(NotFoundError):
            asyncio.run(service.free_slots("missing", MONDAY))
