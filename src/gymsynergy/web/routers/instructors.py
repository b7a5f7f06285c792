"""Instructor directory, availability and client roster routes."""

from datetime import date

from fastapi import APIRouter, Request

from ...db.repositories import ClientProfileRepository, InstructorProfileRepository, UserRepository
from ...errors import NotFoundError
from ...models.instructor import Availability, InstructorProfile
from ...models.user import UserRole
from ...services.availability import AvailabilityService
from ..deps import get_db
from ..schemas import AvailabilityUpdate, InstructorProfileUpdate

router = APIRouter(prefix="/api/instructors", tags=["instructors"])


@router.get("")
async def list_instructors(request: Request):
    """Instructor accounts with their public profiles."""
    db_path = get_db(request)
    users = await UserRepository(db_path).list_all(role=UserRole.INSTRUCTOR.value)
    profiles = {p.user_id: p for p in await InstructorProfileRepository(db_path).list_all()}

    instructors = []
    for user in users:
        profile = profiles.get(user.id)
        instructors.append(
            {**user.to_dict(), "profile": profile.to_dict() if profile else None}
        )
    return {"success": True, "instructors": instructors}


@router.get("/{instructor_id}")
async def get_instructor(request: Request, instructor_id: str):
    db_path = get_db(request)
    user = await UserRepository(db_path).get(instructor_id)
    profile = await InstructorProfileRepository(db_path).get(instructor_id)
    if user is None or profile is None:
        raise NotFoundError("Instructor not found")
    return {"success": True, "instructor": {**user.to_dict(), "profile": profile.to_dict()}}


@router.patch("/{instructor_id}")
async def update_instructor(request: Request, instructor_id: str, body: InstructorProfileUpdate):
    """Edit the public bio and specialties."""
    repo = InstructorProfileRepository(get_db(request))
    profile = await repo.get(instructor_id)
    if profile is None:
        raise NotFoundError("Instructor not found")

    if body.bio is not None:
        profile.bio = body.bio
    if body.specialties is not None:
        specialties = body.specialties
        if isinstance(specialties, str):
            specialties = InstructorProfile.parse_specialties(specialties)
        profile.specialties = specialties
    await repo.update(profile)
    return {"success": True, "profile": (await repo.get(instructor_id)).to_dict()}


@router.get("/{instructor_id}/clients")
async def list_clients(request: Request, instructor_id: str):
    """Clients linked to an instructor, with their account details."""
    db_path = get_db(request)
    users = UserRepository(db_path)
    clients = []
    for profile in await ClientProfileRepository(db_path).list_by_instructor(instructor_id):
        user = await users.get(profile.user_id)
        clients.append(
            {**(user.to_dict() if user else {"id": profile.user_id}), "profile": profile.to_dict()}
        )
    return {"success": True, "clients": clients}


@router.get("/{instructor_id}/availability")
async def get_availability(request: Request, instructor_id: str, date: date | None = None):
    """Weekly availability; with `date`, also each slot's free/taken state."""
    service = AvailabilityService(get_db(request))
    availability = await service.get_availability(instructor_id)
    response = {"success": True, "availability": availability.to_dict()}
    if date is not None:
        slots = await service.free_slots(instructor_id, date)
        response["date"] = date.isoformat()
        response["slots"] = [s.to_dict() for s in slots]
    return response


@router.put("/{instructor_id}/availability")
async def update_availability(request: Request, instructor_id: str, body: AvailabilityUpdate):
    """Replace the weekly availability map."""
    availability = Availability.from_dict(
        {day: [slot.model_dump() for slot in slots] for day, slots in body.availability.items()}
    )
    service = AvailabilityService(get_db(request))
    await service.set_availability(instructor_id, availability)
    return {"success": True, "availability": availability.to_dict()}
