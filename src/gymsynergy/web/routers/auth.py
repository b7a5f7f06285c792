"""Signup and login routes."""

from fastapi import APIRouter, Request

from ...models.instructor import InstructorProfile
from ...services.accounts import AccountService, SignupForm
from ..deps import get_db, get_email_service
from ..schemas import LoginRequest, SignupRequest

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup")
async def signup(request: Request, body: SignupRequest):
    """Register a client or instructor account."""
    specialties = body.specialties
    if isinstance(specialties, str):
        specialties = InstructorProfile.parse_specialties(specialties)

    form = SignupForm(
        email=body.email,
        password=body.password,
        confirm_password=body.confirm_password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
        phone=body.phone,
        demographic=body.demographic.to_model(),
        bio=body.bio,
        specialties=specialties,
    )
    service = AccountService(get_db(request), get_email_service(request))
    user = await service.signup(form)
    return {"success": True, "user": user.to_dict()}


@router.post("/login")
async def login(request: Request, body: LoginRequest):
    service = AccountService(get_db(request), get_email_service(request))
    user = await service.login(body.email, body.password)
    return {"success": True, "user": user.to_dict()}
