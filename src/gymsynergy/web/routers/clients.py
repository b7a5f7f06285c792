"""Client profile routes."""

from fastapi import APIRouter, Request

from ...db.repositories import ClientProfileRepository
from ...errors import NotFoundError
from ...services.onboarding import OnboardingService
from ..deps import get_db
from ..schemas import ClientProfileCreate, ClientStatusUpdate

router = APIRouter(prefix="/api", tags=["clients"])


@router.post("/create-client-profile")
async def create_client_profile(request: Request, body: ClientProfileCreate):
    """Store intake details, compute BMI and record starting measurements."""
    service = OnboardingService(get_db(request))
    profile = await service.create_client_profile(
        body.user_id,
        body.demographic.to_model(),
        body.health.to_model(),
        body.measurements,
    )
    return {"success": True, "profile": profile.to_dict()}


@router.patch("/clients/{client_id}/status")
async def update_client_status(request: Request, client_id: str, body: ClientStatusUpdate):
    """Mark a client active or inactive."""
    repo = ClientProfileRepository(get_db(request))
    if not await repo.set_status(client_id, body.status):
        raise NotFoundError("Client not found")
    profile = await repo.get(client_id)
    return {"success": True, "profile": profile.to_dict()}
