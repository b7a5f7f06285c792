"""User account routes."""

from fastapi import APIRouter, Request

from ...db.repositories import UserRepository
from ...errors import NotFoundError
from ...services.accounts import AccountService
from ..deps import get_db, get_email_service
from ..schemas import DeleteAccountRequest, UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}")
async def get_user(request: Request, user_id: str):
    user = await UserRepository(get_db(request)).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return {"success": True, "user": user.to_dict()}


@router.delete("/{user_id}")
async def delete_user(request: Request, user_id: str, body: DeleteAccountRequest):
    """Delete an account. The body must carry `{"confirmation": "DELETE"}`."""
    service = AccountService(get_db(request), get_email_service(request))
    await service.delete_account(user_id, body.confirmation)
    return {"success": True}


@router.patch("/{user_id}")
async def update_user(request: Request, user_id: str, body: UserUpdate):
    """Change name, phone or profile image. Omitted or null fields keep their values."""
    repo = UserRepository(get_db(request))
    user = await repo.get(user_id)
    if user is None:
        raise NotFoundError("User not found")

    for name, value in body.model_dump(exclude_none=True).items():
        setattr(user, name, value)
    await repo.update(user)
    return {"success": True, "user": (await repo.get(user_id)).to_dict()}
