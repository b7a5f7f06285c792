"""Training session routes."""

from fastapi import APIRouter, Request

from ...db.repositories import SessionRepository
from ...errors import NotFoundError
from ...models.session import Session
from ..deps import get_db
from ..schemas import SessionCreate, SessionStatusUpdate

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.get("/{user_id}")
async def list_sessions(request: Request, user_id: str):
    """Sessions where the user is the instructor or the client."""
    sessions = await SessionRepository(get_db(request)).list_for_user(user_id)
    return {"success": True, "sessions": [s.to_dict() for s in sessions]}


@router.post("")
async def create_session(request: Request, body: SessionCreate):
    """Book a session. Availability is not re-checked here."""
    repo = SessionRepository(get_db(request))
    session_id = await repo.create(Session(**body.model_dump()))
    session = await repo.get(session_id)
    return {"success": True, "session": session.to_dict()}


@router.patch("/{session_id}/status")
async def update_session_status(request: Request, session_id: int, body: SessionStatusUpdate):
    repo = SessionRepository(get_db(request))
    if not await repo.update_status(session_id, body.status):
        raise NotFoundError("Session not found")
    session = await repo.get(session_id)
    return {"success": True, "session": session.to_dict()}
