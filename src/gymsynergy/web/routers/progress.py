"""Progress tracking routes."""

from fastapi import APIRouter, Request

from ...db.repositories import ProgressRepository
from ...models.progress import ProgressRecord
from ..deps import get_db
from ..schemas import ProgressCreate

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("/{user_id}")
async def list_progress(request: Request, user_id: str):
    records = await ProgressRepository(get_db(request)).list_for_client(user_id)
    return {"success": True, "progress": [r.to_dict() for r in records]}


@router.post("")
async def record_progress(request: Request, body: ProgressCreate):
    repo = ProgressRepository(get_db(request))
    record = ProgressRecord(
        client_id=body.user_id,
        type=body.type,
        value=body.value,
        unit=body.unit,
        notes=body.notes,
    )
    record.id = await repo.create(record)
    return {"success": True, "progress": record.to_dict()}
