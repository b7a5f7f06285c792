"""Workout video routes."""

from fastapi import APIRouter, Request

from ...db.repositories import VideoRepository
from ...errors import NotFoundError
from ...models.content import Video
from ..deps import get_db
from ..schemas import VideoCreate

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("")
async def list_videos(request: Request, instructorId: str | None = None):
    """All videos newest first, optionally for one instructor."""
    videos = await VideoRepository(get_db(request)).list_all(instructor_id=instructorId)
    return {"success": True, "videos": [v.to_dict() for v in videos]}


@router.post("")
async def create_video(request: Request, body: VideoCreate):
    repo = VideoRepository(get_db(request))
    video_id = await repo.create(Video(**body.model_dump()))
    video = await repo.get(video_id)
    return {"success": True, "video": video.to_dict()}


@router.delete("/{video_id}")
async def delete_video(request: Request, video_id: int):
    if not await VideoRepository(get_db(request)).delete(video_id):
        raise NotFoundError("Video not found")
    return {"success": True}
