"""Community forum routes."""

from fastapi import APIRouter, Request

from ...services.forum import ForumService
from ..deps import get_db
from ..schemas import ForumLikeRequest, ForumPostCreate

router = APIRouter(prefix="/api/forum", tags=["forum"])


@router.get("/posts")
async def list_posts(request: Request):
    """Posts newest first."""
    posts = await ForumService(get_db(request)).list_posts()
    return {"success": True, "posts": [p.to_dict() for p in posts]}


@router.post("/posts")
async def create_post(request: Request, body: ForumPostCreate):
    post = await ForumService(get_db(request)).create_post(
        author_id=body.author_id,
        title=body.title,
        content=body.content,
        tags=body.tags,
        author_name=body.author_name,
    )
    return {"success": True, "post": post.to_dict()}


@router.post("/posts/{post_id}/like")
async def like_post(request: Request, post_id: int, body: ForumLikeRequest):
    post = await ForumService(get_db(request)).like_post(post_id, body.user_id)
    return {"success": True, "post": post.to_dict()}


@router.delete("/posts/{post_id}")
async def delete_post(request: Request, post_id: int, userId: str):
    """Delete a post. `userId` must be the post's author."""
    await ForumService(get_db(request)).delete_post(post_id, userId)
    return {"success": True}
