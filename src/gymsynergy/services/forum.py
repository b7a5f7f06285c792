"""Community forum posts and likes."""

from pathlib import Path

from ..db.repositories import ForumRepository
from ..errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from ..models.forum import ForumPost


class ForumService:
    def __init__(self, db_path: Path | None = None):
        self.posts = ForumRepository(db_path)

    async def create_post(
        self,
        author_id: str,
        title: str,
        content: str,
        tags: str = "",
        author_name: str = "",
    ) -> ForumPost:
        """Create a post from raw form input.

        Title and content are trimmed and must be non-empty; tags are a
        comma-separated string.
        """
        title = title.strip()
        content = content.strip()
        if not title or not content:
            raise ValidationError("Please fill in both title and content.")

        post = ForumPost(
            title=title,
            content=content,
            author_id=author_id,
            author_name=author_name or "Anonymous",
            tags=ForumPost.parse_tags(tags),
        )
        post.id = await self.posts.create(post)
        return await self.posts.get(post.id)

    async def list_posts(self) -> list[ForumPost]:
        return await self.posts.list_all()

    async def like_post(self, post_id: int, user_id: str) -> ForumPost:
        """Like a post once per user."""
        if await self.posts.get(post_id) is None:
            raise NotFoundError("Post not found")
        if not await self.posts.add_like(post_id, user_id):
            raise ConflictError("You've already liked this post.")
        return await self.posts.get(post_id)

    async def delete_post(self, post_id: int, user_id: str) -> None:
        """Delete a post; only its author may do so."""
        post = await self.posts.get(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if post.author_id != user_id:
            raise PermissionDeniedError("You can only delete your own posts.")
        await self.posts.delete(post_id)
