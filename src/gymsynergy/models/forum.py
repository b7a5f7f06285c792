"""Community forum models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ForumPost:
    """A community forum post."""

    title: str
    content: str
    author_id: str
    author_name: str = "Anonymous"
    tags: list[str] = field(default_factory=list)
    likes: int = 0
    comments: int = 0
    id: int | None = None
    created_at: datetime | None = None

    @staticmethod
    def parse_tags(raw: str) -> list[str]:
        """Split comma-separated tags, trimmed and lower-cased, dropping empties."""
        return [tag.strip().lower() for tag in raw.split(",") if tag.strip()]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author_id": self.author_id,
            "author_name": self.author_name,
            "tags": self.tags,
            "likes": self.likes,
            "comments": self.comments,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
