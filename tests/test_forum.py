"""Tests for the community forum."""

import asyncio

import pytest

from gymsynergy.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from gymsynergy.services.forum import ForumService


@pytest.fixture
def forum(db_path):
    return ForumService(db_path)


class TestCreatePost:
    def test_tags_normalized(self, forum):
        post = asyncio.run(
            forum.create_post("u1", "  Deadlift form ", "Any tips?", " Strength, ,Form ", "Jane")
        )

        assert post.id is not None
        assert post.title == "Deadlift form"
        assert post.tags == ["strength", "form"]
        assert post.likes == 0

    def test_author_name_defaults_to_anonymous(self, forum):
        post = asyncio.run(forum.create_post("u1", "Hello", "First post"))
        assert post.author_name == "Anonymous"

    @pytest.mark.parametrize("title,content", [("", "body"), ("title", "   ")])
    def test_blank_title_or_content_rejected(self, forum, title, content):
        with pytest.raises(ValidationError, match="fill in both title and content"):
            asyncio.run(forum.create_post("u1", title, content))

    def test_list_posts(self, forum):
        asyncio.run(forum.create_post("u1", "One", "a"))
        asyncio.run(forum.create_post("u2", "Two", "b"))

        posts = asyncio.run(forum.list_posts())

        assert {post.title for post in posts} == {"One", "Two"}


class TestLikes:
    """A user can like a post only once."""

    def test_like_increments_count(self, forum):
        post = asyncio.run(forum.create_post("u1", "Hello", "World"))

        liked = asyncio.run(forum.like_post(post.id, "u2"))

        assert liked.likes == 1

    def test_second_like_by_same_user_rejected(self, forum):
        post = asyncio.run(forum.create_post("u1", "Hello", "World"))
        asyncio.run(forum.like_post(post.id, "u2"))

        with pytest.raises(ConflictError, match="already liked"):
            asyncio.run(forum.like_post(post.id, "u2"))

        assert asyncio.run(forum.posts.get(post.id)).likes == 1

    def test_different_users_can_like(self, forum):
        post = asyncio.run(forum.create_post("u1", "Hello", "World"))
        asyncio.run(forum.like_post(post.id, "u2"))

        liked = asyncio.run(forum.like_post(post.id, "u3"))

        assert liked.likes == 2

    def test_like_missing_post(self, forum):
        with pytest.raises(NotFoundError):
            asyncio.run(forum.like_post(404, "u2"))


class TestDeletePost:
    def test_author_can_delete(self, forum):
        post = asyncio.run(forum.create_post("u1", "Hello", "World"))

        asyncio.run(forum.delete_post(post.id, "u1"))

        assert asyncio.run(forum.posts.get(post.id)) is None

    def test_other_user_cannot_delete(self, forum):
        post = asyncio.run(forum.create_post("u1", "Hello", "World"))

        with pytest.raises(PermissionDeniedError) as exc_info:
            asyncio.run(forum.delete_post(post.id, "u2"))

        assert exc_info.value.status_code == 403
        assert asyncio.run(forum.posts.get(post.id)) is not None
