"""Tests for PostService mutations and the per-user post cache."""

from __future__ import annotations

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from postboard.core.exceptions import NotFoundException, ValidationFailure
from postboard.features.posts.models import Comment, Like
from postboard.features.posts.service import PostService, user_posts_cache_key


class RecordingCache:
    """Cache wrapper that records every call."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.calls: list[tuple[str, str]] = []

    async def get(self, key):
        self.calls.append(("get", key))
        return await self.inner.get(key)

    async def set(self, key, value, ttl):
        self.calls.append(("set", key))
        await self.inner.set(key, value, ttl)

    async def remove(self, key):
        self.calls.append(("remove", key))
        await self.inner.remove(key)


@pytest.fixture
def recording_cache(memory_cache) -> RecordingCache:
    return RecordingCache(memory_cache)


@pytest.fixture
def recorded_post_service(db_session, recording_cache, clock) -> PostService:
    return PostService(db_session, recording_cache, clock=clock)


async def test_create_post_persists_with_timestamps(post_service, make_user, clock):
    user = await make_user("alice")

    post = await post_service.create_post("hello world", user.id)

    assert post.id is not None
    assert post.content == "hello world"
    assert post.user_id == user.id
    assert post.created_at == clock()
    assert post.updated_at is None
    assert post.like_count == 0


async def test_created_post_visible_after_cached_read(post_service, make_user, memory_cache):
    user = await make_user("alice")
    assert await post_service.get_user_posts(user.id) == []
    assert await memory_cache.get(user_posts_cache_key(user.id)) == []

    post = await post_service.create_post("fresh", user.id)

    posts = await post_service.get_user_posts(user.id)
    assert [p.id for p in posts] == [post.id]


async def test_user_posts_are_newest_first(post_service, make_user, clock):
    user = await make_user("alice")
    first = await post_service.create_post("first", user.id)
    clock.advance(minutes=1)
    second = await post_service.create_post("second", user.id)

    posts = await post_service.get_user_posts(user.id)

    assert [p.id for p in posts] == [second.id, first.id]


async def test_user_posts_only_include_owner(post_service, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await post_service.create_post("from bob", bob.id)

    assert await post_service.get_user_posts(alice.id) == []


async def test_update_is_visible_after_cached_read(post_service, make_user, clock):
    user = await make_user("alice")
    post = await post_service.create_post("draft", user.id)
    await post_service.get_user_posts(user.id)

    clock.advance(minutes=5)
    updated = await post_service.update_post(post.id, "final")

    assert updated.updated_at == clock()
    posts = await post_service.get_user_posts(user.id)
    assert [p.content for p in posts] == ["final"]


async def test_delete_is_visible_after_cached_read(post_service, make_user):
    user = await make_user("alice")
    post = await post_service.create_post("doomed", user.id)
    await post_service.get_user_posts(user.id)

    assert await post_service.delete_post(post.id) is True

    assert await post_service.get_user_posts(user.id) == []


async def test_delete_removes_comments_and_likes(post_service, make_user, db_session):
    user = await make_user("alice")
    post = await post_service.create_post("popular", user.id)
    post.comments.append(Comment(text="nice", user_id=user.id))
    post.likes.append(Like(user_id=user.id))
    await db_session.commit()

    [read] = await post_service.get_user_posts(user.id)
    assert [c.text for c in read.comments] == ["nice"]
    assert read.like_count == 1
    assert [like.user_id for like in read.likes] == [user.id]

    await post_service.delete_post(post.id)

    comments = await db_session.scalar(select(func.count()).select_from(Comment))
    likes = await db_session.scalar(select(func.count()).select_from(Like))
    assert comments == 0
    assert likes == 0


async def test_create_post_for_unknown_user_fails(post_service):
    with pytest.raises(NotFoundException, match="User not found"):
        await post_service.create_post("orphan", uuid4())


@pytest.mark.parametrize("content", ["", "   "])
async def test_create_post_requires_content(post_service, make_user, content):
    user = await make_user("alice")

    with pytest.raises(ValidationFailure) as exc_info:
        await post_service.create_post(content, user.id)

    assert exc_info.value.fields == {"content": ["Content must not be empty"]}


async def test_update_post_requires_content(post_service, make_user):
    user = await make_user("alice")
    post = await post_service.create_post("kept", user.id)

    with pytest.raises(ValidationFailure) as exc_info:
        await post_service.update_post(post.id, "")

    assert exc_info.value.fields == {"newContent": ["Content must not be empty"]}


async def test_missing_post_leaves_cache_untouched(
    recorded_post_service, recording_cache, make_user
):
    user = await make_user("alice")
    await recorded_post_service.get_user_posts(user.id)
    recording_cache.calls.clear()

    with pytest.raises(NotFoundException, match="Post not found"):
        await recorded_post_service.update_post(uuid4(), "anything")
    with pytest.raises(NotFoundException, match="Post not found"):
        await recorded_post_service.delete_post(uuid4())

    assert recording_cache.calls == []
    assert await recording_cache.inner.get(user_posts_cache_key(user.id)) == []


async def test_mutations_invalidate_owner_entry(recorded_post_service, recording_cache, make_user):
    user = await make_user("alice")
    key = user_posts_cache_key(user.id)

    post = await recorded_post_service.create_post("one", user.id)
    await recorded_post_service.update_post(post.id, "two")
    await recorded_post_service.delete_post(post.id)

    assert [call for call in recording_cache.calls if call[0] == "remove"] == [
        ("remove", key),
        ("remove", key),
        ("remove", key),
    ]


async def test_cache_hit_is_served_without_database(post_service, memory_cache, make_user):
    user = await make_user("alice")
    await post_service.create_post("real", user.id)
    await post_service.get_user_posts(user.id)

    cached = await memory_cache.get(user_posts_cache_key(user.id))
    cached[0]["content"] = "from cache"
    await memory_cache.set(user_posts_cache_key(user.id), cached, 300)

    posts = await post_service.get_user_posts(user.id)

    assert [p.content for p in posts] == ["from cache"]


async def test_expired_entry_is_reloaded(post_service, memory_cache, monotonic, make_user):
    user = await make_user("alice")
    await post_service.get_user_posts(user.id)

    monotonic.advance(301)

    assert await memory_cache.get(user_posts_cache_key(user.id)) is None
    assert await post_service.get_user_posts(user.id) == []
    assert await memory_cache.get(user_posts_cache_key(user.id)) == []
