"""Tests for the Redis cache backend with a mocked client."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from postboard.infra.cache import PostCache, RedisCache


@pytest.fixture
def redis_client() -> AsyncMock:
    client = AsyncMock()
    client.getex.return_value = None
    return client


@pytest.fixture
def cache(redis_client: AsyncMock) -> RedisCache:
    cache = RedisCache("redis://localhost:6379/0", key_prefix="postboard:", default_ttl=300)
    cache._client = redis_client
    return cache


async def test_get_refreshes_expiry_on_prefixed_key(cache, redis_client):
    redis_client.getex.return_value = json.dumps([{"content": "hi"}])

    assert await cache.get("posts_user_1") == [{"content": "hi"}]
    redis_client.getex.assert_awaited_once_with("postboard:posts_user_1", ex=300)


async def test_get_miss_returns_none(cache, redis_client):
    assert await cache.get("posts_user_1") is None


async def test_set_stores_json_with_ttl(cache, redis_client):
    value = [{"id": "abc", "content": "hello", "comments": []}]

    await cache.set("posts_user_1", value, ttl=120)

    redis_client.set.assert_awaited_once()
    args, kwargs = redis_client.set.call_args
    assert args[0] == "postboard:posts_user_1"
    assert json.loads(args[1]) == value
    assert kwargs == {"ex": 120}


async def test_remove_deletes_prefixed_key(cache, redis_client):
    await cache.remove("posts_user_1")

    redis_client.delete.assert_awaited_once_with("postboard:posts_user_1")


async def test_connect_pings_and_disconnect_closes(redis_client):
    cache = RedisCache("redis://localhost:6379/0")

    with patch("postboard.infra.cache.redis.Redis.from_url", return_value=redis_client) as from_url:
        await cache.connect()

    from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
    redis_client.ping.assert_awaited_once()
    assert cache.client is redis_client

    await cache.disconnect()
    redis_client.aclose.assert_awaited_once()
    with pytest.raises(RuntimeError):
        _ = cache.client


async def test_connect_failure_closes_client(redis_client):
    redis_client.ping.side_effect = ConnectionError("refused")
    cache = RedisCache("redis://localhost:6379/0")

    with (
        patch("postboard.infra.cache.redis.Redis.from_url", return_value=redis_client),
        pytest.raises(ConnectionError),
    ):
        await cache.connect()

    redis_client.aclose.assert_awaited_once()


def test_redis_cache_satisfies_protocol():
    assert isinstance(RedisCache("redis://localhost:6379/0"), PostCache)
