"""GraphQL post queries and mutations."""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from postboard.core.pagination import CursorCodec
from postboard.core.pagination.cursor import CursorData
from postboard.features.users.models import Role

CREATE_POST = """
mutation CreatePost($input: CreatePostInput!) {
    createPost(input: $input) {
        id content userId likeCount
        comments { edges { node { id } } pageInfo { totalCount } }
        likes { edges { node { id } } }
    }
}
"""

UPDATE_POST = """
mutation UpdatePost($input: UpdatePostInput!) {
    updatePost(input: $input) { id content updatedAt }
}
"""

DELETE_POST = """
mutation DeletePost($postId: ID!) {
    deletePost(postId: $postId)
}
"""

USER_POSTS = """
query UserPosts($userId: ID!) {
    userPosts(userId: $userId) {
        edges { node { id content author { username } } }
        pageInfo { totalCount }
    }
}
"""

POSTS = """
query Posts($first: Int, $after: String, $last: Int, $before: String) {
    posts(first: $first, after: $after, last: $last, before: $before) {
        edges { cursor node { id content } }
        pageInfo { hasNextPage hasPreviousPage startCursor endCursor totalCount }
    }
}
"""


@pytest.fixture
async def alice(make_user):
    return await make_user("alice")


@pytest.fixture
async def alice_claims(alice, claims_for):
    return claims_for(alice)


def _contents(connection):
    return [edge["node"]["content"] for edge in connection["edges"]]


async def _create(execute, claims, user_id, content):
    result = await execute(
        CREATE_POST,
        {"input": {"content": content, "userId": str(user_id)}},
        user=claims,
    )
    assert result.errors is None
    return result.data["createPost"]


async def test_create_post_requires_authentication(execute, alice):
    result = await execute(
        CREATE_POST,
        {"input": {"content": "hi", "userId": str(alice.id)}},
    )

    [error] = result.errors
    assert error.message == "Unexpected error occurred."
    assert error.extensions["errorType"] == "UnauthenticatedError"


async def test_create_post_for_self(execute, alice, alice_claims):
    post = await _create(execute, alice_claims, alice.id, "hello")

    assert post["content"] == "hello"
    assert post["userId"] == str(alice.id)
    assert post["likeCount"] == 0
    assert post["comments"] == {"edges": [], "pageInfo": {"totalCount": 0}}
    assert post["likes"] == {"edges": []}


async def test_user_cannot_post_for_someone_else(execute, alice_claims, make_user):
    bob = await make_user("bob")

    result = await execute(
        CREATE_POST,
        {"input": {"content": "impersonation", "userId": str(bob.id)}},
        user=alice_claims,
    )

    [error] = result.errors
    assert error.extensions["errorType"] == "ForbiddenError"


async def test_admin_cannot_create_posts(execute, make_user, claims_for):
    admin = await make_user("root", role=Role.ADMIN)

    result = await execute(
        CREATE_POST,
        {"input": {"content": "from admin", "userId": str(admin.id)}},
        user=claims_for(admin),
    )

    [error] = result.errors
    assert error.message == "Unexpected error occurred."
    assert error.extensions["errorType"] == "ForbiddenError"


async def test_create_post_with_empty_content(execute, alice, alice_claims):
    result = await execute(
        CREATE_POST,
        {"input": {"content": "", "userId": str(alice.id)}},
        user=alice_claims,
    )

    [error] = result.errors
    assert error.message == "Validation failed."
    assert error.extensions["validationErrors"] == {"content": ["Content must not be empty"]}


async def test_create_post_with_malformed_user_id(execute, alice_claims):
    result = await execute(
        CREATE_POST,
        {"input": {"content": "hi", "userId": "not-a-uuid"}},
        user=alice_claims,
    )

    [error] = result.errors
    assert error.extensions["validationErrors"] == {"userId": ["Must be a valid id"]}


async def test_user_posts_reflect_mutations(execute, alice, alice_claims):
    before = await execute(USER_POSTS, {"userId": str(alice.id)})
    assert before.data["userPosts"] == {"edges": [], "pageInfo": {"totalCount": 0}}

    post = await _create(execute, alice_claims, alice.id, "first draft")
    created = await execute(USER_POSTS, {"userId": str(alice.id)})
    assert created.data["userPosts"]["edges"] == [
        {"node": {"id": post["id"], "content": "first draft", "author": {"username": "alice"}}}
    ]

    updated = await execute(
        UPDATE_POST,
        {"input": {"postId": post["id"], "newContent": "final"}},
        user=alice_claims,
    )
    assert updated.errors is None
    assert updated.data["updatePost"]["updatedAt"] is not None
    after_update = await execute(USER_POSTS, {"userId": str(alice.id)})
    assert _contents(after_update.data["userPosts"]) == ["final"]

    deleted = await execute(DELETE_POST, {"postId": post["id"]}, user=alice_claims)
    assert deleted.data == {"deletePost": True}
    after_delete = await execute(USER_POSTS, {"userId": str(alice.id)})
    assert after_delete.data["userPosts"]["edges"] == []


async def test_update_missing_post_is_not_found(execute, alice_claims):
    result = await execute(
        UPDATE_POST,
        {"input": {"postId": str(uuid4()), "newContent": "x"}},
        user=alice_claims,
    )

    [error] = result.errors
    assert error.message == "Unexpected error occurred."
    assert error.extensions == {"errorType": "NotFoundException", "details": "Post not found"}


async def test_delete_requires_authentication(execute):
    result = await execute(DELETE_POST, {"postId": str(uuid4())})

    [error] = result.errors
    assert error.extensions["errorType"] == "UnauthenticatedError"


async def test_posts_paginate_forward(execute, alice, alice_claims, clock):
    for n in range(3):
        await _create(execute, alice_claims, alice.id, f"post {n}")
        clock.advance(minutes=1)

    page1 = await execute(POSTS, {"first": 2})
    assert page1.errors is None
    conn1 = page1.data["posts"]
    assert [e["node"]["content"] for e in conn1["edges"]] == ["post 2", "post 1"]
    assert conn1["pageInfo"]["hasNextPage"] is True
    assert conn1["pageInfo"]["hasPreviousPage"] is False
    assert conn1["pageInfo"]["totalCount"] == 3

    page2 = await execute(POSTS, {"first": 2, "after": conn1["pageInfo"]["endCursor"]})
    conn2 = page2.data["posts"]
    assert [e["node"]["content"] for e in conn2["edges"]] == ["post 0"]
    assert conn2["pageInfo"]["hasNextPage"] is False
    assert conn2["pageInfo"]["hasPreviousPage"] is True


async def test_posts_invalid_cursor_returns_first_page(execute, alice, alice_claims):
    await _create(execute, alice_claims, alice.id, "only")

    result = await execute(POSTS, {"first": 10, "after": "garbage"})

    assert result.errors is None
    assert [e["node"]["content"] for e in result.data["posts"]["edges"]] == ["only"]


async def test_posts_cursor_with_malformed_values_returns_first_page(execute, alice, alice_claims):
    await _create(execute, alice_claims, alice.id, "only")
    crafted = CursorCodec.encode(CursorData(values={"created_at": "garbage", "id": "nope"}))

    result = await execute(POSTS, {"first": 10, "after": crafted})

    assert result.errors is None
    assert [e["node"]["content"] for e in result.data["posts"]["edges"]] == ["only"]


async def test_posts_negative_page_size_rejected(execute):
    result = await execute(POSTS, {"first": -1})

    [error] = result.errors
    assert error.extensions["validationErrors"] == {"first": ["Must not be negative"]}


async def test_query_depth_is_limited(execute):
    nested = "author { posts { " * 8 + "id" + " } }" * 8
    deep = "query { posts { edges { node { " + nested + " } } } }"

    result = await execute(deep)

    assert result.errors
    assert "exceeds maximum operation depth" in result.errors[0].message


USER_POSTS_PAGE = """
query UserPosts(
    $userId: ID!, $first: Int, $after: String, $filter: PostFilter, $orderBy: PostOrder
) {
    userPosts(userId: $userId, first: $first, after: $after, filter: $filter, orderBy: $orderBy) {
        edges { node { content } }
        pageInfo { hasNextPage hasPreviousPage endCursor totalCount }
    }
}
"""


async def test_user_posts_paginate_filter_and_sort(execute, alice, alice_claims, clock):
    for content in ("apple pie", "banana", "apple tart"):
        await _create(execute, alice_claims, alice.id, content)
        clock.advance(minutes=1)
    user_id = str(alice.id)

    page1 = (await execute(USER_POSTS_PAGE, {"userId": user_id, "first": 2})).data["userPosts"]
    assert _contents(page1) == ["apple tart", "banana"]
    assert page1["pageInfo"]["hasNextPage"] is True
    assert page1["pageInfo"]["totalCount"] == 3

    after = page1["pageInfo"]["endCursor"]
    page2 = (
        await execute(USER_POSTS_PAGE, {"userId": user_id, "first": 2, "after": after})
    ).data["userPosts"]
    assert _contents(page2) == ["apple pie"]
    assert page2["pageInfo"]["hasNextPage"] is False
    assert page2["pageInfo"]["hasPreviousPage"] is True

    filtered = await execute(
        USER_POSTS_PAGE, {"userId": user_id, "filter": {"contentContains": "APPLE"}}
    )
    assert _contents(filtered.data["userPosts"]) == ["apple tart", "apple pie"]

    by_content = await execute(
        USER_POSTS_PAGE,
        {"userId": user_id, "orderBy": {"field": "CONTENT", "direction": "ASC"}},
    )
    assert _contents(by_content.data["userPosts"]) == ["apple pie", "apple tart", "banana"]


POST_INTERACTIONS = """
query UserPosts($userId: ID!, $likedBy: ID) {
    userPosts(userId: $userId) {
        edges { node {
            likeCount
            comments(first: 2) {
                edges { node { text } }
                pageInfo { hasNextPage totalCount }
            }
            oldest: comments(first: 1, orderBy: ASC) { edges { node { text } } }
            likes(filter: {userId: $likedBy}) { edges { node { userId } } }
        } }
    }
}
"""


async def test_post_comments_and_likes_are_paged(
    execute, alice, alice_claims, make_user, db_session, clock
):
    from postboard.features.posts.models import Comment, Like, Post

    bob = await make_user("bob")
    created = await _create(execute, alice_claims, alice.id, "popular")
    post = await db_session.get(Post, UUID(created["id"]))
    for n in range(3):
        clock.advance(minutes=1)
        post.comments.append(Comment(text=f"comment {n}", user_id=bob.id, created_at=clock()))
    for liker in (alice, bob):
        clock.advance(minutes=1)
        post.likes.append(Like(user_id=liker.id, created_at=clock()))
    await db_session.commit()

    result = await execute(POST_INTERACTIONS, {"userId": str(alice.id), "likedBy": str(bob.id)})

    assert result.errors is None
    [edge] = result.data["userPosts"]["edges"]
    node = edge["node"]
    assert node["likeCount"] == 2
    assert _texts(node["comments"]) == ["comment 2", "comment 1"]
    assert node["comments"]["pageInfo"] == {"hasNextPage": True, "totalCount": 3}
    assert _texts(node["oldest"]) == ["comment 0"]
    assert node["likes"]["edges"] == [{"node": {"userId": str(bob.id)}}]


def _texts(connection):
    return [edge["node"]["text"] for edge in connection["edges"]]
