"""Mutation resolvers for posts.

- createPost(input): create a post (only as the authenticated User)
- updatePost(input): replace a post's content
- deletePost(postId): delete a post with its comments and likes
"""

from __future__ import annotations

import logging

import strawberry
from strawberry.types import Info  # noqa: TC002

from postboard.core.exceptions import ForbiddenError, UnauthenticatedError
from postboard.features.graphql.context import GraphQLContext  # noqa: TC001
from postboard.features.graphql.types.posts import CreatePostInput, PostType, UpdatePostInput
from postboard.features.graphql.utils import parse_id

logger = logging.getLogger(__name__)


@strawberry.type
class PostMutation:
    """Post write operations. All require an authenticated user."""

    @strawberry.mutation(description="Create a post")
    async def create_post(
        self,
        info: Info[GraphQLContext, None],
        input: CreatePostInput,  # noqa: A002
    ) -> PostType:
        owner_id = parse_id(input.user_id, "userId")

        claims = info.context.user
        if claims is None:
            raise UnauthenticatedError
        if claims.sub != owner_id:
            logger.warning(
                "Rejected post on behalf of another user",
                extra={"user_id": str(claims.sub), "owner_id": str(owner_id)},
            )
            raise ForbiddenError("Users may only create posts for themselves")

        post = await info.context.post_service().create_post(input.content, owner_id)
        return PostType.from_model(post)

    @strawberry.mutation(description="Replace a post's content")
    async def update_post(
        self,
        info: Info[GraphQLContext, None],
        input: UpdatePostInput,  # noqa: A002
    ) -> PostType:
        post = await info.context.post_service().update_post(
            parse_id(input.post_id, "postId"),
            input.new_content,
        )
        return PostType.from_model(post)

    @strawberry.mutation(description="Delete a post")
    async def delete_post(
        self,
        info: Info[GraphQLContext, None],
        post_id: strawberry.ID,
    ) -> bool:
        return await info.context.post_service().delete_post(parse_id(post_id, "postId"))


__all__ = ["PostMutation"]
