"""GraphQL types for posts, comments and likes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry
from strawberry.types import Info  # noqa: TC002

from postboard.core.pagination import paginate_sequence
from postboard.features.graphql.context import GraphQLContext  # noqa: TC001
from postboard.features.graphql.types.base import PageInfoType, SortDirection
from postboard.features.graphql.utils import page_size, parse_id
from postboard.features.posts.schemas import CommentRead, LikeRead, PostRead
from postboard.features.users.repository import get_user_repository

if TYPE_CHECKING:
    from postboard.features.graphql.types.users import UserType
    from postboard.features.posts.models import Post

_SORT_FIELDS = ["created_at", "id"]


def _ordered[T: (CommentRead, LikeRead)](items: list[T], direction: SortDirection) -> list[T]:
    return sorted(
        items,
        key=lambda item: (item.created_at, str(item.id)),
        reverse=direction == SortDirection.DESC,
    )


@strawberry.type(name="Comment", description="A comment on a post")
class CommentType:
    id: strawberry.ID
    text: str
    created_at: datetime
    user_id: strawberry.ID

    @classmethod
    def from_read(cls, comment: CommentRead) -> CommentType:
        return cls(
            id=strawberry.ID(str(comment.id)),
            text=comment.text,
            created_at=comment.created_at,
            user_id=strawberry.ID(str(comment.user_id)),
        )


@strawberry.type(name="Like", description="A user's like on a post")
class LikeType:
    id: strawberry.ID
    created_at: datetime
    user_id: strawberry.ID

    @classmethod
    def from_read(cls, like: LikeRead) -> LikeType:
        return cls(
            id=strawberry.ID(str(like.id)),
            created_at=like.created_at,
            user_id=strawberry.ID(str(like.user_id)),
        )


@strawberry.type(name="CommentEdge", description="Edge containing a comment node and cursor")
class CommentEdge:
    node: CommentType
    cursor: str


@strawberry.type(name="CommentConnection", description="Paginated list of comments")
class CommentConnection:
    edges: list[CommentEdge]
    page_info: PageInfoType


@strawberry.type(name="LikeEdge", description="Edge containing a like node and cursor")
class LikeEdge:
    node: LikeType
    cursor: str


@strawberry.type(name="LikeConnection", description="Paginated list of likes")
class LikeConnection:
    edges: list[LikeEdge]
    page_info: PageInfoType


@strawberry.input(description="Filters for a post's comments")
class CommentFilter:
    text_contains: str | None = None
    user_id: strawberry.ID | None = None


@strawberry.input(description="Filters for a post's likes")
class LikeFilter:
    user_id: strawberry.ID | None = None


@strawberry.type(name="Post", description="A user's post")
class PostType:
    id: strawberry.ID
    content: str
    created_at: datetime
    updated_at: datetime | None
    user_id: strawberry.ID
    like_count: int = strawberry.field(description="Number of likes")
    comment_items: strawberry.Private[list[CommentRead]]
    like_items: strawberry.Private[list[LikeRead]]

    @strawberry.field(description="The post's owner")
    async def author(
        self,
        info: Info[GraphQLContext, None],
    ) -> Annotated["UserType", strawberry.lazy("postboard.features.graphql.types.users")] | None:
        from postboard.features.graphql.types.users import UserType

        user = await get_user_repository().get(info.context.session, UUID(str(self.user_id)))
        return UserType.from_model(user) if user is not None else None

    @strawberry.field(description="Comments with cursor pagination, newest first by default")
    def comments(
        self,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
        filter: CommentFilter | None = None,  # noqa: A002
        order_by: SortDirection = SortDirection.DESC,
    ) -> CommentConnection:
        first, last = page_size(first, last)
        items = self.comment_items
        if filter is not None:
            author_id = parse_id(filter.user_id, "userId") if filter.user_id else None
            needle = (filter.text_contains or "").lower()
            items = [
                c
                for c in items
                if needle in c.text.lower() and (author_id is None or c.user_id == author_id)
            ]

        connection = paginate_sequence(
            _ordered(items, order_by),
            _SORT_FIELDS,
            first=first,
            after=after,
            last=last,
            before=before,
        )
        return CommentConnection(
            edges=[
                CommentEdge(node=CommentType.from_read(edge.node), cursor=edge.cursor)
                for edge in connection.edges
            ],
            page_info=PageInfoType.from_page_info(connection.page_info),
        )

    @strawberry.field(description="Likes with cursor pagination, newest first by default")
    def likes(
        self,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
        filter: LikeFilter | None = None,  # noqa: A002
        order_by: SortDirection = SortDirection.DESC,
    ) -> LikeConnection:
        first, last = page_size(first, last)
        items = self.like_items
        if filter is not None and filter.user_id:
            liker_id = parse_id(filter.user_id, "userId")
            items = [like for like in items if like.user_id == liker_id]

        connection = paginate_sequence(
            _ordered(items, order_by),
            _SORT_FIELDS,
            first=first,
            after=after,
            last=last,
            before=before,
        )
        return LikeConnection(
            edges=[
                LikeEdge(node=LikeType.from_read(edge.node), cursor=edge.cursor)
                for edge in connection.edges
            ],
            page_info=PageInfoType.from_page_info(connection.page_info),
        )

    @classmethod
    def from_read(cls, post: PostRead) -> PostType:
        return cls(
            id=strawberry.ID(str(post.id)),
            content=post.content,
            created_at=post.created_at,
            updated_at=post.updated_at,
            user_id=strawberry.ID(str(post.user_id)),
            like_count=post.like_count,
            comment_items=post.comments,
            like_items=post.likes,
        )

    @classmethod
    def from_model(cls, post: Post) -> PostType:
        return cls.from_read(PostRead.model_validate(post))


@strawberry.type(name="PostEdge", description="Edge containing a post node and cursor")
class PostEdge:
    node: PostType
    cursor: str


@strawberry.type(name="PostConnection", description="Paginated list of posts")
class PostConnection:
    edges: list[PostEdge]
    page_info: PageInfoType


@strawberry.input(description="Input for creating a post")
class CreatePostInput:
    content: str
    user_id: strawberry.ID


@strawberry.input(description="Input for replacing a post's content")
class UpdatePostInput:
    post_id: strawberry.ID
    new_content: str


@strawberry.input(description="Filters for the posts query")
class PostFilter:
    content_contains: str | None = None
    user_id: strawberry.ID | None = None
    created_after: datetime | None = None
    created_before: datetime | None = None


@strawberry.enum(description="Fields posts can be ordered by")
class PostOrderField(Enum):
    CREATED_AT = "created_at"
    CONTENT = "content"


@strawberry.input(description="Ordering for the posts query")
class PostOrder:
    field: PostOrderField = PostOrderField.CREATED_AT
    direction: SortDirection = SortDirection.DESC


__all__ = [
    "CommentConnection",
    "CommentEdge",
    "CommentFilter",
    "CommentType",
    "CreatePostInput",
    "LikeConnection",
    "LikeEdge",
    "LikeFilter",
    "LikeType",
    "PostConnection",
    "PostEdge",
    "PostFilter",
    "PostOrder",
    "PostOrderField",
    "PostType",
    "UpdatePostInput",
]
