"""Posts feature: posts, comments, likes and the per-user post cache."""

from __future__ import annotations

from .models import Comment, Like, Post
from .repository import PostRepository, get_post_repository
from .schemas import CommentRead, PostListFilters, PostRead
from .service import PostService, user_posts_cache_key

__all__ = [
    "Comment",
    "CommentRead",
    "Like",
    "Post",
    "PostListFilters",
    "PostRead",
    "PostRepository",
    "PostService",
    "get_post_repository",
    "user_posts_cache_key",
]
