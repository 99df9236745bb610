"""Application services for posts and comments."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from postcomments.models import MAX_COMMENT_LENGTH, Comment, Post, SortOrder
from postcomments.repositories import (
    CommentRepository,
    InvalidSortOrderError,
    PostRepository,
    SortOrderLike,
    TextTooLongError,
)


def _now_rfc3339() -> str:
    """Return the current local time as an RFC 3339 timestamp with second precision."""
    stamp = datetime.now().astimezone().isoformat(timespec="seconds")
    if stamp.endswith("+00:00"):
        return stamp[: -len("+00:00")] + "Z"
    return stamp


class PostService:
    """Creates and looks up posts."""

    def __init__(self, repo: PostRepository) -> None:
        self._repo = repo

    def create_post(self, title: str, content: str, author: str, allow_comments: bool) -> Post:
        """Create, store and return a new post."""
        post = Post(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            author=author,
            allow_comments=allow_comments,
            created_at=_now_rfc3339(),
        )
        self._repo.create(post)
        return post

    def get_post(self, post_id: str) -> Post:
        """Return the post with the given id."""
        return self._repo.get_by_id(post_id)

    def get_posts(self, limit: int, after: Optional[str], sort_order: SortOrderLike) -> list[Post]:
        """Return a page of posts; the sort order must be ASC or DESC."""
        if sort_order not in (SortOrder.ASC, SortOrder.DESC):
            raise InvalidSortOrderError()
        return self._repo.list(limit, after, sort_order)


class CommentService:
    """Creates and lists comments."""

    def __init__(self, repo: CommentRepository) -> None:
        self._repo = repo

    def add_comment(
        self, post_id: str, author: str, text: str, parent_id: Optional[str] = None
    ) -> Comment:
        """Create, store and return a new comment or reply."""
        if len(text.encode("utf-8")) > MAX_COMMENT_LENGTH:
            raise TextTooLongError()

        comment = Comment(
            id=str(uuid.uuid4()),
            post_id=post_id,
            parent_id=parent_id,
            author=author,
            text=text,
            created_at=_now_rfc3339(),
        )
        self._repo.create(comment)
        return comment

    def get_comments(
        self,
        post_id: str,
        parent_id: Optional[str],
        limit: int,
        after: Optional[str],
        sort_order: SortOrderLike,
    ) -> tuple[list[Comment], bool]:
        """Return a page of comments on one level and whether more follow."""
        return self._repo.get_by_post_id(post_id, parent_id, limit, after, sort_order)

    def get_comments_count(self, post_id: str, parent_id: Optional[str] = None) -> int:
        """Return the number of comments on one level."""
        return self._repo.count(post_id, parent_id)

    def get_replies_counts(self, post_id: str) -> dict[str, int]:
        """Return the number of direct replies per comment of a post."""
        return self._repo.count_replies(post_id)