"""In-memory, thread-safe repositories."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from postcomments.models import MAX_COMMENT_LENGTH, Comment, Post, SortOrder
from postcomments.repositories import (
    CommentRepository,
    CommentsDisabledError,
    InvalidCursorError,
    NotFoundError,
    ParentNotFoundError,
    PostRepository,
    RepositoryError,
    SortOrderLike,
    TextTooLongError,
)


class MemoryPostRepository(PostRepository):
    """Posts kept in insertion order in memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._posts: list[Post] = []
        self._by_id: dict[str, Post] = {}
        self._indices: dict[str, int] = {}

    def create(self, post: Post) -> None:
        with self._lock:
            self._indices[post.id] = len(self._posts)
            self._posts.append(post)
            self._by_id[post.id] = post

    def get_by_id(self, post_id: str) -> Post:
        with self._lock:
            try:
                return self._by_id[post_id]
            except KeyError:
                raise NotFoundError() from None

    def _cursor_index(self, after: str) -> int:
        try:
            return self._indices[after]
        except KeyError:
            raise InvalidCursorError() from None

    def list(self, limit: int, after: Optional[str], sort_order: SortOrderLike) -> list[Post]:
        with self._lock:
            if not self._posts:
                return []

            if sort_order == SortOrder.DESC or sort_order == "":
                start = len(self._posts) - 1 if after is None else self._cursor_index(after) - 1
                available = min(start + 1, limit)
                if available <= 0:
                    return []
                return self._posts[start - available + 1 : start + 1][::-1]

            start = 0 if after is None else self._cursor_index(after) + 1
            end = min(start + limit, len(self._posts))
            return self._posts[start:end]


@dataclass
class _Level:
    comments: list[Comment] = field(default_factory=list)
    index: dict[str, int] = field(default_factory=dict)

    def add(self, comment: Comment) -> None:
        self.index[comment.id] = len(self.comments)
        self.comments.append(comment)

    def position(self, comment_id: str) -> int:
        try:
            return self.index[comment_id]
        except KeyError:
            raise InvalidCursorError() from None


class MemoryCommentRepository(CommentRepository):
    """Comments kept in memory, grouped by post (root level) or parent comment."""

    def __init__(self, post_repo: PostRepository) -> None:
        self._lock = threading.Lock()
        self._comments: dict[str, Comment] = {}
        self._levels: dict[str, _Level] = {}
        self._post_repo = post_repo

    def create(self, comment: Comment) -> None:
        with self._lock:
            if len(comment.text.encode("utf-8")) > MAX_COMMENT_LENGTH:
                raise TextTooLongError()

            try:
                post = self._post_repo.get_by_id(comment.post_id)
            except RepositoryError as exc:
                raise NotFoundError() from exc

            if not post.allow_comments:
                raise CommentsDisabledError()

            if comment.parent_id is not None:
                parent = self._comments.get(comment.parent_id)
                if parent is None or parent.post_id != comment.post_id:
                    raise ParentNotFoundError()

            key = comment.parent_id if comment.parent_id is not None else comment.post_id
            self._levels.setdefault(key, _Level()).add(comment)
            self._comments[comment.id] = comment

    def get_by_post_id(
        self,
        post_id: str,
        parent_id: Optional[str],
        limit: int,
        after: Optional[str],
        sort_order: SortOrderLike,
    ) -> tuple[list[Comment], bool]:
        with self._lock:
            if limit <= 0:
                return [], False

            level = self._levels.get(parent_id if parent_id is not None else post_id)
            if level is None or not level.comments:
                return [], False

            total = len(level.comments)

            if sort_order == SortOrder.DESC:
                start = total - 1 if after is None else level.position(after) - 1
                low = max(start - limit + 1, 0)
                page = level.comments[low : start + 1][::-1]
                return page, start - limit >= 0

            start = 0 if after is None else level.position(after) + 1
            end = min(start + limit, total)
            return level.comments[start:end], end < total

    def count(self, post_id: str, parent_id: Optional[str]) -> int:
        with self._lock:
            key = post_id
            if parent_id is not None:
                if parent_id not in self._comments:
                    raise ParentNotFoundError()
                key = parent_id
            level = self._levels.get(key)
            return len(level.comments) if level is not None else 0

    def count_replies(self, post_id: str) -> dict[str, int]:
        with self._lock:
            return dict(
                Counter(
                    comment.parent_id
                    for comment in self._comments.values()
                    if comment.post_id == post_id and comment.parent_id is not None
                )
            )