"""Repository interfaces and the errors they raise."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Union

from postcomments.models import Comment, Post, SortOrder


class RepositoryError(Exception):
    """Base class for storage and domain rule errors."""

    default_message = "repository error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(RepositoryError):
    """The requested post does not exist."""

    default_message = "not found"


class InvalidCursorError(RepositoryError):
    """A pagination cursor refers to an unknown item."""

    default_message = "invalid cursor"


class CommentsDisabledError(RepositoryError):
    """The post does not accept comments."""

    default_message = "comments are disabled for this post"


class TextTooLongError(RepositoryError):
    """The comment text is longer than allowed."""

    default_message = "comment text exceeds the 2000 character limit"


class ParentNotFoundError(RepositoryError):
    """The parent comment does not exist or belongs to another post."""

    default_message = "parent comment not found"


class InvalidSortOrderError(RepositoryError):
    """The sort order is neither ascending nor descending."""

    default_message = "invalid sort order"


SortOrderLike = Union[SortOrder, str]


class PostRepository(ABC):
    """Storage for posts."""

    @abstractmethod
    def create(self, post: Post) -> None:
        """Store a new post."""

    @abstractmethod
    def get_by_id(self, post_id: str) -> Post:
        """Return the post with the given id or raise NotFoundError."""

    @abstractmethod
    def list(self, limit: int, after: Optional[str], sort_order: SortOrderLike) -> list[Post]:
        """Return up to ``limit`` posts following the ``after`` cursor."""


class CommentRepository(ABC):
    """Storage for comments."""

    @abstractmethod
    def create(self, comment: Comment) -> None:
        """Store a new comment, enforcing the posting rules."""

    @abstractmethod
    def get_by_post_id(
        self,
        post_id: str,
        parent_id: Optional[str],
        limit: int,
        after: Optional[str],
        sort_order: SortOrderLike,
    ) -> tuple[list[Comment], bool]:
        """Return a page of comments on one level and whether more follow."""

    @abstractmethod
    def count(self, post_id: str, parent_id: Optional[str]) -> int:
        """Return the number of comments on one level."""

    @abstractmethod
    def count_replies(self, post_id: str) -> dict[str, int]:
        """Return the number of direct replies per comment of a post."""