"""Domain models for posts and comments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

MAX_COMMENT_LENGTH = 2000
DEFAULT_LIMIT = 10


class SortOrder(str, Enum):
    """Order in which posts or comments are listed."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass
class Post:
    """A published post."""

    id: str
    title: str
    content: str
    author: str
    allow_comments: bool
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        """Return the post in its wire (JSON) form."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "allowComments": self.allow_comments,
            "createdAt": self.created_at,
        }


@dataclass
class Comment:
    """A comment on a post, optionally a reply to another comment."""

    id: str
    post_id: str
    text: str
    author: str
    created_at: str
    parent_id: Optional[str] = None
    replies_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the comment in its wire (JSON) form; parentId is omitted when unset."""
        data: dict[str, Any] = {"id": self.id, "postId": self.post_id}
        if self.parent_id is not None:
            data["parentId"] = self.parent_id
        data.update(
            {
                "text": self.text,
                "author": self.author,
                "createdAt": self.created_at,
                "repliesCount": self.replies_count,
            }
        )
        return data