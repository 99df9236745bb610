"""Query and mutation resolvers producing API-facing objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from postcomments.models import DEFAULT_LIMIT, Comment, Post, SortOrder
from postcomments.repositories import SortOrderLike
from postcomments.services import CommentService, PostService


@dataclass
class PostNode:
    """A post as returned by the API."""

    id: str
    title: str
    content: str
    author: str
    allow_comments: bool
    created_at: str

    @classmethod
    def from_post(cls, post: Post) -> "PostNode":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=post.author,
            allow_comments=post.allow_comments,
            created_at=post.created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the node in its wire (JSON) form."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "allowComments": self.allow_comments,
            "createdAt": self.created_at,
        }


@dataclass
class CommentNode:
    """A comment as returned by the API."""

    id: str
    post_id: str
    text: str
    author: str
    created_at: str
    parent_id: Optional[str] = None
    replies_count: int = 0

    @classmethod
    def from_comment(cls, comment: Comment, replies_count: int = 0) -> "CommentNode":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            text=comment.text,
            author=comment.author,
            created_at=comment.created_at,
            replies_count=replies_count,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the node in its wire (JSON) form; parentId is omitted when unset."""
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


@dataclass
class CommentEdge:
    """A comment together with the cursor that points at it."""

    node: CommentNode
    cursor: str


@dataclass
class PageInfo:
    """Pagination state of a comment connection."""

    has_next_page: bool = False
    has_previous_page: bool = False
    end_cursor: Optional[str] = None


@dataclass
class CommentConnection:
    """A page of comments with pagination data and the level's total."""

    edges: list[CommentEdge] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=PageInfo)
    total_count: int = 0


@dataclass
class PostWithComments:
    """A post with its first page of root comments and their reply counts."""

    post: PostNode
    comments: list[CommentNode]
    total_comments: int


def _page_info(has_more: bool, comments: list[Comment]) -> PageInfo:
    if not comments:
        return PageInfo()
    return PageInfo(has_next_page=has_more, end_cursor=comments[-1].id)


def _nodes_with_replies(
    comments: list[Comment], replies: Mapping[str, int]
) -> list[CommentNode]:
    return [CommentNode.from_comment(c, replies.get(c.id, 0)) for c in comments]


class Resolver:
    """Entry points for every query and mutation of the API."""

    def __init__(self, post_service: PostService, comment_service: CommentService) -> None:
        self._posts = post_service
        self._comments = comment_service

    def create_post(
        self, title: str, content: str, author: str, allow_comments: bool
    ) -> PostNode:
        return PostNode.from_post(
            self._posts.create_post(title, content, author, allow_comments)
        )

    def create_comment(
        self, post_id: str, parent_id: Optional[str], text: str, author: str
    ) -> CommentNode:
        comment = self._comments.add_comment(post_id, author, text, parent_id)
        return CommentNode.from_comment(comment)

    def posts(
        self,
        after: Optional[str] = None,
        first: Optional[int] = None,
        sort_order: Optional[SortOrderLike] = None,
    ) -> list[PostNode]:
        limit = DEFAULT_LIMIT if first is None else first
        order = SortOrder.DESC if sort_order is None else sort_order
        return [PostNode.from_post(p) for p in self._posts.get_posts(limit, after, order)]

    def post(self, post_id: str) -> PostNode:
        return PostNode.from_post(self._posts.get_post(post_id))

    def comments(
        self,
        post_id: str,
        parent_id: Optional[str] = None,
        after: Optional[str] = None,
        first: Optional[int] = None,
        sort_order: Optional[SortOrderLike] = None,
    ) -> CommentConnection:
        limit = DEFAULT_LIMIT if first is None else first
        order = SortOrder.ASC if sort_order is None else sort_order

        page, has_more = self._comments.get_comments(post_id, parent_id, limit, after, order)
        total = self._comments.get_comments_count(post_id, parent_id)

        return CommentConnection(
            edges=[CommentEdge(node=CommentNode.from_comment(c), cursor=c.id) for c in page],
            page_info=_page_info(has_more, page),
            total_count=total,
        )

    def comments_count(self, post_id: str, parent_id: Optional[str] = None) -> int:
        return self._comments.get_comments_count(post_id, parent_id)

    def post_with_comments(
        self, post_id: str, after: Optional[str] = None, first: Optional[int] = None
    ) -> PostWithComments:
        limit = DEFAULT_LIMIT if first is None else first

        post = self._posts.get_post(post_id)
        page, _ = self._comments.get_comments(post_id, None, limit, after, SortOrder.ASC)
        replies = self._comments.get_replies_counts(post_id)
        total = self._comments.get_comments_count(post_id, None)

        return PostWithComments(
            post=PostNode.from_post(post),
            comments=_nodes_with_replies(page, replies),
            total_comments=total,
        )