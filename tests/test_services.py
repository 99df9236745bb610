from datetime import datetime

import pytest

from postcomments.memory import MemoryCommentRepository, MemoryPostRepository
from postcomments.repositories import (
    CommentsDisabledError,
    InvalidSortOrderError,
    NotFoundError,
    ParentNotFoundError,
    TextTooLongError,
)
from postcomments.services import CommentService, PostService


@pytest.fixture
def services():
    post_repo = MemoryPostRepository()
    comment_repo = MemoryCommentRepository(post_repo)
    return PostService(post_repo), CommentService(comment_repo)


def test_add_comment_success(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)

    comment = comment_service.add_comment(post.id, "CommentAuthor", "Comment text", None)

    assert comment.post_id == post.id
    assert comment.author == "CommentAuthor"
    assert comment.text == "Comment text"
    assert comment.parent_id is None


def test_add_comment_text_too_long(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)

    with pytest.raises(TextTooLongError) as excinfo:
        comment_service.add_comment(post.id, "Author", "a" * 2001, None)
    assert "comment text exceeds the 2000 character limit" in str(excinfo.value)


def test_add_comment_at_limit_is_accepted(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)

    comment = comment_service.add_comment(post.id, "Author", "a" * 2000, None)
    assert comment_service.get_comments_count(post.id, None) == 1
    assert len(comment.text) == 2000


def test_add_comment_disabled_comments(services):
    post_service, comment_service = services
    post = post_service.create_post("No Comments", "Content", "Author", False)

    with pytest.raises(CommentsDisabledError):
        comment_service.add_comment(post.id, "Author", "Text", None)


def test_add_comment_parent_not_found(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)

    with pytest.raises(ParentNotFoundError):
        comment_service.add_comment(post.id, "Author", "Text", "non-existent-id")


def test_add_comment_unknown_post(services):
    _, comment_service = services
    with pytest.raises(NotFoundError):
        comment_service.add_comment("non-existent-id", "Author", "Text", None)


def test_get_comments(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)
    comment_service.add_comment(post.id, "User1", "First comment", None)
    comment_service.add_comment(post.id, "User2", "Second comment", None)

    comments, has_more = comment_service.get_comments(post.id, None, 10, None, "ASC")

    assert len(comments) == 2
    assert has_more is False
    assert comments[0].text == "First comment"
    assert comments[1].text == "Second comment"


def test_get_comments_with_pagination(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)
    comment_service.add_comment(post.id, "User1", "Comment 1", None)
    comment_service.add_comment(post.id, "User2", "Comment 2", None)
    comment_service.add_comment(post.id, "User3", "Comment 3", None)

    comments, has_more = comment_service.get_comments(post.id, None, 2, None, "ASC")
    assert len(comments) == 2
    assert has_more is True

    next_comments, has_more = comment_service.get_comments(
        post.id, None, 2, comments[1].id, "ASC"
    )
    assert len(next_comments) == 1
    assert has_more is False


def test_add_nested_comment(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)
    parent = comment_service.add_comment(post.id, "Parent", "Parent comment", None)
    child = comment_service.add_comment(post.id, "Child", "Child comment", parent.id)

    replies, has_more = comment_service.get_comments(post.id, parent.id, 10, None, "ASC")

    assert has_more is False
    assert len(replies) == 1
    assert replies[0].id == child.id
    assert replies[0].parent_id == parent.id


def test_get_comments_count(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)
    comment_service.add_comment(post.id, "User1", "Comment 1", None)
    comment_service.add_comment(post.id, "User2", "Comment 2", None)

    assert comment_service.get_comments_count(post.id, None) == 2


def test_nested_comments(services):
    post_service, comment_service = services
    post = post_service.create_post("Nested Comments Test", "Content", "author1", True)

    root1 = comment_service.add_comment(post.id, "user1", "Root comment 1", None)
    root2 = comment_service.add_comment(post.id, "user2", "Root comment 2", None)
    child1 = comment_service.add_comment(post.id, "user3", "Child 1 of Root 1", root1.id)
    child2 = comment_service.add_comment(post.id, "user1", "Child 2 of Root 1", root1.id)
    comment_service.add_comment(post.id, "user4", "Child of Root 2", root2.id)
    grandchild1 = comment_service.add_comment(post.id, "user2", "Grandchild 1", child1.id)
    grandchild2 = comment_service.add_comment(post.id, "user3", "Grandchild 2", child1.id)

    roots, has_more = comment_service.get_comments(post.id, None, 10, None, "ASC")
    assert has_more is False
    assert [c.id for c in roots] == [root1.id, root2.id]

    children, has_more = comment_service.get_comments(post.id, root1.id, 10, None, "ASC")
    assert has_more is False
    assert [c.id for c in children] == [child1.id, child2.id]

    grandchildren, has_more = comment_service.get_comments(post.id, child1.id, 10, None, "ASC")
    assert has_more is False
    assert [c.id for c in grandchildren] == [grandchild1.id, grandchild2.id]

    assert comment_service.get_comments_count(post.id, None) == 2
    assert comment_service.get_comments_count(post.id, root1.id) == 2
    assert comment_service.get_comments_count(post.id, child1.id) == 2

    deep = comment_service.add_comment(post.id, "user1", "Invalid cyclic", grandchild2.id)
    assert deep.parent_id == grandchild2.id

    assert root1.parent_id is None
    assert root2.parent_id is None
    assert child1.parent_id == root1.id
    assert grandchild1.parent_id == child1.id


def test_get_replies_counts(services):
    post_service, comment_service = services
    post = post_service.create_post("Test Post", "Content", "Author", True)
    root = comment_service.add_comment(post.id, "u", "root", None)
    comment_service.add_comment(post.id, "u", "reply 1", root.id)
    comment_service.add_comment(post.id, "u", "reply 2", root.id)

    assert comment_service.get_replies_counts(post.id) == {root.id: 2}


def test_create_post_success(services):
    post_service, _ = services
    post = post_service.create_post("Title", "Content", "Author", True)
    assert post.title == "Title"
    assert post.content == "Content"
    assert post.allow_comments is True


def test_create_post_timestamp_is_rfc3339(services):
    post_service, _ = services
    post = post_service.create_post("Title", "Content", "Author", True)
    stamp = post.created_at
    if stamp.endswith("Z"):
        stamp = stamp[:-1] + "+00:00"
    parsed = datetime.fromisoformat(stamp)
    assert parsed.tzinfo is not None
    assert parsed.microsecond == 0


def test_create_post_ids_are_unique(services):
    post_service, _ = services
    ids = {post_service.create_post("T", "C", "A", True).id for _ in range(5)}
    assert len(ids) == 5


def test_get_post_success(services):
    post_service, _ = services
    created = post_service.create_post("Title", "Content", "Author", True)
    post = post_service.get_post(created.id)
    assert post.id == created.id


def test_get_posts(services):
    post_service, _ = services
    first = post_service.create_post("Title 1", "Content", "Author", True)
    second = post_service.create_post("Title 2", "Content", "Author", True)

    posts = post_service.get_posts(10, None, "DESC")
    assert [p.id for p in posts] == [second.id, first.id]


def test_create_post_invalid_author(services):
    post_service, _ = services
    post = post_service.create_post("Title", "Content", "", True)
    assert post.author == ""


def test_get_post_not_found(services):
    post_service, _ = services
    with pytest.raises(NotFoundError):
        post_service.get_post("non-existent-id")


def test_get_posts_sort_order_validation(services):
    post_service, _ = services
    with pytest.raises(InvalidSortOrderError):
        post_service.get_posts(10, None, "INVALID")