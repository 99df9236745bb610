# postcomments

A small library for posts with threaded comments. Posts can be listed
newest first or oldest first. Comments nest to any depth. Each level of a
thread is paged with cursors. All data is held in a thread-safe in-memory
store.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `postcomments.models` holds the `Post` and `Comment` dataclasses and the
  `SortOrder` enum (`ASC`, `DESC`). `SortOrder` is a `str` enum, so the plain
  strings `"ASC"` and `"DESC"` work as well. `Post.to_dict()` and
  `Comment.to_dict()` return the camelCase wire form. `parentId` is left out
  when a comment has no parent.
- `postcomments.repositories` holds the abstract `PostRepository` and
  `CommentRepository` interfaces and the error classes. Every error derives
  from `RepositoryError`. The errors are `NotFoundError`, `InvalidCursorError`,
  `CommentsDisabledError`, `TextTooLongError`, `ParentNotFoundError` and
  `InvalidSortOrderError`.
- `postcomments.memory` holds `MemoryPostRepository` and
  `MemoryCommentRepository`, the in-memory stores. The comment store needs a
  post repository so that it can check the post a comment belongs to.
- `postcomments.services` holds `PostService` and `CommentService`. They
  create records with fresh UUIDs and RFC 3339 timestamps in local time, and
  they check input before storing it.
- `postcomments.resolvers` holds `Resolver`, an API-shaped front end. It
  returns `PostNode`, `CommentNode`, `CommentConnection` (built from
  `CommentEdge` and `PageInfo`) and `PostWithComments`.

## Example

```python
from postcomments.memory import MemoryPostRepository, MemoryCommentRepository
from postcomments.services import PostService, CommentService
from postcomments.resolvers import Resolver

posts = MemoryPostRepository()
comments = MemoryCommentRepository(posts)
resolver = Resolver(PostService(posts), CommentService(comments))

post = resolver.create_post("Hello", "First post", "alice", True)
root = resolver.create_comment(post.id, None, "Nice post", "bob")
resolver.create_comment(post.id, root.id, "Thanks!", "alice")

page = resolver.comments(post.id, None, None, 10, None)
print(page.total_count, [edge.node.text for edge in page.edges])

overview = resolver.post_with_comments(post.id, None, None)
print(overview.comments[0].replies_count)  # 1
```

## Rules

- Comment text may be at most 2000 bytes once encoded as UTF-8. Longer text
  raises `TextTooLongError`.
- A comment on a post that does not exist raises `NotFoundError`. A comment on
  a post created with comments turned off raises `CommentsDisabledError`.
- A reply's parent must exist and belong to the same post. Otherwise
  `ParentNotFoundError` is raised. Counting the replies of an unknown parent
  raises the same error.
- Looking up an unknown post raises `NotFoundError`.
- A cursor (`after`) that names no record on the level being listed raises
  `InvalidCursorError`.
- `PostService.get_posts` accepts only `ASC` or `DESC`. Any other order raises
  `InvalidSortOrderError`.
- Through `Resolver`, a page holds 10 items unless `first` is given. Posts
  default to newest first and comments to oldest first.
  `Resolver.post_with_comments` always lists root comments oldest first.
- `Resolver.comments` returns a connection. Its `page_info.has_next_page` tells
  whether more comments follow. Its `page_info.end_cursor` is the id of the
  last comment on the page, or `None` when the page is empty.

## What it does not do

This is a library only. It has no HTTP or GraphQL server and no command-line
program. Data lives only in memory: nothing is written to a database or to
disk, and everything is lost when the process ends. To persist data, write a
storage backend by implementing `PostRepository` and `CommentRepository`.