"""Comment Tree — pure operations over a course's comment forest.

Invariants:
    - Lookups are pre-order depth-first over the whole forest, first match wins
    - New roots and replies are appended at the end of their sibling list
    - Removing a node removes its entire reply subtree
    - Updating a node replaces content only (id, created_at, replies untouched)
    - Functions mutate only the forest passed in; no IO, no async
    - Walks and copies use an explicit stack, never the interpreter call stack

Design Decisions:
    - No id -> node index: forests are small per course, O(n) search keeps the
      stored shape (nested lists) as the single source of truth
    - Reply depth is capped at MAX_REPLY_DEPTH by the service layer (see
      check_reply_depth): the JSON encoder and response serializer recurse per level
"""

from collections.abc import Iterator
from dataclasses import replace
from datetime import datetime
from uuid import uuid4

from classroom.core.domain_types import MAX_COMMENT_LENGTH, MAX_REPLY_DEPTH
from classroom.core.entities import Comment, utc_now
from classroom.core.errors import ValidationFailedError


def new_comment_id() -> str:
    return uuid4().hex


def normalize_content(content: str | None) -> str:
    """Strip content and reject empty / whitespace-only / oversized bodies."""
    text = (content or "").strip()
    if not text:
        raise ValidationFailedError(
            "Comment content cannot be empty or whitespace", field="content",
        )
    if len(text) > MAX_COMMENT_LENGTH:
        raise ValidationFailedError(
            f"Comment content exceeds {MAX_COMMENT_LENGTH} characters",
            field="content",
        )
    return text


def new_comment(
    author_id: str,
    author_name: str,
    content: str,
    created_at: datetime | None = None,
) -> Comment:
    """Build a fresh leaf comment. Content must already be normalized."""
    return Comment(
        id=new_comment_id(),
        author_id=author_id,
        author_name=author_name,
        content=content,
        created_at=created_at or utc_now(),
        replies=[],
    )


def iter_comments(forest: list[Comment]) -> Iterator[Comment]:
    """Yield every comment in pre-order (parent before its replies)."""
    for _, node, _depth in _walk(forest):
        yield node


def _walk(
    forest: list[Comment],
) -> Iterator[tuple[list[Comment], Comment, int]]:
    """Pre-order walk yielding (containing sibling list, node, depth)."""
    stack = [(forest, node, 0) for node in reversed(forest)]
    while stack:
        siblings, node, depth = stack.pop()
        yield siblings, node, depth
        stack.extend(
            (node.replies, child, depth + 1) for child in reversed(node.replies)
        )


def _locate(
    forest: list[Comment], comment_id: str,
) -> tuple[list[Comment], Comment] | None:
    for siblings, node, _depth in _walk(forest):
        if node.id == comment_id:
            return siblings, node
    return None


def find_comment(forest: list[Comment], comment_id: str) -> Comment | None:
    """Return the first node whose id matches, at any depth."""
    found = _locate(forest, comment_id)
    return found[1] if found else None


def comment_depth(forest: list[Comment], comment_id: str) -> int | None:
    """Nesting level of a comment (0 for roots). None if the id is absent."""
    for _, node, depth in _walk(forest):
        if node.id == comment_id:
            return depth
    return None


def check_reply_depth(forest: list[Comment], parent_id: str) -> None:
    """Reject a reply that would nest deeper than MAX_REPLY_DEPTH.

    A missing parent passes: the caller reports it as not found.
    """
    depth = comment_depth(forest, parent_id)
    if depth is not None and depth + 1 > MAX_REPLY_DEPTH:
        raise ValidationFailedError(
            f"Replies cannot be nested more than {MAX_REPLY_DEPTH} levels deep",
            field="parent_id",
        )


def append_comment(forest: list[Comment], comment: Comment) -> Comment:
    """Append a new root comment at the end of the forest."""
    forest.append(comment)
    return comment


def append_reply(
    forest: list[Comment], parent_id: str, reply: Comment,
) -> Comment | None:
    """Append reply as the last child of parent_id. None if parent is absent."""
    parent = find_comment(forest, parent_id)
    if parent is None:
        return None
    parent.replies.append(reply)
    return reply


def update_content(
    forest: list[Comment], comment_id: str, content: str,
) -> Comment | None:
    """Replace a node's content in place. None if the id is absent."""
    node = find_comment(forest, comment_id)
    if node is None:
        return None
    node.content = content
    return node


def remove_comment(forest: list[Comment], comment_id: str) -> Comment | None:
    """Detach the first matching node (with its subtree). Returns the removed node."""
    found = _locate(forest, comment_id)
    if found is None:
        return None
    siblings, node = found
    # by identity: equal-valued siblings are still distinct nodes
    index = next(i for i, sibling in enumerate(siblings) if sibling is node)
    del siblings[index]
    return node


def comment_ids(forest: list[Comment]) -> list[str]:
    return [node.id for node in iter_comments(forest)]


def count_comments(forest: list[Comment]) -> int:
    return sum(1 for _ in iter_comments(forest))


def clone_comment(comment: Comment) -> Comment:
    """Copy a comment and its whole reply subtree, without recursion."""
    root = replace(comment, replies=[])
    stack = [(comment, root)]
    while stack:
        source, target = stack.pop()
        for reply in source.replies:
            copied = replace(reply, replies=[])
            target.replies.append(copied)
            stack.append((reply, copied))
    return root


def clone_forest(forest: list[Comment]) -> list[Comment]:
    return [clone_comment(c) for c in forest]
