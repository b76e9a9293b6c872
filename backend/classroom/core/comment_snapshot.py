"""Comment Snapshot — serialization / deserialization of comment forests.

Invariants:
    - to_document produces a JSON-safe dict: {id, authorId, authorName, content, createdAt, replies}
    - createdAt is ISO-8601; naive timestamps are read back as UTC
    - from_document(to_document(c)) reproduces c (ids, order, nesting)
    - Both directions walk an explicit stack, so document depth never meets the recursion limit

Design Decisions:
    - camelCase keys: the stored embedded document and the HTTP response share one shape
    - Course resources serialized here as well so both backends use one codec
"""

from datetime import datetime, timezone

from classroom.core.domain_types import ResourceType
from classroom.core.entities import Comment, Resource


def _document_shell(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "authorId": comment.author_id,
        "authorName": comment.author_name,
        "content": comment.content,
        "createdAt": comment.created_at.isoformat(),
        "replies": [],
    }


def _comment_shell(data: dict) -> Comment:
    return Comment(
        id=str(data["id"]),
        author_id=str(data.get("authorId", "")),
        author_name=data.get("authorName", ""),
        content=data.get("content", ""),
        created_at=_parse_timestamp(data.get("createdAt")),
        replies=[],
    )


def comment_to_document(comment: Comment) -> dict:
    """Serialize a comment and its whole reply subtree. Pure, no IO."""
    root = _document_shell(comment)
    stack = [(comment, root)]
    while stack:
        node, doc = stack.pop()
        for reply in node.replies:
            child = _document_shell(reply)
            doc["replies"].append(child)
            stack.append((reply, child))
    return root


def comment_from_document(data: dict) -> Comment:
    """Rebuild a comment subtree from its stored document. Pure, no IO."""
    root = _comment_shell(data)
    stack = [(data, root)]
    while stack:
        doc, node = stack.pop()
        for reply_doc in doc.get("replies") or []:
            child = _comment_shell(reply_doc)
            node.replies.append(child)
            stack.append((reply_doc, child))
    return root


def forest_to_documents(forest: list[Comment]) -> list[dict]:
    return [comment_to_document(c) for c in forest]


def forest_from_documents(data: list[dict] | None) -> list[Comment]:
    return [comment_from_document(d) for d in data or []]


def resource_to_document(resource: Resource) -> dict:
    return {
        "name": resource.name,
        "type": resource.type.value,
        "url": resource.url,
    }


def resource_from_document(data: dict) -> Resource:
    return Resource(
        name=data["name"], type=ResourceType(data["type"]), url=data["url"],
    )


def _parse_timestamp(value: str | datetime | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
