"""Authorship and lifecycle rules for annotations.

Comments belong to their author: only the author edits or deletes them, and a
comment that still has replies cannot be deleted. Highlights and relations are
shared per document, so any authenticated user may toggle or delete them.
"""

import logging
from typing import Optional

from docannotate.errors import Conflict, Forbidden, NotFound, ValidationError
from docannotate.models.comment import Comment
from docannotate.models.document import Document
from docannotate.models.highlight import Highlight
from docannotate.storage.base import AnnotationStore

logger = logging.getLogger(__name__)

CREATED = "created"
DELETED = "deleted"


def require_document(store: AnnotationStore, document_id: str) -> Document:
    doc = store.get_document(document_id)
    if doc is None:
        raise NotFound("Document not found")
    return doc


def require_comment(store: AnnotationStore, comment_id: str) -> Comment:
    comment = store.get_comment(comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    return comment


def check_line(doc: Document, line: int, field: str = "lineNumber"):
    if line < 1 or line > doc.line_count:
        raise ValidationError(
            f"{field} must be between 1 and {doc.line_count}",
            fields=[field],
        )


def ensure_author(comment: Comment, username: str):
    if comment.author != username:
        logger.warning("User %s refused access to comment %s by %s", username, comment.id, comment.author)
        raise Forbidden("Only the author can change this comment")


def ensure_reply_target(parent: Optional[Comment], document_id: str, line_number: int):
    if parent is None:
        raise NotFound("Parent comment not found")
    if parent.document_id != document_id or parent.line_number != line_number:
        raise ValidationError(
            "A reply must be on the same document and line as its parent",
            fields=["parentCommentId"],
        )
    if parent.is_reply:
        raise Conflict("Replies cannot be nested; reply to the top-level comment instead")


def add_comment(
    store: AnnotationStore,
    document_id: str,
    line_number: int,
    author: str,
    content: str,
    parent_comment_id: Optional[str] = None,
) -> Comment:
    doc = require_document(store, document_id)
    check_line(doc, line_number)
    content = content.strip()
    if not content:
        raise ValidationError("Comment content must not be empty", fields=["content"])
    if parent_comment_id is not None:
        ensure_reply_target(store.get_comment(parent_comment_id), document_id, line_number)
    return store.create_comment(document_id, line_number, author, content, parent_comment_id)


def edit_comment(store: AnnotationStore, comment_id: str, username: str, content: str) -> Comment:
    comment = require_comment(store, comment_id)
    ensure_author(comment, username)
    content = content.strip()
    if not content:
        raise ValidationError("Invalid content", fields=["content"])
    return store.update_comment_content(comment_id, content)


def remove_comment(store: AnnotationStore, comment_id: str, username: str):
    comment = require_comment(store, comment_id)
    ensure_author(comment, username)
    if store.has_replies(comment_id):
        raise Conflict("Cannot delete a comment that has replies; delete the replies first")
    store.delete_comment(comment_id)
    logger.info("Comment %s deleted by %s", comment_id, username)


def toggle_highlight(store: AnnotationStore, document_id: str, line_number: int) -> tuple[Optional[Highlight], str]:
    doc = require_document(store, document_id)
    check_line(doc, line_number)
    existing = store.find_highlight(document_id, line_number)
    if existing is not None:
        store.delete_highlight(existing.id)
        return None, DELETED
    return store.create_highlight(document_id, line_number), CREATED
