import logging
import threading
from typing import Iterable, Optional

from docannotate.annotations.spans import SpanLike
from docannotate.errors import Conflict
from docannotate.models.comment import Comment
from docannotate.models.document import Document
from docannotate.models.highlight import Highlight
from docannotate.models.relation import Relation, RelationSpan
from docannotate.models.user import User
from docannotate.storage.base import AnnotationStore
from docannotate.utils.ids import new_id, utcnow

logger = logging.getLogger(__name__)


class MemoryStore(AnnotationStore):
    """Process-local store used when no DATABASE_URL is configured.

    Holds transient (never flushed) ORM instances, so callers see the same
    attribute names as with SqlStore. Contents are lost on restart.

    One instance serves every request, and sync routes run in a threadpool,
    so every public method holds ``_lock``.
    """

    kind = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self.documents: dict[str, Document] = {}
        self.comments: dict[str, Comment] = {}
        self.highlights: dict[str, Highlight] = {}
        self.relations: dict[str, Relation] = {}
        self.spans: dict[str, RelationSpan] = {}
        self.users: dict[str, User] = {}

    # documents
    def create_document(self, name: str, content: str, type: str) -> Document:
        doc = Document(id=new_id(), name=name, content=content, type=type, uploaded_at=utcnow())
        with self._lock:
            self.documents[doc.id] = doc
        return doc

    def get_document(self, document_id: str) -> Optional[Document]:
        with self._lock:
            return self.documents.get(document_id)

    def list_documents(self) -> list[Document]:
        with self._lock:
            # reversed first so equal timestamps still list the later insert first
            return sorted(reversed(self.documents.values()), key=lambda d: d.uploaded_at, reverse=True)

    def delete_document(self, document_id: str) -> bool:
        with self._lock:
            if self.documents.pop(document_id, None) is None:
                return False
            for c in [c for c in self.comments.values() if c.document_id == document_id]:
                del self.comments[c.id]
            for h in [h for h in self.highlights.values() if h.document_id == document_id]:
                del self.highlights[h.id]
            for r in [r for r in self.relations.values() if r.document_id == document_id]:
                self._drop_relation(r)
            return True

    # comments
    def create_comment(self, document_id, line_number, author, content, parent_comment_id=None) -> Comment:
        comment = Comment(
            id=new_id(),
            document_id=document_id,
            line_number=line_number,
            author=author,
            content=content,
            parent_comment_id=parent_comment_id,
            created_at=utcnow(),
        )
        with self._lock:
            self.comments[comment.id] = comment
        return comment

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        with self._lock:
            return self.comments.get(comment_id)

    def list_comments(self, document_id: str) -> list[Comment]:
        with self._lock:
            found = [c for c in self.comments.values() if c.document_id == document_id]
        return sorted(found, key=lambda c: c.created_at)

    def update_comment_content(self, comment_id: str, content: str) -> Optional[Comment]:
        with self._lock:
            comment = self.comments.get(comment_id)
            if comment is not None:
                comment.content = content
            return comment

    def has_replies(self, comment_id: str) -> bool:
        with self._lock:
            return any(c.parent_comment_id == comment_id for c in self.comments.values())

    def delete_comment(self, comment_id: str) -> bool:
        with self._lock:
            return self.comments.pop(comment_id, None) is not None

    # highlights
    def create_highlight(self, document_id: str, line_number: int) -> Highlight:
        with self._lock:
            if self.find_highlight(document_id, line_number) is not None:
                raise Conflict(f"Line {line_number} is already highlighted")
            hl = Highlight(id=new_id(), document_id=document_id, line_number=line_number)
            self.highlights[hl.id] = hl
            return hl

    def find_highlight(self, document_id: str, line_number: int) -> Optional[Highlight]:
        with self._lock:
            for h in self.highlights.values():
                if h.document_id == document_id and h.line_number == line_number:
                    return h
            return None

    def list_highlights(self, document_id: str) -> list[Highlight]:
        with self._lock:
            return [h for h in self.highlights.values() if h.document_id == document_id]

    def delete_highlight(self, highlight_id: str) -> bool:
        with self._lock:
            return self.highlights.pop(highlight_id, None) is not None

    # relations
    def create_relation(self, document_id: str, url: str, note: Optional[str], spans: Iterable[SpanLike]) -> Relation:
        rel = Relation(id=new_id(), document_id=document_id, url=url, note=note, created_at=utcnow())
        with self._lock:
            self.relations[rel.id] = rel
            for s in spans:
                self.create_relation_span(rel.id, s.start_line, s.end_line)
        return rel

    def get_relation(self, relation_id: str) -> Optional[Relation]:
        with self._lock:
            return self.relations.get(relation_id)

    def list_relations(self, document_id: str) -> list[Relation]:
        with self._lock:
            return [r for r in self.relations.values() if r.document_id == document_id]

    def delete_relation(self, relation_id: str) -> bool:
        with self._lock:
            rel = self.relations.get(relation_id)
            if rel is None:
                return False
            self._drop_relation(rel)
            return True

    def _drop_relation(self, rel: Relation):
        with self._lock:
            for span in list(rel.spans):
                self.spans.pop(span.id, None)
            self.relations.pop(rel.id, None)

    def create_relation_span(self, relation_id: str, start_line: int, end_line: int) -> RelationSpan:
        with self._lock:
            rel = self.relations[relation_id]
            span = RelationSpan(id=new_id(), relation_id=relation_id, start_line=start_line, end_line=end_line)
            rel.spans.append(span)
            rel.spans.sort(key=lambda s: s.start_line)
            self.spans[span.id] = span
            return span

    def delete_relation_span(self, span_id: str) -> bool:
        with self._lock:
            span = self.spans.pop(span_id, None)
            if span is None:
                return False
            rel = self.relations.get(span.relation_id)
            if rel is not None:
                rel.spans.remove(span)
            return True

    # users
    def create_user(self, username, email, password_hash, password_salt) -> User:
        with self._lock:
            if self.get_user_by_username(username) is not None:
                raise Conflict("Username already taken")
            user = User(
                id=new_id(),
                username=username,
                email=email,
                password_hash=password_hash,
                password_salt=password_salt,
                created_at=utcnow(),
            )
            self.users[user.id] = user
        logger.info("Registered user %s (memory store)", username)
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for u in self.users.values():
                if u.username == username:
                    return u
            return None
