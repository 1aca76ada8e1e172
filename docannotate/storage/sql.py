import logging
from typing import Iterable, Optional

from sqlalchemy import select, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

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


class SqlStore(AnnotationStore):
    """AnnotationStore over a SQLAlchemy session; every write commits."""

    kind = "sql"

    def __init__(self, session: Session):
        self.session = session

    def _add(self, obj, conflict_message: str | None = None):
        self.session.add(obj)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            if conflict_message is None:
                raise
            raise Conflict(conflict_message)
        return obj

    def _delete(self, obj) -> bool:
        if obj is None:
            return False
        self.session.delete(obj)
        self.session.commit()
        return True

    # documents
    def create_document(self, name: str, content: str, type: str) -> Document:
        doc = Document(id=new_id(), name=name, content=content, type=type, uploaded_at=utcnow())
        return self._add(doc)

    def get_document(self, document_id: str) -> Optional[Document]:
        return self.session.get(Document, document_id)

    def list_documents(self) -> list[Document]:
        stmt = select(Document).order_by(Document.uploaded_at.desc())
        return list(self.session.scalars(stmt))

    def delete_document(self, document_id: str) -> bool:
        # ORM cascade removes comments, highlights, relations and their spans
        return self._delete(self.get_document(document_id))

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
        return self._add(comment)

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        return self.session.get(Comment, comment_id)

    def list_comments(self, document_id: str) -> list[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.document_id == document_id)
            .order_by(Comment.created_at.asc())
        )
        return list(self.session.scalars(stmt))

    def update_comment_content(self, comment_id: str, content: str) -> Optional[Comment]:
        comment = self.get_comment(comment_id)
        if comment is None:
            return None
        comment.content = content
        self.session.commit()
        return comment

    def has_replies(self, comment_id: str) -> bool:
        stmt = select(exists().where(Comment.parent_comment_id == comment_id))
        return bool(self.session.scalar(stmt))

    def delete_comment(self, comment_id: str) -> bool:
        return self._delete(self.get_comment(comment_id))

    # highlights
    def create_highlight(self, document_id: str, line_number: int) -> Highlight:
        hl = Highlight(id=new_id(), document_id=document_id, line_number=line_number)
        return self._add(hl, conflict_message=f"Line {line_number} is already highlighted")

    def find_highlight(self, document_id: str, line_number: int) -> Optional[Highlight]:
        stmt = select(Highlight).where(
            Highlight.document_id == document_id,
            Highlight.line_number == line_number,
        )
        return self.session.scalars(stmt).first()

    def list_highlights(self, document_id: str) -> list[Highlight]:
        stmt = select(Highlight).where(Highlight.document_id == document_id)
        return list(self.session.scalars(stmt))

    def delete_highlight(self, highlight_id: str) -> bool:
        return self._delete(self.session.get(Highlight, highlight_id))

    # relations
    def create_relation(self, document_id: str, url: str, note: Optional[str], spans: Iterable[SpanLike]) -> Relation:
        rel = Relation(id=new_id(), document_id=document_id, url=url, note=note, created_at=utcnow())
        for s in sorted(spans, key=lambda s: s.start_line):
            rel.spans.append(RelationSpan(id=new_id(), start_line=s.start_line, end_line=s.end_line))
        return self._add(rel)

    def get_relation(self, relation_id: str) -> Optional[Relation]:
        return self.session.get(Relation, relation_id)

    def list_relations(self, document_id: str) -> list[Relation]:
        stmt = select(Relation).where(Relation.document_id == document_id)
        return list(self.session.scalars(stmt))

    def delete_relation(self, relation_id: str) -> bool:
        return self._delete(self.get_relation(relation_id))

    def create_relation_span(self, relation_id: str, start_line: int, end_line: int) -> RelationSpan:
        span = RelationSpan(id=new_id(), relation_id=relation_id, start_line=start_line, end_line=end_line)
        self._add(span)
        # keep the relation's loaded span list in step with the new row
        relation = self.session.get(Relation, relation_id)
        if relation is not None:
            self.session.expire(relation, ["spans"])
        return span

    def delete_relation_span(self, span_id: str) -> bool:
        span = self.session.get(RelationSpan, span_id)
        if span is None:
            return False
        relation = span.relation
        relation.spans.remove(span)
        self.session.commit()
        return True

    # users
    def create_user(self, username, email, password_hash, password_salt) -> User:
        user = User(
            id=new_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            password_salt=password_salt,
            created_at=utcnow(),
        )
        self._add(user, conflict_message="Username already taken")
        logger.info("Registered user %s", username)
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        return self.session.scalars(stmt).first()
