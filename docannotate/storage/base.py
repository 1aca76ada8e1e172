from abc import ABC, abstractmethod
from typing import Iterable, Optional

from docannotate.annotations.spans import SpanLike
from docannotate.models.comment import Comment
from docannotate.models.document import Document
from docannotate.models.highlight import Highlight
from docannotate.models.relation import Relation, RelationSpan
from docannotate.models.user import User


class AnnotationStore(ABC):
    """Repository for documents, their annotations and users.

    Ordering contract: documents newest first, comments oldest first.
    Highlights and relations come back in no particular order; a relation's
    spans are sorted by start line.
    """

    # reported by /health
    kind = "abstract"

    # documents
    @abstractmethod
    def create_document(self, name: str, content: str, type: str) -> Document: ...

    @abstractmethod
    def get_document(self, document_id: str) -> Optional[Document]: ...

    @abstractmethod
    def list_documents(self) -> list[Document]: ...

    @abstractmethod
    def delete_document(self, document_id: str) -> bool:
        """Delete a document and every comment, highlight and relation on it."""

    # comments
    @abstractmethod
    def create_comment(
        self,
        document_id: str,
        line_number: int,
        author: str,
        content: str,
        parent_comment_id: Optional[str] = None,
    ) -> Comment: ...

    @abstractmethod
    def get_comment(self, comment_id: str) -> Optional[Comment]: ...

    @abstractmethod
    def list_comments(self, document_id: str) -> list[Comment]: ...

    @abstractmethod
    def update_comment_content(self, comment_id: str, content: str) -> Optional[Comment]: ...

    @abstractmethod
    def has_replies(self, comment_id: str) -> bool: ...

    @abstractmethod
    def delete_comment(self, comment_id: str) -> bool:
        """Delete exactly one comment; replies are left untouched."""

    # highlights
    @abstractmethod
    def create_highlight(self, document_id: str, line_number: int) -> Highlight: ...

    @abstractmethod
    def find_highlight(self, document_id: str, line_number: int) -> Optional[Highlight]: ...

    @abstractmethod
    def list_highlights(self, document_id: str) -> list[Highlight]: ...

    @abstractmethod
    def delete_highlight(self, highlight_id: str) -> bool: ...

    # relations
    @abstractmethod
    def create_relation(
        self,
        document_id: str,
        url: str,
        note: Optional[str],
        spans: Iterable[SpanLike],
    ) -> Relation: ...

    @abstractmethod
    def get_relation(self, relation_id: str) -> Optional[Relation]: ...

    @abstractmethod
    def list_relations(self, document_id: str) -> list[Relation]: ...

    @abstractmethod
    def delete_relation(self, relation_id: str) -> bool: ...

    @abstractmethod
    def create_relation_span(self, relation_id: str, start_line: int, end_line: int) -> RelationSpan: ...

    @abstractmethod
    def delete_relation_span(self, span_id: str) -> bool: ...

    # users
    @abstractmethod
    def create_user(self, username: str, email: Optional[str], password_hash: str, password_salt: str) -> User: ...

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...
