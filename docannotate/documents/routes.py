
import logging
import httpx
from fastapi import APIRouter, Depends, Request, Response
from docannotate.annotations import guard
from docannotate.annotations.views import build_document_view
from docannotate.auth.deps import get_store, get_current_user
from docannotate.config import settings
from docannotate.documents.importer import fetch_text
from docannotate.models.user import User
from docannotate.schemas.comment import CommentOut, ThreadOut
from docannotate.schemas.document import DocumentCreate, DocumentImport, DocumentOut, DocumentType
from docannotate.schemas.highlight import HighlightOut
from docannotate.schemas.relation import RelationOut
from docannotate.schemas.view import DocumentViewOut
from docannotate.storage import AnnotationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])

def get_import_transport(request: Request) -> httpx.AsyncBaseTransport | None:
    """Transport used by the URL importer; None means real network access."""
    return getattr(request.app.state, "import_transport", None)

@router.get("", response_model=list[DocumentOut])
def list_documents(store: AnnotationStore = Depends(get_store)):
    return store.list_documents()

@router.get("/{doc_id}", response_model=DocumentOut)
def get_document(doc_id: str, store: AnnotationStore = Depends(get_store)):
    return guard.require_document(store, doc_id)

@router.post("", response_model=DocumentOut, status_code=201)
def create_document(body: DocumentCreate, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    doc = store.create_document(body.name, body.content, body.type.value)
    logger.info("Document %s (%s) created by %s", doc.id, doc.name, user.username)
    return doc

@router.post("/import-url", response_model=DocumentOut, status_code=201)
async def import_document(
    body: DocumentImport,
    store: AnnotationStore = Depends(get_store),
    user: User = Depends(get_current_user),
    transport: httpx.AsyncBaseTransport | None = Depends(get_import_transport),
):
    fetched = await fetch_text(
        body.url,
        timeout=settings.import_timeout_seconds,
        max_bytes=settings.max_document_bytes,
        transport=transport,
    )
    doc = store.create_document(fetched.name, fetched.content, DocumentType.URL.value)
    logger.info("Document %s imported from %s by %s", doc.id, body.url, user.username)
    return doc

@router.delete("/{doc_id}", status_code=204)
def delete_document(doc_id: str, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    guard.require_document(store, doc_id)
    store.delete_document(doc_id)
    logger.info("Document %s deleted by %s", doc_id, user.username)
    return Response(status_code=204)

@router.get("/{doc_id}/comments", response_model=list[CommentOut])
def list_comments(doc_id: str, store: AnnotationStore = Depends(get_store)):
    return store.list_comments(doc_id)

@router.get("/{doc_id}/highlights", response_model=list[HighlightOut])
def list_highlights(doc_id: str, store: AnnotationStore = Depends(get_store)):
    return store.list_highlights(doc_id)

@router.get("/{doc_id}/relations", response_model=list[RelationOut])
def list_relations(doc_id: str, store: AnnotationStore = Depends(get_store)):
    return store.list_relations(doc_id)

@router.get("/{doc_id}/view", response_model=DocumentViewOut)
def document_view(doc_id: str, store: AnnotationStore = Depends(get_store)):
    doc = guard.require_document(store, doc_id)
    view = build_document_view(
        store.list_comments(doc_id),
        store.list_highlights(doc_id),
        store.list_relations(doc_id),
    )
    threads = {
        line: [
            ThreadOut(
                **CommentOut.model_validate(t.comment).model_dump(),
                replies=[CommentOut.model_validate(r) for r in t.replies],
                count=t.count,
            )
            for t in line_threads
        ]
        for line, line_threads in sorted(view.threads.items())
    }
    return DocumentViewOut(
        document_id=doc.id,
        line_count=doc.line_count,
        threads=threads,
        comment_counts=view.comment_counts(),
        highlighted_lines=sorted(view.highlighted_lines),
        relations_by_line={line: [r.id for r in rels] for line, rels in sorted(view.relations_by_line.items())},
        relation_counts=view.relation_counts(),
    )
