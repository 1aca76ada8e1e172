
import logging
from fastapi import APIRouter, Depends, Response
from docannotate.annotations import guard
from docannotate.annotations.spans import Span, to_spans
from docannotate.auth.deps import get_store, get_current_user
from docannotate.errors import NotFound
from docannotate.models.user import User
from docannotate.schemas.relation import RelationCreate, RelationOut, SpanIn, SpanOut
from docannotate.storage import AnnotationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["relations"])

@router.post("/relations", response_model=RelationOut, status_code=201)
def create_relation(body: RelationCreate, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    doc = guard.require_document(store, body.document_id)
    spans = [Span(s.start_line, s.end_line) for s in body.spans or []]
    if body.lines:
        spans.extend(to_spans(body.lines))
    for span in spans:
        guard.check_line(doc, span.end_line, field="spans")
    relation = store.create_relation(doc.id, body.url, body.note, spans)
    logger.info("Relation %s on %s created by %s (%d spans)", relation.id, doc.id, user.username, len(spans))
    return relation

@router.post("/relations/{relation_id}/spans", response_model=SpanOut, status_code=201)
def add_span(relation_id: str, body: SpanIn, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    relation = store.get_relation(relation_id)
    if relation is None:
        raise NotFound("Relation not found")
    doc = guard.require_document(store, relation.document_id)
    guard.check_line(doc, body.end_line, field="endLine")
    return store.create_relation_span(relation_id, body.start_line, body.end_line)

@router.delete("/relations/{relation_id}", status_code=204)
def delete_relation(relation_id: str, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    if not store.delete_relation(relation_id):
        raise NotFound("Relation not found")
    logger.info("Relation %s deleted by %s", relation_id, user.username)
    return Response(status_code=204)

@router.delete("/relation-spans/{span_id}", status_code=204)
def delete_relation_span(span_id: str, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    if not store.delete_relation_span(span_id):
        raise NotFound("Relation span not found")
    return Response(status_code=204)
