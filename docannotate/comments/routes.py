
from fastapi import APIRouter, Depends, Response
from docannotate.annotations import guard
from docannotate.auth.deps import get_store, get_current_user
from docannotate.models.user import User
from docannotate.schemas.comment import CommentCreate, CommentUpdate, CommentOut
from docannotate.storage import AnnotationStore

router = APIRouter(prefix="/api/comments", tags=["comments"])

@router.post("", response_model=CommentOut, status_code=201)
def create_comment(body: CommentCreate, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    # author always comes from the session, never from the body
    return guard.add_comment(
        store,
        body.document_id,
        body.line_number,
        user.username,
        body.content,
        body.parent_comment_id,
    )

@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(comment_id: str, body: CommentUpdate, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    return guard.edit_comment(store, comment_id, user.username, body.content)

@router.delete("/{comment_id}", status_code=204)
def delete_comment(comment_id: str, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    guard.remove_comment(store, comment_id, user.username)
    return Response(status_code=204)
