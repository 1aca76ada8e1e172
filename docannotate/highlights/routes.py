
from fastapi import APIRouter, Depends
from docannotate.annotations import guard
from docannotate.auth.deps import get_store, get_current_user
from docannotate.models.user import User
from docannotate.schemas.highlight import HighlightToggle, HighlightOut, ToggleOut
from docannotate.storage import AnnotationStore

router = APIRouter(prefix="/api/highlights", tags=["highlights"])

@router.post("/toggle", response_model=ToggleOut)
def toggle_highlight(body: HighlightToggle, store: AnnotationStore = Depends(get_store), user: User = Depends(get_current_user)):
    highlight, action = guard.toggle_highlight(store, body.document_id, body.line_number)
    out = HighlightOut.model_validate(highlight) if highlight is not None else None
    return ToggleOut(highlight=out, action=action)
