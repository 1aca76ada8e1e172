import io
import logging
import re
from fastapi import APIRouter, UploadFile, File, Depends
from pdfminer.high_level import extract_text
from docannotate.auth.deps import get_store, get_current_user
from docannotate.config import settings
from docannotate.errors import PayloadRejected, ValidationError
from docannotate.models.user import User
from docannotate.schemas.document import DocumentOut, DocumentType
from docannotate.storage import AnnotationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["upload"])

def _clean_pdf_text(raw: str) -> str:
    if not raw:
        return ""

    raw = raw.replace("\x0c", "\n\n")
    raw = raw.replace("\r\n", "\n").replace("\r", "\n")
    raw = re.sub(r"\n{3,}", "\n\n", raw)
    raw = re.sub(r"[ \t]{2,}", " ", raw)
    raw = "\n".join(line.strip() for line in raw.split("\n"))

    return raw.strip()

def _detect_type(f: UploadFile) -> DocumentType:
    name = (f.filename or "").lower()
    ctype = (f.content_type or "").lower()
    if ctype == "application/pdf" or name.endswith(".pdf"):
        return DocumentType.PDF
    if ctype.startswith("text/plain") or name.endswith(".txt"):
        return DocumentType.TXT
    raise PayloadRejected(f"File '{f.filename}' is neither PDF nor TXT.", status_code=415)

@router.post("/upload", response_model=DocumentOut, status_code=201)
async def upload_document(
    file: UploadFile = File(...),
    store: AnnotationStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    doc_type = _detect_type(file)
    data = await file.read()
    if len(data) > settings.max_document_bytes:
        raise PayloadRejected(f"{file.filename} is larger than {settings.max_document_bytes // (1024 * 1024)}MB.", status_code=413)

    if doc_type is DocumentType.PDF:
        try:
            text = _clean_pdf_text(extract_text(io.BytesIO(data)) or "")
        except Exception as e:
            raise PayloadRejected(f"Could not extract text from {file.filename}: {e}", status_code=422)
    else:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            raise ValidationError(f"{file.filename} is not valid UTF-8 text", fields=["file"])

    if not text.strip():
        raise PayloadRejected("No text could be extracted.", status_code=422)

    doc = store.create_document(file.filename or f"upload.{doc_type.value}", text, doc_type.value)
    logger.info("Document %s uploaded by %s (%s, %d chars)", doc.id, user.username, doc_type.value, len(text))
    return doc
