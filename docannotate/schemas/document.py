
from datetime import datetime
from enum import Enum
from pydantic import Field
from docannotate.schemas.base import ApiModel

class DocumentType(str, Enum):
    PDF = "pdf"
    TXT = "txt"
    URL = "url-imported"

class DocumentCreate(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    content: str
    type: DocumentType = DocumentType.TXT

class DocumentImport(ApiModel):
    url: str = Field(min_length=1)

class DocumentOut(ApiModel):
    id: str
    name: str
    content: str
    type: DocumentType
    uploaded_at: datetime
