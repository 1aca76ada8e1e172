from datetime import datetime
from pydantic import Field, PositiveInt
from docannotate.schemas.base import ApiModel

class CommentCreate(ApiModel):
    document_id: str = Field(min_length=1)
    line_number: PositiveInt
    content: str = Field(min_length=1)
    parent_comment_id: str | None = None

class CommentUpdate(ApiModel):
    content: str = Field(min_length=1)

class CommentOut(ApiModel):
    id: str
    document_id: str
    line_number: int
    author: str
    content: str
    parent_comment_id: str | None = None
    created_at: datetime

class ThreadOut(CommentOut):
    replies: list[CommentOut] = []
    count: int = 1
