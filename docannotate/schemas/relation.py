from datetime import datetime
from pydantic import Field, PositiveInt, model_validator
from docannotate.schemas.base import ApiModel

class SpanIn(ApiModel):
    start_line: PositiveInt
    end_line: PositiveInt

    @model_validator(mode="after")
    def _ordered(self):
        if self.start_line > self.end_line:
            raise ValueError("startLine must not be after endLine")
        return self

class RelationCreate(ApiModel):
    document_id: str = Field(min_length=1)
    url: str = Field(min_length=1, max_length=2048)
    note: str | None = None
    spans: list[SpanIn] | None = None
    # raw selected lines, normalized into spans server-side
    lines: list[PositiveInt] | None = None

    @model_validator(mode="after")
    def _has_coverage(self):
        if not self.spans and not self.lines:
            raise ValueError("either spans or lines must be provided")
        return self

class SpanOut(ApiModel):
    id: str
    relation_id: str
    start_line: int
    end_line: int

class RelationOut(ApiModel):
    id: str
    document_id: str
    url: str
    note: str | None = None
    created_at: datetime
    spans: list[SpanOut] = []
