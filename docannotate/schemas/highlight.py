from typing import Literal
from pydantic import Field, PositiveInt
from docannotate.schemas.base import ApiModel

class HighlightToggle(ApiModel):
    document_id: str = Field(min_length=1)
    line_number: PositiveInt

class HighlightOut(ApiModel):
    id: str
    document_id: str
    line_number: int

class ToggleOut(ApiModel):
    highlight: HighlightOut | None
    action: Literal["created", "deleted"]
