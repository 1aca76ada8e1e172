from docannotate.schemas.base import ApiModel
from docannotate.schemas.comment import ThreadOut

class DocumentViewOut(ApiModel):
    document_id: str
    line_count: int
    threads: dict[int, list[ThreadOut]]
    comment_counts: dict[int, int]
    highlighted_lines: list[int]
    relations_by_line: dict[int, list[str]]
    relation_counts: dict[int, int]
