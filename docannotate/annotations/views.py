"""Per-line views derived from a document's raw annotation rows.

Nothing here is cached or written back; callers rebuild the view from the
store on every fetch.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from docannotate.annotations.spans import expand_spans
from docannotate.models.comment import Comment
from docannotate.models.highlight import Highlight
from docannotate.models.relation import Relation


@dataclass
class Thread:
    comment: Comment
    replies: list[Comment] = field(default_factory=list)

    @property
    def count(self) -> int:
        return 1 + len(self.replies)


@dataclass
class DocumentView:
    threads: dict[int, list[Thread]]
    highlighted_lines: set[int]
    relations_by_line: dict[int, list[Relation]]

    def comment_count(self, line: int) -> int:
        return sum(t.count for t in self.threads.get(line, []))

    def comment_counts(self) -> dict[int, int]:
        return {line: self.comment_count(line) for line in sorted(self.threads)}

    def is_highlighted(self, line: int) -> bool:
        return line in self.highlighted_lines

    def relation_count(self, line: int) -> int:
        return len(self.relations_by_line.get(line, []))

    def relation_counts(self) -> dict[int, int]:
        return {line: len(rels) for line, rels in sorted(self.relations_by_line.items())}


def build_threads(comments: Iterable[Comment]) -> dict[int, list[Thread]]:
    ordered = sorted(comments, key=lambda c: c.created_at)

    threads: dict[int, list[Thread]] = defaultdict(list)
    by_id: dict[str, Thread] = {}
    for c in ordered:
        if c.parent_comment_id is None:
            thread = Thread(comment=c)
            threads[c.line_number].append(thread)
            by_id[c.id] = thread

    for c in ordered:
        if c.parent_comment_id is None:
            continue
        parent = by_id.get(c.parent_comment_id)
        # orphans: parent missing, itself a reply, or on another line
        if parent is None or parent.comment.line_number != c.line_number:
            continue
        parent.replies.append(c)

    return dict(threads)


def highlighted_lines(highlights: Iterable[Highlight]) -> set[int]:
    return {h.line_number for h in highlights}


def relation_index(relations: Iterable[Relation]) -> dict[int, list[Relation]]:
    index: dict[int, list[Relation]] = defaultdict(list)
    for rel in relations:
        for line in sorted(expand_spans(rel.spans)):
            index[line].append(rel)
    return dict(index)


def build_document_view(
    comments: Iterable[Comment],
    highlights: Iterable[Highlight],
    relations: Iterable[Relation],
) -> DocumentView:
    return DocumentView(
        threads=build_threads(comments),
        highlighted_lines=highlighted_lines(highlights),
        relations_by_line=relation_index(relations),
    )
