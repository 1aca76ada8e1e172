"""Line selections <-> minimal inclusive spans.

A selection is any iterable of 1-based line numbers. ``to_spans`` collapses it
into the fewest disjoint, ascending ``Span`` values; ``expand_spans`` goes
back the other way for per-line aggregates.
"""

from dataclasses import dataclass
from typing import Iterable, Protocol


class SpanLike(Protocol):
    start_line: int
    end_line: int


@dataclass(frozen=True)
class Span:
    start_line: int
    end_line: int

    def __post_init__(self):
        if self.start_line < 1:
            raise ValueError(f"start_line must be positive, got {self.start_line}")
        if self.start_line > self.end_line:
            raise ValueError(f"start_line {self.start_line} is after end_line {self.end_line}")


def to_spans(lines: Iterable[int]) -> list[Span]:
    ordered = sorted(set(lines))
    if ordered and ordered[0] < 1:
        raise ValueError(f"line numbers must be positive, got {ordered[0]}")

    spans: list[Span] = []
    start = prev = None
    for line in ordered:
        if start is None:
            start = prev = line
        elif line == prev + 1:
            prev = line
        else:
            spans.append(Span(start, prev))
            start = prev = line
    if start is not None:
        spans.append(Span(start, prev))
    return spans


def expand_spans(spans: Iterable[SpanLike]) -> set[int]:
    covered: set[int] = set()
    for span in spans:
        covered.update(range(span.start_line, span.end_line + 1))
    return covered

