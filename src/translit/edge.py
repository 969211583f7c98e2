"""Chart edges: scored candidate transliterations of a codepoint span."""
from __future__ import annotations

from dataclasses import dataclass


class InvalidSpan(ValueError):
    """Raised when an edge would cover zero or a negative number of codepoints."""


@dataclass(frozen=True)
class ChartEdge:
    """The codepoints between two positions should become ``span_transliteration``.

    Positions sit between codepoints: position 0 precedes the first codepoint,
    position 1 lies between the first and second, and so on. Higher scores are
    better and scores add up along a path.
    """
    start_position: int
    end_position: int
    span_transliteration: str
    score: float

    def __post_init__(self):
        if self.end_position <= self.start_position:
            raise InvalidSpan(
                f"Edge must end after it starts: [{self.start_position}, {self.end_position})"
            )

    @property
    def length(self) -> int:
        return self.end_position - self.start_position
