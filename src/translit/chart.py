"""A "chart" for transliteration.

The chart holds alternative transliterations for spans of one input string and
finds the best overall transliteration from them. Positions are between
codepoints, so the first codepoint lies between positions 0 and 1 and every
edge covers at least one codepoint.

A chart is mutable and append-only: rule blocks add edges, nothing removes or
changes them. It is built for a single transliteration call and then dropped.
"""
from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from src.translit.edge import ChartEdge
from src.translit.script import ScriptMapping

log = logging.getLogger(__name__)


class OutOfRange(ValueError):
    """Raised when an edge reaches outside the chart's input string."""


class TransliterationChart:
    def __init__(self, text: str, script_mapping: ScriptMapping, track_derivations: bool = True):
        if script_mapping.text != text:
            raise ValueError("Script mapping was built for a different string")
        self.text = text
        self.script_mapping = script_mapping
        self.track_derivations = track_derivations

        self._edges: List[ChartEdge] = []
        # edge indices, for convenience when writing transliteration rules
        self._starting_at: Dict[int, List[int]] = defaultdict(list)
        self._ending_at: Dict[int, List[int]] = defaultdict(list)
        self._including: Dict[int, List[int]] = defaultdict(list)
        # how did each edge come to be? for debugging only, never iterated
        self._derivations: Dict[int, str] = {}
        self._index_by_identity: Dict[int, int] = {}

    def __len__(self) -> int:
        """Number of codepoints in the input."""
        return len(self.text)

    @property
    def edges(self) -> List[ChartEdge]:
        return list(self._edges)

    def add_edge(self, edge: ChartEdge, derivation: str = "") -> None:
        """Add a possible transliteration of the codepoints covered by ``edge``."""
        if edge.end_position > len(self.text) or edge.start_position < 0:
            raise OutOfRange(
                f"Edge [{edge.start_position}, {edge.end_position}) outside input of "
                f"length {len(self.text)}"
            )
        index = len(self._edges)
        self._edges.append(edge)
        self._starting_at[edge.start_position].append(index)
        self._ending_at[edge.end_position].append(index)
        for position in range(edge.start_position, edge.end_position):
            self._including[position].append(index)
        self._index_by_identity[id(edge)] = index
        if self.track_derivations:
            self._derivations[index] = derivation

    def derivation(self, edge: ChartEdge) -> Optional[str]:
        """Why ``edge`` was added, if derivations are tracked and the edge is in this chart."""
        index = self._index_by_identity.get(id(edge))
        if index is None or self._edges[index] is not edge:
            return None
        return self._derivations.get(index)

    # lookups return copies so rules may add edges while iterating over them

    def edges_starting_at(self, position: int) -> List[ChartEdge]:
        return [self._edges[i] for i in self._starting_at.get(position, ())]

    def edges_ending_at(self, position: int) -> List[ChartEdge]:
        return [self._edges[i] for i in self._ending_at.get(position, ())]

    def edges_from_to(self, start: int, end: int) -> List[ChartEdge]:
        if start < 0:
            raise ValueError(f"Start position must be non-negative, got {start}")
        if end <= start:
            raise ValueError(f"End position {end} must be after start position {start}")
        return [edge for edge in self.edges_starting_at(start) if edge.end_position == end]

    def edges_including(self, position: int) -> List[ChartEdge]:
        """Edges which transliterate the codepoint at ``position``."""
        return [self._edges[i] for i in self._including.get(position, ())]

    def add_extended(self, base: ChartEdge, new_end: int, new_transliteration: str,
                     new_score: float, reason: str) -> None:
        """Add an edge starting where ``base`` does and extending to ``new_end``."""
        if new_end < base.end_position:
            raise ValueError(
                f"Extended edge must end at or after {base.end_position}, got {new_end}"
            )
        self.add_edge(ChartEdge(base.start_position, new_end, new_transliteration, new_score),
                      self._extend_reason([base], reason))

    def add_merged(self, left: ChartEdge, right: ChartEdge, combined_transliteration: str,
                   score: float, reason: str) -> None:
        """Add an edge covering two adjacent edges."""
        if left.end_position != right.start_position:
            raise ValueError(
                f"Cannot merge non-adjacent edges ending at {left.end_position} "
                f"and starting at {right.start_position}"
            )
        if self.track_derivations:
            left_derivation = self.derivation(left)
            right_derivation = self.derivation(right)
            if left_derivation is not None:
                reason += f" [left: {left_derivation}]"
            if right_derivation is not None:
                reason += f" [right: {right_derivation}]"
        self.add_edge(ChartEdge(left.start_position, right.end_position,
                                combined_transliteration, score), reason)

    def add_derived(self, source_edges: Iterable[ChartEdge], new_edge: ChartEdge,
                    reason: str) -> None:
        """Add ``new_edge``, noting that it was computed from ``source_edges``."""
        self.add_edge(new_edge, self._extend_reason(source_edges, reason))

    def best_score(self) -> float:
        """Score of the best path through the chart, ``-inf`` if there is none."""
        scores, _ = self._relax()
        return scores[len(self.text)]

    def best_decoding(self) -> Optional[str]:
        """The highest scoring transliteration, or ``None`` when no path spans the input.

        Edges are relaxed once each, ordered by start and then end position; edges
        with the same span are taken in the order they were added and a later edge
        only replaces an earlier one on a strictly better score.
        """
        scores, backpointers = self._relax()
        end = len(self.text)
        if scores[end] == -math.inf:
            return None

        parts = []
        position = end
        while position > 0:
            edge = backpointers[position]
            if edge is None:
                log.error(f"Reachable position {position} has no backpointer; "
                          f"treating chart over {self.text!r} as undecodable")
                return None
            parts.append(edge.span_transliteration)
            position = edge.start_position
        parts.reverse()
        return "".join(parts)

    def _relax(self):
        n = len(self.text)
        scores = [0.0] + [-math.inf] * n
        backpointers: List[Optional[ChartEdge]] = [None] * (n + 1)
        for edge in sorted(self._edges, key=lambda e: (e.start_position, e.end_position)):
            path_score = scores[edge.start_position] + edge.score
            if path_score > scores[edge.end_position]:
                scores[edge.end_position] = path_score
                backpointers[edge.end_position] = edge
        return scores, backpointers

    def _extend_reason(self, base_edges: Iterable[ChartEdge], reason: str) -> str:
        if not self.track_derivations:
            return reason
        parts = [reason]
        for base_edge in base_edges:
            base_derivation = self.derivation(base_edge)
            if base_derivation is not None:
                parts.append(f" [from: {base_derivation}]")
        return "".join(parts)
