"""Table lookup: matches source substrings against known transliterations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from src.translit.chart import TransliterationChart
from src.translit.edge import ChartEdge
from src.translit.pipeline import INDEPENDENT_INITIAL_STEP, RuleBlock
from src.translit.schema import validate_dataframe

DEFAULT_SEQUENCE_NUMBER = INDEPENDENT_INITIAL_STEP

NO_COMMENT_DERIVATION = "substring mapper (no comment)"


@dataclass(frozen=True)
class SubstringMapping:
    transliteration: str
    score: float
    comment: Optional[str] = None


class SubstringMapper(RuleBlock):
    """Adds an edge for every known source substring found in the input.

    Mappings are indexed by the first codepoint of their source. A full trie
    would do better on long patterns, but most patterns are one or two
    codepoints long.
    """

    def __init__(self, mappings: Iterable[Tuple[str, SubstringMapping]] = ()):
        by_source: Dict[str, List[SubstringMapping]] = {}
        for source, mapping in mappings:
            if not source:
                raise ValueError("Cannot have empty substring mapper pattern")
            by_source.setdefault(source, []).append(mapping)
        self._mappings = {source: tuple(m) for source, m in by_source.items()}

        by_first_char: Dict[str, List[str]] = {}
        for source in self._mappings:
            by_first_char.setdefault(source[0], []).append(source)
        self._sources_by_first_char = {char: tuple(s) for char, s in by_first_char.items()}

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "SubstringMapper":
        """Build a mapper from a frame following ``schema.MAPPING_COLUMNS``."""
        validate_dataframe(df)
        mappings = []
        for r in df.itertuples(index=False):
            comment = r.comment if isinstance(r.comment, str) and r.comment else None
            mappings.append((r.source, SubstringMapping(r.target, float(r.score), comment)))
        return cls(mappings)

    def __len__(self) -> int:
        return sum(len(m) for m in self._mappings.values())

    def mappings_for(self, source: str) -> Tuple[SubstringMapping, ...]:
        return self._mappings.get(source, ())

    def sources_starting_with(self, char: str) -> Tuple[str, ...]:
        return self._sources_by_first_char.get(char, ())

    @property
    def max_pattern_length(self) -> int:
        return max((len(source) for source in self._mappings), default=0)

    def apply_to_chart(self, chart: TransliterationChart) -> None:
        text = chart.text
        for position, char in enumerate(text):
            for source in self.sources_starting_with(char):
                if text.startswith(source, position):
                    for mapping in self._mappings[source]:
                        chart.add_edge(ChartEdge(position, position + len(source),
                                                 mapping.transliteration, mapping.score),
                                       mapping.comment or NO_COMMENT_DERIVATION)


def build(mappings: Iterable[Tuple[str, SubstringMapping]] = (), **kwargs) -> SubstringMapper:
    return SubstringMapper(mappings)
