"""Ordered pipelines of rule blocks which fill a chart and decode it."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.translit.chart import TransliterationChart
from src.translit.script import CodePointToScriptMapper

log = logging.getLogger(__name__)

# Sequence number for steps which only add things to the chart without examining
# its contents and which should be applied early in processing.
INDEPENDENT_INITIAL_STEP = 10000


class RuleBlock(ABC):
    """Any transformation of a transliteration chart.

    Rule blocks only ever add edges. They keep no per-call state, so one
    instance can serve every chart a pipeline builds.
    """

    @abstractmethod
    def apply_to_chart(self, chart: TransliterationChart) -> None:
        ...


class Transliterator(ABC):
    """Anything which turns a string into its Latin-script rendering."""

    @abstractmethod
    def transliterate(self, text: str) -> str:
        ...

    def __call__(self, text: str) -> str:
        return self.transliterate(text)


class IdentityTransliterator(Transliterator):
    """Returns its input unaltered."""

    def transliterate(self, text: str) -> str:
        return text


class Pipeline(Transliterator):
    """Applies rule blocks in order of sequence number, then decodes the chart.

    Blocks sharing a sequence number run in the order they were registered.
    Pipelines are immutable once built and may be shared between threads; every
    call works on its own chart.
    """

    def __init__(self, registrations: List[Tuple[int, "RuleBlock"]],
                 script_mapper: Optional[CodePointToScriptMapper] = None,
                 track_derivations: bool = False):
        # sorted() is stable, so registration order breaks sequence number ties
        ordered = sorted(registrations, key=lambda registration: registration[0])
        self._registrations: Tuple[Tuple[int, RuleBlock], ...] = tuple(ordered)
        self._script_mapper = script_mapper or CodePointToScriptMapper()
        self._track_derivations = track_derivations

    @property
    def registrations(self) -> Tuple[Tuple[int, RuleBlock], ...]:
        """(sequence number, block) pairs in application order."""
        return self._registrations

    @property
    def rule_blocks(self) -> Tuple[RuleBlock, ...]:
        return tuple(block for _, block in self._registrations)

    @property
    def script_mapper(self) -> CodePointToScriptMapper:
        return self._script_mapper

    def new_chart(self, text: str) -> TransliterationChart:
        return TransliterationChart(text, self._script_mapper.map_string(text),
                                    track_derivations=self._track_derivations)

    def apply(self, chart: TransliterationChart) -> str:
        """Run every block once over ``chart`` and decode it.

        When no path spans the chart the input comes back unchanged.
        """
        for rule_block in self.rule_blocks:
            rule_block.apply_to_chart(chart)
        decoding = chart.best_decoding()
        if decoding is None:
            log.debug(f"No decoding found for {chart.text!r}, returning it unchanged")
            return chart.text
        return decoding

    def transliterate(self, text: str) -> str:
        return self.apply(self.new_chart(text))

    def to_builder(self) -> "PipelineBuilder":
        """A builder pre-loaded with this pipeline's blocks, for deriving variants."""
        builder = PipelineBuilder(self._script_mapper, track_derivations=self._track_derivations)
        for sequence_number, block in self._registrations:
            builder.register(sequence_number, block)
        return builder


class PipelineBuilder:
    def __init__(self, script_mapper: Optional[CodePointToScriptMapper] = None,
                 track_derivations: bool = False):
        self._script_mapper = script_mapper
        self._track_derivations = track_derivations
        self._registrations: List[Tuple[int, RuleBlock]] = []

    def register(self, sequence_number: int, block: RuleBlock) -> "PipelineBuilder":
        if not isinstance(block, RuleBlock):
            raise TypeError(f"Expected a RuleBlock, got {type(block).__name__}")
        self._registrations.append((sequence_number, block))
        return self

    def script_mapper(self, script_mapper: CodePointToScriptMapper) -> "PipelineBuilder":
        self._script_mapper = script_mapper
        return self

    def build(self) -> Pipeline:
        return Pipeline(list(self._registrations), self._script_mapper,
                        track_derivations=self._track_derivations)
