"""Final schwa deletion for Devanagari.

Many Indo-Aryan languages drop the final schwa of a word. Hindi sometimes does
so word-medially as well; that case is not handled.
"""
import re

from src.translit.chart import TransliterationChart
from src.translit.edge import ChartEdge
from src.translit.pipeline import RuleBlock
from src.translit.rules.abugida import CONSONANT_VOWEL_PATTERN, ends_with_vowel

DEFAULT_SEQUENCE_NUMBER = 40000

SCHWA_DELETION_BONUS = 0.25

_ROMAN_LETTERS = re.compile(r"[a-zA-Z]+")


class SchwaDeletionRule(RuleBlock):
    def apply_to_chart(self, chart: TransliterationChart) -> None:
        scripts = chart.script_mapping
        n = len(chart)
        for position in range(n - 1):
            if scripts.is_devanagari(position):
                next_position = position + 1
                if (not scripts.is_devanagari(next_position)
                        or self._is_boundary(chart, next_position)):
                    self._delete_schwa_ending_at(chart, position)
        if n and scripts.is_devanagari(n - 1):
            self._delete_schwa_ending_at(chart, n - 1)

    @staticmethod
    def _is_boundary(chart: TransliterationChart, position: int) -> bool:
        """Nothing transliterates the character at ``position`` into Latin letters."""
        return not any(_ROMAN_LETTERS.search(edge.span_transliteration)
                       for edge in chart.edges_including(position))

    @staticmethod
    def _delete_schwa_ending_at(chart: TransliterationChart, position: int) -> None:
        for preceding in chart.edges_ending_at(position + 1):
            match = CONSONANT_VOWEL_PATTERN.match(preceding.span_transliteration)
            if not match or match.group(2) != "a":
                continue
            for before in chart.edges_ending_at(preceding.start_position):
                if ends_with_vowel(before.span_transliteration):
                    chart.add_derived(
                        [before, preceding],
                        ChartEdge(before.start_position, preceding.end_position,
                                  before.span_transliteration + match.group(1),
                                  before.score + preceding.score + SCHWA_DELETION_BONUS),
                        "schwa-deletion")


def build(**kwargs) -> SchwaDeletionRule:
    return SchwaDeletionRule()
