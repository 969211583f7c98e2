"""Many diacritic marks can simply be deleted."""
import re
import unicodedata

from src.translit.chart import TransliterationChart
from src.translit.edge import ChartEdge
from src.translit.pipeline import RuleBlock

DEFAULT_SEQUENCE_NUMBER = 20000

DELETE_DIACRITIC_SCORE = 1.0
DERIVATION = "delete diacritic"

_DIACRITIC_WORDS = [
    "ACCENT",
    "TONE",
    "COMBINING DIAERESIS",
    "COMBINING DIAERESIS BELOW",
    "COMBINING MACRON",
    "COMBINING VERTICAL LINE ABOVE",
    "COMBINING DOT ABOVE RIGHT",
    "COMBINING TILDE",
    "COMBINING CYRILLIC",
    "MUUSIKATOAN",
    "TRIISAP",
]
_DIACRITIC_PATTERN = re.compile(r"\b(" + "|".join(_DIACRITIC_WORDS) + r")\b")


def is_diacritic_to_delete(char: str) -> bool:
    if unicodedata.category(char) != "Mn":
        return False
    name = unicodedata.name(char, None)
    return name is not None and _DIACRITIC_PATTERN.search(name) is not None


class DiacriticDeletionRule(RuleBlock):
    def apply_to_chart(self, chart: TransliterationChart) -> None:
        for position, char in enumerate(chart.text):
            if is_diacritic_to_delete(char):
                chart.add_edge(ChartEdge(position, position + 1, "", DELETE_DIACRITIC_SCORE),
                               DERIVATION)


def build(**kwargs) -> DiacriticDeletionRule:
    return DiacriticDeletionRule()
