"""Low scoring identity edges so there is always a path through the chart."""
from src.translit.chart import TransliterationChart
from src.translit.edge import ChartEdge
from src.translit.pipeline import RuleBlock

# this should generally be the last rule applied, so it sits close to the end
# while leaving a little room for anything a user wants to run after it
DEFAULT_SEQUENCE_NUMBER = 2**31 - 1 - 100000

IDENTITY_TRANSLITERATION_SCORE = 0.1
DERIVATION = "backoff-identity"


class BackoffRule(RuleBlock):
    """Copies every input codepoint through untransliterated."""

    def apply_to_chart(self, chart: TransliterationChart) -> None:
        for position, char in enumerate(chart.text):
            chart.add_edge(ChartEdge(position, position + 1, char, IDENTITY_TRANSLITERATION_SCORE),
                           DERIVATION)


def build(**kwargs) -> BackoffRule:
    return BackoffRule()
