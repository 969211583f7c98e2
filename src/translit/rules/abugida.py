"""Rules for abugida writing systems (https://en.wikipedia.org/wiki/Abugida).

Consonant letters carry a default vowel unless a sign next to them says
otherwise. For every codepoint, in order:

1. A nukta (foreign-sound marker in Devanagari) extends the preceding edges.
2. A subjoined letter or vowel sign inside the same script replaces the
   default vowel of the preceding edge with its own transliteration.
3. A virama suppresses the default vowel of the preceding edge.
4. Otherwise a consonant gets the script's primary default vowel appended.
5. Syllable-final consonant signs (``+m``, ``+ng``...) merge with the preceding
   syllable, supplying the default vowel when that syllable lacks one.

Earlier alternatives stay in the chart, so the decoder picks among them.
"""
import re
import unicodedata
from typing import Optional

from src.translit.chart import TransliterationChart
from src.translit.pipeline import RuleBlock

DEFAULT_SEQUENCE_NUMBER = 30000

VIRAMA_SCORE = 2.0
ABUGIDA_SYLLABIC_BONUS = 0.5
SUBJOINED_BONUS = 0.25
NUKTA_BONUS = 0.25
DEFAULT_VOWEL_INCREMENT = 0.25

CONSONANT_VOWEL_PATTERN = re.compile(r"^(.*[bcdfghjklmnpqrstvwxyz])([aeiou]+)$")
_LATIN_CONSONANTS = re.compile(r"^[bcdfghjklmnpqrstvwxyz]+$")
_STRIP_INITIAL_PLUS = re.compile(r"^\+")

_SUBJOINED_PATTERN = re.compile(
    r"\b(?:SUBJOINED LETTER|VOWEL SIGN|AU LENGTH MARK|EMPHASIS MARK|CONSONANT SIGN|SIGN VIRAMA"
    r"|SIGN PAMAAEH|SIGN COENG|SIGN ASAT|SIGN ANUSVARA|SIGN ANUSVARAYA|SIGN BINDI|TIPPI"
    r"|SIGN NIKAHIT|SIGN CANDRABINDU|SIGN VISARGA|SIGN REAHMUK|SIGN DOT BELOW"
    r"|ARABIC (?:DAMMA|DAMMATAN|FATHA|FATHATAN|HAMZA|KASRA|KASRATAN|MADDAH|SHADDA"
    r"|SUKUN))\b")

_VIRAMA_WORDS = ["VIRAMA", "AL-LAKUNA", "ASAT", "COENG", "PAMAAEH"]
_VIRAMA_PATTERN = re.compile(r"\bSIGN (?:" + "|".join(_VIRAMA_WORDS) + r")\b")

_ABUGIDA_SYLLABICS = frozenset(["+H", "+M", "+N", "+NG", "+h", "+m", "+n", "+ng"])


def _char_name(char: str) -> Optional[str]:
    return unicodedata.name(char, None)


def is_nukta(char: str) -> bool:
    name = _char_name(char)
    return name is not None and "SIGN NUKTA" in name


def is_subjoined(char: str) -> bool:
    name = _char_name(char)
    return name is not None and _SUBJOINED_PATTERN.search(name) is not None


def is_virama(char: str) -> bool:
    name = _char_name(char)
    return name is not None and _VIRAMA_PATTERN.search(name) is not None


def is_latin_consonant(s: str) -> bool:
    return _LATIN_CONSONANTS.match(s) is not None


def ends_with_vowel(s: str) -> bool:
    return s[-1:] in ("a", "e", "i", "o", "u")


def is_abugida_syllabic(s: str) -> bool:
    return s in _ABUGIDA_SYLLABICS


class AbugidaRule(RuleBlock):
    def apply_to_chart(self, chart: TransliterationChart) -> None:
        for position, char in enumerate(chart.text):
            self._apply_to_position(chart, position, char)

    def _apply_to_position(self, chart: TransliterationChart, position: int, char: str) -> None:
        scripts = chart.script_mapping
        block_default_vowel = False

        if is_nukta(char):
            for preceding in chart.edges_ending_at(position):
                chart.add_extended(preceding, position + 1, preceding.span_transliteration,
                                   preceding.score + NUKTA_BONUS, "nukta")
            block_default_vowel = True

        # certain markers replace the default vowel with themselves
        if not scripts.starts_new_script(position) and is_subjoined(char):
            for preceding in chart.edges_ending_at(position):
                match = CONSONANT_VOWEL_PATTERN.match(preceding.span_transliteration)
                if match and scripts.is_abugida_vowel_for_some_script(position, match.group(2)):
                    for current in chart.edges_from_to(position, position + 1):
                        chart.add_extended(preceding, position + 1,
                                           match.group(1) + current.span_transliteration,
                                           preceding.score + current.score + SUBJOINED_BONUS,
                                           "subjoined")
            block_default_vowel = True

        if is_virama(char) and position > 0:
            for preceding in chart.edges_ending_at(position):
                match = CONSONANT_VOWEL_PATTERN.match(preceding.span_transliteration)
                if match:
                    if scripts.is_abugida_vowel_for_some_script(position, match.group(2)):
                        chart.add_extended(preceding, position + 1, match.group(1),
                                           preceding.score + VIRAMA_SCORE,
                                           "suppress-default-vowel")
                else:
                    chart.add_extended(preceding, position + 1, preceding.span_transliteration,
                                       preceding.score + VIRAMA_SCORE, "no-op-virama")
            block_default_vowel = True

        if not block_default_vowel:
            default_vowel = scripts.primary_default_vowel(position)
            if default_vowel is not None:
                for edge in chart.edges_ending_at(position + 1):
                    if is_latin_consonant(edge.span_transliteration):
                        chart.add_extended(edge, position + 1,
                                           edge.span_transliteration + default_vowel,
                                           edge.score + DEFAULT_VOWEL_INCREMENT, "default-vowel")

        for edge in chart.edges_from_to(position, position + 1):
            if (is_abugida_syllabic(edge.span_transliteration)
                    and not scripts.starts_new_script(position)
                    and scripts.is_abugida_vowel_for_some_script(position, "a")):
                suffix = _STRIP_INITIAL_PLUS.sub("", edge.span_transliteration)
                for maybe_vowel_edge in chart.edges_ending_at(position):
                    syllable = maybe_vowel_edge.span_transliteration
                    if ends_with_vowel(syllable):
                        chart.add_merged(maybe_vowel_edge, edge, syllable + suffix,
                                         maybe_vowel_edge.score + edge.score + ABUGIDA_SYLLABIC_BONUS,
                                         "syllable-end-consonant")
                    else:
                        chart.add_merged(maybe_vowel_edge, edge, syllable + "a" + suffix,
                                         maybe_vowel_edge.score + edge.score + ABUGIDA_SYLLABIC_BONUS,
                                         "syllable-end-consonant-with-default-vowel")


def build(**kwargs) -> AbugidaRule:
    return AbugidaRule()
