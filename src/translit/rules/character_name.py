"""Transliterate characters by looking up their Unicode names.

``CYRILLIC SMALL LETTER ZHE`` becomes ``zh``, ``HIRAGANA LETTER KA`` becomes
``ka``, digits become their decimal value and punctuation its ASCII
counterpart. Names which would transliterate to something suspiciously long are
refused, leaving the character to other rules.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from functools import lru_cache
from typing import Dict, Optional

from src.translit.chart import TransliterationChart
from src.translit.edge import ChartEdge
from src.translit.pipeline import INDEPENDENT_INITIAL_STEP, RuleBlock

log = logging.getLogger(__name__)

DEFAULT_SEQUENCE_NUMBER = INDEPENDENT_INITIAL_STEP

CHARACTER_NAME_SCORE = 1.0
DERIVATION = "by character name"
SUSPICIOUS_LENGTH = 6

PUNCTUATION_CATEGORIES = {"Pc", "Me", "Pe", "Pf", "Pi", "Ps", "Po"}
_OTHER_HANDLED_CATEGORIES = {"Cf", "Mc", "Mn"}


def _alternation(words) -> str:
    # longest first so multi-word phrases win over their prefixes
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


_DELETE_UP_TO_AND_INCLUDING_FROM_BEGINNING = re.compile(r"^.* (" + _alternation([
    "LETTER", "SYLLABLE", "SYLLABICS", "LIGATURE", "VOWEL SIGN", "CONSONANT SIGN",
    "CONSONANT", "VOWEL",
]) + r")\s+")

_DELETE_SUFFIX_AND_ALL_FOLLOWING = re.compile(r" (WITH|WITHOUT) .*")

_PHRASES_TO_DELETE = re.compile(r"\s+(?:" + _alternation([
    "ABOVE", "AGUNG", "BAR", "BARREE", "BELOW", "CEDILLA", "CEREK", "DIGRAPH", "DOACHASHMEE",
    "FINAL FORM", "GHUNNA", "GOAL", "INITIAL FORM", "ISOLATED FORM", "KAWI", "LELET",
    "LELET RASWADI", "LONSUM", "MAHAPRANA", "MEDIAL FORM", "MURDA", "MURDA MAHAPRANA",
    "REVERSED", "ROTUNDA", "SASAK", "SUNG", "TAM", "TEDUNG", "TYPE ONE", "TYPE TWO", "WOLOSO",
]) + r")(?=\s|$)")

_DELETE_UP_TO_AND_INCLUDING_AGAIN = re.compile(r"^.*\b(" + _alternation([
    "ABKHASIAN", "ACADEMY", "AFRICAN", "AIVILIK", "AITON", "AKHMIMIC", "ALEUT", "ALI GALI",
    "ALPAPRAANA", "ALTERNATE", "ALTERNATIVE", "AMBA", "ARABIC", "ARCHAIC", "ASPIRATED",
    "ATHAPASCAN", "BASELINE", "BLACKLETTER", "BARRED", "BASHKIR", "BERBER", "BHATTIPROLU",
    "BIBLE-CREE", "BIG", "BINOCULAR", "BLACKFOOT", "BLENDED", "BOTTOM", "BROAD", "BROKEN",
    "CANDRA", "CAPITAL", "CARRIER", "CHILLU", "CLOSE", "CLOSED", "COPTIC", "CROSSED",
    "CRYPTOGRAMMIC", "CURLY", "CYRILLIC", "DANTAJA", "DENTAL", "DIALECT-P", "DIAERESIZED",
    "DOTLESS", "DOUBLE", "DOUBLE-STRUCK", "EASTERN PWO KAREN", "EGYPTOLOGICAL", "FARSI",
    "FINAL", "FLATTENED", "GLOTTAL", "GREAT", "GREEK", "HALF", "HIGH", "INITIAL", "INSULAR",
    "INVERTED", "IOTIFIED", "JONA", "KANTAJA", "KASHMIRI", "KHAKASSIAN", "KHAMTI", "KHANDA",
    "KIRGHIZ", "KOMI", "L-SHAPED", "LATINATE", "LITTLE", "LONG", "LOOPED", "LOW",
    "MAHAAPRAANA", "MANCHU", "MANDAILING", "MATHEMATICAL", "MEDIAL", "MIDDLE-WELSH",
    "MON", "MONOCULAR", "MOOSE-CREE", "MULTIOCULAR", "MUURDHAJA", "N-CREE", "NASKAPI",
    "NDOLE", "NEUTRAL", "NIKOLSBURG", "NORTHERN", "NUBIAN", "NUNAVIK", "NUNAVUT", "OJIBWAY",
    "OLD", "OPEN", "ORKHON", "OVERLONG", "PERSIAN", "PHARYNGEAL", "PRISHTHAMATRA",
    "R-CREE", "REDUPLICATION", "REVERSED", "ROMANIAN", "ROUND", "ROUNDED", "RUDIMENTA",
    "RUMAI PALAUNG", "SANYAKA", "SARA", "SAYISI", "SCRIPT", "SEBATBEIT", "SEMISOFT",
    "SGAW KAREN", "SHAN", "SHARP", "SHWE PALAUNG", "SHORT", "SIBE", "SIDEWAYS",
    "SIMALUNGUN", "SMALL", "SOGDIAN", "SOFT", "SOUTH-SLAVEY", "SOUTHERN", "SPIDERY",
    "STIRRUP", "STRAIGHT", "STRETCHED", "SUBSCRIPT", "SWASH", "TAILING", "TAILED",
    "TAILLESS", "TAALUJA", "TH-CREE", "TALL", "TURNED", "TODO", "TOP", "TROKUTASTI",
    "TUAREG", "UKRAINIAN", "VISIGOTHIC", "VOCALIC", "VOICED", "VOICELESS", "VOLAPUK", "WAVY",
    "WESTERN PWO KAREN", "WEST-CREE", "WESTERN", "WIDE", "WOODS-CREE", "Y-CREE", "YENISEI",
    "YIDDISH",
]) + r")\s+")

_THAI_CODEPOINTS = range(0x0E01, 0x0E5B + 1)
_THAI_CONSONANTS = range(0x0E01, 0x0E2E + 1)
_STRIP_THAI_CHARACTER = re.compile(r"^THAI CHARACTER\s+")
_STRIP_THAI_CONSONANT = re.compile(r"^([^AEIOU]*).*")
_THAI_VOWEL = re.compile(r"^SARA [AEIOU]")

_LOWERCASE_TRIGGER = re.compile(r"(HIRAGANA LETTER|KATAKANA LETTER|SYLLABLE|LIGATURE)")
_PLUS_M = re.compile(r"\b(ANUSVARA|ANUSVARAYA|NIKAHIT|SIGN BINDI|TIPPI)\b")
_SCHWA = re.compile(r"\bSCHWA\b")
_WHITESPACE = re.compile(r"\s")

_LETTER_PATTERN_1 = re.compile(r"^[AEIOU]+([^AEIOU]+)$")
_LETTER_PATTERN_2 = re.compile(r"^([^-AEIOUY]+)[AEIOU].*")
_LETTER_PATTERN_3 = re.compile(r"^Y[AEIOU].*")
_LETTER_PATTERN_4 = re.compile(r"^(Y[AEIOU]+)[^AEIOU].*$")
_LETTER_PATTERN_5 = re.compile(r"^([AEIOU]+)[^AEIOU]+[AEIOU].*")

# in these Indic scripts LETTER YA is a plain "y"
_YA_PATTERN = re.compile(
    r"\b(BENGALI|DEVANAGARI|GURMUKHI|GUJARATI|KANNADA|MALAYALAM|MODI|MYANMAR|ORIYA|TAMIL"
    r"|TELUGU|TIBETAN)\b.*\bLETTER YA\b")

# matched in order against the character name; "" matches everything
_PUNCTUATION_PATTERNS: Dict[str, Dict[str, str]] = {
    "Po": {
        "INVERTED EXCLAMATION MARK": "¡",
        "EXCLAMATION MARK": "!",
        "QUOTATION MARK": '"',
        "INVERTED QUESTION MARK": "¿",
        "QUESTION MARK": "?",
        "APOSTROPHE": "'",
        "COMMA": ",",
        "FULL STOP": ".",
        "PER MILLE": "‰",
        "PER TEN THOUSAND": "‱",
        "SEMICOLON": ";",
        "DECIMAL SEPARATOR": ".",
        "THOUSANDS SEPARATOR": ",",
        # leading space keeps SEMICOLON from matching
        " COLON": ":",
        "NUMBER SIGN": "#",
        "AMPERSAND": "&",
        "ASTERISK": "*",
        "PERCENT SIGN": "%",
        "COMMERCIAL AT": "@",
        "REVERSE SOLIDUS": "\\",
        "SOLIDUS": "/",
    },
    "Ps": {"PARENTHESIS": "(", "SQUARE BRACKET": "[", "CURLY BRACKET": "{"},
    "Pe": {"PARENTHESIS": ")", "SQUARE BRACKET": "]", "CURLY BRACKET": "}"},
    "Pi": {"SINGLE": "'", "DOUBLE": '"'},
    "Pf": {"SINGLE": "'", "DOUBLE": '"'},
    "Pc": {"LOW LINE": "_", "": "-"},
    "Me": {"": ""},
}


def is_punctuation(char: str) -> bool:
    return unicodedata.category(char) in PUNCTUATION_CATEGORIES


def is_handled(char: str) -> bool:
    """Letters, digits, punctuation, format characters and marks get name-based edges."""
    category = unicodedata.category(char)
    return (category.startswith("L") or category == "Nd"
            or category in PUNCTUATION_CATEGORIES or category in _OTHER_HANDLED_CATEGORIES)


def transliterate_punctuation(char: str) -> str:
    category = unicodedata.category(char)
    if category not in _PUNCTUATION_PATTERNS:
        raise ValueError(f"{char!r} is not a punctuation mark")
    name = unicodedata.name(char, None)
    if name is not None:
        for pattern, result in _PUNCTUATION_PATTERNS[category].items():
            if pattern in name:
                return result
    return char


def _transliterate_letter_name(name: str, original_name: str) -> str:
    match = _LETTER_PATTERN_1.match(name)
    if match:
        name = match.group(1)
    match = _LETTER_PATTERN_2.match(name)
    if match:
        name = match.group(1)
    if _YA_PATTERN.search(original_name):
        name = _LETTER_PATTERN_3.sub("Y", name, count=1)
    match = _LETTER_PATTERN_4.match(name)
    if match:
        name = match.group(1)
    match = _LETTER_PATTERN_5.match(name)
    if match:
        name = match.group(1)
    return name


def codepoint_to_string(char: str) -> Optional[str]:
    """The name-derived transliteration of ``char``, or ``None`` if there is none."""
    category = unicodedata.category(char)
    if category == "Nd":
        return str(unicodedata.decimal(char))
    if category in PUNCTUATION_CATEGORIES:
        return transliterate_punctuation(char)
    if category == "Cf":
        # non-punctuation format characters are removed
        return ""

    original_name = unicodedata.name(char, None)
    if original_name is None:
        return None

    name = _DELETE_UP_TO_AND_INCLUDING_FROM_BEGINNING.sub("", original_name)
    name = _DELETE_SUFFIX_AND_ALL_FOLLOWING.sub("", name)
    name = _PHRASES_TO_DELETE.sub("", name)
    for _ in range(3):
        name = _DELETE_UP_TO_AND_INCLUDING_AGAIN.sub("", name)

    codepoint = ord(char)
    if codepoint in _THAI_CODEPOINTS:
        name = _STRIP_THAI_CHARACTER.sub("", name)
        if codepoint in _THAI_CONSONANTS:
            name = _STRIP_THAI_CONSONANT.match(name).group(1)
        elif _THAI_VOWEL.search(name):
            name = _THAI_VOWEL.sub("", name)

    if _LOWERCASE_TRIGGER.search(original_name):
        name = name.lower()
    elif _PLUS_M.search(name):
        name = "+m"
    elif _SCHWA.search(name):
        name = "e"
    elif _WHITESPACE.search(name):
        # names still containing spaces get no further processing
        pass
    elif "KHMER LETTER" in original_name:
        name += "-"
    elif "CHEROKEE LETTER" in original_name:
        pass
    elif original_name == "KHMER INDEPENDENT VOWEL":
        name = name.replace("q", "")
    elif "LETTER" in original_name:
        name = _transliterate_letter_name(name, original_name)

    if not char.isupper():
        name = name.lower()

    if len(name) >= SUSPICIOUS_LENGTH:
        log.warning(f"Codepoint with name {original_name} transliterates to suspiciously "
                    f"long string {name!r}, refusing to add transliteration")
        return None
    return name


class CharacterNameRule(RuleBlock):
    """Adds one name-derived edge per handled character.

    Lookups are memoised per character in a bounded, thread-safe cache.
    """

    def __init__(self, cache_size: int = 10000):
        self._lookup = lru_cache(maxsize=cache_size)(codepoint_to_string)

    def transliterate_char(self, char: str) -> Optional[str]:
        return self._lookup(char)

    def apply_to_chart(self, chart: TransliterationChart) -> None:
        for position, char in enumerate(chart.text):
            if not is_handled(char):
                continue
            transliteration = self.transliterate_char(char)
            if transliteration is not None:
                chart.add_edge(ChartEdge(position, position + 1, transliteration,
                                         CHARACTER_NAME_SCORE), DERIVATION)


def build(cache_size: int = 10000, **kwargs) -> CharacterNameRule:
    return CharacterNameRule(cache_size=cache_size)
