"""Shared scripts and chart constructors for the transliteration tests."""
from src.translit.chart import TransliterationChart
from src.translit.script import Script, ScriptMapping

LATIN = Script("Latin", associated_languages=frozenset({"English"}))
DEVANAGARI = Script("Devanagari", primary_abugida_default_vowel="a",
                    associated_languages=frozenset({"Hindi", "Nepali"}))


def latin_chart(text: str, **kwargs) -> TransliterationChart:
    return TransliterationChart(text, ScriptMapping.uniform(text, LATIN), **kwargs)
