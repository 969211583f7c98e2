"""Writing-script classification of codepoints and strings.

Script data follows uroman's ``scripts.txt``; see ``loaders.load_script_data``.
"""
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

DEVANAGARI = "Devanagari"


@dataclass(frozen=True)
class Script:
    """A writing script as described by uroman's script table.

    If the script is an abugida, ``primary_abugida_default_vowel`` is the vowel
    its consonants carry unless a diacritic overrides it.
    """
    primary_name: str
    all_names: FrozenSet[str] = field(default_factory=frozenset)
    primary_abugida_default_vowel: Optional[str] = None
    all_abugida_default_vowels: FrozenSet[str] = field(default_factory=frozenset)
    associated_languages: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.primary_name:
            raise ValueError("Script needs a primary name")
        vowels = frozenset(self.all_abugida_default_vowels)
        if self.primary_abugida_default_vowel is not None:
            vowels |= {self.primary_abugida_default_vowel}
        # the primary name always counts as one of the names
        object.__setattr__(self, "all_names", frozenset(self.all_names) | {self.primary_name})
        object.__setattr__(self, "all_abugida_default_vowels", vowels)
        object.__setattr__(self, "associated_languages", frozenset(self.associated_languages))


class ScriptMapping:
    """The possible scripts of the character at each codepoint position of a string."""

    def __init__(self, text: str, data: Sequence[Iterable[Script]]):
        if len(data) != len(text):
            raise ValueError(
                f"Script data covers {len(data)} positions but text has {len(text)} codepoints"
            )
        self.text = text
        self._data: Tuple[FrozenSet[Script], ...] = tuple(frozenset(d) for d in data)

    @classmethod
    def uniform(cls, text: str, script: Script) -> "ScriptMapping":
        """Every character of ``text`` belongs to ``script``."""
        return cls(text, [(script,)] * len(text))

    def __len__(self) -> int:
        return len(self.text)

    def scripts_for_offset(self, position: int) -> FrozenSet[Script]:
        return self._data[position]

    def starts_new_script(self, position: int) -> bool:
        """Whether the character at ``position`` definitely begins a new script."""
        if position == 0:
            return True
        return not (self._data[position] & self._data[position - 1])

    def primary_default_vowel(self, position: int) -> Optional[str]:
        for script in sorted(self._data[position], key=lambda s: s.primary_name):
            if script.primary_abugida_default_vowel is not None:
                return script.primary_abugida_default_vowel
        return None

    def is_abugida_vowel_for_some_script(self, position: int, vowel: str) -> bool:
        """Whether ``vowel`` could be an abugida default vowel of the character at ``position``."""
        lowercase_vowel = vowel.lower()
        return any(lowercase_vowel in script.all_abugida_default_vowels
                   for script in self._data[position])

    def is_devanagari(self, position: int) -> bool:
        return any(script.primary_name == DEVANAGARI for script in self._data[position])


_SUFFIXES_TO_STRIP = ("CONSONANT", "LETTER", "LIGATURE", "SIGN", "SYLLABLE", "SYLLABICS", "VOWEL")
_STRIP_SUFFIXES_PATTERN = re.compile(r"\s+(" + "|".join(_SUFFIXES_TO_STRIP) + r")\b.*")
_DELETE_FINAL_WORD_PATTERN = re.compile(r"\s*\S+\s*$")


class CodePointToScriptMapper:
    """Knows which scripts a codepoint may come from, judging by its Unicode name.

    ``DEVANAGARI LETTER KA`` is first cut back to ``DEVANAGARI``; names that do
    not match any script lose their final word until one does or nothing is left.
    """

    def __init__(self, scripts: Iterable[Script] = (), cache_size: int = 10000):
        self.scripts: Tuple[Script, ...] = tuple(scripts)
        by_name: Dict[str, List[Script]] = {}
        for script in self.scripts:
            for name in script.all_names:
                # code point names are uppercase
                by_name.setdefault(name.upper(), []).append(script)
        self._scripts_by_name = {name: frozenset(s) for name, s in by_name.items()}
        self._cached_lookup = lru_cache(maxsize=cache_size)(self._scripts_for_codepoint)

    def scripts_for_codepoint(self, codepoint: int) -> FrozenSet[Script]:
        return self._cached_lookup(codepoint)

    def map_string(self, text: str) -> ScriptMapping:
        return ScriptMapping(text, [self.scripts_for_codepoint(ord(ch)) for ch in text])

    def _scripts_for_codepoint(self, codepoint: int) -> FrozenSet[Script]:
        char_name = unicodedata.name(chr(codepoint), None)
        if char_name is None:
            return frozenset()
        char_name = _STRIP_SUFFIXES_PATTERN.sub("", char_name)
        while char_name:
            if char_name in self._scripts_by_name:
                return self._scripts_by_name[char_name]
            char_name = _DELETE_FINAL_WORD_PATTERN.sub("", char_name)
        return frozenset()
