"""Loaders for uroman's script table and substring mapping files.

Sample lines:

    ::script-name Khmer ::abugida-default-vowel a, o
    ::s ҥ ::t ng ::comment Cyrillic small ligature en ghe
    ::u 0B95 ::r ka
    丁<TAB>ding

Mapping files are collected into DataFrames following ``schema.MAPPING_COLUMNS``
before becoming ``SubstringMapper``s.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from src.translit.rules.substring_mapper import SubstringMapper
from src.translit.schema import MAPPING_COLUMNS, make_row, validate_dataframe
from src.translit.script import Script
from src.translit.uroman_format import (
    BadMappingsFile,
    field_values,
    is_comment_line,
    only_value,
    parse_colon_delimited_line,
)

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

PER_CHARACTER_CUSTOM_MAPPING_SCORE = 1.1
LANGUAGE_SPECIFIC_BOOST = 1.1
PER_CHARACTER_OVERWRITE_MAPPING_SCORE = 1.2
CJK_MAPPING_SCORE = 1.0
# longer matches get a slight edge over combinations of shorter ones
LENGTH_BOOST = 1.1

_STRIP_DOUBLE_QUOTES = re.compile(r'^"(.*)"$')
_STRIP_SINGLE_QUOTES = re.compile(r"^'(.*)'$")


@dataclass
class LoadSubstringMappingsResult:
    general_mapper: SubstringMapper
    language_specific_mappers: Dict[str, SubstringMapper] = field(default_factory=dict)


def _read_lines(path: PathLike) -> List[str]:
    return Path(path).read_text(encoding="utf-8").splitlines()


def _split_list(values: Iterable[str]) -> List[str]:
    items = []
    for value in values:
        items.extend(item.strip() for item in value.split(",") if item.strip())
    return items


def length_weighted_score(source: str, per_character_score: float) -> float:
    n = len(source)
    return LENGTH_BOOST ** n * per_character_score * n


def _unquote(target: str) -> str:
    match = _STRIP_DOUBLE_QUOTES.match(target)
    if match:
        target = match.group(1)
    match = _STRIP_SINGLE_QUOTES.match(target)
    if match:
        target = match.group(1)
    return target


def _target_of(fields, target_field: str) -> str:
    target = _unquote(only_value(fields, target_field).rstrip())
    numbers = field_values(fields, "num")
    if numbers and not target:
        # no proper number handling yet: use the numeric value as literal text
        target = numbers[0].strip()
    return target


def load_script_data(path: PathLike) -> List[Script]:
    """Load uroman's script table."""
    scripts = []
    for line_no, line in enumerate(_read_lines(path), start=1):
        if is_comment_line(line):
            continue
        try:
            fields = parse_colon_delimited_line(line)
            primary_name = only_value(fields, "script-name").strip()
            vowels = _split_list(field_values(fields, "abugida-default-vowel"))
            scripts.append(Script(
                primary_name=primary_name,
                all_names=frozenset(_split_list(field_values(fields, "alt-script-name"))),
                primary_abugida_default_vowel=vowels[0] if vowels else None,
                all_abugida_default_vowels=frozenset(vowels),
                associated_languages=frozenset(_split_list(field_values(fields, "language"))),
            ))
        except ValueError as e:
            raise BadMappingsFile(
                f"Cannot parse line {line_no} of script data file {path}: {line}"
            ) from e
    log.info(f"Loaded {len(scripts)} scripts from {path}")
    return scripts


def _parse_custom_mapping_line(line: str) -> List[dict]:
    if is_comment_line(line):
        return []
    fields = parse_colon_delimited_line(line)
    source = only_value(fields, "s").rstrip()
    if not field_values(fields, "t"):
        # some entries only give numeric values; these are skipped
        return []
    target = _target_of(fields, "t")
    comments = field_values(fields, "comment")
    comment = "; ".join(c.strip() for c in comments) if comments else None
    score = length_weighted_score(source, PER_CHARACTER_CUSTOM_MAPPING_SCORE)

    languages = _split_list(field_values(fields, "lcode"))
    if not languages:
        return [make_row(source, target, score, comment=comment)]
    return [
        make_row(source, target, LANGUAGE_SPECIFIC_BOOST * score, language=language,
                 comment=f"{comment or ''} [lang: {language}]".strip())
        for language in languages
    ]


def load_mapping_table(paths: Iterable[PathLike]) -> pd.DataFrame:
    """Read uroman romanization tables into a single mapping DataFrame."""
    rows = []
    for path in paths:
        for line_no, line in enumerate(_read_lines(path), start=1):
            try:
                rows.extend(_parse_custom_mapping_line(line))
            except ValueError as e:
                raise BadMappingsFile(
                    f"Cannot parse line {line_no} of custom mappings file {path}: {line}"
                ) from e
    df = pd.DataFrame(rows, columns=MAPPING_COLUMNS)
    return validate_dataframe(df)


def load_substring_mappings(paths: Iterable[PathLike]) -> LoadSubstringMappingsResult:
    """Load general and language-specific mappers from uroman romanization tables."""
    df = load_mapping_table(paths)
    general = df[df["language"] == ""]
    language_specific = {
        language: SubstringMapper.from_dataframe(group)
        for language, group in df[df["language"] != ""].groupby("language")
    }
    log.info(f"Loaded {len(general)} general mappings and mappings for "
             f"{len(language_specific)} languages")
    return LoadSubstringMappingsResult(SubstringMapper.from_dataframe(general), language_specific)


def load_cjk_mappings(path: PathLike) -> SubstringMapper:
    """Load a tab-separated ideograph to pinyin table."""
    rows = []
    for line in _read_lines(path):
        if is_comment_line(line):
            continue
        parts = line.split("\t")
        if len(parts) != 2:
            raise BadMappingsFile(f"Bad line in CJK mappings file {path}: {line}")
        rows.append(make_row(parts[0], parts[1], CJK_MAPPING_SCORE, comment="CJK"))
    df = validate_dataframe(pd.DataFrame(rows, columns=MAPPING_COLUMNS))
    log.info(f"Loaded {len(df)} CJK mappings from {path}")
    return SubstringMapper.from_dataframe(df)


def _parse_overwrite_line(line: str) -> Optional[dict]:
    if is_comment_line(line):
        return None
    fields = parse_colon_delimited_line(line)
    source = chr(int(only_value(fields, "u").strip(), 16))
    if not field_values(fields, "r"):
        return None
    target = _target_of(fields, "r")
    comments = field_values(fields, "comment")
    comment = "; ".join(c.strip() for c in comments) if comments else ""
    return make_row(source, target,
                    length_weighted_score(source, PER_CHARACTER_OVERWRITE_MAPPING_SCORE),
                    comment=comment + "[Unicode overwrite]")


def load_unicode_overwrite_mappings(path: PathLike) -> SubstringMapper:
    """Load per-codepoint transliterations which take precedence over character names."""
    rows = []
    for line_no, line in enumerate(_read_lines(path), start=1):
        try:
            row = _parse_overwrite_line(line)
        except ValueError as e:
            raise BadMappingsFile(
                f"Cannot parse line {line_no} of Unicode data overwrite file {path}: {line}"
            ) from e
        if row is not None:
            rows.append(row)
    df = validate_dataframe(pd.DataFrame(rows, columns=MAPPING_COLUMNS))
    return SubstringMapper.from_dataframe(df)
