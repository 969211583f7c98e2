"""Assembly of the standard transliteration pipelines.

The rule blocks, their heuristics and much of the mapping data follow the
universal romanizer uroman by Ulf Hermjakob (USC Information Sciences
Institute, 2015-2016).
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional

from src.translit.loaders import LoadSubstringMappingsResult
from src.translit.pipeline import INDEPENDENT_INITIAL_STEP, Pipeline, PipelineBuilder, Transliterator
from src.translit.rules import default_sequence_number, load_rule
from src.translit.rules.substring_mapper import SubstringMapper
from src.translit.script import CodePointToScriptMapper

log = logging.getLogger(__name__)

# registration order matters for blocks sharing a sequence number
STANDARD_RULES = [
    "character_name",
    "diacritic_deletion",
    "abugida",
    "schwa_deletion",
    "backoff",
]


def build_general_transliterator(
    script_mapper: Optional[CodePointToScriptMapper] = None,
    custom_mappings: Optional[LoadSubstringMappingsResult] = None,
    extra_mappers: Iterable[SubstringMapper] = (),
    rules: Iterable[str] = STANDARD_RULES,
    track_derivations: bool = False,
) -> Pipeline:
    """Build the language-agnostic pipeline.

    ``extra_mappers`` (Unicode overwrites, CJK readings...) and the general part
    of ``custom_mappings`` run alongside the character-name rule.
    """
    builder = PipelineBuilder(script_mapper, track_derivations=track_derivations)
    for name in rules:
        builder.register(default_sequence_number(name), load_rule(name))
    if custom_mappings is not None:
        builder.register(INDEPENDENT_INITIAL_STEP, custom_mappings.general_mapper)
    for mapper in extra_mappers:
        builder.register(INDEPENDENT_INITIAL_STEP, mapper)
    return builder.build()


def build_language_transliterators(
    general: Pipeline,
    custom_mappings: Optional[LoadSubstringMappingsResult],
) -> Dict[str, Pipeline]:
    """Derive a pipeline per language code which has its own mappings."""
    if custom_mappings is None:
        return {}
    return {
        language: general.to_builder().register(INDEPENDENT_INITIAL_STEP, mapper).build()
        for language, mapper in custom_mappings.language_specific_mappers.items()
    }


def transliterator_for_language(
    language_code: str,
    registry: Mapping[str, Transliterator],
    default: Optional[Transliterator] = None,
) -> Transliterator:
    """The transliterator registered for ``language_code``, else ``default``.

    Raises KeyError when neither exists.
    """
    if language_code in registry:
        return registry[language_code]
    if default is None:
        raise KeyError(f"No transliterator registered for {language_code!r}. "
                       f"Transliterators are registered for {sorted(registry)}")
    log.info(f"No custom transliterator registered for {language_code!r}, "
             f"using default transliterator")
    return default
