# tests/translit/test_registry.py
import pytest
from src.translit.pipeline import RuleBlock
from src.translit.rules import default_sequence_number, list_rules, load_rule
from src.translit.rules.substring_mapper import SubstringMapper, SubstringMapping


def test_list_rules_includes_all_blocks():
    expected = {"abugida", "backoff", "character_name", "diacritic_deletion", "schwa_deletion",
                "substring_mapper"}
    assert expected.issubset(set(list_rules()))


def test_load_rule_by_name():
    for name in list_rules():
        assert isinstance(load_rule(name), RuleBlock)


def test_load_rule_passes_kwargs():
    mapper = load_rule("substring_mapper", mappings=[("a", SubstringMapping("b", 1.0))])
    assert isinstance(mapper, SubstringMapper)
    assert len(mapper) == 1


def test_unknown_rule():
    with pytest.raises(ModuleNotFoundError):
        load_rule("no_such_rule")


def test_default_sequence_numbers():
    assert default_sequence_number("character_name") == 10000
    assert default_sequence_number("substring_mapper") == 10000
    assert default_sequence_number("diacritic_deletion") == 20000
    assert default_sequence_number("abugida") == 30000
    assert default_sequence_number("schwa_deletion") == 40000
    assert default_sequence_number("backoff") == 2**31 - 1 - 100000
