# tests/translit/test_uroman_format.py
import pytest
from src.translit.uroman_format import (
    BadMappingsFile,
    field_values,
    is_comment_line,
    only_value,
    parse_colon_delimited_line,
)


def test_comment_lines():
    assert is_comment_line("")
    assert is_comment_line("# scripts")
    assert not is_comment_line("::s a ::t b")


def test_parse_fields():
    fields = parse_colon_delimited_line("::s ab ::t x y ::comment first ::comment second")
    assert fields == [("s", "ab "), ("t", "x y "), ("comment", "first "), ("comment", "second")]


def test_empty_value_is_kept():
    fields = parse_colon_delimited_line("::s n ::t  ::num 7")
    assert field_values(fields, "t") == [""]
    assert only_value(fields, "num") == "7"


def test_field_without_value_rejected():
    with pytest.raises(BadMappingsFile):
        parse_colon_delimited_line("::script-name")


def test_field_values():
    fields = parse_colon_delimited_line("::language Hindi ::language Nepali")
    assert field_values(fields, "language") == ["Hindi ", "Nepali"]
    assert field_values(fields, "script-name") == []


def test_only_value_requires_exactly_one():
    fields = parse_colon_delimited_line("::s a ::s b")
    with pytest.raises(BadMappingsFile, match="found 2"):
        only_value(fields, "s")
    with pytest.raises(BadMappingsFile, match="found 0"):
        only_value(fields, "t")
