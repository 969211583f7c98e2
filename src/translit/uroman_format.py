"""Helpers for uroman's ``::field value`` file formats."""
import re
from typing import List, Tuple

_SPLIT_ON_WHITESPACE = re.compile(r"\s+")


class BadMappingsFile(ValueError):
    """Raised when a mapping or script data file cannot be parsed."""


def is_comment_line(line: str) -> bool:
    return not line or line.startswith("#")


def parse_colon_delimited_line(line: str) -> List[Tuple[str, str]]:
    """Split ``::s ab ::t x ::comment y`` into ``[("s", "ab"), ("t", "x"), ("comment", "y")]``.

    Fields may repeat; values keep their inner and trailing whitespace.
    """
    fields = []
    for component in line.split("::"):
        if not component:
            continue
        parts = _SPLIT_ON_WHITESPACE.split(component, maxsplit=1)
        if len(parts) != 2:
            raise BadMappingsFile(f"Cannot parse line: {line}")
        fields.append((parts[0].strip(), parts[1]))
    return fields


def field_values(fields: List[Tuple[str, str]], name: str) -> List[str]:
    return [value for key, value in fields if key == name]


def only_value(fields: List[Tuple[str, str]], name: str) -> str:
    values = field_values(fields, name)
    if len(values) != 1:
        raise BadMappingsFile(f"Expected exactly one ::{name} field, found {len(values)}")
    return values[0]
