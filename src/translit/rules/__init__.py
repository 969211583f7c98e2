"""Rule blocks, one per module.

Each module exposes ``DEFAULT_SEQUENCE_NUMBER`` and a ``build(**kwargs)``
factory returning its ``RuleBlock``; modules are found by file name.
"""
import importlib
from pathlib import Path
from types import ModuleType
from typing import List

from src.translit.pipeline import RuleBlock

_RULES_DIR = Path(__file__).parent


def list_rules() -> List[str]:
    """Names of the rule modules in this package, sorted."""
    return sorted(f.stem for f in _RULES_DIR.glob("*.py") if not f.stem.startswith("_"))


def _rule_module(name: str) -> ModuleType:
    return importlib.import_module(f"{__name__}.{name}")


def load_rule(name: str, **kwargs) -> RuleBlock:
    """Build the rule block of module ``name``; ``kwargs`` go to its ``build()``."""
    return _rule_module(name).build(**kwargs)


def default_sequence_number(name: str) -> int:
    """Where module ``name`` suggests registering its block in a pipeline."""
    return _rule_module(name).DEFAULT_SEQUENCE_NUMBER
