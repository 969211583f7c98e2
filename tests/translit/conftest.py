import pytest

from src.translit.script import CodePointToScriptMapper

from tests.translit.helpers import DEVANAGARI, LATIN


@pytest.fixture
def devanagari_mapper():
    return CodePointToScriptMapper([LATIN, DEVANAGARI])
