"""Shared pytest fixtures for pinyin_search tests."""

from __future__ import annotations

import pytest

from pinyin_search.dictionary.base import PinyinDictionary, unique
from pinyin_search.services.index import PinyinIndex
from pinyin_search.services.tokenizer import Tokenizer

# ============================================================
# Static Dictionary
# ============================================================

READINGS: dict[str, list[str]] = {
    "微": ["wei"],
    "信": ["xin", "shen"],
    "网": ["wang"],
    "易": ["yi"],
    "云": ["yun"],
    "音": ["yin"],
    "乐": ["yue", "le"],
    "相": ["xiang"],
    "机": ["ji"],
    "行": ["xing", "hang"],
    "中": ["zhong"],
    "重": ["zhong", "chong"],
    "庆": ["qing"],
    "西": ["xi"],
    "安": ["an"],
    "银": ["yin"],
}


class StaticDictionary(PinyinDictionary):
    """A fixed, in-memory dictionary so tests don't depend on pypinyin data.

    Characters outside the table are unknown.
    """

    def __init__(self, table: dict[str, list[str]] | None = None):
        super().__init__()
        self._table = dict(READINGS if table is None else table)

    def lookup(self, char: str) -> list[str]:
        return unique(self._table.get(char, []))

    @property
    def provider_name(self) -> str:
        return "static"


@pytest.fixture
def dictionary() -> StaticDictionary:
    """Provide the static test dictionary."""
    return StaticDictionary()


@pytest.fixture
def make_dictionary():
    """Build a StaticDictionary over a custom table."""
    return StaticDictionary


@pytest.fixture
def tokenizer(dictionary: StaticDictionary) -> Tokenizer:
    """Provide a tokenizer over the static dictionary."""
    return Tokenizer(dictionary)


@pytest.fixture
def apps_index(tokenizer: Tokenizer) -> PinyinIndex:
    """Provide an index over a few launcher entries."""
    return PinyinIndex(["微信", "网易云音乐", "Windows相机"], str, tokenizer)
