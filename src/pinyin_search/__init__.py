"""Pinyin-aware fuzzy search for short mixed Chinese/Latin strings."""

from pinyin_search.config import Settings, load_settings
from pinyin_search.dictionary import PinyinDictionary, PinyinFormat, create_dictionary
from pinyin_search.services.index import PinyinIndex, SearchResult, TokenizedEntry
from pinyin_search.services.matcher import match_query, match_word
from pinyin_search.services.tokenizer import Token, Tokenizer, TokenKind, tokenize

__all__ = [
    "PinyinDictionary",
    "PinyinFormat",
    "PinyinIndex",
    "SearchResult",
    "Settings",
    "Token",
    "TokenKind",
    "TokenizedEntry",
    "Tokenizer",
    "create_dictionary",
    "load_settings",
    "match_query",
    "match_word",
    "tokenize",
]
