"""Dictionary module — pluggable character-to-pinyin providers."""

from pinyin_search.dictionary.base import PinyinDictionary, PinyinFormat
from pinyin_search.dictionary.factory import create_dictionary

__all__ = ["PinyinDictionary", "PinyinFormat", "create_dictionary"]
