"""Tests for building components from Settings."""

from __future__ import annotations

import json

from pinyin_search.bootstrap import create_index, create_tokenizer
from pinyin_search.config import Settings
from pinyin_search.dictionary.json_provider import JsonPinyinDictionary
from pinyin_search.dictionary.noop_provider import NoopDictionary
from pinyin_search.dictionary.pypinyin_provider import PypinyinDictionary


class TestCreateTokenizer:
    def test_default_settings(self):
        tokenizer = create_tokenizer(Settings())
        assert isinstance(tokenizer.dictionary, PypinyinDictionary)

    def test_tokenizer_options(self):
        settings = Settings(
            dictionary={"provider": "none"},
            tokenizer={"separators": " ", "include_hanzi": True},
        )
        tokenizer = create_tokenizer(settings)
        assert isinstance(tokenizer.dictionary, NoopDictionary)
        assert tokenizer.separators == frozenset(" ")

    def test_json_dictionary(self, tmp_path):
        path = tmp_path / "chars.json"
        path.write_text(json.dumps([{"char": "微", "pinyin": ["wēi"]}]), encoding="utf-8")
        settings = Settings(dictionary={"provider": "json", "paths": [str(path)]})
        tokenizer = create_tokenizer(settings)
        assert isinstance(tokenizer.dictionary, JsonPinyinDictionary)
        assert tokenizer.tokenize("微")[0].full == ("wei",)


class TestCreateIndex:
    def test_index_from_settings(self):
        settings = Settings(cache={"enabled": True}, search={"max_workers": 2})
        index = create_index(["微信", "网易云音乐"], str, settings)
        assert len(index) == 2
        assert index.cache.enabled is True
        assert [r.source for r in index.search("wx")] == ["微信"]

    def test_reuses_tokenizer(self, tokenizer):
        index = create_index(["微信"], settings=Settings(), tokenizer=tokenizer)
        assert index.tokenizer is tokenizer

    def test_degraded_dictionary_still_searches(self):
        index = create_index(["微信", "WeChat"], str, Settings(dictionary={"provider": "none"}))
        assert [r.source for r in index.search("wech")] == ["WeChat"]
        assert [r.source for r in index.search("微")] == ["微信"]
