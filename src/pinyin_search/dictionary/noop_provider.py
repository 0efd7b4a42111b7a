"""No-op dictionary — knows no characters.

Used when dictionary.provider = "none", or as the fallback when a
configured provider cannot be built. Every Chinese character then
tokenizes to its literal form.
"""

from __future__ import annotations

from pinyin_search.dictionary.base import PinyinDictionary


class NoopDictionary(PinyinDictionary):
    """Dictionary with no entries."""

    def lookup(self, char: str) -> list[str]:
        return []

    @property
    def provider_name(self) -> str:
        return "noop"
