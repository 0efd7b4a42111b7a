"""Abstract base class for pinyin dictionary providers.

A dictionary maps one Chinese character to its candidate readings. More
than one reading marks a heteronym. Providers are built once and then
only read, so a single instance can be shared by any number of
tokenizers and threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class PinyinFormat(str, Enum):
    """How readings are rendered."""

    WITHOUT_TONE = "without_tone"  # zhong, lv
    TONE_MARK = "tone_mark"  # zhōng, lǜ
    TONE_NUMBER = "tone_number"  # zhong1, lv4


class PinyinDictionary(ABC):
    """Abstract pinyin dictionary interface.

    To add a custom source, inherit from PinyinDictionary and implement
    `lookup`.

    Example:
        class StaticDictionary(PinyinDictionary):
            def lookup(self, char):
                return {"行": ["xing", "hang"]}.get(char, [])
    """

    def __init__(self, format: PinyinFormat = PinyinFormat.WITHOUT_TONE):
        self._format = PinyinFormat(format)

    @abstractmethod
    def lookup(self, char: str) -> list[str]:
        """Return the readings of a single character.

        Args:
            char: One Unicode code point.

        Returns:
            Readings in preference order, without duplicates. Empty when
            the character is unknown.
        """
        ...

    @property
    def format(self) -> PinyinFormat:
        """Return the rendering used for readings."""
        return self._format

    @property
    def provider_name(self) -> str:
        """Return the name of this dictionary provider."""
        return self.__class__.__name__


def unique(readings) -> list[str]:
    """Drop empty and repeated readings, keeping first-seen order."""
    return list(dict.fromkeys(r for r in readings if r))
