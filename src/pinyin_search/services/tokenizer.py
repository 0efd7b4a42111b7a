"""Pinyin-aware tokenizer for fuzzy search.

Splits mixed Chinese/Latin text into tokens in a single left-to-right
scan. Every Chinese character becomes its own token carrying all of its
dictionary readings; Latin letters and digits are grouped into runs that
break on camel-case capitals; separator characters are kept as
single-character tokens. Concatenating the tokens' ``original`` values
always gives back the input text.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from enum import Enum

from pinyin_search.config import DEFAULT_SEPARATORS
from pinyin_search.dictionary.base import PinyinDictionary, unique

_HANZI = re.compile(r"[\u4e00-\u9fff\u3400-\u4dbf]")
_UPPERCASE = frozenset(string.ascii_uppercase)


def is_hanzi(char: str) -> bool:
    """Return True for a CJK unified ideograph (basic block or extension A)."""
    return bool(_HANZI.fullmatch(char))


def fold_case(text: str) -> str:
    """Lower-case text one character at a time, keeping its length.

    A character whose lower-case form is longer, such as the dotted
    capital I, keeps only the first code point, so offsets into the
    folded text still address the original.
    """
    return "".join(ch.lower()[0] for ch in text)


class TokenKind(str, Enum):
    HANZI = "hanzi"
    WORD = "word"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class Token:
    """One unit of the source text.

    Attributes:
        original: The exact slice of the source text.
        full: Candidate spellings. Word and separator tokens carry their
            lower-cased text; a Chinese character carries its readings,
            or itself when the dictionary has none.
        first: First character of each spelling, de-duplicated.
        kind: What the slice is.
    """

    original: str
    full: tuple[str, ...]
    first: tuple[str, ...]
    kind: TokenKind = TokenKind.WORD

    @property
    def is_hanzi(self) -> bool:
        return self.kind == TokenKind.HANZI

    @property
    def is_separator(self) -> bool:
        return self.kind == TokenKind.SEPARATOR

    @classmethod
    def literal(cls, text: str, kind: TokenKind = TokenKind.WORD) -> Token:
        lowered = fold_case(text)
        return cls(original=text, full=(lowered,), first=(lowered[0],), kind=kind)

    @classmethod
    def hanzi(cls, char: str, readings: list[str]) -> Token:
        full = tuple(unique(readings)) or (char,)
        return cls(
            original=char,
            full=full,
            first=tuple(unique(r[0] for r in full)),
            kind=TokenKind.HANZI,
        )


class Tokenizer:
    """Turns text into Token sequences using an injected dictionary.

    The tokenizer holds no mutable state, so one instance can serve any
    number of threads.
    """

    def __init__(
        self,
        dictionary: PinyinDictionary,
        separators: str = DEFAULT_SEPARATORS,
        include_hanzi: bool = False,
    ):
        self._dictionary = dictionary
        self._separators = frozenset(separators)
        self._include_hanzi = include_hanzi

    @property
    def dictionary(self) -> PinyinDictionary:
        return self._dictionary

    @property
    def separators(self) -> frozenset[str]:
        return self._separators

    def tokenize(self, text: str) -> list[Token]:
        """Split text into tokens. Never fails; empty text gives no tokens."""
        if not text:
            return []

        tokens: list[Token] = []
        buffer: list[str] = []

        def flush() -> None:
            if buffer:
                tokens.append(Token.literal("".join(buffer)))
                buffer.clear()

        for char in text:
            if is_hanzi(char):
                flush()
                tokens.append(self._hanzi_token(char))
            elif char in _UPPERCASE:
                # Camel-case boundary
                flush()
                buffer.append(char)
            elif char in self._separators:
                flush()
                tokens.append(Token.literal(char, TokenKind.SEPARATOR))
            else:
                buffer.append(char)
        flush()
        return tokens

    def _hanzi_token(self, char: str) -> Token:
        readings = self._dictionary.lookup(char)
        if readings and self._include_hanzi:
            readings = [*readings, char]
        return Token.hanzi(char, readings)


def tokenize(text: str, dictionary: PinyinDictionary | None = None) -> list[Token]:
    """Tokenize text with the given dictionary, or with pypinyin readings."""
    if dictionary is None:
        from pinyin_search.dictionary.pypinyin_provider import PypinyinDictionary

        dictionary = PypinyinDictionary()
    return Tokenizer(dictionary).tokenize(text)
