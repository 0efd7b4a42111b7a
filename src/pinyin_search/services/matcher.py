"""Greedy pinyin matcher.

Consumes one query word against a token sequence. Matching is tried from
each candidate start token in turn and the first start that consumes the
whole word wins, which makes it the left-most match. Within one attempt
the matcher never backtracks:

  - a separator the query does not ask for is skipped as a gap, and only
    highlighted if a later character matches;
  - at the start of a Chinese token every reading is compared with the
    rest of the word and the longest common prefix is consumed, so one
    character may eat several query letters (``wei`` for 微);
  - otherwise a single query character must equal the source character
    or, at a token start, one of the token's first letters;
  - on a mismatch inside a word token, or at the start of a non-Chinese
    token, the attempt jumps to the next token; a mismatching Chinese
    character ends the attempt.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pinyin_search.config import WeightConfig
from pinyin_search.services.tokenizer import Token, fold_case


@dataclass(frozen=True)
class TokenLayout:
    """Character offsets of a token sequence.

    Attributes:
        starts: Offset of the first character of each token.
        owners: Index of the token covering each character.
    """

    starts: tuple[int, ...]
    owners: tuple[int, ...]

    @classmethod
    def of(cls, tokens: Sequence[Token]) -> TokenLayout:
        starts = []
        owners = []
        for i, token in enumerate(tokens):
            starts.append(len(owners))
            owners.extend([i] * len(token.original))
        return cls(starts=tuple(starts), owners=tuple(owners))

    @property
    def length(self) -> int:
        return len(self.owners)

    def end_of(self, index: int, tokens: Sequence[Token]) -> int:
        return self.starts[index] + len(tokens[index].original)


@dataclass(frozen=True)
class WordMatch:
    """Result of matching one query word.

    Attributes:
        positions: Source offsets highlighted by this word, separator gaps
            included.
        confirmed: Number of source characters that actually matched.
        start: Offset the match is ranked by. This is the first confirmed
            character, or the first of the separators the attempt opened
            on; separators left over after a skipped token do not count.
        end: Offset just past the last consumed character; the next
            word's search starts here.
    """

    positions: tuple[int, ...]
    confirmed: int
    start: int
    end: int

    @property
    def skipped(self) -> int:
        """Unhighlighted characters inside this word's span."""
        return (self.end - self.positions[0]) - len(self.positions)


@dataclass(frozen=True)
class QueryMatch:
    """Result of matching every word of a query."""

    positions: frozenset[int]
    weight: float
    words: tuple[WordMatch, ...]


def _common_prefix(reading: str, word: str, offset: int) -> int:
    n = 0
    limit = min(len(reading), len(word) - offset)
    while n < limit and reading[n] == word[offset + n]:
        n += 1
    return n


def _match_from(
    word: str,
    tokens: Sequence[Token],
    layout: TokenLayout,
    offset: int,
) -> WordMatch | None:
    q = 0
    c = offset
    positions: list[int] = []
    gaps: list[int] = []
    confirmed = 0
    start = -1

    while q < len(word):
        if c >= layout.length:
            return None

        index = layout.owners[c]
        token = tokens[index]
        inner = c - layout.starts[index]
        char = fold_case(token.original[inner])
        wanted = word[q]

        if token.is_separator and char != wanted:
            gaps.append(c)
            c += 1
            continue

        consumed = 0
        if inner == 0 and token.is_hanzi:
            consumed = max((_common_prefix(r, word, q) for r in token.full), default=0)
        if not consumed and (char == wanted or (inner == 0 and wanted in token.first)):
            consumed = 1

        if consumed:
            if start < 0:
                start = gaps[0] if gaps and gaps[0] == offset else c
            positions.extend(gaps)
            gaps.clear()
            positions.append(c)
            confirmed += 1
            q += consumed
            c += 1
            continue

        if inner > 0 or not token.is_hanzi:
            gaps.clear()
            c = layout.end_of(index, tokens)
            continue

        return None

    return WordMatch(
        positions=tuple(positions),
        confirmed=confirmed,
        start=start,
        end=c,
    )


def match_word(
    word: str,
    tokens: Sequence[Token],
    start: int = 0,
    layout: TokenLayout | None = None,
) -> WordMatch | None:
    """Match one lower-cased query word at or after ``start``.

    Args:
        word: Query word, already lower-cased, without spaces.
        tokens: Token sequence of the source text.
        start: Character offset where the search begins.
        layout: Precomputed layout of ``tokens``.

    Returns:
        The left-most match, or None if the word cannot be consumed.
    """
    if not word:
        return None
    layout = layout or TokenLayout.of(tokens)
    if start < 0 or start >= layout.length:
        return None

    first = layout.owners[start]
    for index in range(first, len(tokens)):
        offset = start if index == first else layout.starts[index]
        match = _match_from(word, tokens, layout, offset)
        if match is not None:
            return match
    return None


def compute_weight(words: Sequence[WordMatch], weights: WeightConfig | None = None) -> float:
    """Score a full query match; only the relative order is meaningful.

    The first word's start offset sets the weight in whole
    ``start_penalty`` steps, so an earlier match always outranks a later
    one. Within a step, confirmed characters raise the weight and
    unhighlighted characters inside a word's span lower it; that quality
    term stays in ``[0, 1)`` of a step however long the text is.
    """
    weights = weights or WeightConfig()
    if not words:
        return 0.0
    bonus = weights.match_bonus * sum(word.confirmed for word in words)
    penalty = weights.skip_penalty * sum(word.skipped for word in words)
    quality = bonus / (bonus + penalty + 1)
    return weights.base - weights.start_penalty * (words[0].start - quality)


def match_query(
    words: Sequence[str],
    tokens: Sequence[Token],
    layout: TokenLayout | None = None,
    weights: WeightConfig | None = None,
) -> QueryMatch | None:
    """Match every word in order, each starting where the previous ended.

    Returns None as soon as one word fails; positions from earlier words
    are discarded with it.
    """
    if not words:
        return None
    layout = layout or TokenLayout.of(tokens)

    cursor = 0
    matches: list[WordMatch] = []
    for word in words:
        match = match_word(word, tokens, cursor, layout)
        if match is None:
            return None
        matches.append(match)
        cursor = match.end

    positions = frozenset(p for m in matches for p in m.positions)
    return QueryMatch(
        positions=positions,
        weight=compute_weight(matches, weights),
        words=tuple(matches),
    )
