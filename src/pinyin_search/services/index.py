"""In-memory pinyin search index.

Holds an append-only, de-duplicated collection of tokenized entries and
ranks them against a query:

  1. Normalise — lower-case the query and split it on spaces
  2. Cache check — return a cached result list if available
  3. Matching — run every word over every entry, in parallel for large
     collections
  4. Ranking — weight descending, shorter text first on ties
  5. Cache store — save the ranked list for repeated keystrokes

Entries are never mutated after creation, so searches only read shared
data. Appending while a search is running on the same index is not
supported.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Hashable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, TypeVar

from pinyin_search.config import CacheConfig, SearchConfig
from pinyin_search.services.cache import SearchCache
from pinyin_search.services.matcher import TokenLayout, match_query
from pinyin_search.services.tokenizer import Token, Tokenizer, fold_case

logger = logging.getLogger("pinyin_search.index")

T = TypeVar("T")
Selector = Callable[[T], "str | None"]


@dataclass(frozen=True)
class TokenizedEntry(Generic[T]):
    """One searchable record.

    Attributes:
        source: The caller's item.
        text: The text the tokens were built from.
        tokens: Token sequence of ``text``.
        layout: Character offsets of ``tokens``.
    """

    source: T
    text: str
    tokens: tuple[Token, ...]
    layout: TokenLayout


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """A matched item with its ranking weight and highlight mask.

    ``highlight_mask`` has one flag per character of ``text``.
    """

    source: T
    weight: float
    highlight_mask: tuple[bool, ...]
    text: str

    @property
    def highlighted(self) -> str:
        """The matched characters of ``text``, in order."""
        return "".join(ch for ch, hit in zip(self.text, self.highlight_mask) if hit)


@dataclass(frozen=True)
class _ByIdentity:
    ident: int


def _identity_key(item) -> Hashable:
    """Key used to detect an item that is already cached.

    Hashable items compare by their own equality; anything else by object
    identity.
    """
    try:
        hash(item)
    except TypeError:
        return _ByIdentity(id(item))
    return item


def split_query(query: str | None) -> tuple[str, ...]:
    """Lower-case a query and split it into words on single spaces."""
    if not query or not query.strip():
        return ()
    return tuple(word for word in fold_case(query).split(" ") if word)


class PinyinIndex(Generic[T]):
    """Pinyin-aware fuzzy search over a collection of items.

    Example:
        index = PinyinIndex(["微信", "网易云音乐"], str, tokenizer)
        for result in index.search("wx"):
            print(result.source, result.highlighted)
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        selector: Selector = str,
        tokenizer: Tokenizer | None = None,
        search_config: SearchConfig | None = None,
        cache_config: CacheConfig | None = None,
    ):
        if tokenizer is None:
            from pinyin_search.dictionary.pypinyin_provider import PypinyinDictionary

            tokenizer = Tokenizer(PypinyinDictionary())
        self._tokenizer = tokenizer
        self._config = search_config or SearchConfig()
        cache_config = cache_config or CacheConfig()
        self._cache = SearchCache(
            max_size=cache_config.max_size,
            ttl_seconds=cache_config.ttl_seconds,
            enabled=cache_config.enabled,
        )
        self._entries: list[TokenizedEntry[T]] = []
        self._keys: set[Hashable] = set()

        added = self.append(items, selector)
        logger.info("Pinyin index built with %d entries", added)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[TokenizedEntry[T], ...]:
        return tuple(self._entries)

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def cache(self) -> SearchCache:
        return self._cache

    def _entry_for(self, item: T, selector: Selector) -> TokenizedEntry[T] | None:
        text = selector(item)
        if not text:
            return None
        tokens = tuple(self._tokenizer.tokenize(text))
        return TokenizedEntry(
            source=item,
            text=text,
            tokens=tokens,
            layout=TokenLayout.of(tokens),
        )

    def add_item(self, item: T, selector: Selector = str) -> bool:
        """Add a single item.

        Returns:
            True if the item was added; False if it is already cached or
            its selected text is empty.
        """
        key = _identity_key(item)
        if key in self._keys:
            return False
        entry = self._entry_for(item, selector)
        if entry is None:
            return False
        self._entries.append(entry)
        self._keys.add(key)
        self._cache.clear()
        return True

    def append(self, items: Iterable[T], selector: Selector = str) -> int:
        """Add items that are not cached yet; duplicates are ignored.

        Returns:
            Number of entries added.
        """
        added = 0
        skipped = 0
        for item in items:
            if self.add_item(item, selector):
                added += 1
            else:
                skipped += 1
        if skipped:
            logger.debug("Append skipped %d duplicate or empty item(s)", skipped)
        return added

    def _evaluate(
        self, words: tuple[str, ...], entry: TokenizedEntry[T]
    ) -> SearchResult[T] | None:
        match = match_query(words, entry.tokens, entry.layout, self._config.weights)
        if match is None:
            return None
        return SearchResult(
            source=entry.source,
            weight=match.weight,
            highlight_mask=tuple(i in match.positions for i in range(len(entry.text))),
            text=entry.text,
        )

    def _evaluate_all(
        self, words: tuple[str, ...], entries: Sequence[TokenizedEntry[T]]
    ) -> list[SearchResult[T] | None]:
        workers = self._config.max_workers
        if workers <= 1 or len(entries) <= self._config.parallel_threshold:
            return [self._evaluate(words, entry) for entry in entries]

        chunksize = max(1, math.ceil(len(entries) / (workers * 4)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(
                pool.map(lambda entry: self._evaluate(words, entry), entries, chunksize=chunksize)
            )

    def search(self, query: str | None, limit: int | None = None) -> list[SearchResult[T]]:
        """Rank every entry that matches all words of the query.

        Args:
            query: Space-separated query words. Case is ignored.
            limit: Keep only the first ``limit`` results.

        Returns:
            Results sorted by weight descending, then by text length.
            Empty for a blank query.
        """
        words = split_query(query)
        if not words:
            return []

        cached = self._cache.get(words, limit)
        if cached is not None:
            return cached

        start = time.monotonic()
        entries = tuple(self._entries)
        results = [r for r in self._evaluate_all(words, entries) if r is not None]
        results.sort(key=lambda r: (-r.weight, len(r.text)))
        if limit is not None:
            results = results[: max(limit, 0)]

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.debug(
            "Search %r: %d/%d entries matched in %dms",
            " ".join(words),
            len(results),
            len(entries),
            duration_ms,
        )

        self._cache.put(words, limit, results)
        return results
