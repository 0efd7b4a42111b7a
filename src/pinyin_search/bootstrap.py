"""Builds the search components from Settings.

Library classes never read global settings on their own; applications
call these factories once and pass the results around.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pinyin_search.config import Settings, get_settings
from pinyin_search.dictionary.factory import create_dictionary
from pinyin_search.services.index import PinyinIndex, Selector
from pinyin_search.services.tokenizer import Tokenizer

logger = logging.getLogger("pinyin_search.bootstrap")


def create_tokenizer(settings: Settings | None = None) -> Tokenizer:
    """Create a Tokenizer with the configured dictionary and boundary rules."""
    settings = settings or get_settings()
    dictionary = create_dictionary(settings.dictionary)
    return Tokenizer(
        dictionary,
        separators=settings.tokenizer.separators,
        include_hanzi=settings.tokenizer.include_hanzi,
    )


def create_index(
    items: Iterable = (),
    selector: Selector = str,
    settings: Settings | None = None,
    tokenizer: Tokenizer | None = None,
) -> PinyinIndex:
    """Create a PinyinIndex over ``items`` using configured components.

    Args:
        items: Initial items.
        selector: Maps an item to the text to index.
        settings: Settings to use. Defaults to the global settings.
        tokenizer: Reuse an existing tokenizer instead of building one.

    Returns:
        A populated PinyinIndex.
    """
    settings = settings or get_settings()
    tokenizer = tokenizer or create_tokenizer(settings)
    logger.info(
        "Creating index (dictionary=%s, workers=%d, cache=%s)",
        tokenizer.dictionary.provider_name,
        settings.search.max_workers,
        settings.cache.enabled,
    )
    return PinyinIndex(
        items,
        selector,
        tokenizer=tokenizer,
        search_config=settings.search,
        cache_config=settings.cache,
    )
