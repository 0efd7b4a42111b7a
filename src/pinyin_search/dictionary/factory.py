"""Factory function to create a PinyinDictionary based on configuration.

Reads the dictionary config section and instantiates the appropriate
provider. Falls back to NoopDictionary if configuration is invalid.
"""

from __future__ import annotations

import logging

from pinyin_search.config import DictionaryConfig
from pinyin_search.dictionary.base import PinyinDictionary, PinyinFormat
from pinyin_search.dictionary.noop_provider import NoopDictionary

logger = logging.getLogger("pinyin_search.dictionary.factory")


def create_dictionary(config: DictionaryConfig | None = None) -> PinyinDictionary:
    """Create a PinyinDictionary instance from configuration.

    Args:
        config: Dictionary configuration section. Defaults to pypinyin
            without tones.

    Returns:
        A PinyinDictionary instance ready to use.
    """
    config = config or DictionaryConfig()
    provider = config.provider
    fmt = PinyinFormat(config.format)

    if provider == "none":
        logger.info("Dictionary: disabled (provider=none)")
        return NoopDictionary(fmt)

    if provider == "pypinyin":
        from pinyin_search.dictionary.pypinyin_provider import PypinyinDictionary

        logger.info("Dictionary: pypinyin (format=%s)", fmt.value)
        return PypinyinDictionary(fmt)

    if provider == "json":
        from pinyin_search.dictionary.json_provider import JsonPinyinDictionary

        if not config.paths:
            logger.warning("Dictionary provider 'json' has no paths, falling back to noop")
            return NoopDictionary(fmt)
        logger.info("Dictionary: json (paths=%s, format=%s)", config.paths, fmt.value)
        return JsonPinyinDictionary(config.paths, fmt)

    logger.warning("Unknown dictionary provider '%s', falling back to noop", provider)
    return NoopDictionary(fmt)
