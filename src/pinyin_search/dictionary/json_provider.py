"""Dictionary loaded from JSON character tables.

Each resource is a JSON array of objects::

    [{"char": "行", "pinyin": ["xíng", "háng"]}, ...]

Readings are stored with tone marks and rendered to the configured
format at load time. Resources are layered: a later table only supplies
characters that no earlier table defines.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pinyin_search.dictionary.base import PinyinDictionary, PinyinFormat, unique
from pinyin_search.dictionary.tones import normalize_reading

logger = logging.getLogger("pinyin_search.dictionary.json")


class JsonPinyinDictionary(PinyinDictionary):
    """Read-only character table built from one or more JSON resources.

    A resource that is missing or malformed is logged and skipped, so the
    dictionary degrades to whatever the remaining resources provide.
    """

    def __init__(
        self,
        paths: list[str | Path],
        format: PinyinFormat = PinyinFormat.WITHOUT_TONE,
    ):
        super().__init__(format)
        self._table: dict[str, tuple[str, ...]] = {}
        for path in paths:
            self._load(Path(path))
        logger.info(
            "JSON pinyin dictionary ready: %d characters from %d resource(s)",
            len(self._table),
            len(paths),
        )

    def _load(self, path: Path) -> None:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Pinyin resource unavailable: %s", path, exc_info=True)
            return

        if not isinstance(data, list):
            logger.warning("Pinyin resource %s is not a JSON array, skipped", path)
            return

        added = 0
        for item in data:
            if not isinstance(item, dict):
                continue
            char = item.get("char")
            readings = item.get("pinyin")
            if not char or not isinstance(readings, list) or char in self._table:
                continue
            rendered = unique(
                normalize_reading(r, self._format) for r in readings if isinstance(r, str)
            )
            if rendered:
                self._table[char] = tuple(rendered)
                added += 1
        logger.debug("Loaded %d characters from %s", added, path)

    def lookup(self, char: str) -> list[str]:
        return list(self._table.get(char, ()))

    def __len__(self) -> int:
        return len(self._table)

    @property
    def provider_name(self) -> str:
        return "json"
