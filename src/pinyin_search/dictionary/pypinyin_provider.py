"""Dictionary backed by the pypinyin library (heteronym mode)."""

from __future__ import annotations

from pypinyin import Style, pinyin

from pinyin_search.dictionary.base import PinyinDictionary, PinyinFormat, unique

_STYLES = {
    PinyinFormat.WITHOUT_TONE: Style.NORMAL,
    PinyinFormat.TONE_MARK: Style.TONE,
    PinyinFormat.TONE_NUMBER: Style.TONE3,
}


class PypinyinDictionary(PinyinDictionary):
    """Looks readings up in pypinyin's bundled character table.

    Characters pypinyin does not know produce no readings.
    """

    def __init__(self, format: PinyinFormat = PinyinFormat.WITHOUT_TONE):
        super().__init__(format)
        self._style = _STYLES[self._format]

    def lookup(self, char: str) -> list[str]:
        if not char:
            return []
        result = pinyin(char, style=self._style, heteronym=True, errors="ignore")
        if not result:
            return []
        return unique(result[0])

    @property
    def provider_name(self) -> str:
        return "pypinyin"
