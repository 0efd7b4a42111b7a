"""Tone rendering helpers for readings written with tone marks."""

from __future__ import annotations

import unicodedata

from pinyin_search.dictionary.base import PinyinFormat

# Combining marks left behind by NFD on tone-marked vowels
_TONE_MARKS = {
    "\u0304": "1",  # macron
    "\u0301": "2",  # acute
    "\u030c": "3",  # caron
    "\u0300": "4",  # grave
}


def _split_tone(reading: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFD", reading)
    tone = ""
    base = []
    for ch in decomposed:
        if ch in _TONE_MARKS:
            tone = _TONE_MARKS[ch]
        else:
            base.append(ch)
    plain = unicodedata.normalize("NFC", "".join(base)).replace("ü", "v")
    return plain, tone


def strip_tones(reading: str) -> str:
    """Remove tone marks: ``zhōng`` -> ``zhong``, ``lǜ`` -> ``lv``."""
    return _split_tone(reading)[0]


def to_tone_number(reading: str) -> str:
    """Move the tone mark to a trailing digit: ``zhōng`` -> ``zhong1``.

    Neutral-tone readings carry no digit.
    """
    plain, tone = _split_tone(reading)
    return plain + tone


def normalize_reading(reading: str, format: PinyinFormat) -> str:
    """Render a tone-marked reading in the requested format."""
    if format == PinyinFormat.WITHOUT_TONE:
        return strip_tones(reading)
    if format == PinyinFormat.TONE_NUMBER:
        return to_tone_number(reading)
    return unicodedata.normalize("NFC", reading)
