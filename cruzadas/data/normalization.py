"""Shared helpers for word and letter normalization."""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

WORD_RE = re.compile(r"[^A-Za-z]")


def strip_accents(text: str) -> str:
    """Drop combining marks after canonical decomposition (``ç`` -> ``c``)."""

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    if not text:
        return ""
    ascii_word = WORD_RE.sub("", strip_accents(text))
    return ascii_word.upper()


def normalize_letter(raw: Optional[str]) -> Optional[str]:
    """Reduce player input to a single letter of the grid alphabet.

    Returns ``None`` when nothing usable remains. Multi-character input keeps
    the last letter typed, which is what a text field reports after a
    keystroke lands next to an existing value.
    """

    if not raw:
        return None
    cleaned = clean_word(raw)
    if not cleaned:
        return None
    return cleaned[-1]


__all__ = ["clean_word", "normalize_letter", "strip_accents"]
