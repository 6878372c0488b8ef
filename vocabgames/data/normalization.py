"""Shared helpers for word normalization."""

from __future__ import annotations

import re
import unicodedata

WORD_RE = re.compile(r"[^A-Za-z]")
ALPHA_RE = re.compile(r"^[A-Za-z]+$")


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return WORD_RE.sub("", stripped).upper()


def is_alphabetic(text: str) -> bool:
    """True when ``text`` consists of ASCII letters only (no spaces or hyphens)."""

    return bool(text) and ALPHA_RE.match(text) is not None


__all__ = ["clean_word", "is_alphabetic"]
