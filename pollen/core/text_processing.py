from __future__ import annotations

from typing import Iterable, List

# NOTE: Skill labels are free text typed by candidates and employers.
# Matching is deliberately permissive (substring in either direction), so the
# helpers here only fold case and never tokenize or stem.

DISC_COLOURS = ("Red", "Yellow", "Green", "Blue")


def normalize_whitespace(text: str) -> str:
    return " ".join((text or "").split()).strip()


def fold(text: str) -> str:
    """Case-fold for comparisons. Whitespace is kept as typed."""
    return (text or "").lower()


def clean_labels(items: Iterable[str]) -> List[str]:
    """Drop blank entries, keep order and original spelling."""
    out: List[str] = []
    for it in items or []:
        if it is None:
            continue
        s = str(it)
        if normalize_whitespace(s):
            out.append(s)
    return out


def contains(haystack: str, needle: str) -> bool:
    """One-directional, case-insensitive substring test."""
    return fold(needle) in fold(haystack)


def mutual_substring(a: str, b: str) -> bool:
    """
    True if either string is a case-insensitive substring of the other.
    "JavaScript" ~ "script" and "script" ~ "JavaScript" both hold.
    """
    fa, fb = fold(a), fold(b)
    return fa in fb or fb in fa


def any_mutual_match(needle: str, candidates: Iterable[str]) -> bool:
    return any(mutual_substring(c, needle) for c in candidates or [])


def mentions_colour(label: str, colour: str) -> bool:
    """DISC labels look like "Red - Dominant"; match on the colour word (case-sensitive)."""
    return colour in (label or "")
