"""Fuzzy matching shared by the combobox filter and the command palette."""

from __future__ import annotations


def fuzzy_match(query: str, text: str) -> bool:
    """Check if all characters of query appear in order in text."""
    it = iter(text)
    return all(ch in it for ch in query)


def score(query: str, text: str) -> float:
    """Score a match: higher is better (closer to 1.0)."""
    if not query:
        return 0.5
    if text == query:
        return 1.0
    if text.startswith(query):
        return 0.9
    if query in text:
        return 0.8
    return 0.7
