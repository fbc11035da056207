"""
Helpers for reading record tokens.

Records are sequences of strings; these functions turn a token into the value
a given feature kind needs (a number, a set of selections, a bag of words).
"""

from typing import List, Optional
import math
import re

_WORD = re.compile(r"\w+", re.UNICODE)


def as_token(value) -> str:
    """Coerce a raw cell to a token string; None becomes the empty token."""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return str(value)


def is_missing(token: Optional[str]) -> bool:
    """True for None, empty and whitespace-only tokens."""
    return token is None or token.strip() == ''


def parse_number(token: Optional[str]) -> Optional[float]:
    """Parse a numeric token, returning None when it is missing or not finite."""
    if is_missing(token):
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_number(value: float) -> str:
    """Inverse of parse_number used when writing synthetic centers."""
    return repr(float(value))


def parse_selections(token: Optional[str]) -> List[str]:
    """Split a multi-select token on commas.

    Returns the trimmed, non-empty selections in order of first appearance
    with duplicates removed.
    """
    if is_missing(token):
        return []
    selections = []
    for part in token.split(','):
        part = part.strip()
        if part and part not in selections:
            selections.append(part)
    return selections


def tokenize_text(text: Optional[str]) -> List[str]:
    """Lowercased word tokens of a free-text answer."""
    if is_missing(text):
        return []
    return _WORD.findall(text.lower())
