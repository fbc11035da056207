"""
Local (per-dimension) distances.

Each function compares two non-missing tokens of one feature kind and
returns a value in [0, 1]. Missing values and identical tokens are handled by
the caller before these are reached.
"""

from typing import Optional

from ..base.feature_spec import Numeric, Ordinal
from ..utils.tokens import parse_number, parse_selections, tokenize_text


def numeric_distance(a: str, b: str, spec: Numeric) -> float:
    """|a - b| / (max - min), clamped to 1.

    A degenerate range gives 0; a token that does not parse gives 1.
    """
    x = parse_number(a)
    y = parse_number(b)
    if x is None or y is None:
        return 1.0
    span = spec.span
    if span <= 0:
        return 0.0
    return min(1.0, abs(x - y) / span)


def ordinal_distance(a: str, b: str, spec: Ordinal) -> float:
    """|rank(a) - rank(b)| / (m - 1), or 1 for a label outside the order."""
    ra = spec.rank(a)
    rb = spec.rank(b)
    if ra is None or rb is None:
        return 1.0
    denominator = spec.cardinality - 1
    if denominator <= 0:
        return 0.0 if ra == rb else 1.0
    return min(1.0, abs(ra - rb) / denominator)


def nominal_single_distance(a: str, b: str) -> float:
    return 0.0 if a.strip() == b.strip() else 1.0


def jaccard_distance(sa: set, sb: set) -> float:
    """1 - |A ∩ B| / |A ∪ B|; two empty sets are identical."""
    union = sa | sb
    if not union:
        return 0.0
    return 1.0 - len(sa & sb) / len(union)


def nominal_multi_distance(a: str, b: str) -> float:
    return jaccard_distance(set(parse_selections(a)), set(parse_selections(b)))


def token_text_distance(a: str, b: str) -> float:
    """Jaccard distance between the word-token sets of two texts.

    Texts without any word (punctuation only) fall back to exact comparison.
    """
    ta = set(tokenize_text(a))
    tb = set(tokenize_text(b))
    if not ta and not tb:
        return 0.0 if a.strip() == b.strip() else 1.0
    return jaccard_distance(ta, tb)


def levenshtein(s: str, t: str) -> int:
    """Edit distance (insertions, deletions, substitutions) with two rows."""
    if len(s) < len(t):
        s, t = t, s
    if not t:
        return len(s)
    previous = list(range(len(t) + 1))
    for i, cs in enumerate(s, start=1):
        current = [i]
        for j, ct in enumerate(t, start=1):
            cost = 0 if cs == ct else 1
            current.append(min(previous[j] + 1,
                               current[j - 1] + 1,
                               previous[j - 1] + cost))
        previous = current
    return previous[-1]


def levenshtein_text_distance(a: str, b: str) -> float:
    """Edit distance normalized by the longer text."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    return levenshtein(a, b) / longest


TEXT_METRICS = {
    'token': token_text_distance,
    'levenshtein': levenshtein_text_distance,
}


def get_text_metric(name: Optional[str]):
    """Look up a free-text distance function by name."""
    if name is None:
        name = 'token'
    if name not in TEXT_METRICS:
        raise ValueError(f"Unknown text metric: {name}. Expected one of {sorted(TEXT_METRICS)}")
    return TEXT_METRICS[name]
