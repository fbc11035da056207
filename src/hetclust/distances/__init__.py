"""Distance metrics between heterogeneous records."""

from .heterogeneous import DistanceCalculator
from .features import (
    numeric_distance,
    ordinal_distance,
    nominal_single_distance,
    nominal_multi_distance,
    jaccard_distance,
    token_text_distance,
    levenshtein,
    levenshtein_text_distance,
    get_text_metric
)

__all__ = [
    'DistanceCalculator',
    'numeric_distance',
    'ordinal_distance',
    'nominal_single_distance',
    'nominal_multi_distance',
    'jaccard_distance',
    'token_text_distance',
    'levenshtein',
    'levenshtein_text_distance',
    'get_text_metric'
]
