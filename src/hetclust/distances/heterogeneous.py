"""
Composite distance between heterogeneous records.

Every dimension contributes a local distance in [0, 1] computed according to
its FeatureSpec; the local distances are then aggregated so that the result
does not depend on the number of dimensions.
"""

from typing import Optional, Sequence
import math

from ..base.interfaces import DistanceMetric, Record
from ..base.feature_spec import (
    FeatureSpec, Numeric, Ordinal, NominalSingle, NominalMulti, FreeText
)
from ..utils.tokens import as_token, is_missing
from .features import (
    numeric_distance, ordinal_distance, nominal_single_distance,
    nominal_multi_distance, get_text_metric
)


class DistanceCalculator(DistanceMetric):
    """Distance over records described by a list of FeatureSpec.

    Local distances per kind:
    - Numeric: |a - b| / (max - min)
    - Ordinal: |rank(a) - rank(b)| / (m - 1)
    - NominalSingle: 0 if equal, else 1
    - NominalMulti: Jaccard distance of the selection sets
    - FreeText: Jaccard distance of word tokens (or normalized Levenshtein)

    Identical tokens are at distance 0; a missing token against a present one
    is at the maximal distance 1.
    """

    AGGREGATIONS = ('mean', 'rms')

    def __init__(self, aggregation: str = 'mean', text_metric: str = 'token'):
        """
        Args:
            aggregation: 'mean' (arithmetic mean of local distances) or
                        'rms' (sqrt of the mean squared local distance, in [0, 1];
                        penalizes large gaps more)
            text_metric: 'token' or 'levenshtein' for FreeText dimensions
        """
        if aggregation not in self.AGGREGATIONS:
            raise ValueError(f"Unknown aggregation: {aggregation}. Expected one of {self.AGGREGATIONS}")
        self.aggregation = aggregation
        self.text_metric = text_metric
        self._text_distance = get_text_metric(text_metric)

    def local_distance(self, a: Optional[str], b: Optional[str], spec: FeatureSpec) -> float:
        """Distance in [0, 1] between two tokens of one dimension."""
        a = as_token(a)
        b = as_token(b)
        if a == b:
            return 0.0
        a_missing = is_missing(a)
        b_missing = is_missing(b)
        if a_missing or b_missing:
            return 0.0 if a_missing and b_missing else 1.0

        if isinstance(spec, Numeric):
            return numeric_distance(a, b, spec)
        elif isinstance(spec, Ordinal):
            return ordinal_distance(a, b, spec)
        elif isinstance(spec, NominalSingle):
            return nominal_single_distance(a, b)
        elif isinstance(spec, NominalMulti):
            return nominal_multi_distance(a, b)
        elif isinstance(spec, FreeText):
            return self._text_distance(a, b)
        else:
            raise TypeError(f"Unknown feature spec: {type(spec)}")

    def text_distance(self, a: Optional[str], b: Optional[str]) -> float:
        """Local distance between two free-text tokens."""
        return self.local_distance(a, b, FreeText())

    def distance(self, a: Record, b: Record, specs: Sequence[FeatureSpec]) -> float:
        """Aggregate distance between two records.

        Raises:
            ValueError: If an argument is None or the lengths differ
        """
        if a is None or b is None or specs is None:
            raise ValueError("Arguments cannot be None")
        if len(a) != len(b) or len(a) != len(specs):
            raise ValueError(f"Records and specs must have the same length, "
                             f"got {len(a)}, {len(b)} and {len(specs)}")
        n = len(specs)
        if n == 0:
            return 0.0

        if self.aggregation == 'mean':
            total = 0.0
            for ai, bi, spec in zip(a, b, specs):
                total += self.local_distance(ai, bi, spec)
            return total / n

        total = 0.0
        for ai, bi, spec in zip(a, b, specs):
            d = self.local_distance(ai, bi, spec)
            total += d * d
        return math.sqrt(total / n)

    def __repr__(self) -> str:
        return f"DistanceCalculator(aggregation={self.aggregation!r}, text_metric={self.text_metric!r})"
