"""
Kluster: a cluster of heterogeneous records.

A Kluster holds a center (a synthetic centroid for K-Means, a real record for
K-Medoids) and the records currently assigned to it.
"""

from collections import Counter
from typing import Dict, Any, List, Optional, Sequence
import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation, DistanceMetric, Record
from ..base.feature_spec import (
    FeatureSpec, Numeric, Ordinal, NominalSingle, NominalMulti, FreeText
)
from ..utils.tokens import is_missing, parse_number, format_number, parse_selections


class Kluster(ClusterRepresentation):
    """Cluster represented by a center vector and its members.

    Centroid recomputation aggregates the members per dimension:
    - Numeric: mean of the parseable values
    - Ordinal: option whose rank is nearest the mean rank
    - NominalSingle: mode
    - NominalMulti: options chosen by a majority of members
    - FreeText: the member text closest to all the others
    """

    def __init__(self, center: Record):
        """
        Args:
            center: Initial center (must be non-empty)
        """
        if center is None or len(center) == 0:
            raise ValueError("Center cannot be None or empty")
        self._center = list(center)
        self._members: List[List[str]] = []

    @property
    def dimension(self) -> int:
        return len(self._center)

    @property
    def center(self) -> List[str]:
        """Copy of the center vector."""
        return list(self._center)

    def set_center(self, center: Record) -> None:
        if center is None or len(center) != len(self._center):
            raise ValueError(f"Center must have dimension {len(self._center)}")
        self._center = list(center)

    @property
    def members(self) -> List[List[str]]:
        """Copies of the member records, in insertion order."""
        return [list(m) for m in self._members]

    def add_member(self, record: Record) -> None:
        self._members.append(list(record))

    def clear_members(self) -> None:
        self._members.clear()

    def size(self) -> int:
        return len(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def distance_to_point(self, points: Sequence[Record], specs: Sequence[FeatureSpec],
                          distance: DistanceMetric) -> Tensor:
        """Distance from every point to the center.

        Returns:
            (n,) float64 tensor
        """
        return torch.tensor([distance.distance(p, self._center, specs) for p in points],
                            dtype=torch.float64)

    def get_representant(self, specs: Sequence[FeatureSpec], distance: DistanceMetric) -> List[str]:
        """Member closest to the center, or the center when there are no members.

        Ties go to the member that was added first.
        """
        if specs is None or distance is None:
            raise ValueError("specs and distance cannot be None")
        if not self._members:
            return self.center

        best = self._members[0]
        best_distance = distance.distance(self._center, best, specs)
        for member in self._members[1:]:
            d = distance.distance(self._center, member, specs)
            if d < best_distance:
                best_distance = d
                best = member
        return list(best)

    def recompute_centroid(self, specs: Sequence[FeatureSpec],
                           distance: Optional[DistanceMetric] = None) -> bool:
        """Recompute the center from the current members.

        Args:
            specs: One FeatureSpec per dimension
            distance: Metric used to pick the free-text representative;
                      a default DistanceCalculator when None

        Returns:
            True if any dimension of the center changed
        """
        if not self._members:
            return False
        if specs is None or len(specs) != len(self._center):
            raise ValueError("specs must match the center dimension")
        if distance is None:
            from ..distances.heterogeneous import DistanceCalculator
            distance = DistanceCalculator()

        new_center = []
        for i, spec in enumerate(specs):
            column = [m[i] for m in self._members]
            if isinstance(spec, Numeric):
                value = self._numeric_mean(column)
            elif isinstance(spec, Ordinal):
                value = self._ordinal_median(column, spec)
            elif isinstance(spec, NominalSingle):
                value = self._mode(column)
            elif isinstance(spec, NominalMulti):
                value = self._majority_selection(column, spec)
            elif isinstance(spec, FreeText):
                value = self._text_medoid(column, distance)
            else:
                raise TypeError(f"Unknown feature spec: {type(spec)}")
            new_center.append(self._center[i] if value is None else value)

        changed = new_center != self._center
        self._center = new_center
        return changed

    @staticmethod
    def _numeric_mean(column: List[str]) -> Optional[str]:
        values = [v for v in (parse_number(t) for t in column) if v is not None]
        if not values:
            return None
        return format_number(sum(values) / len(values))

    @staticmethod
    def _ordinal_median(column: List[str], spec: Ordinal) -> Optional[str]:
        ranks = [r for r in (spec.rank(t) for t in column if not is_missing(t)) if r is not None]
        if not ranks:
            return None
        mean_rank = sum(ranks) / len(ranks)
        # Strict comparison keeps the lower rank on ties
        best = 0
        for r in range(1, len(spec.order)):
            if abs(r - mean_rank) < abs(best - mean_rank):
                best = r
        return spec.order[best]

    @staticmethod
    def _mode(column: List[str]) -> Optional[str]:
        counts = Counter(t.strip() for t in column if not is_missing(t))
        if not counts:
            return None
        # Counter preserves insertion order, so max() returns the first seen on ties
        return max(counts, key=counts.get)

    @staticmethod
    def _majority_selection(column: List[str], spec: NominalMulti) -> Optional[str]:
        counts = Counter()
        for token in column:
            counts.update(parse_selections(token))
        if not counts:
            return None

        ranked = sorted(counts, key=lambda option: -counts[option])
        chosen = [option for option in ranked if counts[option] * 2 > len(column)]
        if not chosen:
            chosen = ranked[:1]
        if spec.max_selections is not None:
            chosen = chosen[:spec.max_selections]
        return ','.join(chosen)

    @staticmethod
    def _text_medoid(column: List[str], distance: DistanceMetric) -> Optional[str]:
        texts = [t for t in column if not is_missing(t)]
        if not texts:
            return None

        text_distance = getattr(distance, 'text_distance', None)
        if text_distance is None:
            spec = [FreeText()]
            text_distance = lambda a, b: distance.distance([a], [b], spec)

        best = texts[0]
        best_cost = None
        for candidate in texts:
            cost = sum(text_distance(candidate, other) for other in texts)
            if best_cost is None or cost < best_cost:
                best_cost = cost
                best = candidate
        return best

    def get_parameters(self) -> Dict[str, Any]:
        """Return parameters defining this cluster."""
        return {'center': self.center}

    def set_parameters(self, params: Dict[str, Any]) -> None:
        if 'center' in params:
            self.set_center(params['center'])

    def __repr__(self) -> str:
        return f"Kluster(center={self._center}, size={len(self._members)})"
