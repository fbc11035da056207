"""
Result containers returned by the model-selection layer.
"""

from typing import Optional, List, Dict, Any, TYPE_CHECKING
from dataclasses import dataclass, field

if TYPE_CHECKING:
    from ..representations.kluster import Kluster


@dataclass
class OptimalKResult:
    """Outcome of a silhouette sweep over k_min..k_max.

    scores[i] is the silhouette obtained with k = k_min + i.
    """

    best_k: int
    best_score: float
    k_min: int
    k_max: int
    scores: List[float]

    def __post_init__(self):
        assert len(self.scores) == self.k_max - self.k_min + 1

    def score_for_k(self, k: int) -> Optional[float]:
        """Silhouette for a given k, or None if k was not evaluated."""
        if k < self.k_min or k > self.k_max:
            return None
        return self.scores[k - self.k_min]

    def as_dict(self) -> Dict[int, float]:
        return {self.k_min + i: s for i, s in enumerate(self.scores)}


@dataclass
class AnalysisResult:
    """A clustering run together with its quality report."""

    k: int
    algorithm: str
    strategy: str
    clusters: List['Kluster']
    silhouette: float
    silhouette_per_cluster: List[float]
    representants: List[List[str]]
    quality: str
    optimal: Optional[OptimalKResult] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def sizes(self) -> List[int]:
        return [c.size() for c in self.clusters]
