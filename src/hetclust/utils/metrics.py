"""
Clustering evaluation metrics.

Internal quality metrics computed from the clusters alone (no ground truth):
the silhouette coefficient and its per-cluster breakdown, plus inertia.
Clusters are any objects exposing `members` (and `center` for inertia), as
produced by the algorithms in hetclust.algorithms.
"""

from typing import Optional, List, Sequence, Tuple
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..base.feature_spec import FeatureSpec


def _default_distance() -> DistanceMetric:
    from ..distances.heterogeneous import DistanceCalculator
    return DistanceCalculator()


def _check_inputs(clusters, specs) -> None:
    if clusters is None or len(clusters) == 0:
        raise ValueError("clusters cannot be None or empty")
    if specs is None:
        raise ValueError("specs cannot be None")


def _flatten(clusters) -> Tuple[List[List[str]], Tensor]:
    """Stack all members in cluster order and label them by cluster index."""
    points = []
    labels = []
    for k, cluster in enumerate(clusters):
        members = cluster.members
        points.extend(members)
        labels.extend([k] * len(members))
    return points, torch.tensor(labels, dtype=torch.long)


def silhouette_samples(clusters: Sequence, specs: Sequence[FeatureSpec],
                       distance: Optional[DistanceMetric] = None) -> Tensor:
    """Compute the silhouette coefficient of every clustered point.

    For point i, a(i) is the mean distance to the other members of its own
    cluster (0 for a singleton) and b(i) the smallest mean distance to the
    members of another non-empty cluster. The coefficient is
    (b - a) / max(a, b), or 0 when both are 0.

    Args:
        clusters: Clusters exposing `members`
        specs: One FeatureSpec per dimension
        distance: Metric between records (default DistanceCalculator())

    Returns:
        (n,) float64 tensor in [-1, 1], ordered cluster by cluster, members
        in their stored order

    Raises:
        ValueError: If clusters is None/empty or specs is None
    """
    _check_inputs(clusters, specs)
    if distance is None:
        distance = _default_distance()

    points, labels = _flatten(clusters)
    n_samples = len(points)
    silhouette_values = torch.zeros(n_samples, dtype=torch.float64)
    if n_samples == 0:
        return silhouette_values

    present = torch.unique(labels).tolist()
    if len(present) < 2:
        return silhouette_values

    distances = distance.pairwise(points, specs=specs)

    for i in range(n_samples):
        own = labels[i].item()
        same_cluster = labels == own
        same_cluster[i] = False

        a = distances[i, same_cluster].mean().item() if same_cluster.any() else 0.0

        b = min(
            distances[i, labels == k].mean().item()
            for k in present if k != own
        )

        denom = max(a, b)
        if denom > 0:
            silhouette_values[i] = (b - a) / denom

    return torch.clamp(silhouette_values, -1.0, 1.0)


def silhouette_per_cluster(clusters: Sequence, specs: Sequence[FeatureSpec],
                           distance: Optional[DistanceMetric] = None) -> List[float]:
    """Mean silhouette of each cluster, 0.0 for an empty one."""
    values = silhouette_samples(clusters, specs, distance)
    result = []
    start = 0
    for cluster in clusters:
        size = len(cluster.members)
        if size == 0:
            result.append(0.0)
        else:
            result.append(values[start:start + size].mean().item())
        start += size
    return result


def silhouette_score(clusters: Sequence, specs: Sequence[FeatureSpec],
                     distance: Optional[DistanceMetric] = None) -> float:
    """Mean silhouette coefficient over all clustered points.

    Returns:
        Score in [-1, 1]; 0.0 when there are no points
    """
    values = silhouette_samples(clusters, specs, distance)
    if len(values) == 0:
        return 0.0
    return values.mean().item()


def interpret_silhouette(score: float) -> str:
    """Map a silhouette score to a quality band (lower bounds inclusive)."""
    if score >= 0.7:
        return 'excellent'
    if score >= 0.5:
        return 'good'
    if score >= 0.25:
        return 'acceptable'
    if score >= 0:
        return 'poor'
    return 'very poor'


def inertia(clusters: Sequence, specs: Sequence[FeatureSpec],
            distance: Optional[DistanceMetric] = None) -> float:
    """Sum of member-to-center distances (lower is better)."""
    _check_inputs(clusters, specs)
    if distance is None:
        distance = _default_distance()

    total = 0.0
    for cluster in clusters:
        center = cluster.center
        for member in cluster.members:
            total += distance.distance(member, center, specs)
    return total


class ClusterEvaluator:
    """Silhouette-based quality evaluation bound to one distance metric.

    Example:
        >>> evaluator = ClusterEvaluator()
        >>> evaluator.silhouette_score(model.clusters_, specs)
    """

    def __init__(self, distance: Optional[DistanceMetric] = None):
        self.distance = distance if distance is not None else _default_distance()

    def silhouette_samples(self, clusters: Sequence, specs: Sequence[FeatureSpec]) -> Tensor:
        return silhouette_samples(clusters, specs, self.distance)

    def silhouette_per_cluster(self, clusters: Sequence,
                               specs: Sequence[FeatureSpec]) -> List[float]:
        return silhouette_per_cluster(clusters, specs, self.distance)

    def silhouette_score(self, clusters: Sequence, specs: Sequence[FeatureSpec]) -> float:
        return silhouette_score(clusters, specs, self.distance)

    def inertia(self, clusters: Sequence, specs: Sequence[FeatureSpec]) -> float:
        return inertia(clusters, specs, self.distance)

    @staticmethod
    def interpret(score: float) -> str:
        return interpret_silhouette(score)
