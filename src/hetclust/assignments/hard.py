"""
Hard assignment strategy for clustering algorithms.

Assigns each record to its nearest cluster center.
"""

from typing import List, Sequence
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation, DistanceMetric, Record
from ..base.feature_spec import FeatureSpec


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest cluster.

    Each point is assigned to exactly one cluster based on minimum distance;
    ties go to the cluster with the lowest index.
    """

    def compute_distances(self, points: Sequence[Record],
                          representations: List[ClusterRepresentation],
                          specs: Sequence[FeatureSpec],
                          distance: DistanceMetric) -> Tensor:
        """(n, K) matrix of distances from points to every cluster center."""
        distances = torch.zeros(len(points), len(representations), dtype=torch.float64)
        for k, representation in enumerate(representations):
            distances[:, k] = representation.distance_to_point(points, specs, distance)
        return distances

    def compute_assignments(self, points: Sequence[Record],
                            representations: List[ClusterRepresentation],
                            specs: Sequence[FeatureSpec],
                            distance: DistanceMetric) -> Tensor:
        """Assign each point to nearest cluster.

        Returns:
            (n,) tensor of cluster indices
        """
        distances = self.compute_distances(points, representations, specs, distance)
        # argmin returns the first index among equal minima
        return torch.argmin(distances, dim=1)
