"""
Random initialization strategy for clustering algorithms.

Selects random records from the dataset as initial cluster centers.
"""

from typing import List, Sequence
import torch

from ..base.interfaces import InitializationStrategy, DistanceMetric, Record
from ..base.feature_spec import FeatureSpec
from ..representations.kluster import Kluster


class RandomInit(InitializationStrategy):
    """Random initialization by selecting records from the dataset.

    Selects n_clusters distinct records (without replacement) as initial centers.
    """

    def select_indices(self, points: Sequence[Record], n_clusters: int,
                       generator: torch.Generator) -> List[int]:
        """Pick n_clusters distinct indices uniformly at random."""
        n_points = len(points)
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")
        return torch.randperm(n_points, generator=generator)[:n_clusters].tolist()

    def initialize(self, points: Sequence[Record], n_clusters: int,
                   specs: Sequence[FeatureSpec], distance: DistanceMetric,
                   generator: torch.Generator) -> List[Kluster]:
        """Initialize clusters with random records.

        Returns:
            List of Klusters centered on the selected records
        """
        indices = self.select_indices(points, n_clusters, generator)
        return [Kluster(points[idx]) for idx in indices]
