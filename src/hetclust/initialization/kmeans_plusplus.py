"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

from typing import List, Sequence
import torch

from ..base.interfaces import InitializationStrategy, DistanceMetric, Record
from ..base.feature_spec import FeatureSpec
from ..representations.kluster import Kluster


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute distance from each unchosen record to nearest existing center
       - Choose next center with probability proportional to squared distance
       - If every such distance is zero, choose uniformly among the unchosen
    """

    def select_indices(self, points: Sequence[Record], n_clusters: int,
                       specs: Sequence[FeatureSpec], distance: DistanceMetric,
                       generator: torch.Generator) -> List[int]:
        """Pick n_clusters distinct seed indices by D² sampling."""
        n_points = len(points)
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        first_idx = torch.randint(n_points, (1,), generator=generator).item()
        chosen = [first_idx]
        unchosen = torch.ones(n_points, dtype=torch.bool)
        unchosen[first_idx] = False

        # Distance from every record to its nearest chosen center
        nearest = torch.tensor([distance.distance(p, points[first_idx], specs) for p in points],
                               dtype=torch.float64)

        while len(chosen) < n_clusters:
            weights = torch.where(unchosen, nearest ** 2, torch.zeros_like(nearest))
            if weights.sum() <= 0:
                # Duplicates only: fall back to a uniform pick
                weights = unchosen.to(torch.float64)

            next_idx = torch.multinomial(weights, 1, generator=generator).item()
            chosen.append(next_idx)
            unchosen[next_idx] = False

            new_distances = torch.tensor(
                [distance.distance(p, points[next_idx], specs) for p in points],
                dtype=torch.float64
            )
            nearest = torch.minimum(nearest, new_distances)

        return chosen

    def initialize(self, points: Sequence[Record], n_clusters: int,
                   specs: Sequence[FeatureSpec], distance: DistanceMetric,
                   generator: torch.Generator) -> List[Kluster]:
        """Initialize cluster centers using K-means++.

        Returns:
            List of Klusters centered on the seeded records
        """
        indices = self.select_indices(points, n_clusters, specs, distance, generator)
        return [Kluster(points[idx]) for idx in indices]
