"""
Core interfaces for the hetclust clustering algorithms.

This module defines the abstract base classes that all components must implement,
ensuring a consistent API across different clustering methods.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Sequence
import torch
from torch import Tensor

from .feature_spec import FeatureSpec

Record = Sequence[str]


class DistanceMetric(ABC):
    """Abstract base class for distances between heterogeneous records."""

    @abstractmethod
    def distance(self, a: Record, b: Record, specs: Sequence[FeatureSpec]) -> float:
        """Compute the distance between two records.

        Args:
            a: First record
            b: Second record
            specs: One FeatureSpec per dimension

        Returns:
            Non-negative distance
        """
        pass

    def pairwise(self, X: Sequence[Record], Y: Optional[Sequence[Record]] = None,
                 specs: Optional[Sequence[FeatureSpec]] = None) -> Tensor:
        """Compute the (n, m) distance matrix between two sets of records.

        Args:
            X: n records
            Y: m records (if None, uses X)
            specs: One FeatureSpec per dimension

        Returns:
            (n, m) float64 tensor
        """
        symmetric = Y is None
        if Y is None:
            Y = X
        out = torch.zeros(len(X), len(Y), dtype=torch.float64)
        for i, a in enumerate(X):
            start = i + 1 if symmetric else 0
            for j in range(start, len(Y)):
                d = self.distance(a, Y[j], specs)
                out[i, j] = d
                if symmetric:
                    out[j, i] = d
        return out

    def __call__(self, a: Record, b: Record, specs: Sequence[FeatureSpec]) -> float:
        return self.distance(a, b, specs)


class ClusterRepresentation(ABC):
    """Abstract base class for cluster representations.

    A representation owns a center in record space and the records currently
    assigned to it.
    """

    @abstractmethod
    def distance_to_point(self, points: Sequence[Record], specs: Sequence[FeatureSpec],
                          distance: DistanceMetric) -> Tensor:
        """Compute distance from points to this cluster's center.

        Args:
            points: n records
            specs: One FeatureSpec per dimension
            distance: Metric used for the comparison

        Returns:
            (n,) tensor of distances
        """
        pass

    @abstractmethod
    def get_parameters(self) -> Dict[str, Any]:
        """Return all parameters defining this cluster representation."""
        pass

    @abstractmethod
    def set_parameters(self, params: Dict[str, Any]) -> None:
        """Set cluster parameters from dictionary."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Number of dimensions of the records."""
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Sequence[Record],
                            representations: List[ClusterRepresentation],
                            specs: Sequence[FeatureSpec],
                            distance: DistanceMetric) -> Tensor:
        """Compute cluster assignments for points.

        Returns:
            (n,) long tensor of cluster indices
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for cluster initialization strategies."""

    @abstractmethod
    def initialize(self, points: Sequence[Record], n_clusters: int,
                   specs: Sequence[FeatureSpec], distance: DistanceMetric,
                   generator: torch.Generator) -> List[ClusterRepresentation]:
        """Initialize cluster representations.

        Args:
            points: n records
            n_clusters: Number of clusters to initialize
            specs: One FeatureSpec per dimension
            distance: Metric used by distance-aware seeding
            generator: Random source

        Returns:
            List of initialized cluster representations
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringAlgorithm(ABC):
    """Common interface of the center-seeking algorithms."""

    @abstractmethod
    def fit(self, data: Sequence[Record], k: int, max_iter: Optional[int] = None,
            specs: Optional[Sequence[FeatureSpec]] = None) -> list:
        """Partition data into k clusters.

        Returns:
            List of k clusters
        """
        pass
