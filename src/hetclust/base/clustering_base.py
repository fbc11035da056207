"""
Base class for clustering algorithms in the hetclust family.

Provides the common skeleton shared by the center-seeking algorithms: input
validation, the injected random source, progress reporting and the fitted
attributes.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Sequence, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import ClusteringAlgorithm, DistanceMetric, Record
from .feature_spec import FeatureSpec
from ..utils.validation import validate_clustering_input, check_random_state


def _default_max_iter(max_iter) -> int:
    """None or a non-positive cap falls back to 100 iterations."""
    if max_iter is None or max_iter <= 0:
        return 100
    return int(max_iter)


class BaseClusteringAlgorithm(ClusteringAlgorithm):
    """Base class implementing the shared fit workflow.

    Subclasses implement `_fit(data, k, max_iter, specs)` returning the list
    of clusters and the (n,) label tensor, and may set `n_iter_` and
    `converged_` while doing so.
    """

    def __init__(self,
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 distance: Optional[DistanceMetric] = None):
        """
        Args:
            max_iter: Maximum iterations used when fit() gets none
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or torch.Generator for reproducibility
            distance: Distance metric (default DistanceCalculator())
        """
        self.max_iter = _default_max_iter(max_iter)
        self.verbose = verbose
        self.random_state = random_state
        self.generator = check_random_state(random_state)

        if distance is None:
            from ..distances.heterogeneous import DistanceCalculator
            distance = DistanceCalculator()
        self.distance = distance

        # Algorithm state
        self.fitted_ = False
        self.n_iter_ = 0
        self.converged_ = False
        self.clusters_ = None
        self.labels_: Optional[Tensor] = None

    @abstractmethod
    def _fit(self, data: List[List[str]], k: int, max_iter: int,
             specs: List[FeatureSpec]):
        """Run the algorithm on validated input.

        Returns:
            (clusters, labels) tuple
        """
        pass

    def fit(self, data: Sequence[Record], k: int, max_iter: Optional[int] = None,
            specs: Optional[Sequence[FeatureSpec]] = None) -> list:
        """Partition data into k clusters.

        Args:
            data: n records, each with one token per spec
            k: Number of clusters (1 <= k <= n)
            max_iter: Iteration cap; None or <= 0 uses the instance default
            specs: One FeatureSpec per dimension

        Returns:
            List of k Klusters

        Raises:
            ValueError: If data is empty, k is out of range, specs is missing
                        or a record length does not match specs
        """
        validated = validate_clustering_input(data, k, specs)
        max_iter = self._resolve_max_iter(max_iter)
        return self._run(validated['data'], validated['n_clusters'], max_iter,
                         validated['specs'], self._fit)

    def fit_predict(self, data: Sequence[Record], k: int, max_iter: Optional[int] = None,
                    specs: Optional[Sequence[FeatureSpec]] = None) -> Tensor:
        """Fit and return cluster assignments.

        Returns:
            (n,) tensor of cluster indices
        """
        self.fit(data, k, max_iter, specs)
        return self.labels_

    def _resolve_max_iter(self, max_iter: Optional[int]) -> int:
        if max_iter is None or max_iter <= 0:
            return _default_max_iter(self.max_iter)
        return int(max_iter)

    def _run(self, data, k, max_iter, specs, fit_fn):
        """Time the fit, store the fitted attributes and report."""
        if self.verbose:
            print(f"Initializing {k} clusters...")

        start_time = time.time()
        self.n_iter_ = 0
        self.converged_ = False
        clusters, labels = fit_fn(data, k, max_iter, specs)
        total_time = time.time() - start_time

        self.clusters_ = clusters
        self.labels_ = labels
        self.fitted_ = True

        if self.verbose:
            if not self.converged_:
                warnings.warn(f"Failed to converge after {max_iter} iterations")
            print(f"Total fitting time: {total_time:.3f}s")
        return clusters

    def _report_iteration(self, iteration: int, n_changed: int, iter_time: float) -> None:
        if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
            print(f"Iteration {iteration:3d}: {n_changed} center(s) changed ({iter_time:.3f}s)")

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'distance': self.distance
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            if key == 'max_iter':
                value = _default_max_iter(value)
            setattr(self, key, value)
            if key == 'random_state':
                self.generator = check_random_state(value)
        return self
