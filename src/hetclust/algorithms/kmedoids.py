"""
K-medoids clustering (PAM, Partitioning Around Medoids).

Centers are always records of the dataset, so no averaging is needed. This
suits dimensions without a natural mean such as free text or multi-select
answers, and makes the result less sensitive to outliers.
"""

from typing import Optional, List, Sequence, Union
import time
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import DistanceMetric, Record
from ..base.feature_spec import FeatureSpec
from ..representations.kluster import Kluster
from ..initialization.random import RandomInit
from ..utils.convergence import CenterChange
from ..utils.validation import validate_specs, validate_records, check_n_clusters


class KMedoids(BaseClusteringAlgorithm):
    """K-medoids with the PAM assignment/swap loop.

    Each iteration assigns records to the nearest medoid, then replaces every
    medoid with the member of its cluster that minimizes the summed distance
    to the other members. Stops when no medoid changes.

    Cost is O(n²) distance evaluations up front (the pairwise matrix) plus
    O(sum of |C|²) per iteration.

    Attributes
    ----------
    medoid_indices_ : list of int
        Index in the input data of every final medoid
    """

    def __init__(self,
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 distance: Optional[DistanceMetric] = None):
        super().__init__(
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            distance=distance
        )
        self.initialization_strategy = RandomInit()
        self.convergence_criterion = CenterChange()
        self.medoid_indices_: Optional[List[int]] = None

    def _fit(self, data: List[List[str]], k: int, max_iter: int,
             specs: List[FeatureSpec]):
        medoids = self.initialization_strategy.select_indices(data, k, self.generator)
        return self._pam(data, medoids, max_iter, specs)

    def fit_with_initial_medoids(self, data: Sequence[Record], medoid_indices: Sequence[int],
                                 max_iter: Optional[int] = None,
                                 specs: Optional[Sequence[FeatureSpec]] = None) -> List[Kluster]:
        """Run PAM starting from the given medoid indices.

        Raises:
            ValueError: If the indices are empty, repeated or out of range
        """
        if medoid_indices is None or len(medoid_indices) == 0:
            raise ValueError("no initial medoids")
        specs = validate_specs(specs)
        records = validate_records(data, n_features=len(specs))
        medoids = [int(i) for i in medoid_indices]
        check_n_clusters(len(medoids), len(records))
        if len(set(medoids)) != len(medoids):
            raise ValueError(f"Initial medoids must be distinct, got {medoids}")
        for idx in medoids:
            if idx < 0 or idx >= len(records):
                raise ValueError(f"Medoid index {idx} out of range for {len(records)} records")

        return self._run(records, len(medoids), self._resolve_max_iter(max_iter), specs,
                         lambda data, k, max_iter, specs: self._pam(data, medoids, max_iter, specs))

    def _pam(self, data: List[List[str]], medoids: List[int], max_iter: int,
             specs: List[FeatureSpec]):
        k = len(medoids)
        distances = self.distance.pairwise(data, specs=specs)
        medoids = torch.tensor(medoids, dtype=torch.long)
        self.convergence_criterion.reset()
        labels = self._assign(distances, medoids)

        for iteration in range(max_iter):
            iter_start_time = time.time()

            # Assignment step
            labels = self._assign(distances, medoids)

            # Swap step
            n_changed = 0
            for j in range(k):
                members = torch.nonzero(labels == j, as_tuple=True)[0]
                costs = distances[members][:, members].sum(dim=1)
                best_pos = torch.argmin(costs).item()
                current_pos = torch.nonzero(members == medoids[j], as_tuple=True)[0].item()
                if costs[best_pos] < costs[current_pos]:
                    medoids[j] = members[best_pos]
                    n_changed += 1

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'changed': n_changed > 0,
                'n_changed': n_changed
            })
            self.n_iter_ = iteration + 1
            self._report_iteration(iteration, n_changed, time.time() - iter_start_time)

            if converged:
                self.converged_ = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break
        else:
            # Cap reached, possibly right after a swap
            labels = self._assign(distances, medoids)

        self.medoid_indices_ = medoids.tolist()
        return self._build_clusters(data, self.medoid_indices_, labels), labels

    @staticmethod
    def _assign(distances: Tensor, medoids: Tensor) -> Tensor:
        """Nearest medoid per record; each medoid keeps its own cluster."""
        labels = torch.argmin(distances[:, medoids], dim=1)
        labels[medoids] = torch.arange(len(medoids))
        return labels

    @staticmethod
    def _build_clusters(data: List[List[str]], medoids: List[int], labels: Tensor) -> List[Kluster]:
        clusters = [Kluster(data[idx]) for idx in medoids]
        for record, label in zip(data, labels.tolist()):
            clusters[label].add_member(record)
        return clusters
