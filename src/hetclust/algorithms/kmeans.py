"""
K-means clustering algorithm.

Lloyd's alternating assignment/update loop over heterogeneous records.
"""

from typing import Optional, List, Sequence, Union
import time
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import DistanceMetric, Record, InitializationStrategy
from ..base.feature_spec import FeatureSpec
from ..representations.kluster import Kluster
from ..assignments.hard import HardAssignment
from ..initialization.random import RandomInit
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import CenterChange
from ..utils.validation import validate_specs, validate_records, check_n_clusters


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Partitions records into k clusters whose centers are synthetic centroids
    aggregated per dimension (see Kluster.recompute_centroid).

    Parameters
    ----------
    init : str, default='random'
        Initialization method:
        - 'random' : k distinct records chosen uniformly
        - 'k-means++' : D²-weighted seeding
    max_iter : int, default=100
        Maximum number of iterations
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random source for seeding and empty-cluster reseeding
    distance : DistanceMetric, optional
        Metric between records (default DistanceCalculator())

    Attributes
    ----------
    clusters_ : list of Kluster
        Clusters found by the last fit
    labels_ : Tensor of shape (n_samples,)
        Cluster index of every record
    n_iter_ : int
        Number of iterations run
    converged_ : bool
        Whether the centers stopped changing before max_iter
    """

    def __init__(self,
                 init: str = 'random',
                 max_iter: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 distance: Optional[DistanceMetric] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state,
            distance=distance
        )
        self.init = init
        self.assignment_strategy = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion = None

    def _create_components(self, initial_centroids=None) -> None:
        """Create K-means specific components."""
        self.assignment_strategy = HardAssignment()

        if initial_centroids is not None:
            self.initialization_strategy = FromPreviousInit(initial_centroids)
        elif self.init == 'random':
            self.initialization_strategy = RandomInit()
        elif self.init == 'k-means++':
            self.initialization_strategy = KMeansPlusPlusInit()
        else:
            raise ValueError(f"Unknown init method: {self.init}")

        self.convergence_criterion = CenterChange()

    def _fit(self, data: List[List[str]], k: int, max_iter: int,
             specs: List[FeatureSpec]):
        self._create_components()
        clusters = self.initialization_strategy.initialize(
            data, k, specs, self.distance, self.generator
        )
        return self._lloyd(data, clusters, max_iter, specs)

    def fit_with_initial_centroids(self, data: Sequence[Record],
                                   initial_centroids: Sequence[Record],
                                   max_iter: Optional[int] = None,
                                   specs: Optional[Sequence[FeatureSpec]] = None) -> List[Kluster]:
        """Run the refinement loop from caller-supplied centers.

        Args:
            data: n records
            initial_centroids: k center records (or Klusters)
            max_iter: Iteration cap
            specs: One FeatureSpec per dimension

        Returns:
            List of k Klusters
        """
        if initial_centroids is None or len(initial_centroids) == 0:
            raise ValueError("no initial centroids")
        specs = validate_specs(specs)
        records = validate_records(data, n_features=len(specs))
        k = len(initial_centroids)
        check_n_clusters(k, len(records))

        def fit_fn(data, k, max_iter, specs):
            self._create_components(initial_centroids)
            clusters = self.initialization_strategy.initialize(
                data, k, specs, self.distance, self.generator
            )
            return self._lloyd(data, clusters, max_iter, specs)

        return self._run(records, k, self._resolve_max_iter(max_iter), specs, fit_fn)

    def _lloyd(self, data: List[List[str]], clusters: List[Kluster], max_iter: int,
               specs: List[FeatureSpec]):
        """Alternate assignment and centroid updates until the centers settle."""
        self.convergence_criterion.reset()
        labels = torch.zeros(len(data), dtype=torch.long)

        for iteration in range(max_iter):
            iter_start_time = time.time()
            previous_centers = [cluster.center for cluster in clusters]

            # Assignment step
            labels = self.assignment_strategy.compute_assignments(
                data, clusters, specs, self.distance
            )
            self._reseed_empty_clusters(data, clusters, labels)
            self._rebuild_members(data, clusters, labels)

            # Update step
            for cluster in clusters:
                cluster.recompute_centroid(specs, self.distance)

            # Reseeded centers count only if they end up somewhere new
            n_changed = sum(
                cluster.center != previous
                for cluster, previous in zip(clusters, previous_centers)
            )

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

        return clusters, labels

    def _reseed_empty_clusters(self, data: List[List[str]], clusters: List[Kluster],
                               labels: Tensor) -> None:
        """Give every empty cluster a record taken from a cluster with spares.

        The record is drawn uniformly among those whose cluster holds more than
        one member, moved into the empty cluster and used as its center, so the
        partition keeps exactly k non-empty clusters. Updates labels in place.
        """
        k = len(clusters)
        counts = torch.bincount(labels, minlength=k)
        for j in range(k):
            if counts[j] > 0:
                continue
            donors = torch.nonzero(counts[labels] > 1, as_tuple=True)[0]
            pick = donors[torch.randint(len(donors), (1,), generator=self.generator).item()].item()
            counts[labels[pick]] -= 1
            labels[pick] = j
            counts[j] += 1

            clusters[j].set_center(data[pick])
            if self.verbose >= 2:
                print(f"Reseeded empty cluster {j} with record {pick}")

    @staticmethod
    def _rebuild_members(data: List[List[str]], clusters: List[Kluster], labels: Tensor) -> None:
        for cluster in clusters:
            cluster.clear_members()
        for record, label in zip(data, labels.tolist()):
            clusters[label].add_member(record)

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params['init'] = self.init
        return params
