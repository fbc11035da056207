"""
Choosing the number of clusters and running a complete analysis.

Three ways to pick k are supported:
- manual: the caller gives k, checked against 2 <= k <= n
- random: k drawn uniformly from [2, max(2, floor(sqrt(n)))]
- optimal: every k in a range is fitted and the best silhouette wins
"""

from typing import Optional, Sequence, Tuple, Union
import math
import numbers
import warnings
import torch

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.data_structures import OptimalKResult, AnalysisResult
from ..base.feature_spec import FeatureSpec
from ..base.interfaces import DistanceMetric, Record
from ..utils.metrics import ClusterEvaluator
from ..utils.validation import validate_specs, validate_records, check_random_state
from .kmeans import KMeans
from .kmeans_plusplus import KMeansPlusPlus
from .kmedoids import KMedoids


_ALGORITHMS = {
    'kmeans': KMeans,
    'kmeans++': KMeansPlusPlus,
    'k-means++': KMeansPlusPlus,
    'kmedoids': KMedoids,
    'k-medoids': KMedoids,
}

_CANONICAL_NAMES = {
    KMeans: 'kmeans',
    KMeansPlusPlus: 'kmeans++',
    KMedoids: 'kmedoids',
}


def _algorithm_class(name: Optional[str]):
    key = 'kmeans' if name is None else str(name).strip().lower()
    if key not in _ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {name!r}. "
                         f"Expected one of {sorted(_ALGORITHMS)}")
    return _ALGORITHMS[key]


def create_algorithm(name: Optional[str] = 'kmeans',
                     max_iter: int = 100,
                     verbose: int = 0,
                     random_state: Optional[Union[int, torch.Generator]] = None,
                     distance: Optional[DistanceMetric] = None) -> BaseClusteringAlgorithm:
    """Create a clustering algorithm by name.

    Parameters
    ----------
    name : str or None
        'kmeans' (also for None), 'kmeans++' / 'k-means++' or
        'kmedoids' / 'k-medoids'; case-insensitive
    max_iter, verbose, random_state, distance
        Passed to the algorithm constructor

    Returns
    -------
    algorithm : BaseClusteringAlgorithm
    """
    algorithm_class = _algorithm_class(name)
    return algorithm_class(
        max_iter=max_iter,
        verbose=verbose,
        random_state=random_state,
        distance=distance
    )


def _check_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be int, got {type(value)}")
    return int(value)


def validate_k(k: int, n: int) -> int:
    """Check a caller-chosen k against 2 <= k <= n."""
    k = _check_int('k', k)
    if k < 2:
        raise ValueError(f"k must be at least 2, got {k}")
    if k > n:
        raise ValueError(f"k ({k}) cannot be larger than the number of records ({n})")
    return int(k)


def select_random_k(n: int, random_state: Optional[Union[int, torch.Generator]] = None) -> int:
    """Draw k uniformly from [2, max(2, floor(sqrt(n)))]."""
    if n < 2:
        raise ValueError(f"Need at least 2 records to choose k, got {n}")
    generator = check_random_state(random_state)
    k_max = max(2, math.isqrt(n))
    return int(torch.randint(2, k_max + 1, (1,), generator=generator).item())


def suggest_k_range(n: int) -> Tuple[int, int]:
    """Default k range for the optimal strategy: (2, min(10, max(3, floor(sqrt(n)))))."""
    return 2, min(10, max(3, math.isqrt(max(n, 0))))


def find_optimal_k(data: Sequence[Record], k_min: int, k_max: int,
                   algorithm: Optional[str] = 'kmeans',
                   max_iter: int = 100,
                   specs: Optional[Sequence[FeatureSpec]] = None,
                   random_state: Optional[Union[int, torch.Generator]] = None,
                   distance: Optional[DistanceMetric] = None,
                   verbose: int = 0) -> OptimalKResult:
    """Fit every k in [k_min, k_max] and keep the one with the best silhouette.

    Ties go to the smallest k. All fits draw from one random source, so a
    fixed random_state makes the whole sweep reproducible.

    Raises:
        TypeError: If k_min or k_max is not an integer
        ValueError: If k_min < 2, k_max < k_min or k_max > n
    """
    k_min = _check_int('k_min', k_min)
    k_max = _check_int('k_max', k_max)
    specs = validate_specs(specs)
    records = validate_records(data, n_features=len(specs))
    n = len(records)
    if k_min < 2:
        raise ValueError(f"k_min must be at least 2, got {k_min}")
    if k_max < k_min:
        raise ValueError(f"k_max ({k_max}) must be >= k_min ({k_min})")
    if k_max > n:
        raise ValueError(f"k_max ({k_max}) cannot be larger than the number of records ({n})")

    algorithm_class = _algorithm_class(algorithm)
    generator = check_random_state(random_state)
    evaluator = ClusterEvaluator(distance)

    scores = []
    best_k = k_min
    best_score = float('-inf')
    for k in range(k_min, k_max + 1):
        model = algorithm_class(max_iter=max_iter, verbose=max(verbose - 1, 0),
                                random_state=generator, distance=evaluator.distance)
        clusters = model.fit(records, k, max_iter, specs)
        score = evaluator.silhouette_score(clusters, specs)
        scores.append(score)
        if verbose:
            print(f"k={k:2d}: silhouette={score:.4f}")
        if score > best_score:
            best_score = score
            best_k = k

    if len(scores) > 1 and max(scores) == min(scores):
        warnings.warn(f"Silhouette is flat ({best_score:.4f}) for every k in "
                      f"[{k_min}, {k_max}]; choosing k={best_k}")

    return OptimalKResult(best_k=best_k, best_score=best_score,
                          k_min=k_min, k_max=k_max, scores=scores)


def run_analysis(data: Sequence[Record], specs: Sequence[FeatureSpec],
                 k: Optional[int] = None,
                 strategy: str = 'manual',
                 algorithm: Optional[str] = 'kmeans',
                 max_iter: int = 100,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 k_min: Optional[int] = None,
                 k_max: Optional[int] = None,
                 distance: Optional[DistanceMetric] = None,
                 verbose: int = 0) -> AnalysisResult:
    """Choose k, cluster the records and evaluate the result.

    Args:
        data: n records
        specs: One FeatureSpec per dimension
        k: Number of clusters, required for the 'manual' strategy
        strategy: 'manual', 'random' or 'optimal'
        algorithm: Algorithm name accepted by create_algorithm
        max_iter: Iteration cap per fit
        random_state: Seed or torch.Generator
        k_min, k_max: Range for the 'optimal' strategy; defaults to
            suggest_k_range(n) with the upper end clamped to n
        distance: Metric between records (default DistanceCalculator())
        verbose: Verbosity level

    Returns:
        AnalysisResult with clusters, silhouette scores, representants
        and a quality label
    """
    specs = validate_specs(specs)
    records = validate_records(data, n_features=len(specs))
    n = len(records)
    algorithm_class = _algorithm_class(algorithm)
    generator = check_random_state(random_state)

    strategy = str(strategy).strip().lower()
    optimal = None
    if strategy == 'manual':
        if k is None:
            raise ValueError("k is required for the manual strategy")
        k = validate_k(k, n)
    elif strategy == 'random':
        k = select_random_k(n, generator)
    elif strategy == 'optimal':
        default_min, default_max = suggest_k_range(n)
        lo = default_min if k_min is None else k_min
        hi = min(default_max, n) if k_max is None else k_max
        optimal = find_optimal_k(records, lo, hi, algorithm, max_iter, specs,
                                 random_state=generator, distance=distance,
                                 verbose=verbose)
        k = optimal.best_k
    else:
        raise ValueError(f"Unknown strategy: {strategy!r}. "
                         f"Expected 'manual', 'random' or 'optimal'")

    model = algorithm_class(max_iter=max_iter, verbose=verbose,
                            random_state=generator, distance=distance)
    clusters = model.fit(records, k, max_iter, specs)

    evaluator = ClusterEvaluator(model.distance)
    per_cluster = evaluator.silhouette_per_cluster(clusters, specs)
    score = evaluator.silhouette_score(clusters, specs)
    representants = [c.get_representant(specs, model.distance) for c in clusters]

    if verbose:
        print(f"k={k}, silhouette={score:.4f} ({evaluator.interpret(score)})")

    return AnalysisResult(
        k=k,
        algorithm=_CANONICAL_NAMES[algorithm_class],
        strategy=strategy,
        clusters=clusters,
        silhouette=score,
        silhouette_per_cluster=per_cluster,
        representants=representants,
        quality=evaluator.interpret(score),
        optimal=optimal,
        metadata={
            'n_samples': n,
            'n_iter': model.n_iter_,
            'converged': model.converged_,
        }
    )
