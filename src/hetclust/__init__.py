"""
hetclust: clustering for records with heterogeneous feature types.

Survey-style records mix numeric answers, ordinal scales, single and
multiple choice selections and free text. This package implements:
- a heterogeneous distance aggregating per-dimension distances in [0, 1]
- K-means with random or k-means++ seeding
- K-medoids (PAM)
- silhouette evaluation and automatic selection of k

Example usage:
    >>> from hetclust import KMeans, Numeric, NominalSingle
    >>>
    >>> data = [["1", "A"], ["2", "A"], ["10", "B"], ["11", "B"]]
    >>> specs = [Numeric(0, 20), NominalSingle()]
    >>>
    >>> kmeans = KMeans(random_state=0)
    >>> clusters = kmeans.fit(data, 2, specs=specs)
    >>>
    >>> # Get cluster assignments
    >>> labels = kmeans.labels_
"""

__version__ = '0.1.0'

# Feature specs
from .base.feature_spec import (
    VariableKind,
    FeatureSpec,
    Numeric,
    Ordinal,
    NominalSingle,
    NominalMulti,
    FreeText
)
from .base.data_structures import OptimalKResult, AnalysisResult

# Components
from .distances.heterogeneous import DistanceCalculator
from .representations.kluster import Kluster
from .utils.metrics import ClusterEvaluator

# Algorithms
from .algorithms.kmeans import KMeans
from .algorithms.kmeans_plusplus import KMeansPlusPlus
from .algorithms.kmedoids import KMedoids
from .algorithms.model_selection import (
    create_algorithm,
    validate_k,
    select_random_k,
    suggest_k_range,
    find_optimal_k,
    run_analysis
)

__all__ = [
    # Feature specs
    'VariableKind',
    'FeatureSpec',
    'Numeric',
    'Ordinal',
    'NominalSingle',
    'NominalMulti',
    'FreeText',

    # Components
    'DistanceCalculator',
    'Kluster',
    'ClusterEvaluator',

    # Algorithms
    'KMeans',
    'KMeansPlusPlus',
    'KMedoids',

    # Model selection
    'create_algorithm',
    'validate_k',
    'select_random_k',
    'suggest_k_range',
    'find_optimal_k',
    'run_analysis',
    'OptimalKResult',
    'AnalysisResult',

    # Version
    '__version__'
]
