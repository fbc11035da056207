"""Utility functions for hetclust algorithms."""

from .tokens import (
    as_token,
    is_missing,
    parse_number,
    format_number,
    parse_selections,
    tokenize_text
)

from .convergence import CenterChange

from .metrics import (
    silhouette_samples,
    silhouette_per_cluster,
    silhouette_score,
    interpret_silhouette,
    inertia,
    ClusterEvaluator
)

from .validation import (
    validate_specs,
    validate_records,
    check_n_clusters,
    check_random_state,
    validate_clustering_input
)

__all__ = [
    # Token parsing
    'as_token',
    'is_missing',
    'parse_number',
    'format_number',
    'parse_selections',
    'tokenize_text',

    # Convergence criteria
    'CenterChange',

    # Metrics
    'silhouette_samples',
    'silhouette_per_cluster',
    'silhouette_score',
    'interpret_silhouette',
    'inertia',
    'ClusterEvaluator',

    # Validation
    'validate_specs',
    'validate_records',
    'check_n_clusters',
    'check_random_state',
    'validate_clustering_input'
]
