"""Clustering algorithm implementations."""

from .kmeans import KMeans
from .kmeans_plusplus import KMeansPlusPlus
from .kmedoids import KMedoids
from .model_selection import (
    create_algorithm,
    validate_k,
    select_random_k,
    suggest_k_range,
    find_optimal_k,
    run_analysis
)

__all__ = [
    'KMeans',
    'KMeansPlusPlus',
    'KMedoids',
    'create_algorithm',
    'validate_k',
    'select_random_k',
    'suggest_k_range',
    'find_optimal_k',
    'run_analysis'
]
