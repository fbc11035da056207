"""
Input validation utilities.

Provides functions for validating records, feature specs and clustering
parameters before any computation starts.
"""

from typing import Optional, Union, List, Sequence
import torch
import numpy as np

from ..base.feature_spec import FeatureSpec
from .tokens import as_token


def validate_specs(specs: Optional[Sequence[FeatureSpec]]) -> List[FeatureSpec]:
    """Validate the per-dimension feature specs.

    Raises:
        ValueError: If specs is None or empty
        TypeError: If an element is not a FeatureSpec
    """
    if specs is None:
        raise ValueError("specs required")
    specs = list(specs)
    if len(specs) == 0:
        raise ValueError("specs cannot be empty")
    for i, spec in enumerate(specs):
        if not isinstance(spec, FeatureSpec) or type(spec) is FeatureSpec:
            raise TypeError(f"specs[{i}] must be a FeatureSpec variant, got {type(spec)}")
    return specs


def validate_records(data, n_features: Optional[int] = None) -> List[List[str]]:
    """Validate and convert input data to a list of string records.

    Args:
        data: Sequence of records (lists, tuples or a 2D numpy array)
        n_features: Required record length

    Returns:
        List of records with every token converted to str ('' for None)

    Raises:
        ValueError: If data is empty or a record has the wrong length
    """
    if data is None:
        raise ValueError("data empty")
    if isinstance(data, np.ndarray):
        if data.ndim != 2:
            raise ValueError(f"Expected 2D array, got {data.ndim}D")
        data = data.tolist()
    if len(data) == 0:
        raise ValueError("data empty")

    records = []
    for i, row in enumerate(data):
        if row is None or isinstance(row, str):
            raise TypeError(f"data[{i}] must be a sequence of tokens, got {type(row)}")
        record = [as_token(token) for token in row]
        if n_features is not None and len(record) != n_features:
            raise ValueError(f"data[{i}] has {len(record)} values, but specs describe "
                             f"{n_features} dimensions")
        records.append(record)
    return records


def check_n_clusters(n_clusters: int, n_samples: int, min_clusters: int = 1) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples
        min_clusters: Smallest accepted value

    Raises:
        ValueError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters < min_clusters:
        raise ValueError(f"n_clusters must be at least {min_clusters}, got {n_clusters}")

    if n_clusters > n_samples:
        raise ValueError(f"n_clusters ({n_clusters}) cannot be larger than "
                         f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create generator from random state.

    Args:
        random_state: Seed, generator, or None for a freshly seeded generator

    Returns:
        Generator
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def validate_clustering_input(data, n_clusters: int,
                              specs: Optional[Sequence[FeatureSpec]],
                              min_clusters: int = 1) -> dict:
    """Comprehensive validation for clustering input.

    Args:
        data: Input records
        n_clusters: Number of clusters
        specs: One FeatureSpec per dimension
        min_clusters: Smallest accepted number of clusters

    Returns:
        Dictionary with validated inputs
    """
    if data is None or len(data) == 0:
        raise ValueError("data empty")
    specs = validate_specs(specs)
    records = validate_records(data, n_features=len(specs))
    check_n_clusters(n_clusters, len(records), min_clusters=min_clusters)

    return {
        'data': records,
        'specs': specs,
        'n_clusters': int(n_clusters),
        'n_samples': len(records),
        'n_features': len(specs),
    }
